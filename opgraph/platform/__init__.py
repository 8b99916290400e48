"""Filesystem helpers shared by the catalog writer."""

from .files import atomic_write_text

__all__ = ["atomic_write_text"]
