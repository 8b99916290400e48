"""Application services: load inputs, run the compiler, write outputs."""

from .generate import CatalogService, GenerateReport, InputSummary

__all__ = ["CatalogService", "GenerateReport", "InputSummary"]
