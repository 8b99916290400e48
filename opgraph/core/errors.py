"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable:
- 0: Success
- 1: Input error (bad bundle list, version or image reference)
- 2: Configuration error (invalid opgraph.toml or exception table)
- 3: I/O error (file not found, permission denied)
- 4: Internal error (a compiler invariant was violated)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    INPUT_ERROR = 1
    CONFIG_ERROR = 2
    IO_ERROR = 3
    INTERNAL_ERROR = 4
