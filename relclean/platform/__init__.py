"""Platform abstraction layer."""

from .process import (
    ProcessError,
    error_summary,
    run,
)

__all__ = [
    "ProcessError",
    "error_summary",
    "run",
]
