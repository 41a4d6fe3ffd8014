"""Cleanup of failed or aborted releases."""

__version__ = "0.1.0"
