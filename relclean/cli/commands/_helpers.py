"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from relclean import __version__
from relclean.core.errors import ErrorCode
from relclean.core.result import Err, Result

if TYPE_CHECKING:
    from relclean.output.console import ConsoleProtocol

T = TypeVar("T")
E = TypeVar("E")


def exit_on_error(
    result: Result[T, E],
    console: ConsoleProtocol,
    error_code: ErrorCode = ErrorCode.FATAL,
) -> None:
    """Exit with error if result is Err, otherwise return.

    Expects error objects to have 'message' and optional 'hint' attributes.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        hint: str | None = getattr(error, "hint", None)
        console.error(f"{message}: {hint}" if hint else message)
        raise typer.Exit(code=int(error_code))


def version_callback(value: bool) -> None:
    """Eager --version handler: print and exit before required options are checked."""
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))
