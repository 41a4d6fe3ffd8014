from __future__ import annotations

from pathlib import Path

import typer

from relclean.cli.commands._helpers import exit_on_error, version_callback
from relclean.cli.context import build_context
from relclean.core.errors import ErrorCode
from relclean.services.cleanup.model import CleanupOptions
from relclean.services.cleanup.service import clean_release_artifacts


def _non_empty(value: str) -> str:
    if not value.strip():
        raise typer.BadParameter("must not be empty")
    return value


def cleanup(
    tag: str = typer.Option(
        ...,
        "--tag",
        help="Tag of the failed release (e.g. v2.0.0-nightly.20180410).",
        callback=_non_empty,
    ),
    release_id: str = typer.Option(
        "",
        "--releaseId",
        "--release-id",
        help="Id of the draft release to delete; omit to only revert the bump commit.",
    ),
    repo_dir: Path | None = typer.Option(
        None,
        "--repo-dir",
        help="Checkout holding the bump commit (default: current directory).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="TOML settings file (default: relclean.toml in the checkout, if present).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Delete the draft release and tag of a failed release, then revert its bump commit."""
    del version
    ctx = build_context(repo_dir=repo_dir, config_path=config)
    options = CleanupOptions.from_args(tag=tag, release_id=release_id)

    ctx.console.header(f"Cleaning up failed release {options.tag}")
    result = clean_release_artifacts(
        options=options,
        settings=ctx.settings,
        client=ctx.client,
        repo=ctx.repo,
        console=ctx.console,
    )
    exit_on_error(result, ctx.console, ErrorCode.FATAL)
