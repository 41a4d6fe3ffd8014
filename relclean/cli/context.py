from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relclean.core.config import Settings, load_settings
from relclean.core.errors import ErrorCode
from relclean.core.result import Err, Ok
from relclean.git.repository import Repository
from relclean.github.client import GitHubClient
from relclean.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    console: ConsoleProtocol
    client: GitHubClient
    repo: Repository


def resolve_repo_dir(repo_dir: Path | None) -> Path:
    """Return the work tree root for repo_dir (cwd by default).

    Falls back to the directory itself when it is not inside a work tree;
    the branch lookup then reports the problem.
    """
    base = (repo_dir or Path.cwd()).expanduser().resolve()
    match Repository(base).toplevel():
        case Ok(root):
            return root
        case Err(_):
            return base


def build_context(
    *,
    repo_dir: Path | None = None,
    config_path: Path | None = None,
    console: ConsoleProtocol | None = None,
) -> CLIContext:
    console = console or RichConsole()
    root = resolve_repo_dir(repo_dir)

    settings_result = load_settings(repo_dir=root, config_path=config_path)
    if isinstance(settings_result, Err):
        console.error(settings_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    settings = settings_result.value

    if not settings.has_token:
        console.print("no GitHub token found; release and tag deletion will fail", Style.DIM)

    return CLIContext(
        settings=settings,
        console=console,
        client=GitHubClient.from_settings(settings),
        repo=Repository(root),
    )
