"""Tag deletion.

Best effort: a tag that cannot be deleted is reported and the cleanup moves
on. Callers only get a boolean for reporting.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from relclean.core.result import Err
from relclean.github.client import GitHubClient
from relclean.output.console import ConsoleProtocol, Style


def delete_tag(*, client: GitHubClient, tag: str, repo: str, console: ConsoleProtocol) -> bool:
    result = client.delete_tag(client.tag_ref(repo, tag))
    if isinstance(result, Err):
        console.error(f"couldn't delete tag {tag} from {repo}: {result.error}")
        if result.error.hint:
            console.print(f"hint: {result.error.hint}", Style.DIM)
        return False

    console.success(f"successfully deleted tag {tag} from {repo}")
    return True


def delete_tags(
    *,
    client: GitHubClient,
    tag: str,
    repos: tuple[str, ...],
    console: ConsoleProtocol,
) -> tuple[str, ...]:
    """Delete ``tag`` from every repo concurrently and wait for all of them.

    Returns:
        Repos the tag was deleted from, in input order
    """
    if not repos:
        return ()

    with ThreadPoolExecutor(max_workers=len(repos)) as pool:
        futures = [
            pool.submit(delete_tag, client=client, tag=tag, repo=repo, console=console)
            for repo in repos
        ]
        outcomes = [future.result() for future in futures]

    return tuple(repo for repo, ok in zip(repos, outcomes, strict=True) if ok)
