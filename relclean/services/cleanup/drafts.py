"""Draft release deletion.

Only drafts are ever deleted; a published release is left alone and the
caller is told so, which also stops it from deleting the release's tag.
"""

from __future__ import annotations

from relclean.core.config import TOKEN_ENV_VARS
from relclean.core.result import Err, Ok, Result
from relclean.github.client import GitHubClient
from relclean.github.errors import ApiError
from relclean.github.model import Release
from relclean.output.console import ConsoleProtocol, Style
from relclean.services.cleanup.errors import DraftError, NotDraftError


def parse_release_id(release_id: str) -> int | None:
    value = release_id.strip()
    # isdigit() accepts superscripts that int() rejects.
    if not value.isdecimal():
        return None
    try:
        return int(value, 10)
    except ValueError:
        return None


def find_draft(
    *,
    client: GitHubClient,
    release_id: str,
    repo: str,
    console: ConsoleProtocol | None = None,
) -> Result[Release, DraftError]:
    """Fetch a release and make sure it is still a draft.

    Args:
        client: Authenticated GitHub client
        release_id: Numeric release id as given on the command line
        repo: Repository name under the client's owner
        console: When given, a one-line summary of the fetched release is printed

    Returns:
        Ok(Release) for a draft, Err(NotDraftError) for a published release,
        Err(ApiError) for anything else
    """
    rid = parse_release_id(release_id)
    if rid is None:
        return Err(ApiError(message=f"invalid release id: {release_id!r}"))

    if not client.authenticated:
        return Err(
            ApiError(
                message="missing GitHub token",
                hint="Set " + " or ".join(TOKEN_ENV_VARS),
            )
        )

    fetched = client.get_release(client.release_ref(repo, rid))
    if isinstance(fetched, Err):
        return fetched

    release = fetched.value
    if console is not None:
        console.print(release.describe(), Style.DIM)

    if not release.draft:
        return Err(NotDraftError(release_id=release.id, repo=repo))
    return Ok(release)


def delete_draft(
    *,
    client: GitHubClient,
    release_id: str,
    repo: str,
    console: ConsoleProtocol,
) -> bool:
    """Delete a draft release; never raises.

    Returns:
        True only if the release was a draft and is now deleted
    """
    found = find_draft(client=client, release_id=release_id, repo=repo, console=console)
    if isinstance(found, Err):
        match found.error:
            case NotDraftError() as e:
                console.error(e.message)
            case ApiError() as e:
                _report_failure(console, release_id, repo, e)
        return False

    release = found.value
    deleted = client.delete_release(client.release_ref(repo, release.id))
    if isinstance(deleted, Err):
        _report_failure(console, release_id, repo, deleted.error)
        return False

    console.success(f"successfully deleted draft with id {release_id} from {repo}")
    return True


def _report_failure(console: ConsoleProtocol, release_id: str, repo: str, error: ApiError) -> None:
    console.error(f"couldn't delete draft with id {release_id} from {repo}: {error}")
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
