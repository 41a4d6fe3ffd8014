from relclean.services.cleanup.drafts import delete_draft, find_draft
from relclean.services.cleanup.errors import DraftError, NotDraftError, RevertError
from relclean.services.cleanup.model import CleanupOptions, CleanupReport
from relclean.services.cleanup.revert import bump_message, revert_bump_commit
from relclean.services.cleanup.service import clean_release_artifacts
from relclean.services.cleanup.tags import delete_tag, delete_tags

__all__ = [
    "CleanupOptions",
    "CleanupReport",
    "DraftError",
    "NotDraftError",
    "RevertError",
    "bump_message",
    "clean_release_artifacts",
    "delete_draft",
    "delete_tag",
    "delete_tags",
    "find_draft",
    "revert_bump_commit",
]
