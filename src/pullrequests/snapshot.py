"""
Pull Request Snapshot Construction.

Turns a live GitHub pull request into an immutable ``PullRequestSnapshot``.
Sub-fetches that hit the API (comments, labels, mergeable state, author email,
source repository) are guarded one by one: a failure is logged and the field
falls back to its documented default instead of aborting the snapshot.

Defaults:
- comments: ``last_comment_created_at = None``
- labels: ``labels = None`` and ``issue_updated_at = None``
- mergeable: ``False``
- email: ``""``
- source repository owner: ``""``
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Generic, Optional, TypeVar

from github.PullRequest import PullRequest

from config import logger
from pullrequests.models import PullRequestSnapshot
from remote.base import REMOTE_ERRORS

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of fetching a single field: either a value or the error."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def attempt(cls, fetch: Callable[[], T]) -> "FetchResult[T]":
        try:
            return cls(value=fetch())
        except REMOTE_ERRORS as e:
            return cls(error=e)

    @property
    def ok(self) -> bool:
        return self.error is None

    def or_default(self, default: T, field: str, number: int) -> T:
        """Return the fetched value, or log the failure and return ``default``."""
        if self.ok:
            return self.value
        logger.warning(
            {
                "message": f"Can't get {field} for pull request",
                "pull_request": number,
                "error": str(self.error),
            }
        )
        return default


def _last_comment_created_at(remote_pr: PullRequest) -> Optional[datetime]:
    last = None
    for comment in remote_pr.get_issue_comments():
        if last is None or comment.created_at > last:
            last = comment.created_at
    return last


def _user_email(remote_pr: PullRequest) -> str:
    return remote_pr.user.email or ""


def _source_repo_owner(remote_pr: PullRequest) -> str:
    # head.repo is None when the fork was deleted
    repo = remote_pr.head.repo or remote_pr.base.repo
    return repo.owner.login


def capture(remote_pr: PullRequest) -> PullRequestSnapshot:
    """Save only what is needed for the next comparison.

    Args:
        remote_pr (PullRequest): Live handle to the remote pull request.

    Returns:
        PullRequestSnapshot: Snapshot of the pull request as it is now.
    """
    number = remote_pr.number

    comments = FetchResult.attempt(lambda: _last_comment_created_at(remote_pr))
    email = FetchResult.attempt(lambda: _user_email(remote_pr))
    issue = FetchResult.attempt(remote_pr.as_issue)
    mergeable = FetchResult.attempt(lambda: remote_pr.mergeable)
    source_owner = FetchResult.attempt(lambda: _source_repo_owner(remote_pr))

    labels = None
    issue_updated_at = None
    remote_issue = issue.or_default(None, "labels", number)
    if remote_issue is not None:
        labels = frozenset(label.name for label in remote_issue.labels)
        issue_updated_at = remote_issue.updated_at

    return PullRequestSnapshot(
        number=number,
        issue_updated_at=issue_updated_at,
        pr_updated_at=remote_pr.updated_at,
        head_sha=remote_pr.head.sha,
        head_ref=remote_pr.head.ref,
        base_ref=remote_pr.base.ref,
        title=remote_pr.title,
        mergeable=mergeable.or_default(False, "mergeable status", number),
        labels=labels,
        last_comment_created_at=comments.or_default(None, "comments", number),
        user_login=remote_pr.user.login,
        user_email=email.or_default("", "user email", number),
        source_repo_owner=source_owner.or_default(
            "", "source repository owner", number
        ),
        html_url=remote_pr.html_url,
    )
