"""
Pull Request Trigger Data Models.

Defines the immutable values the trigger engine keeps between polls and the
causes it produces. Uses Pydantic for validation and serialization.
"""

from datetime import datetime
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field


class PullRequestSnapshot(BaseModel):
    """Everything about a pull request needed for the next comparison.

    ``mergeable`` is tri-state: ``None`` means GitHub had not computed it yet.
    ``labels`` is ``None`` when the label list could not be fetched.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    issue_updated_at: Optional[datetime] = None
    pr_updated_at: Optional[datetime] = None
    head_sha: str
    head_ref: str
    base_ref: str
    title: str
    mergeable: Optional[bool] = None
    labels: Optional[FrozenSet[str]] = None
    last_comment_created_at: Optional[datetime] = None
    user_login: str
    user_email: str = ""
    source_repo_owner: str = ""
    html_url: str

    @property
    def is_mergeable(self) -> bool:
        return bool(self.mergeable)

    @property
    def label_set(self) -> FrozenSet[str]:
        return self.labels or frozenset()


class RepositoryState(BaseModel):
    """Latest snapshot of every tracked pull request of one monitored job."""

    model_config = ConfigDict(frozen=True)

    full_name: str
    github_url: str
    pulls: Dict[int, PullRequestSnapshot] = Field(default_factory=dict)


class Cause(BaseModel):
    """A reason to start (or skip) a build for one pull request head."""

    model_config = ConfigDict(frozen=True)

    number: int
    head_sha: str
    reason: str
    skip: bool = False
    title: str = ""
    html_url: str = ""
    event: str = ""
