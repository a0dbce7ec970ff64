"""
Branch events: new commits on the head branch, or a new target branch.
"""

import logging
from typing import Optional

from github.PullRequest import PullRequest

from events.base import PullRequestEvent
from pullrequests.models import Cause, PullRequestSnapshot
from trigger.models import TriggerConfig


class CommitEvent(PullRequestEvent):
    """Fires when the head SHA moved since the previous snapshot."""

    display_name = "Commit changed"

    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        if local_pr is None or remote_pr.state == "closed":
            return None

        head_sha = remote_pr.head.sha
        if head_sha == local_pr.head_sha:
            return None

        log_sink.info(
            f"{self.display_name}: state has changed "
            f"({local_pr.head_sha} -> {head_sha})"
        )
        return self._cause(remote_pr, f"PR head changed to {head_sha}")


class BranchRetargetEvent(PullRequestEvent):
    """Fires when the pull request now targets a different base branch."""

    display_name = "Target branch changed"

    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        if local_pr is None or remote_pr.state == "closed":
            return None

        base_ref = remote_pr.base.ref
        if base_ref == local_pr.base_ref:
            return None

        log_sink.info(
            f"{self.display_name}: state has changed "
            f"({local_pr.base_ref} -> {base_ref})"
        )
        return self._cause(
            remote_pr, f"PR target branch changed from {local_pr.base_ref} to {base_ref}"
        )
