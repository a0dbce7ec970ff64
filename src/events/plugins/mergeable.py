"""
Non-mergeable event.
"""

import logging
from typing import Optional

from github.PullRequest import PullRequest

from events.base import PullRequestEvent
from pullrequests.models import Cause, PullRequestSnapshot
from trigger.models import TriggerConfig


class NonMergeableEvent(PullRequestEvent):
    """
    Fires when GitHub reports an open pull request as not mergeable while the
    previous snapshot (if any) did not already record it as not mergeable.
    A remote ``mergeable is None`` means GitHub is still computing it and never
    fires; a stored ``None`` counts as not yet reported.
    """

    display_name = "Pull request not mergeable"

    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        if remote_pr.state == "closed":
            return None

        if remote_pr.mergeable is not False:
            return None

        if local_pr is not None and local_pr.mergeable is False:
            return None  # already reported

        log_sink.info(f"{self.display_name}: state has changed (PR has conflicts)")
        return self._cause(remote_pr, "PR is not mergeable")
