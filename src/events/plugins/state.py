"""
Open and close events.
"""

import logging
from typing import Optional

from github.PullRequest import PullRequest

from events.base import PullRequestEvent
from pullrequests.models import Cause, PullRequestSnapshot
from trigger.models import TriggerConfig


class OpenEvent(PullRequestEvent):
    """Fires for an open pull request that was never seen before."""

    display_name = "Pull request opened"

    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        if local_pr is not None or remote_pr.state != "open":
            return None

        log_sink.info(f"{self.display_name}: state has changed (PR was opened)")
        return self._cause(remote_pr, "PR opened")


class CloseEvent(PullRequestEvent):
    """Fires when a pull request seen open before is now closed."""

    display_name = "Pull request closed"

    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        if local_pr is None or remote_pr.state != "closed":
            return None

        log_sink.info(f"{self.display_name}: state has changed (PR was closed)")
        return self._cause(remote_pr, "PR closed")
