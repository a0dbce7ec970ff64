"""
Abstract Base Class for Pull Request Events.

An event compares the remote pull request with its last known snapshot and
decides whether something meaningful changed. New kinds of events are added
by subclassing ``PullRequestEvent``; the pipeline never needs to change.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from github.PullRequest import PullRequest

from pullrequests.models import Cause, PullRequestSnapshot
from trigger.models import TriggerConfig


class PullRequestEvent(ABC):
    """
    Base class for pull request events.

    Attributes:
        skip (bool): Produce causes that ask the build to be skipped.
    """

    display_name: str = "Pull request event"

    def __init__(self, skip: bool = False):
        self.skip = skip

    @abstractmethod
    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        """
        Compare the remote pull request with its previous snapshot.

        Args:
            trigger (TriggerConfig): Configuration of the monitored job.
            remote_pr (PullRequest): Live handle to the remote pull request.
            local_pr (Optional[PullRequestSnapshot]): Last snapshot, None if never seen.
            log_sink (logging.Logger): Polling log of the job.

        Returns:
            Optional[Cause]: Cause when the event happened, otherwise None.

        Raises:
            GithubException, OSError: If remote data needed by this check is unavailable.
        """
        pass

    def _cause(self, remote_pr: PullRequest, reason: str) -> Cause:
        return Cause(
            number=remote_pr.number,
            head_sha=remote_pr.head.sha,
            reason=reason,
            skip=self.skip,
            title=remote_pr.title,
            html_url=remote_pr.html_url,
            event=self.display_name,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(skip={self.skip})"
