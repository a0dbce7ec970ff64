"""
Event Pipeline Module.

Runs every configured event against one pull request and collects the causes.
A failing event is logged and contributes no cause; the remaining events
still run.
"""

import logging
from typing import List, Optional, Sequence

from github.PullRequest import PullRequest

from config import logger
from events.base import PullRequestEvent
from pullrequests.models import Cause, PullRequestSnapshot
from remote.base import REMOTE_ERRORS
from trigger.models import TriggerConfig


class EventPipeline:
    """
    Ordered collection of pull request events.

    Attributes:
        events (List[PullRequestEvent]): Events in configuration order.
    """

    def __init__(self, events: Sequence[PullRequestEvent]):
        self.events = list(events)

    def evaluate(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> List[Cause]:
        """
        Check every event against one pull request.

        Args:
            trigger (TriggerConfig): Configuration of the monitored job.
            remote_pr (PullRequest): Live handle to the remote pull request.
            local_pr (Optional[PullRequestSnapshot]): Last snapshot, None if never seen.
            log_sink (logging.Logger): Polling log of the job.

        Returns:
            List[Cause]: Causes in event configuration order.
        """
        causes: List[Cause] = []
        for event in self.events:
            try:
                cause = event.check(trigger, remote_pr, local_pr, log_sink)
            except REMOTE_ERRORS as e:
                log_sink.info(
                    f"{event.display_name}: can't check PR #{remote_pr.number} ({e})"
                )
                logger.warning(
                    {
                        "message": "Event check failed to fetch remote data",
                        "repository": trigger.repository_full_name,
                        "pull_request": remote_pr.number,
                        "event": event.display_name,
                        "error": str(e),
                    }
                )
                continue
            except Exception as e:
                logger.error(
                    {
                        "message": "Event check failed",
                        "repository": trigger.repository_full_name,
                        "pull_request": remote_pr.number,
                        "event": event.display_name,
                        "error": str(e),
                    },
                    exc_info=True,
                )
                continue

            if cause is not None:
                logger.debug(
                    {
                        "message": "Event fired",
                        "repository": trigger.repository_full_name,
                        "pull_request": remote_pr.number,
                        "event": event.display_name,
                        "reason": cause.reason,
                    }
                )
                causes.append(cause)

        return causes
