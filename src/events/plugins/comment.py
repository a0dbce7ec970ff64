"""
Comment event: trigger (or skip) a pull request by a comment matching a pattern.
"""

import logging
import re
from typing import Optional

from github.PullRequest import PullRequest

from config import logger
from events.base import PullRequestEvent
from pullrequests.models import Cause, PullRequestSnapshot
from trigger.models import TriggerConfig


class CommentEvent(PullRequestEvent):
    """
    Fires on a new issue comment whose whole body matches ``pattern``.

    Only comments created after the last comment seen in the previous snapshot
    are considered, so a pull request seen for the first time, or one that
    had no comments, never fires. When several new comments match, the cause
    of the last one wins.

    Attributes:
        pattern (re.Pattern): Compiled regular expression.
    """

    display_name = "Comment matched to pattern"

    def __init__(self, pattern: str, skip: bool = False):
        super().__init__(skip)
        self.pattern = re.compile(pattern)

    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        if local_pr is None or local_pr.last_comment_created_at is None:
            return None  # nothing to compare

        cause = None
        for comment in remote_pr.get_issue_comments():
            if comment.created_at <= local_pr.last_comment_created_at:
                continue

            body = comment.body or ""
            log_sink.info(
                f'{self.display_name}: state has changed (new comment found - "{body}")'
            )
            login = comment.user.login if comment.user else ""
            matched = self._check_comment(trigger, login, body)
            if matched:
                cause = self._cause(remote_pr, f'PR was triggered by comment "{body}"')

        return cause

    def _check_comment(self, trigger: TriggerConfig, login: str, body: str) -> bool:
        if not trigger.is_allowed(login):
            logger.debug(
                {
                    "message": "Comment author is not allowed to trigger",
                    "repository": trigger.repository_full_name,
                    "user": login,
                }
            )
            return False

        if self.pattern.fullmatch(body) is None:
            return False

        logger.debug({"message": "Triggering by comment", "comment": body})
        return True

    def __repr__(self) -> str:
        return f"CommentEvent(pattern={self.pattern.pattern!r}, skip={self.skip})"
