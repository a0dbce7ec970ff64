"""
Label events: a watched set of labels was added to or removed from a pull request.

Labels are read from the issue side of the pull request on every check, since
the snapshot may be stale by the time the event runs.
"""

import logging
from typing import FrozenSet, Iterable, Optional

from github.PullRequest import PullRequest

from events.base import PullRequestEvent
from pullrequests.models import Cause, PullRequestSnapshot
from trigger.models import TriggerConfig


def _remote_labels(remote_pr: PullRequest) -> FrozenSet[str]:
    return frozenset(label.name for label in remote_pr.get_labels())


class _LabelSetEvent(PullRequestEvent):
    def __init__(self, labels: Iterable[str], skip: bool = False):
        super().__init__(skip)
        self.labels = frozenset(labels)
        if not self.labels:
            raise ValueError("At least one label must be watched")

    def _label_text(self) -> str:
        return "[" + ", ".join(sorted(self.labels)) + "]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(labels={sorted(self.labels)}, skip={self.skip})"


class LabelRemovedEvent(_LabelSetEvent):
    """
    Fires when the watched set of labels is gone from an open pull request.

    The set counts as removed only when at least one of its labels was present
    in the previous snapshot AND none of them is present remotely any more.
    Removing only part of the set does not fire.
    """

    display_name = "Labels removed"

    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        if remote_pr.state == "closed":
            return None  # already closed

        if local_pr is None:
            return None  # not seen before, nothing to check

        has_local = not self.labels.isdisjoint(local_pr.label_set)
        has_remote = not self.labels.isdisjoint(_remote_labels(remote_pr))

        if has_local and not has_remote:
            log_sink.info(
                f"{self.display_name}: state has changed "
                f"({self._label_text()} labels were removed)"
            )
            return self._cause(remote_pr, f"{self._label_text()} labels were removed")

        return None


class LabelAddedEvent(_LabelSetEvent):
    """
    Fires when every watched label is present on an open pull request and the
    previous snapshot did not already carry the whole set.
    """

    display_name = "Labels added"

    def check(
        self,
        trigger: TriggerConfig,
        remote_pr: PullRequest,
        local_pr: Optional[PullRequestSnapshot],
        log_sink: logging.Logger,
    ) -> Optional[Cause]:
        if remote_pr.state == "closed":
            return None

        if local_pr is not None and (
            local_pr.labels is None or self.labels <= local_pr.labels
        ):
            return None  # already had them, or nothing known to compare with

        if not self.labels <= _remote_labels(remote_pr):
            return None

        log_sink.info(
            f"{self.display_name}: state has changed "
            f"({self._label_text()} labels were added)"
        )
        return self._cause(remote_pr, f"{self._label_text()} labels were added")
