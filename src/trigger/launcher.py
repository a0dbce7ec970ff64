"""
Build Launchers.

Hand causes over to the CI system that actually runs builds.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path

from config import logger
from pullrequests.models import Cause
from trigger.models import TriggerConfig


class BuildLauncher(ABC):
    """Base class for build launchers."""

    @abstractmethod
    def launch(self, trigger: TriggerConfig, cause: Cause) -> None:
        """
        Start (or record a skipped) build for one cause.

        Args:
            trigger (TriggerConfig): Configuration of the monitored job.
            cause (Cause): Why the build starts, tagged with the head SHA.
        """
        pass


class QueueFileBuildLauncher(BuildLauncher):
    """Appends one JSON line per cause to a queue file read by the CI system."""

    def __init__(self, queue_file: str):
        self.queue_file = Path(queue_file)

    def launch(self, trigger: TriggerConfig, cause: Cause) -> None:
        entry = {
            "job": trigger.job_name,
            "repository": trigger.repository_full_name,
            "number": cause.number,
            "head_sha": cause.head_sha,
            "title": cause.title,
            "reason": cause.reason,
            "skip": cause.skip,
            "event": cause.event,
            "html_url": cause.html_url,
            "queued_at": datetime.now(timezone.utc).isoformat(),
        }

        self.queue_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.queue_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

        logger.info(
            {
                "message": "Build skipped" if cause.skip else "Build queued",
                "repository": trigger.repository_full_name,
                "pull_request": cause.number,
                "head_sha": cause.head_sha,
                "reason": cause.reason,
            }
        )
