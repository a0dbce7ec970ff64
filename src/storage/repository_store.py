"""
Repository State Storage Module.

This module handles the persistent storage and retrieval of the pull request
snapshots of one monitored job. The whole state is read once, replaced as a
whole once per reconciliation cycle and written back in one go, so an
interrupted cycle never leaves a partially written state behind.
"""

import json
import os
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from config import logger
from pullrequests.models import PullRequestSnapshot, RepositoryState


class RepositoryStore:
    """
    Manages persistent storage of the pull request snapshots of one job.

    Attributes:
        file_path (Path): Location of the serialized repository state.
        full_name (str): Repository name in ``owner/repo`` form.
        github_url (str): Browser URL of the repository.
    """

    FILE = "github-pullrequests.runtime.json"

    def __init__(self, job_dir: str, full_name: str, github_url: str):
        """Initialize the store for one job.

        Args:
            job_dir (str): Directory of the monitored job.
            full_name (str): Repository name in ``owner/repo`` form.
            github_url (str): Browser URL of the repository.
        """
        self.storage_dir = Path(job_dir)
        self.file_path = self.storage_dir / self.FILE
        self.full_name = full_name
        self.github_url = github_url
        self._state: Optional[RepositoryState] = None

    def _empty_state(self) -> RepositoryState:
        return RepositoryState(full_name=self.full_name, github_url=self.github_url)

    @property
    def state(self) -> RepositoryState:
        """Current repository state, loaded from disk on first access."""
        if self._state is None:
            self.load()
        return self._state

    def load(self) -> RepositoryState:
        """Load the repository state from disk.

        A missing or unreadable file yields an empty state; this never raises.

        Returns:
            RepositoryState: Loaded or freshly initialized state.
        """
        if not self.file_path.exists():
            logger.info(
                {
                    "message": "No saved repository state, creating new one",
                    "repository": self.full_name,
                    "file": str(self.file_path),
                }
            )
            self._state = self._empty_state()
            return self._state

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                self._state = RepositoryState.model_validate_json(f.read())

            logger.info(
                {
                    "message": "Repository state loaded",
                    "repository": self.full_name,
                    "pull_requests": len(self._state.pulls),
                }
            )

        except (OSError, ValueError, ValidationError) as e:
            # Corrupted file: start fresh
            logger.error(
                {
                    "message": "Can't read saved repository state, creating new one",
                    "repository": self.full_name,
                    "file": str(self.file_path),
                    "error": str(e),
                }
            )
            self._state = self._empty_state()

        return self._state

    def get(self, number: int) -> Optional[PullRequestSnapshot]:
        """Return the last known snapshot of a pull request, if any."""
        return self.state.pulls.get(number)

    def replace_all(self, pulls: Dict[int, PullRequestSnapshot]) -> None:
        """Swap the whole number -> snapshot mapping for a new one.

        Args:
            pulls (Dict[int, PullRequestSnapshot]): Complete next mapping.
        """
        self._state = self.state.model_copy(update={"pulls": dict(pulls)})

    def save(self) -> None:
        """Write the repository state to disk.

        Failures are logged and leave the previous file in place; this never raises.
        """
        tmp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self.state.model_dump(mode="json"), f, indent=2)
            os.replace(tmp_path, self.file_path)

            logger.info(
                {
                    "message": "Repository state saved",
                    "repository": self.full_name,
                    "file": str(self.file_path),
                    "pull_requests": len(self.state.pulls),
                }
            )

        except (OSError, TypeError, ValueError) as e:
            logger.error(
                {
                    "message": "Failed to save repository state",
                    "repository": self.full_name,
                    "file": str(self.file_path),
                    "error": str(e),
                }
            )
