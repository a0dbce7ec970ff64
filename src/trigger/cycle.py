"""
Reconciliation Cycle Module.

One poll of a monitored repository: fetch the open pull requests, compare
each with its last snapshot, persist the new snapshots once and hand the
causes over to the build launcher.

- The next state is built completely before it replaces the stored one, so a
  cycle that dies halfway leaves the persisted state untouched.
- A failure on one pull request only skips that pull request; its previous
  snapshot is carried over so the change is detected again next time.
- Only one cycle per job runs at a time, across processes: the job directory
  is guarded by a lock file and an overlapping call is skipped.
- A pull request that no longer exists remotely is dropped from the state.
"""

import logging
from typing import Dict, List, Optional, Tuple

from filelock import FileLock, Timeout
from github import UnknownObjectException

from config import logger
from events.pipeline import EventPipeline
from pullrequests.models import Cause, PullRequestSnapshot
from pullrequests.snapshot import capture
from remote.base import REMOTE_ERRORS, RemoteRepository
from storage.repository_store import RepositoryStore
from trigger.launcher import BuildLauncher
from trigger.models import TriggerConfig


class ReconciliationCycle:
    """
    Polls one monitored repository and turns detected changes into builds.

    Attributes:
        trigger (TriggerConfig): Configuration of the monitored job.
        remote (RemoteRepository): Access to the hosted repository.
        store (RepositoryStore): Snapshots of the job.
        pipeline (EventPipeline): Events checked for every pull request.
        launcher (BuildLauncher): Receives every cause.
        log_sink (logging.Logger): Polling log of the job.
    """

    LOCK_FILE = "github-pullrequests.lock"

    def __init__(
        self,
        trigger: TriggerConfig,
        remote: RemoteRepository,
        store: RepositoryStore,
        pipeline: EventPipeline,
        launcher: BuildLauncher,
        log_sink: logging.Logger,
    ):
        self.trigger = trigger
        self.remote = remote
        self.store = store
        self.pipeline = pipeline
        self.launcher = launcher
        self.log_sink = log_sink
        self.lock_file = store.storage_dir / self.LOCK_FILE

    async def run(self) -> List[Cause]:
        """
        Run one reconciliation cycle.

        Returns:
            List[Cause]: Causes handed over to the launcher, empty when the cycle
                was skipped or aborted.
        """
        self.lock_file.parent.mkdir(parents=True, exist_ok=True)
        lock = FileLock(str(self.lock_file))
        try:
            lock.acquire(timeout=0)
        except Timeout:
            logger.warning(
                {
                    "message": "Previous cycle still running, skipping",
                    "job": self.trigger.job_name,
                    "repository": self.trigger.repository_full_name,
                }
            )
            return []

        try:
            return await self._run()
        finally:
            lock.release()

    async def _run(self) -> List[Cause]:
        repo_name = self.trigger.repository_full_name
        logger.info({"message": "Starting reconciliation cycle", "repository": repo_name})
        self.log_sink.info(f"Checking {repo_name}")

        try:
            open_numbers = self.remote.list_open_pull_request_numbers()
        except REMOTE_ERRORS as e:
            logger.error(
                {
                    "message": "Can't list open pull requests, will retry next cycle",
                    "repository": repo_name,
                    "error": str(e),
                }
            )
            self.log_sink.info(f"Can't list open pull requests of {repo_name}: {e}")
            return []

        state = self.store.state
        # locally known pull requests are checked too, so closing is noticed
        numbers = sorted(set(open_numbers) | set(state.pulls))

        next_pulls: Dict[int, PullRequestSnapshot] = {}
        causes: List[Cause] = []
        for number in numbers:
            local_pr = state.pulls.get(number)
            try:
                pr_causes, snapshot = self._process(number, local_pr)
            except UnknownObjectException as e:
                logger.warning(
                    {
                        "message": "Pull request no longer exists, dropping snapshot",
                        "repository": repo_name,
                        "pull_request": number,
                        "error": str(e),
                    }
                )
                self.log_sink.info(f"PR #{number} no longer exists")
                continue
            except REMOTE_ERRORS as e:
                logger.warning(
                    {
                        "message": "Can't process pull request, keeping previous state",
                        "repository": repo_name,
                        "pull_request": number,
                        "error": str(e),
                    }
                )
                self.log_sink.info(f"Can't process PR #{number}: {e}")
                if local_pr is not None:
                    next_pulls[number] = local_pr
                continue

            causes.extend(pr_causes)
            if snapshot is not None:
                next_pulls[number] = snapshot

        self.store.replace_all(next_pulls)
        self.store.save()

        for cause in causes:
            self._launch(cause)

        logger.info(
            {
                "message": "Reconciliation cycle finished",
                "repository": repo_name,
                "pull_requests": len(next_pulls),
                "causes": len(causes),
            }
        )
        return causes

    def _process(
        self, number: int, local_pr: Optional[PullRequestSnapshot]
    ) -> Tuple[List[Cause], Optional[PullRequestSnapshot]]:
        """Fetch, check and snapshot one pull request.

        Returns:
            Tuple[List[Cause], Optional[PullRequestSnapshot]]: Causes found and the
                next snapshot, None when the pull request is closed.
        """
        remote_pr = self.remote.get_pull_request(number)
        causes = self.pipeline.evaluate(self.trigger, remote_pr, local_pr, self.log_sink)
        if not causes:
            self.log_sink.info(f"PR #{number}: no changes detected")

        if remote_pr.state == "closed":
            logger.debug(
                {
                    "message": "Pull request closed, dropping snapshot",
                    "repository": self.trigger.repository_full_name,
                    "pull_request": number,
                }
            )
            return causes, None

        return causes, capture(remote_pr)

    def _launch(self, cause: Cause) -> None:
        try:
            self.launcher.launch(self.trigger, cause)
        except Exception as e:
            logger.error(
                {
                    "message": "Failed to launch build",
                    "repository": self.trigger.repository_full_name,
                    "pull_request": cause.number,
                    "head_sha": cause.head_sha,
                    "error": str(e),
                },
                exc_info=True,
            )
