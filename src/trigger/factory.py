"""
Job Factory Module.

Wires one monitored job (remote, store, events, launcher, polling log) from
the application settings.
"""

import os
from typing import List, Optional

from config import Settings
from events.base import PullRequestEvent
from events.pipeline import EventPipeline
from events.plugins.branch import BranchRetargetEvent, CommitEvent
from events.plugins.comment import CommentEvent
from events.plugins.labels import LabelAddedEvent, LabelRemovedEvent
from events.plugins.mergeable import NonMergeableEvent
from events.plugins.state import CloseEvent, OpenEvent
from logger import get_polling_logger
from remote.base import RemoteRepository
from remote.github_remote import GitHubRemote, repo_name_from_url
from storage.repository_store import RepositoryStore
from trigger.cycle import ReconciliationCycle
from trigger.launcher import QueueFileBuildLauncher
from trigger.models import TriggerConfig
from trigger.restrictions import WhitelistUserRestriction

POLLING_LOG_FILE = "github-pullrequests.log"
BUILD_QUEUE_FILE = "builds.jsonl"


def build_events(settings: Settings) -> List[PullRequestEvent]:
    """Create the configured events in a stable order."""
    events: List[PullRequestEvent] = []
    if settings.trigger_on_open:
        events.append(OpenEvent())
    if settings.trigger_on_commit:
        events.append(CommitEvent())
    if settings.trigger_on_branch_retarget:
        events.append(BranchRetargetEvent())
    if settings.trigger_comment_pattern:
        events.append(CommentEvent(settings.trigger_comment_pattern))
    if settings.labels_added:
        events.append(LabelAddedEvent(settings.labels_added))
    if settings.labels_removed:
        events.append(LabelRemovedEvent(settings.labels_removed))
    if settings.trigger_on_non_mergeable:
        events.append(NonMergeableEvent())
    if settings.trigger_on_close:
        events.append(CloseEvent())
    return events


def job_dir_for(settings: Settings, full_name: str) -> str:
    safe_name = full_name.replace("/", "_").replace("\\", "_")
    return os.path.join(settings.data_dir, safe_name)


def build_job(
    settings: Settings, repo_url: str, remote: Optional[RemoteRepository] = None
) -> ReconciliationCycle:
    """
    Build the reconciliation cycle of one monitored repository.

    Args:
        settings (Settings): Application settings.
        repo_url (str): URL of the monitored repository.
        remote (RemoteRepository): Remote access, a GitHubRemote when None.

    Returns:
        ReconciliationCycle: Ready to run cycle for the repository.
    """
    full_name = repo_name_from_url(repo_url)
    job_dir = job_dir_for(settings, full_name)

    if remote is None:
        token = settings.github_token.get_secret_value() if settings.github_token else None
        remote = GitHubRemote(
            full_name,
            github_token=token,
            base_url=settings.github_api_url,
            retry_attempts=settings.github_retry_attempts,
        )

    restriction = None
    if settings.allowed_user_logins:
        restriction = WhitelistUserRestriction(settings.allowed_user_logins)

    trigger = TriggerConfig(
        job_name=os.path.basename(job_dir),
        repository_full_name=full_name,
        user_restriction=restriction,
    )

    return ReconciliationCycle(
        trigger=trigger,
        remote=remote,
        store=RepositoryStore(job_dir, full_name, str(repo_url).strip()),
        pipeline=EventPipeline(build_events(settings)),
        launcher=QueueFileBuildLauncher(os.path.join(job_dir, BUILD_QUEUE_FILE)),
        log_sink=get_polling_logger(
            trigger.job_name, os.path.join(job_dir, POLLING_LOG_FILE)
        ),
    )
