"""
GitHub Remote Repository Module.

PyGithub-backed access to one hosted repository. Every remote call is retried
with exponential backoff, except a 404 which is final; the last error is
re-raised so callers can decide whether to skip a pull request or abort the
cycle.
"""

from datetime import datetime, timezone
from typing import List, Optional

from github import Auth, Github, UnknownObjectException
from github.PullRequest import PullRequest
from github.Repository import Repository
from tenacity import (
    Retrying,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config import logger
from remote.base import REMOTE_ERRORS, RemoteRepository


def repo_name_from_url(repo_url: str) -> str:
    """Extract ``owner/repo`` from a repository URL."""
    url = str(repo_url).strip().rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return "/".join(url.split("/")[-2:])


class GitHubRemote(RemoteRepository):
    """
    Remote repository backed by the GitHub REST API.

    Attributes:
        full_name (str): Repository name in ``owner/repo`` form.
        html_url (str): Browser URL of the repository.
        retry_attempts (int): Attempts for each remote call.
    """

    def __init__(
        self,
        full_name: str,
        github_token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        retry_attempts: int = 3,
        github: Optional[Github] = None,
    ):
        """Initialize the remote repository.

        Args:
            full_name (str): Repository name in ``owner/repo`` form.
            github_token (Optional[str]): GitHub API token, anonymous when None.
            base_url (str): Base URL of the GitHub API.
            retry_attempts (int): Attempts for each remote call.
            github (Optional[Github]): Preconfigured client, mainly for tests.
        """
        if github is None:
            auth = Auth.Token(github_token) if github_token else None
            github = Github(auth=auth, base_url=base_url)
        self.github = github
        self.full_name = full_name
        self.html_url = f"https://github.com/{full_name}"
        self.retry_attempts = retry_attempts
        self._repo: Optional[Repository] = None

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=(
                retry_if_exception_type(REMOTE_ERRORS)
                & retry_if_not_exception_type(UnknownObjectException)
            ),
            reraise=True,
        )

    def _check_rate_limit(self, check_name: str) -> None:
        """
        Log the GitHub API rate limit status and warn when it runs low.

        Args:
            check_name (str): Identifier for the rate limit check point.
        """
        remaining, limit = self.github.rate_limiting
        reset_time = datetime.fromtimestamp(
            self.github.rate_limiting_resettime, tz=timezone.utc
        )

        logger.debug(
            {
                "message": f"{check_name} API rate limit status",
                "remaining_points": remaining,
                "total_points": limit,
                "reset_time": reset_time.isoformat(),
            }
        )

        if limit > 0 and remaining < limit * 0.1:
            logger.warning(
                {
                    "message": "GitHub API rate limit running low",
                    "remaining_points": remaining,
                    "reset_time": reset_time.isoformat(),
                }
            )

    @property
    def repo(self) -> Repository:
        if self._repo is None:
            self._repo = self._retrying()(self.github.get_repo, self.full_name)
            self.html_url = self._repo.html_url
        return self._repo

    def list_open_pull_request_numbers(self) -> List[int]:
        repo = self.repo

        def _list() -> List[int]:
            return [pr.number for pr in repo.get_pulls(state="open")]

        numbers = self._retrying()(_list)
        self._check_rate_limit("Open pull requests")
        logger.debug(
            {
                "message": "Listed open pull requests",
                "repository": self.full_name,
                "count": len(numbers),
            }
        )
        return numbers

    def get_pull_request(self, number: int) -> PullRequest:
        repo = self.repo
        return self._retrying()(repo.get_pull, number)
