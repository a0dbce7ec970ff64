"""
Abstract Base Class for Remote Repositories.

Defines the capability the trigger engine needs from the code hosting service.
Implementations handle authentication, transport and retries; the engine only
lists open pull requests and fetches one pull request at a time.
"""

from abc import ABC, abstractmethod
from typing import List

from github import GithubException
from github.PullRequest import PullRequest

# I/O-kind failures of the remote API. requests exceptions and socket
# timeouts derive from OSError.
REMOTE_ERRORS = (GithubException, OSError)


class RemoteRepository(ABC):
    """
    Abstract base class for remote repositories.

    Attributes:
        full_name (str): Repository name in ``owner/repo`` form.
        html_url (str): Browser URL of the repository.
    """

    full_name: str
    html_url: str

    @abstractmethod
    def list_open_pull_request_numbers(self) -> List[int]:
        """
        List the numbers of all currently open pull requests.

        Returns:
            List[int]: Open pull request numbers.

        Raises:
            GithubException, OSError: If the list cannot be fetched.
        """
        pass

    @abstractmethod
    def get_pull_request(self, number: int) -> PullRequest:
        """
        Fetch the full detail of one pull request, open or closed.

        Args:
            number (int): Pull request number.

        Returns:
            PullRequest: Live handle to the remote pull request.

        Raises:
            GithubException, OSError: If the pull request cannot be fetched.
        """
        pass
