"""
User Restrictions.

Decides which accounts may trigger builds through comments.
"""

from abc import ABC, abstractmethod
from typing import Iterable


class UserRestriction(ABC):
    """Base class for user restrictions."""

    @abstractmethod
    def is_allowed(self, login: str) -> bool:
        """Return True when ``login`` may trigger builds."""
        pass


class WhitelistUserRestriction(UserRestriction):
    """Allows only the listed logins (case-insensitive, as on GitHub)."""

    def __init__(self, users: Iterable[str]):
        self.users = frozenset(user.strip().lower() for user in users if user.strip())

    def is_allowed(self, login: str) -> bool:
        return bool(login) and login.lower() in self.users

    def __repr__(self) -> str:
        return f"WhitelistUserRestriction({sorted(self.users)})"
