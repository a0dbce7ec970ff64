"""
Trigger Configuration Models.

Holds the per-job configuration handed to every event check.
"""

from dataclasses import dataclass
from typing import Optional

from trigger.restrictions import UserRestriction


@dataclass(frozen=True)
class TriggerConfig:
    """
    Configuration of one monitored job.

    Attributes:
        job_name (str): Name of the monitored job.
        repository_full_name (str): Repository name in ``owner/repo`` form.
        user_restriction (Optional[UserRestriction]): Who may trigger by comment.
            None allows everybody.
    """

    job_name: str
    repository_full_name: str
    user_restriction: Optional[UserRestriction] = None

    def is_allowed(self, login: str) -> bool:
        if self.user_restriction is None:
            return True
        return self.user_restriction.is_allowed(login)
