"""
Shared fixtures.
"""

from unittest.mock import Mock

import pytest

from trigger.models import TriggerConfig


@pytest.fixture
def trigger():
    return TriggerConfig(job_name="owner_repo", repository_full_name="owner/repo")


@pytest.fixture
def log_sink():
    return Mock()
