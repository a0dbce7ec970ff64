"""
Repository Store Test Suite.

Covers loading, replacing and saving the snapshots of one job, including
corrupted and missing state files.
"""

import pytest

from factories import T1, make_snapshot
from pullrequests.models import RepositoryState
from storage.repository_store import RepositoryStore


@pytest.fixture
def store(tmp_path):
    return RepositoryStore(str(tmp_path), "owner/repo", "https://github.com/owner/repo")


def _reloaded(tmp_path) -> RepositoryState:
    return RepositoryStore(
        str(tmp_path), "owner/repo", "https://github.com/owner/repo"
    ).load()


def test_missing_file_yields_empty_state(store):
    """Test loading without a saved file."""
    state = store.load()

    assert state.full_name == "owner/repo"
    assert state.github_url == "https://github.com/owner/repo"
    assert state.pulls == {}


@pytest.mark.parametrize("count", [0, 1, 5])
def test_replace_all_save_load_round_trip(store, tmp_path, count):
    """Test that the saved state is read back field for field."""
    pulls = {
        n: make_snapshot(
            n,
            labels=frozenset({"wip", f"label-{n}"}),
            last_comment_created_at=T1,
            mergeable=None if n % 2 else True,
        )
        for n in range(1, count + 1)
    }

    store.replace_all(pulls)
    store.save()

    reloaded = _reloaded(tmp_path)
    assert reloaded == store.state
    assert reloaded.pulls == pulls


def test_get(store):
    snapshot = make_snapshot(3)
    store.replace_all({3: snapshot})

    assert store.get(3) == snapshot
    assert store.get(4) is None


def test_replace_all_does_not_mutate_previous_state(store):
    """Test that replacing publishes a new state object."""
    store.replace_all({1: make_snapshot(1)})
    previous = store.state

    store.replace_all({2: make_snapshot(2)})

    assert set(previous.pulls) == {1}
    assert set(store.state.pulls) == {2}


def test_corrupted_file_yields_empty_state(store, tmp_path):
    """Test that an unreadable state file doesn't raise."""
    (tmp_path / RepositoryStore.FILE).write_text("{not json", encoding="utf-8")

    state = store.load()

    assert state.pulls == {}
    assert state.full_name == "owner/repo"


def test_invalid_content_yields_empty_state(store, tmp_path):
    (tmp_path / RepositoryStore.FILE).write_text(
        '{"full_name": "owner/repo", "pulls": {"1": {"number": "x"}}}', encoding="utf-8"
    )

    assert store.load().pulls == {}


def test_save_failure_is_not_raised(tmp_path):
    """Test that a failing save leaves the caller running."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = RepositoryStore(str(blocker / "job"), "owner/repo", "https://github.com/owner/repo")
    store.replace_all({1: make_snapshot(1)})

    store.save()

    assert not (blocker / "job" / RepositoryStore.FILE).exists()
