"""
Open, close, commit, retarget and mergeable event tests.
"""

from events.plugins.branch import BranchRetargetEvent, CommitEvent
from events.plugins.mergeable import NonMergeableEvent
from events.plugins.state import CloseEvent, OpenEvent
from factories import make_remote_pr, make_snapshot


def test_open_event(trigger, log_sink):
    event = OpenEvent()

    cause = event.check(trigger, make_remote_pr(number=4), None, log_sink)

    assert cause.number == 4
    assert cause.reason == "PR opened"
    assert event.check(trigger, make_remote_pr(), make_snapshot(), log_sink) is None
    assert event.check(trigger, make_remote_pr(state="closed"), None, log_sink) is None


def test_close_event(trigger, log_sink):
    event = CloseEvent()

    assert event.check(trigger, make_remote_pr(state="closed"), make_snapshot(), log_sink)
    assert event.check(trigger, make_remote_pr(state="closed"), None, log_sink) is None
    assert event.check(trigger, make_remote_pr(), make_snapshot(), log_sink) is None


def test_commit_event(trigger, log_sink):
    event = CommitEvent()
    local = make_snapshot(head_sha="abc123")

    cause = event.check(trigger, make_remote_pr(head_sha="fff999"), local, log_sink)

    assert cause.head_sha == "fff999"
    assert event.check(trigger, make_remote_pr(head_sha="abc123"), local, log_sink) is None
    assert event.check(trigger, make_remote_pr(head_sha="fff999"), None, log_sink) is None


def test_branch_retarget_event(trigger, log_sink):
    event = BranchRetargetEvent()
    local = make_snapshot(base_ref="main")

    cause = event.check(trigger, make_remote_pr(base_ref="release"), local, log_sink)

    assert "main" in cause.reason and "release" in cause.reason
    assert event.check(trigger, make_remote_pr(base_ref="main"), local, log_sink) is None


def test_non_mergeable_event(trigger, log_sink):
    event = NonMergeableEvent()

    assert event.check(trigger, make_remote_pr(mergeable=False), make_snapshot(mergeable=True), log_sink)
    assert event.check(trigger, make_remote_pr(mergeable=False), None, log_sink)
    # already reported
    assert event.check(trigger, make_remote_pr(mergeable=False), make_snapshot(mergeable=False), log_sink) is None
    # still being computed
    assert event.check(trigger, make_remote_pr(mergeable=None), make_snapshot(), log_sink) is None


def test_non_mergeable_after_still_computing(trigger, log_sink):
    """Test that a conflict found after GitHub was still computing is reported."""
    event = NonMergeableEvent()

    cause = event.check(
        trigger, make_remote_pr(mergeable=False), make_snapshot(mergeable=None), log_sink
    )

    assert cause is not None
    assert cause.reason == "PR is not mergeable"
