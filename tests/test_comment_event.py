"""
Comment Event Test Suite.
"""

import pytest
from github import GithubException

from events.plugins.comment import CommentEvent
from factories import T0, T1, T2, make_comment, make_remote_pr, make_snapshot, remote_error
from trigger.models import TriggerConfig
from trigger.restrictions import WhitelistUserRestriction


@pytest.fixture
def event():
    return CommentEvent("retest")


@pytest.mark.parametrize("body", ["retest", "anything", ""])
def test_no_local_snapshot_never_fires(event, trigger, log_sink, body):
    """Test that a pull request seen for the first time is not compared."""
    pr = make_remote_pr(comments=[make_comment(body, T1)])

    assert event.check(trigger, pr, None, log_sink) is None
    pr.get_issue_comments.assert_not_called()


def test_no_previous_comment_never_fires(event, trigger, log_sink):
    pr = make_remote_pr(comments=[make_comment("retest", T1)])
    local = make_snapshot(last_comment_created_at=None)

    assert event.check(trigger, pr, local, log_sink) is None


def test_new_matching_comment_fires(event, trigger, log_sink):
    """Test the old comment is ignored and the new matching one fires."""
    pr = make_remote_pr(
        head_sha="def456",
        comments=[make_comment("retest", T0), make_comment("retest", T1)],
    )
    local = make_snapshot(last_comment_created_at=T0)

    cause = event.check(trigger, pr, local, log_sink)

    assert cause is not None
    assert cause.number == 1
    assert cause.head_sha == "def456"
    assert cause.skip is False
    assert "retest" in cause.reason
    assert log_sink.info.call_count == 1


def test_old_comments_only(event, trigger, log_sink):
    pr = make_remote_pr(comments=[make_comment("retest", T0)])
    local = make_snapshot(last_comment_created_at=T0)

    assert event.check(trigger, pr, local, log_sink) is None
    log_sink.info.assert_not_called()


def test_pattern_must_match_whole_body(event, trigger, log_sink):
    pr = make_remote_pr(comments=[make_comment("please retest", T1)])
    local = make_snapshot(last_comment_created_at=T0)

    assert event.check(trigger, pr, local, log_sink) is None


def test_last_matching_comment_wins(trigger, log_sink):
    """Test that with several new matching comments, the last one is reported."""
    event = CommentEvent(r"(re)?test( \w+)?")
    pr = make_remote_pr(
        comments=[
            make_comment("test first", T1),
            make_comment("test second", T2),
            make_comment("unrelated", T2),
        ]
    )
    local = make_snapshot(last_comment_created_at=T0)

    cause = event.check(trigger, pr, local, log_sink)

    assert cause is not None
    assert "test second" in cause.reason
    assert log_sink.info.call_count == 3


def test_restricted_author_is_ignored(log_sink):
    """Test that comments from non-whitelisted users don't fire."""
    trigger = TriggerConfig(
        job_name="owner_repo",
        repository_full_name="owner/repo",
        user_restriction=WhitelistUserRestriction(["maintainer"]),
    )
    event = CommentEvent("retest")
    local = make_snapshot(last_comment_created_at=T0)

    stranger = make_remote_pr(comments=[make_comment("retest", T1, login="stranger")])
    maintainer = make_remote_pr(comments=[make_comment("retest", T1, login="Maintainer")])

    assert event.check(trigger, stranger, local, log_sink) is None
    assert event.check(trigger, maintainer, local, log_sink) is not None


def test_skip_flag_is_carried(trigger, log_sink):
    event = CommentEvent(r"\[skip ci\]", skip=True)
    pr = make_remote_pr(comments=[make_comment("[skip ci]", T1)])

    cause = event.check(trigger, pr, make_snapshot(last_comment_created_at=T0), log_sink)

    assert cause.skip is True


def test_comment_fetch_failure_propagates(event, trigger, log_sink):
    pr = make_remote_pr()
    pr.get_issue_comments.side_effect = remote_error()

    with pytest.raises(GithubException):
        event.check(trigger, pr, make_snapshot(last_comment_created_at=T0), log_sink)
