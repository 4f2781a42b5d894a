"""Tests for building typed events from webhook payloads."""

import json

import pytest

from prcord_core.errors import MalformedEventError
from prcord_core.events import (
    PULL_REQUEST,
    PULL_REQUEST_REVIEW,
    PullRequestClosed,
    PullRequestMerged,
    PullRequestOpened,
    PullRequestReadyForReview,
    PullRequestSynchronized,
    ReviewDismissed,
    ReviewRequested,
    ReviewRequestRemoved,
    ReviewSubmitted,
    load_event_payload,
    parse_event,
)


def _pr_payload(**overrides):
    pr = {
        "number": 42,
        "title": "Add login flow",
        "html_url": "https://github.com/acme/app/pull/42",
        "user": {"login": "alice"},
        "base": {"ref": "main"},
        "head": {"ref": "feature/login"},
        "body": "Implements the login page.",
        "draft": False,
        "requested_reviewers": [{"login": "bob"}, {"login": "carol"}],
        "merged": False,
        "merged_by": None,
        "merge_commit_sha": None,
    }
    pr.update(overrides)
    return pr


def _payload(action, **extra):
    return {"action": action, "pull_request": _pr_payload(), "sender": {"login": "alice"}, **extra}


class TestPullRequestEvents:
    def test_opened(self):
        event = parse_event(PULL_REQUEST, _payload("opened"))
        assert isinstance(event, PullRequestOpened)
        pr = event.pull_request
        assert pr.number == 42
        assert pr.author == "alice"
        assert pr.head_branch == "feature/login"
        assert pr.base_branch == "main"
        assert pr.requested_reviewers == ("bob", "carol")

    def test_null_body_becomes_empty_string(self):
        payload = _payload("opened")
        payload["pull_request"]["body"] = None
        assert parse_event(PULL_REQUEST, payload).pull_request.body == ""

    def test_ready_for_review(self):
        assert isinstance(parse_event(PULL_REQUEST, _payload("ready_for_review")), PullRequestReadyForReview)

    def test_review_requested_carries_reviewer(self):
        event = parse_event(PULL_REQUEST, _payload("review_requested", requested_reviewer={"login": "carol"}))
        assert isinstance(event, ReviewRequested)
        assert event.requested_reviewer == "carol"

    def test_team_review_request_has_no_reviewer(self):
        event = parse_event(PULL_REQUEST, _payload("review_requested", requested_team={"slug": "core"}))
        assert event.requested_reviewer is None

    def test_review_request_removed(self):
        event = parse_event(PULL_REQUEST, _payload("review_request_removed", requested_reviewer={"login": "bob"}))
        assert isinstance(event, ReviewRequestRemoved)
        assert event.requested_reviewer == "bob"

    def test_synchronize(self):
        assert isinstance(parse_event(PULL_REQUEST, _payload("synchronize")), PullRequestSynchronized)

    def test_closed_without_merge_uses_sender_as_closer(self):
        payload = _payload("closed", sender={"login": "bob"})
        event = parse_event(PULL_REQUEST, payload)
        assert isinstance(event, PullRequestClosed)
        assert event.closer == "bob"

    def test_closed_without_sender_falls_back_to_author(self):
        payload = _payload("closed")
        del payload["sender"]
        assert parse_event(PULL_REQUEST, payload).closer == "alice"

    def test_closed_with_merge_is_merged_event(self):
        payload = _payload("closed")
        payload["pull_request"].update(merged=True, merged_by={"login": "carol"}, merge_commit_sha="abc123")
        event = parse_event(PULL_REQUEST, payload)
        assert isinstance(event, PullRequestMerged)
        assert event.merger == "carol"
        assert event.pull_request.merge_commit_sha == "abc123"

    def test_merged_without_merged_by_is_unknown(self):
        payload = _payload("closed")
        payload["pull_request"]["merged"] = True
        assert parse_event(PULL_REQUEST, payload).merger == "unknown"

    def test_unhandled_action_returns_none(self):
        assert parse_event(PULL_REQUEST, _payload("labeled")) is None

    def test_missing_required_field_raises(self):
        payload = _payload("opened")
        del payload["pull_request"]["head"]
        with pytest.raises(MalformedEventError, match="pull_request.head"):
            parse_event(PULL_REQUEST, payload)

    def test_missing_pull_request_raises(self):
        with pytest.raises(MalformedEventError):
            parse_event(PULL_REQUEST, {"action": "opened"})


class TestReviewEvents:
    def _review_payload(self, action, state="APPROVED", body="LGTM"):
        return _payload(action, review={"id": 9, "user": {"login": "bob"}, "state": state, "body": body})

    def test_submitted_state_is_lowercased(self):
        event = parse_event(PULL_REQUEST_REVIEW, self._review_payload("submitted"))
        assert isinstance(event, ReviewSubmitted)
        assert event.review.state == "approved"
        assert event.review.reviewer == "bob"
        assert event.review.body == "LGTM"

    def test_null_review_body(self):
        event = parse_event(PULL_REQUEST_REVIEW, self._review_payload("submitted", body=None))
        assert event.review.body == ""

    def test_dismissed(self):
        event = parse_event(PULL_REQUEST_REVIEW, self._review_payload("dismissed", state="changes_requested"))
        assert isinstance(event, ReviewDismissed)
        assert event.review.state == "changes_requested"

    def test_edited_review_ignored(self):
        assert parse_event(PULL_REQUEST_REVIEW, self._review_payload("edited")) is None

    def test_missing_review_raises(self):
        with pytest.raises(MalformedEventError, match="payload.review"):
            parse_event(PULL_REQUEST_REVIEW, _payload("submitted"))


def test_unknown_event_name_returns_none():
    assert parse_event("push", {"action": "opened"}) is None


class TestLoadEventPayload:
    def test_reads_json_object(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"action": "opened"}))
        assert load_event_payload(str(path)) == {"action": "opened"}

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(MalformedEventError):
            load_event_payload(str(tmp_path / "missing.json"))

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text("{not json")
        with pytest.raises(MalformedEventError):
            load_event_payload(str(path))

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text("[1, 2]")
        with pytest.raises(MalformedEventError, match="not a JSON object"):
            load_event_payload(str(path))
