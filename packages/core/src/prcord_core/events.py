"""Typed pull request events built from GitHub webhook payloads.

One frozen dataclass per event kind the handlers understand. Payloads are
validated once, here, so the handlers never check for missing keys.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from prcord_core.errors import MalformedEventError

logger = logging.getLogger(__name__)

PULL_REQUEST = "pull_request"
PULL_REQUEST_REVIEW = "pull_request_review"

REVIEW_APPROVED = "approved"
REVIEW_CHANGES_REQUESTED = "changes_requested"
REVIEW_COMMENTED = "commented"


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    url: str
    author: str
    base_branch: str
    head_branch: str
    body: str = ""
    draft: bool = False
    requested_reviewers: tuple[str, ...] = ()
    merged: bool = False
    merged_by: str | None = None
    merge_commit_sha: str | None = None


@dataclass(frozen=True)
class Review:
    id: int
    reviewer: str
    state: str  # "approved" | "changes_requested" | "commented" | "dismissed"
    body: str = ""


@dataclass(frozen=True)
class PullRequestOpened:
    pull_request: PullRequest


@dataclass(frozen=True)
class PullRequestReadyForReview:
    pull_request: PullRequest


@dataclass(frozen=True)
class ReviewRequested:
    pull_request: PullRequest
    requested_reviewer: str | None  # None for team review requests


@dataclass(frozen=True)
class ReviewRequestRemoved:
    pull_request: PullRequest
    requested_reviewer: str | None


@dataclass(frozen=True)
class ReviewSubmitted:
    pull_request: PullRequest
    review: Review


@dataclass(frozen=True)
class ReviewDismissed:
    pull_request: PullRequest
    review: Review


@dataclass(frozen=True)
class PullRequestSynchronized:
    pull_request: PullRequest


@dataclass(frozen=True)
class PullRequestClosed:
    pull_request: PullRequest
    closer: str


@dataclass(frozen=True)
class PullRequestMerged:
    pull_request: PullRequest

    @property
    def merger(self) -> str:
        return self.pull_request.merged_by or "unknown"


PullRequestEvent = Union[
    PullRequestOpened,
    PullRequestReadyForReview,
    ReviewRequested,
    ReviewRequestRemoved,
    ReviewSubmitted,
    ReviewDismissed,
    PullRequestSynchronized,
    PullRequestClosed,
    PullRequestMerged,
]


def load_event_payload(path: str) -> dict:
    """Read the webhook payload JSON that the workflow runner wrote to disk."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise MalformedEventError(f"Failed to load event payload from {path}: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedEventError(f"Event payload in {path} is not a JSON object.")
    return payload


def _require(data: dict, key: str, where: str):
    value = data.get(key) if isinstance(data, dict) else None
    if value is None:
        raise MalformedEventError(f"Event payload is missing '{where}.{key}'.")
    return value


def _login(user, where: str) -> str:
    return _require(user, "login", where)


def _optional_login(user) -> str | None:
    if isinstance(user, dict):
        return user.get("login")
    return None


def _parse_pull_request(payload: dict) -> PullRequest:
    pr = _require(payload, "pull_request", "payload")
    reviewers = tuple(
        r["login"] for r in (pr.get("requested_reviewers") or []) if isinstance(r, dict) and r.get("login")
    )
    return PullRequest(
        number=int(_require(pr, "number", "pull_request")),
        title=pr.get("title") or "",
        url=_require(pr, "html_url", "pull_request"),
        author=_login(_require(pr, "user", "pull_request"), "pull_request.user"),
        base_branch=_require(_require(pr, "base", "pull_request"), "ref", "pull_request.base"),
        head_branch=_require(_require(pr, "head", "pull_request"), "ref", "pull_request.head"),
        body=pr.get("body") or "",
        draft=bool(pr.get("draft", False)),
        requested_reviewers=reviewers,
        merged=pr.get("merged") is True,
        merged_by=_optional_login(pr.get("merged_by")),
        merge_commit_sha=pr.get("merge_commit_sha"),
    )


def _parse_review(payload: dict) -> Review:
    review = _require(payload, "review", "payload")
    return Review(
        id=int(_require(review, "id", "review")),
        reviewer=_login(_require(review, "user", "review"), "review.user"),
        state=str(_require(review, "state", "review")).lower(),
        body=review.get("body") or "",
    )


def parse_event(event_name: str, payload: dict) -> PullRequestEvent | None:
    """Build the typed event for a webhook delivery.

    Returns None for event names and actions prcord does not react to.
    Raises MalformedEventError when a handled event lacks a required field.
    """
    action = payload.get("action")

    if event_name == PULL_REQUEST:
        if action not in {
            "opened",
            "ready_for_review",
            "review_requested",
            "review_request_removed",
            "synchronize",
            "closed",
        }:
            logger.info("Ignoring pull_request action %r.", action)
            return None
        pr = _parse_pull_request(payload)
        if action == "opened":
            return PullRequestOpened(pr)
        if action == "ready_for_review":
            return PullRequestReadyForReview(pr)
        if action == "review_requested":
            return ReviewRequested(pr, _optional_login(payload.get("requested_reviewer")))
        if action == "review_request_removed":
            return ReviewRequestRemoved(pr, _optional_login(payload.get("requested_reviewer")))
        if action == "synchronize":
            return PullRequestSynchronized(pr)
        if pr.merged:
            return PullRequestMerged(pr)
        return PullRequestClosed(pr, closer=_optional_login(payload.get("sender")) or pr.author)

    if event_name == PULL_REQUEST_REVIEW:
        if action not in {"submitted", "dismissed"}:
            logger.info("Ignoring pull_request_review action %r.", action)
            return None
        pr = _parse_pull_request(payload)
        review = _parse_review(payload)
        if action == "submitted":
            return ReviewSubmitted(pr, review)
        return ReviewDismissed(pr, review)

    logger.warning("Unhandled event: %s", event_name)
    return None
