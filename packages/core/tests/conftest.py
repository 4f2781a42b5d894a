"""In-memory stand-ins for Discord and GitHub shared by the handler tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from prcord_core.events import PullRequest
from prcord_core.gh.pull_request import TicketComment
from prcord_core.handlers.context import HandlerContext
from prcord_store.comment import CommentLinkageStore

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
CHANNEL_ID = "chan-1"
USER_MAPPING = {"alice": "111", "bob": "222", "carol": "333"}


class FakeDiscord:
    """Keeps messages, thread posts, reactions, and thread state in memory."""

    def __init__(self):
        self.messages: dict[tuple[str, str], str] = {}
        self.thread_posts: list[tuple[str, str]] = []
        self.thread_names: dict[str, str] = {}
        self.reactions: set[tuple[str, str]] = set()
        self.lock_calls: list[tuple[str, bool]] = []
        self.archived: list[str] = []
        self.removed_members: list[tuple[str, str]] = []
        self.edits = 0
        self._next_id = 1000

    def _new_id(self) -> str:
        self._next_id += 1
        return str(self._next_id)

    def send_message(self, channel_id, content):
        message_id = self._new_id()
        self.messages[(channel_id, message_id)] = content
        return message_id

    def create_thread(self, channel_id, message_id, name):
        thread_id = f"thread-{message_id}"
        self.thread_names[thread_id] = name
        return thread_id

    def send_thread_message(self, thread_id, content):
        self.thread_posts.append((thread_id, content))

    def get_message(self, channel_id, message_id):
        return self.messages[(channel_id, message_id)]

    def edit_message(self, channel_id, message_id, content):
        self.edits += 1
        self.messages[(channel_id, message_id)] = content

    def add_reaction(self, channel_id, message_id, emoji):
        self.reactions.add((message_id, emoji))

    def remove_reaction(self, channel_id, message_id, emoji):
        self.reactions.discard((message_id, emoji))

    def lock_thread(self, thread_id, locked):
        self.lock_calls.append((thread_id, locked))

    def archive_thread(self, thread_id):
        self.archived.append(thread_id)

    def remove_thread_member(self, thread_id, user_id):
        self.removed_members.append((thread_id, user_id))

    def content(self, message_id, channel_id=CHANNEL_ID):
        return self.messages[(channel_id, message_id)]

    def posts_in(self, thread_id):
        return [content for tid, content in self.thread_posts if tid == thread_id]


class FakeTickets:
    """Issue comments, review bodies, review requests, and commits for one repository."""

    def __init__(self):
        self.comments: dict[int, list[TicketComment]] = {}
        self.review_bodies: dict[int, str] = {}
        self.review_requests: list[tuple[int, list[str]]] = []
        self.commit_subjects: dict[str, str] = {}

    def list_comments(self, pr_number):
        return list(self.comments.get(pr_number, []))

    def create_comment(self, pr_number, body):
        self.comments.setdefault(pr_number, []).append(TicketComment(body=body, author="prcord-bot", created_at=NOW))

    def add_comment(self, pr_number, body, author, created_at):
        self.comments.setdefault(pr_number, []).append(TicketComment(body=body, author=author, created_at=created_at))

    def get_review_body(self, pr_number, review_id):
        return self.review_bodies.get(review_id, "")

    def request_reviewers(self, pr_number, logins):
        if logins:
            self.review_requests.append((pr_number, list(logins)))

    def get_commit_subject(self, sha):
        return self.commit_subjects[sha]


def _make_pr(**overrides) -> PullRequest:
    fields = {
        "number": 42,
        "title": "Add login flow",
        "url": "https://github.com/acme/app/pull/42",
        "author": "alice",
        "base_branch": "main",
        "head_branch": "feature/login",
        "body": "Implements the login page.",
        "draft": False,
        "requested_reviewers": ("bob",),
    }
    fields.update(overrides)
    return PullRequest(**fields)


@pytest.fixture
def discord():
    return FakeDiscord()


@pytest.fixture
def tickets():
    return FakeTickets()


@pytest.fixture
def ctx(discord, tickets):
    return HandlerContext(
        discord=discord,
        tickets=tickets,
        store=CommentLinkageStore(tickets),
        user_mapping=dict(USER_MAPPING),
        channel_id=CHANNEL_ID,
        closing_comment_window_seconds=60,
        clock=lambda: NOW,
    )


@pytest.fixture
def make_pr():
    return _make_pr
