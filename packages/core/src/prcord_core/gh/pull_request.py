from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from github import Github

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TicketComment:
    """An issue comment on a pull request, reduced to what the handlers read."""

    body: str
    author: str
    created_at: datetime | None


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


class TicketClient:
    """PyGithub-backed operations on one repository's pull requests."""

    def __init__(self, repo):
        self._repo = repo

    @classmethod
    def from_token(cls, repo_name: str, token: str) -> TicketClient:
        return cls(get_repo(repo_name, token=token))

    def list_comments(self, pr_number: int) -> list[TicketComment]:
        """Return every issue comment on the pull request, oldest first."""
        comments = self._repo.get_issue(pr_number).get_comments()
        return [
            TicketComment(
                body=c.body or "",
                author=c.user.login if c.user is not None else "",
                created_at=c.created_at,
            )
            for c in comments
        ]

    def create_comment(self, pr_number: int, body: str) -> None:
        self._repo.get_issue(pr_number).create_comment(body)

    def get_review_body(self, pr_number: int, review_id: int) -> str:
        """Fetch a review's body for deliveries whose payload omitted it."""
        return self._repo.get_pull(pr_number).get_review(review_id).body or ""

    def request_reviewers(self, pr_number: int, logins: list[str]) -> None:
        if not logins:
            return
        self._repo.get_pull(pr_number).create_review_request(reviewers=list(logins))
        logger.debug("Re-requested reviews on #%d from %s", pr_number, ", ".join(logins))

    def get_commit_subject(self, sha: str) -> str:
        """Return the first line of a commit message."""
        return self._repo.get_commit(sha).commit.message.split("\n")[0]
