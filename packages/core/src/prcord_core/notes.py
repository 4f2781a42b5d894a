"""Thread notes and ticket comments posted by the handlers."""

from __future__ import annotations

from prcord_core.formatting import quote

ORIENTATION_NOTE = (
    ":thread: Keep all conversations/dialogue about the contents of the PR in this thread **or** in the PR's comments"
)
READY_NOTE = ":eyes: This PR is now ready for review!"
MERGE_CLOSING_SENTENCE = "Remember to delete associative branch if it is no longer needed!"
MISSING_LINKAGE_COMMENT = (
    "⚠️ Discord integration: Could not find Discord thread metadata for this PR. "
    "The Discord bot may not be able to update notifications."
)


def _quoted(body: str | None) -> str:
    if body and body.strip():
        return f"{quote(body)}\n\n"
    return ""


def reviewer_requested_note(reviewer: str, pr_number: int, pr_url: str) -> str:
    return f":bellhop: {reviewer} - your review as been requested for [PR #{pr_number}]({pr_url})"


def reviewer_removed_note(reviewer: str) -> str:
    return f"👋 {reviewer} has been removed as a reviewer from this PR."


def approved_note(author: str, reviewer: str, body: str | None) -> str:
    return (
        f":white_check_mark: {author} - {reviewer} has approved the PR\n"
        f"{_quoted(body)}"
        "Feel free to merge if all other conditions have been met"
    )


def changes_requested_note(author: str, reviewer: str, body: str | None) -> str:
    return (
        f":tools: {author} - changes have been requested by {reviewer}.\n"
        f"{_quoted(body)}"
        "Please resolve them and re-request a review."
    )


def changes_addressed_note(reviewer: str) -> str:
    return f"✅ {reviewer} The requested changes have been addressed. Please review the updates."


def new_commits_note(reviewers: list[str]) -> str:
    if reviewers:
        return f"⚠️ New commits have been pushed to this PR. {' '.join(reviewers)} Please review the updates."
    return "⚠️ New commits have been pushed to this PR. Please add reviewers if needed."


def closed_note(pr_number: int, pr_url: str, closer: str, closing_comment: str | None) -> str:
    note = f":closed_book: [PR #{pr_number}]({pr_url}) has been closed by {closer}\n"
    if closing_comment and closing_comment.strip():
        note += f"{quote(closing_comment)}\n"
    return note


def merged_note(author: str, pr_number: int, pr_url: str, base_branch: str, commit_subject: str | None) -> str:
    note = f":tada: {author} - [PR #{pr_number}]({pr_url}) has been merged into `{base_branch}`\n\n"
    if commit_subject:
        note += f"> {commit_subject}\n\n"
    return note + MERGE_CLOSING_SENTENCE
