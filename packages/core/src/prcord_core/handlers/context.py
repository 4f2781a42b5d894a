"""Shared plumbing for the event handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from prcord_core.errors import best_effort
from prcord_core.formatting import mention
from prcord_core.notes import MISSING_LINKAGE_COMMENT

if TYPE_CHECKING:
    from prcord_core.discord import DiscordClient
    from prcord_core.gh.pull_request import TicketClient
    from prcord_store.base import BaseLinkageStore
    from prcord_store.models import LinkageRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HandlerContext:
    """Everything one handler invocation needs: both clients, the store, and settings."""

    discord: DiscordClient
    tickets: TicketClient
    store: BaseLinkageStore
    user_mapping: dict = field(default_factory=dict)
    channel_id: str | None = None
    closing_comment_window_seconds: int = 60
    clock: Callable[[], datetime] = _utcnow

    def mention(self, login: str) -> str:
        return mention(login, self.user_mapping)


def require_linkage(ctx: HandlerContext, pr_number: int, need_thread: bool = True) -> LinkageRecord | None:
    """Return the PR's linkage record, or None after reporting that it is missing.

    A missing record (or a missing thread when need_thread is set) is logged
    and explained in a best-effort PR comment. Errors reading the comments
    themselves propagate.
    """
    record = ctx.store.find(pr_number)
    if record is not None and (record.thread_id or not need_thread):
        return record

    what = "metadata" if record is None else "thread"
    logger.warning("No Discord %s found for PR #%d. Skipping.", what, pr_number)
    best_effort(
        "comment in PR about the missing Discord linkage",
        ctx.tickets.create_comment,
        pr_number,
        MISSING_LINKAGE_COMMENT,
    )
    return None


def rewrite_message(ctx: HandlerContext, record: LinkageRecord, patch: Callable[[str], str]) -> str:
    """Read the primary message, apply a text patch, and write it back when it changed."""
    content = ctx.discord.get_message(record.channel_id, record.message_id)
    updated = patch(content)
    if updated != content:
        ctx.discord.edit_message(record.channel_id, record.message_id, updated)
    else:
        logger.debug("Primary message %s already up to date.", record.message_id)
    return updated
