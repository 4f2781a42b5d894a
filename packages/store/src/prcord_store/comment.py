"""CommentLinkageStore - linkage records kept in a hidden pull request comment.

The record is JSON wrapped in an HTML comment, so GitHub renders nothing:

    <!-- DISCORD_BOT_METADATA
    {"message_id": "...", "thread_id": "...", "channel_id": "..."}
    -->

The comments are read and written through a ticket client exposing
``list_comments(pr_number)`` (items with a ``body``) and
``create_comment(pr_number, body)``.
"""

from __future__ import annotations

import json
import logging
import re

from prcord_store.base import BaseLinkageStore
from prcord_store.models import LinkageRecord

logger = logging.getLogger(__name__)

METADATA_START = "<!-- DISCORD_BOT_METADATA"
METADATA_END = "-->"
_METADATA_RE = re.compile(r"<!-- DISCORD_BOT_METADATA\r?\n([\s\S]*?)\r?\n-->")


def format_metadata_comment(record: LinkageRecord) -> str:
    return f"{METADATA_START}\n{json.dumps(record.to_dict(), indent=2)}\n{METADATA_END}"


def parse_metadata_comment(body: str | None) -> LinkageRecord | None:
    """Return the record embedded in a comment body, or None if there is no valid one."""
    if not body:
        return None
    match = _METADATA_RE.search(body)
    if match is None:
        return None
    try:
        return LinkageRecord.from_dict(json.loads(match.group(1)))
    except (json.JSONDecodeError, ValueError) as e:
        logger.debug("Skipping malformed linkage comment: %s", e)
        return None


class CommentLinkageStore(BaseLinkageStore):
    """Stores one linkage record per pull request as a hidden issue comment."""

    def __init__(self, tickets):
        self._tickets = tickets

    def find(self, pr_number: int) -> LinkageRecord | None:
        for comment in self._tickets.list_comments(pr_number):
            record = parse_metadata_comment(comment.body)
            if record is not None:
                return record
        return None

    def create(self, pr_number: int, record: LinkageRecord) -> None:
        self._tickets.create_comment(pr_number, format_metadata_comment(record))
        logger.info("Saved Discord linkage on PR #%d (message %s).", pr_number, record.message_id)
