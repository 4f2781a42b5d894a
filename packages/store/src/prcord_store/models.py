"""Linkage record model.

Decoupled from prcord_core so the store layer has no knowledge of events,
handlers, or the Discord client.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LinkageRecord:
    """Pointer from a pull request to its Discord message, thread, and channel.

    Written once when the PR is opened and never modified afterwards.
    thread_id is None when thread creation failed.
    """

    message_id: str
    channel_id: str
    thread_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "thread_id": self.thread_id,
            "channel_id": self.channel_id,
        }

    @classmethod
    def from_dict(cls, d: dict) -> LinkageRecord:
        """Build a record from parsed JSON. Raises ValueError if required keys are missing."""
        if not isinstance(d, dict):
            raise ValueError("Linkage record must be a JSON object.")
        message_id = d.get("message_id")
        channel_id = d.get("channel_id")
        if not message_id or not channel_id:
            raise ValueError("Linkage record requires message_id and channel_id.")
        thread_id = d.get("thread_id")
        return cls(
            message_id=str(message_id),
            channel_id=str(channel_id),
            thread_id=str(thread_id) if thread_id else None,
        )
