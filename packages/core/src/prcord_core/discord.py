"""Discord REST client covering the operations the handlers need."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from prcord_core.errors import DiscordAPIError

logger = logging.getLogger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"
SUPPRESS_EMBEDS = 1 << 2
_REQUEST_TIMEOUT = 15


class DiscordClient:
    """Thin wrapper over the Discord bot REST API.

    Every method raises DiscordAPIError on a non-success status, except the
    deletions of reactions and thread members, where 404 means the target
    was already gone.
    """

    def __init__(
        self,
        token: str,
        api_base: str = DISCORD_API_BASE,
        session: requests.Session | None = None,
        suppress_embeds: bool = True,
        auto_archive_minutes: int = 1440,
    ):
        self.api_base = api_base.rstrip("/")
        self.session = session or requests.Session()
        self.suppress_embeds = suppress_embeds
        self.auto_archive_minutes = auto_archive_minutes
        self._headers = {
            "Authorization": f"Bot {token}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> Any:
        response = self.session.request(
            method=method,
            url=f"{self.api_base}{path}",
            headers=self._headers,
            json=json,
            timeout=_REQUEST_TIMEOUT,
        )
        if allow_not_found and response.status_code == 404:
            logger.debug("%s %s returned 404; treating as already done.", method, path)
            return {}
        if response.status_code >= 400:
            raise DiscordAPIError(response.status_code, response.text)
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    def _message_body(self, content: str) -> dict[str, Any]:
        body: dict[str, Any] = {"content": content}
        if self.suppress_embeds:
            body["flags"] = SUPPRESS_EMBEDS
        return body

    def send_message(self, channel_id: str, content: str) -> str:
        """Post a message to a channel and return its id."""
        data = self._request("POST", f"/channels/{channel_id}/messages", json=self._message_body(content))
        return str(data["id"])

    def create_thread(self, channel_id: str, message_id: str, name: str) -> str | None:
        """Start a thread on a message. Returns the thread id, or None if Discord sent none."""
        data = self._request(
            "POST",
            f"/channels/{channel_id}/messages/{message_id}/threads",
            json={"name": name, "auto_archive_duration": self.auto_archive_minutes},
        )
        thread_id = data.get("id")
        return str(thread_id) if thread_id else None

    def send_thread_message(self, thread_id: str, content: str) -> None:
        self._request("POST", f"/channels/{thread_id}/messages", json=self._message_body(content))

    def get_message(self, channel_id: str, message_id: str) -> str:
        """Return the current text content of a message."""
        data = self._request("GET", f"/channels/{channel_id}/messages/{message_id}")
        return data.get("content") or ""

    def edit_message(self, channel_id: str, message_id: str, content: str) -> None:
        self._request(
            "PATCH",
            f"/channels/{channel_id}/messages/{message_id}",
            json=self._message_body(content),
        )

    def add_reaction(self, channel_id: str, message_id: str, emoji: str) -> None:
        self._request("PUT", f"/channels/{channel_id}/messages/{message_id}/reactions/{quote(emoji)}/@me")

    def remove_reaction(self, channel_id: str, message_id: str, emoji: str) -> None:
        self._request(
            "DELETE",
            f"/channels/{channel_id}/messages/{message_id}/reactions/{quote(emoji)}/@me",
            allow_not_found=True,
        )

    def lock_thread(self, thread_id: str, locked: bool) -> None:
        self._request("PATCH", f"/channels/{thread_id}", json={"locked": locked})

    def archive_thread(self, thread_id: str) -> None:
        """Archive and lock a thread in one update."""
        self._request("PATCH", f"/channels/{thread_id}", json={"archived": True, "locked": True})

    def remove_thread_member(self, thread_id: str, user_id: str) -> None:
        self._request("DELETE", f"/channels/{thread_id}/thread-members/{user_id}", allow_not_found=True)
