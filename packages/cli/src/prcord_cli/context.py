"""Factories wiring config into clients, store, and handler context.

Kept in the CLI so neither prcord_core nor prcord_store know about the
config format.
"""

from __future__ import annotations

from prcord_core.discord import DiscordClient
from prcord_core.gh.pull_request import TicketClient
from prcord_core.handlers.context import HandlerContext
from prcord_store.comment import CommentLinkageStore


def build_ticket_client(config: dict, repo: str) -> TicketClient:
    return TicketClient.from_token(repo, token=config["github_token"])


def build_handler_context(config: dict, repo: str) -> HandlerContext:
    tickets = build_ticket_client(config, repo)
    discord = DiscordClient(
        token=config["discord_bot_token"],
        api_base=config["discord_api_base"],
        suppress_embeds=config["suppress_embeds"],
        auto_archive_minutes=config["thread_auto_archive_minutes"],
    )
    return HandlerContext(
        discord=discord,
        tickets=tickets,
        store=CommentLinkageStore(tickets),
        user_mapping=config["user_mapping"],
        channel_id=config.get("channel_id"),
        closing_comment_window_seconds=config["closing_comment_window_seconds"],
    )
