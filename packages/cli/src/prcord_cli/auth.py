"""Credential resolution for the CLI.

prcord normally runs as a workflow step, where the token comes from the
environment. The gh CLI session is only consulted for local runs, such as
`prcord linkage` or replaying a saved payload with `prcord handle`.

GitHub token resolution order (stops at first success):
  1. GITHUB_TOKEN environment variable (what the workflow passes to prcord)
  2. GH_TOKEN environment variable (what workflows set for the gh CLI)
  3. `gh auth token`, outside GitHub Actions only

The Discord bot token has a single source, DISCORD_BOT_TOKEN, which
load_config() already reads into ``discord_bot_token``.
"""

from __future__ import annotations

import logging
import os
import subprocess

import click

logger = logging.getLogger(__name__)


_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def _gh_cli_token() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return the token prcord should use for GitHub, or None.

    Never raises. `handle` and `linkage` turn a None into a UsageError.
    """
    for name in _TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token

    # Runners have no gh login session.
    if os.environ.get("GITHUB_ACTIONS") == "true":
        return None

    token = _gh_cli_token()
    if token:
        logger.debug("Resolved GitHub token via gh CLI session.")
    return token


def require_github_token(config: dict) -> str:
    token = config.get("github_token")
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")
    return token


def require_bot_token(config: dict) -> str:
    token = config.get("discord_bot_token")
    if not token:
        raise click.UsageError("DISCORD_BOT_TOKEN secret must be set.")
    return token
