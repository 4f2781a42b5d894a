import json
import os
from pathlib import Path
from typing import Optional

import yaml

from prcord_core.errors import ConfigError

DEFAULT_CONFIG: dict = {
    "channel_id": None,
    "user_mapping": {},  # GitHub login -> Discord user id
    "thread_auto_archive_minutes": 1440,
    "suppress_embeds": True,
    "closing_comment_window_seconds": 60,
    "discord_api_base": "https://discord.com/api/v10",
}


def parse_user_mapping(raw: Optional[str]) -> dict:
    """Parse the DISCORD_USER_MAPPING JSON object. Empty input yields {}."""
    if not raw or not raw.strip():
        return {}
    try:
        mapping = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse DISCORD_USER_MAPPING: {e}") from e
    if not isinstance(mapping, dict):
        raise ConfigError("DISCORD_USER_MAPPING must be a JSON object of GitHub login -> Discord user id.")
    return {str(login): str(user_id) for login, user_id in mapping.items()}


def load_config(config_path: str = ".prcord.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prcord.yml in the current directory
      3. CLI argument overrides
      4. Environment variables (credentials, channel, user mapping)
    """
    config = {**DEFAULT_CONFIG, "user_mapping": dict(DEFAULT_CONFIG["user_mapping"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)
        config["user_mapping"] = {str(k): str(v) for k, v in (config.get("user_mapping") or {}).items()}

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["discord_bot_token"] = os.environ.get("DISCORD_BOT_TOKEN")
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["repository"] = config.get("repository") or os.environ.get("GITHUB_REPOSITORY")

    channel_id = os.environ.get("DISCORD_CHANNEL_ID")
    if channel_id:
        config["channel_id"] = channel_id

    config["user_mapping"].update(parse_user_mapping(os.environ.get("DISCORD_USER_MAPPING")))

    return config
