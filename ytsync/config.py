import os
import yaml
from typing import Dict, List, Mapping, Optional
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import AppConfig, ChannelConfig, SyncSettings

CHANNELS_CONFIG = "config/channels.yaml"

REQUIRED_ENV = [
    "NOTION_TOKEN",
    "NOTION_DATABASE_ID",
    "YOUTUBE_API_KEY",
    "CHANNEL_ID_1",
    "CHANNEL_ID_2",
    "CHANNEL_ID_3",
]

DEFAULT_CHANNELS = [
    {"name": "Cherrius", "env": "CHANNEL_ID_1"},
    {"name": "CherriusClips", "env": "CHANNEL_ID_2"},
    {"name": "CherriusPlays", "env": "CHANNEL_ID_3"},
]

def _read_yaml(path: str) -> Dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return data

def _parse_channels(raw: List, env: Mapping[str, str]) -> List[ChannelConfig]:
    channels = []
    for i, ch in enumerate(raw):
        if not isinstance(ch, dict) or not ch.get("name") or not ch.get("env"):
            raise ConfigError(f"channels[{i}] needs 'name' and 'env'")
        channel_id = env.get(ch["env"], "")
        if not channel_id:
            raise ConfigError(f"Missing required environment variable: {ch['env']}")
        channels.append(ChannelConfig(name=ch["name"], channel_id=channel_id))
    return channels

def load_config(
    channels_config_path: str = CHANNELS_CONFIG,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Builds the run configuration from the environment and the channels file.

    Every required variable is checked before anything touches the network;
    the first missing one raises ConfigError.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV if not env.get(name)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    config = _read_yaml(channels_config_path)

    raw_channels = config.get("channels") or DEFAULT_CHANNELS
    if not isinstance(raw_channels, list):
        raise ConfigError("channels must be a list")
    channels = _parse_channels(raw_channels, env)

    raw_settings = config.get("settings") or {}
    if not isinstance(raw_settings, dict):
        raise ConfigError("settings must be a mapping")

    try:
        settings = SyncSettings(
            **raw_settings,
            dry_run=env.get("DRY_RUN", "False").lower() == "true",
        )
    except (ValidationError, TypeError) as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    return AppConfig(
        notion_token=env["NOTION_TOKEN"],
        notion_database_id=env["NOTION_DATABASE_ID"],
        youtube_api_key=env["YOUTUBE_API_KEY"],
        channels=channels,
        settings=settings,
    )
