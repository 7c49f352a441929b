"""Client options and config.toml loading."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

WHATSAPP_WEB_URL = "https://web.whatsapp.com/"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ClientOptions(BaseModel):
    """Options for launching and tearing down a client."""

    url: str = Field(default=WHATSAPP_WEB_URL, description="WhatsApp Web URL")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="Browser user agent")
    headless: bool = Field(default=False, description="Run the browser without a window")
    user_data_dir: Path = Field(
        default=Path(".whatsbot/session"), description="Persistent browser profile directory"
    )
    store_ready_predicate: str = Field(
        default="window.Store != undefined",
        description="Expression that is truthy once the store is injected",
    )
    destroy_waits_for_keep_session_marker: bool = Field(
        default=False, description="Wait for the keep-session marker before closing"
    )
    keep_session_marker_selector: str = Field(
        default='[data-asset-intro-image="true"]',
        description="Selector of the 'keep your phone connected' intro image",
    )


_ENV_OVERRIDES = {
    "WHATSBOT_URL": "url",
    "WHATSBOT_HEADLESS": "headless",
    "WHATSBOT_USER_DATA_DIR": "user_data_dir",
}


def load_config(config_path: Optional[str] = None) -> ClientOptions:
    """
    Load client options from a TOML file and the environment.

    Reads the ``[whatsbot]`` table of ``config.toml`` (or ``config_path``).
    Environment variables win over file values. A missing or unreadable
    file falls back to defaults.
    """
    # Use tomllib for Python 3.11+, tomli for older versions
    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib

    values: dict = {}
    config_file = Path(config_path) if config_path else Path("config.toml")

    if not config_file.exists():
        logger.warning(f"Config file {config_file} not found, using defaults")
    else:
        try:
            with open(config_file, "rb") as f:
                values.update(tomllib.load(f).get("whatsbot", {}))
            logger.info(f"✅ Loaded config from {config_file}")
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error(f"Failed to load config: {e}")

    for env_name, field in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is not None and raw != "":
            values[field] = raw

    return ClientOptions(**values)
