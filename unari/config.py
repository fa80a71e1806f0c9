"""Runtime configuration defaults for the menu server and sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

UNICAFE_API_URL = "https://unicafe.fi/wp-json/swiss/v1/restaurants/?lang=fi"
HTTP_TIMEOUT_SECONDS = 15.0

TIMEZONE_NAME = "Europe/Helsinki"

# Below either of these the dashboard shows only the size guard message.
MIN_WIDTH = 40
MIN_HEIGHT = 10

SCROLL_STEP = 2
SIDEBAR_WIDTH = 16

# A lone ESC with no follow-up input within this window is the escape key.
ESCAPE_TIMEOUT_SECONDS = 0.05

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 23234
DEFAULT_HOST_KEY_PATH = ".ssh/id_ed25519"
DEFAULT_LOG_PATH = "/tmp/unari-debug.log"


@dataclass(frozen=True)
class Settings:
    """Process-level settings resolved from the environment."""

    host: str
    port: int
    host_key_path: str
    api_url: str
    log_path: str


def load_settings(env_file: str | None = None) -> Settings:
    """Load `.env` (without overriding real env vars) and resolve settings."""
    load_dotenv(env_file)

    raw_port = os.getenv("PORT", "").strip()
    if raw_port:
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None
    else:
        port = DEFAULT_PORT
    if not (0 < port < 65536):
        raise ValueError(f"PORT out of range: {port}")

    return Settings(
        host=os.getenv("HOST", "").strip() or DEFAULT_HOST,
        port=port,
        host_key_path=os.getenv("HOST_KEY_PATH", "").strip() or DEFAULT_HOST_KEY_PATH,
        api_url=os.getenv("UNARI_API_URL", "").strip() or UNICAFE_API_URL,
        log_path=os.getenv("UNARI_LOG_PATH", "").strip() or DEFAULT_LOG_PATH,
    )
