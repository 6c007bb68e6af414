from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# --------------------------------
# Settings

# Used when no server URL has been configured
DEFAULT_SIMILE_URL = "http://localhost:8080/simile"

# Appended to the server base URL
REPOSITORY_PATH = "/repository"

# Request timeout (seconds)
DEFAULT_TIMEOUT_SECONDS = 20.0

CONFIG_FILE_NAME = "simile-notifier.json"

DISPLAY_NAME = "Simile - Search for similar components"

# Build console messages
BANNER_TITLE = "Simile Jenkins Plugin"
BANNER_SEPARATOR = "=" * len(BANNER_TITLE)
MSG_SENDING = "Sending data to Simile for component search."
MSG_ENDPOINT = "Simile Endpoint: {endpoint}"
MSG_SUCCESS = "Data sent successfully!"
MSG_FAILURE = "An error happened when sending data to Simile."
MSG_CONFIG_FALLBACK = "Warning: Simile server configuration is unusable ({error}); using the default endpoint."
MSG_FIELD_WARNING = "Warning: {field}: {message}"
# --------------------------------


def resolve_endpoint(base_url: Optional[str]) -> str:
    base = (base_url or "").strip() or DEFAULT_SIMILE_URL
    return base.rstrip("/") + REPOSITORY_PATH


def default_config_path(env: dict[str, str] | None = None) -> Path:
    e = env if env is not None else os.environ
    jenkins_home = (e.get("JENKINS_HOME") or "").strip()
    if jenkins_home:
        return Path(jenkins_home) / CONFIG_FILE_NAME
    return Path.home() / f".{CONFIG_FILE_NAME}"


@dataclass
class Settings:
    config_path: Path
    simile_url: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @staticmethod
    def from_env(env: dict[str, str] | None = None) -> "Settings":
        e = env if env is not None else os.environ

        def optional(name: str) -> str | None:
            value = e.get(name)
            if value is None or not value.strip():
                return None
            return value.strip()

        config_file = optional("SIMILE_CONFIG_FILE")
        raw_timeout = optional("SIMILE_TIMEOUT_SECONDS")
        timeout = DEFAULT_TIMEOUT_SECONDS
        if raw_timeout is not None:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ValueError(f"SIMILE_TIMEOUT_SECONDS must be a number: {raw_timeout!r}") from exc
            if timeout <= 0:
                raise ValueError(f"SIMILE_TIMEOUT_SECONDS must be positive: {raw_timeout!r}")

        return Settings(
            config_path=Path(config_file) if config_file else default_config_path(e),
            simile_url=optional("SIMILE_URL"),
            timeout_seconds=timeout,
        )
