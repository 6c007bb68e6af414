from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import ServerConfig
from .validation import validate_server_url

logger = logging.getLogger(__name__)

_URL_KEY = "simile_url"


class ServerConfigError(ValueError):
    pass


class ServerConfigStore:
    """Server settings persisted as a small JSON file.

    A missing file means nothing has been configured yet and loads as the
    default (empty) ServerConfig.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> ServerConfig:
        if not self.path.exists():
            logger.info("No server config at %s; using default endpoint", self.path)
            return ServerConfig()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ServerConfigError(f"Unreadable server config {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ServerConfigError(f"Server config {self.path} must be a JSON object")
        raw = data.get(_URL_KEY) or ""
        if not isinstance(raw, str):
            raise ServerConfigError(f"{_URL_KEY} in {self.path} must be a string")
        return ServerConfig(base_url=raw.strip())

    def save(self, config: ServerConfig) -> None:
        base_url = config.base_url.strip()
        verdict = validate_server_url(base_url)
        if verdict.is_error():
            raise ServerConfigError(f"{verdict.message} Got {base_url!r}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {_URL_KEY: base_url}
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        logger.info("Saved server config to %s (simile_url=%s)", self.path, base_url or "<default>")
