from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from . import config
from .log_sink import LogSink
from .models import NotificationConfig, NotificationOutcome, ServerConfig
from .notifier import notify
from .server_config_store import ServerConfigError, ServerConfigStore
from .validation import validate_email, validate_repository

logger = logging.getLogger(__name__)

_RE_ORIGIN = re.compile(r"^origin/")


def branch_from_env(env: dict[str, str] | None = None) -> str:
    """Jenkins exposes GIT_BRANCH as "origin/<name>"; Simile wants the bare name."""
    e = env if env is not None else os.environ
    return _RE_ORIGIN.sub("", e.get("GIT_BRANCH") or "")


def notification_config_from_env(
    *,
    repository: Optional[str] = None,
    branch: Optional[str] = None,
    email: Optional[str] = None,
    env: dict[str, str] | None = None,
) -> NotificationConfig:
    """Explicit values are used as given; only values read from the environment are stripped."""
    e = env if env is not None else os.environ
    return NotificationConfig(
        repository=repository if repository is not None else (e.get("GIT_URL") or "").strip(),
        branch=branch if branch is not None else branch_from_env(e).strip(),
        email=email if email is not None else (e.get("SIMILE_EMAIL") or "").strip(),
    )


def effective_server_config(settings: config.Settings, store: ServerConfigStore) -> ServerConfig:
    if settings.simile_url:
        return ServerConfig(base_url=settings.simile_url)
    return store.load()


@dataclass(frozen=True)
class SimileBuildStep:
    notification: NotificationConfig

    def perform(
        self,
        settings: config.Settings,
        log: LogSink,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> NotificationOutcome:
        try:
            server_config = effective_server_config(settings, ServerConfigStore(settings.config_path))
        except ServerConfigError as exc:
            logger.warning("Falling back to default Simile endpoint: %s", exc)
            log.write_line(config.MSG_CONFIG_FALLBACK.format(error=exc))
            server_config = ServerConfig()

        self._warn_invalid_fields(log)
        logger.info(
            "Build finished; notifying Simile endpoint=%s",
            config.resolve_endpoint(server_config.base_url),
        )
        return notify(
            self.notification,
            server_config,
            log,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    def _warn_invalid_fields(self, log: LogSink) -> None:
        # Warn only; the values are still sent.
        checks = [
            ("repository", validate_repository(self.notification.repository)),
            ("email", validate_email(self.notification.email)),
        ]
        for field, verdict in checks:
            if verdict.is_ok():
                continue
            logger.warning("Invalid %s %r: %s", field, getattr(self.notification, field), verdict.message)
            log.write_line(config.MSG_FIELD_WARNING.format(field=field, message=verdict.message))
