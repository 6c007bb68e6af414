from __future__ import annotations

import logging

import httpx

from .config import DEFAULT_TIMEOUT_SECONDS, resolve_endpoint
from .models import NotificationConfig

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


class SimileError(Exception):
    """Raised when Simile operations fail."""


class SimileConnectionError(SimileError):
    """Raised when Simile is unreachable or the exchange breaks (network/timeout/bad URL)."""


class SimileClient:
    def __init__(
        self,
        base_url: str = "",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        self._endpoint = resolve_endpoint(base_url)
        self._client = httpx.Client(headers=JSON_HEADERS, timeout=timeout, transport=transport)

    @property
    def repository_endpoint(self) -> str:
        return self._endpoint

    def close(self) -> None:
        self._client.close()

    def submit_repository(self, config: NotificationConfig) -> httpx.Response:
        """POST the repository coordinates. Any status code is returned as-is."""
        params = {"repo": config.repository, "branch": config.branch, "email": config.email}
        logger.info("POST %s repo=%s branch=%s", self.repository_endpoint, config.repository, config.branch)
        try:
            response = self._client.post(self.repository_endpoint, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Simile request error POST %s: %s", self.repository_endpoint, exc)
            raise SimileConnectionError(f"Simile request failed: {exc}") from exc
        logger.info("Simile responded with status %s", response.status_code)
        return response
