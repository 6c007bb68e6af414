from __future__ import annotations

import logging
import traceback

import httpx

from .config import (
    BANNER_SEPARATOR,
    BANNER_TITLE,
    DEFAULT_TIMEOUT_SECONDS,
    MSG_ENDPOINT,
    MSG_FAILURE,
    MSG_SENDING,
    MSG_SUCCESS,
)
from .log_sink import LogSink
from .models import NotificationConfig, NotificationOutcome, ServerConfig
from .simile_client import SimileClient, SimileError

logger = logging.getLogger(__name__)


def notify(
    config: NotificationConfig,
    server_config: ServerConfig,
    log: LogSink,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.BaseTransport | None = None,
) -> NotificationOutcome:
    """
    Send one build notification to Simile and report it to the build log.

    Never raises. Every outcome, including transport failures, is written to
    `log` and returned.
    """
    client = SimileClient(base_url=server_config.base_url, timeout=timeout, transport=transport)
    try:
        endpoint = client.repository_endpoint
        log.write_line(BANNER_TITLE)
        log.write_line(BANNER_SEPARATOR)
        log.write_line(MSG_SENDING)
        log.write_line(MSG_ENDPOINT.format(endpoint=endpoint))

        try:
            response = client.submit_repository(config)
        except SimileError as exc:
            logger.warning("Simile notification failed for %s: %s", config.repository, exc)
            return _report_exception(log, exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected failure notifying Simile for %s: %s", config.repository, exc)
            return _report_exception(log, exc)

        body = response.text
        if response.status_code == 200:
            log.write_line(MSG_SUCCESS)
            log.write_line(BANNER_SEPARATOR)
            logger.info("Simile notified for %s (%s)", config.repository, config.branch)
            return NotificationOutcome(succeeded=True, http_status=200, detail=body)

        logger.warning("Simile returned status %s for %s", response.status_code, config.repository)
        log.write_line(MSG_FAILURE)
        log.write_line(body)
        return NotificationOutcome(succeeded=False, http_status=response.status_code, detail=body)
    finally:
        client.close()


def _report_exception(log: LogSink, exc: BaseException) -> NotificationOutcome:
    message = str(exc) or exc.__class__.__name__
    log.write_line(MSG_FAILURE)
    log.write_line(message)
    log.write_line("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip())
    return NotificationOutcome(succeeded=False, http_status=None, detail=message)
