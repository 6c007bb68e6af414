from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from .models import ValidationResult

MSG_REPOSITORY_REQUIRED = "repository is required."
MSG_REPOSITORY_INVALID = "not a valid web URL for a repository; use an http(s) URL."
MSG_REPOSITORY_SHORT = "repository identifier looks unusually short."
MSG_EMAIL_INVALID = "not a valid email address."
MSG_SERVER_URL_INVALID = "not a valid server URL; use an absolute http(s) URL."

_REPOSITORY_REGEX = re.compile(r"^(https?)(://)?[\w.@:/~-]+(\.git)?$", re.ASCII | re.IGNORECASE)

# The unescaped dots match any character.
_EMAIL_REGEX = re.compile(
    r"[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?"
)


def validate_repository(value: Optional[str]) -> ValidationResult:
    """
    Check a Git repository web URL typed into the build step form.

    Returns an error for empty or non-http(s) values and a warning for values
    that are suspiciously short. Never raises.
    """
    value = value or ""
    if not value:
        return ValidationResult.error(MSG_REPOSITORY_REQUIRED)
    if not is_valid_repository_url(value):
        return ValidationResult.error(MSG_REPOSITORY_INVALID)
    if len(value) < 4:
        return ValidationResult.warning(MSG_REPOSITORY_SHORT)
    return ValidationResult.ok()


def validate_email(value: Optional[str]) -> ValidationResult:
    if not is_valid_email(value or ""):
        return ValidationResult.error(MSG_EMAIL_INVALID)
    return ValidationResult.ok()


def validate_server_url(value: Optional[str]) -> ValidationResult:
    """Empty means "use the default endpoint" and is accepted."""
    value = (value or "").strip()
    if not value:
        return ValidationResult.ok()
    parts = urlsplit(value)
    if parts.scheme.lower() not in {"http", "https"} or not parts.netloc:
        return ValidationResult.error(MSG_SERVER_URL_INVALID)
    return ValidationResult.ok()


def is_valid_repository_url(value: str) -> bool:
    return _REPOSITORY_REGEX.fullmatch(value) is not None


def is_valid_email(value: str) -> bool:
    return _EMAIL_REGEX.fullmatch(value) is not None
