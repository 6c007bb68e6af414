"""Notify Simile of a finished build so it can search for similar components."""

from .models import NotificationConfig, NotificationOutcome, ServerConfig, ValidationResult
from .notifier import notify
from .validation import validate_email, validate_repository

__all__ = [
    "NotificationConfig",
    "NotificationOutcome",
    "ServerConfig",
    "ValidationResult",
    "notify",
    "validate_email",
    "validate_repository",
]
