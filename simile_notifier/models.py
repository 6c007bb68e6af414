from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

SEVERITY_OK = "ok"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


@dataclass(frozen=True)
class NotificationConfig:
    repository: str
    branch: str
    email: str


@dataclass
class ServerConfig:
    base_url: str = ""


@dataclass(frozen=True)
class ValidationResult:
    severity: str  # "ok" | "warning" | "error"
    message: str = ""

    @staticmethod
    def ok() -> "ValidationResult":
        return ValidationResult(severity=SEVERITY_OK)

    @staticmethod
    def warning(message: str) -> "ValidationResult":
        return ValidationResult(severity=SEVERITY_WARNING, message=message)

    @staticmethod
    def error(message: str) -> "ValidationResult":
        return ValidationResult(severity=SEVERITY_ERROR, message=message)

    def is_ok(self) -> bool:
        return self.severity == SEVERITY_OK

    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR


@dataclass(frozen=True)
class NotificationOutcome:
    succeeded: bool
    http_status: Optional[int] = None
    detail: str = ""
