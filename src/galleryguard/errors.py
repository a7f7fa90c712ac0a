"""
Error classification for galleryguard.

Every error logs itself when constructed so that absorbed failures (an image
that fails to load, a listener that cannot be attached) still leave a
structured trace.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from galleryguard.logging_config import log_error


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    IMAGE_LOAD = "image_load"
    CONFIGURATION = "configuration"
    LISTENER = "listener"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorInfo:
    """Structured error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    code: str
    message: str
    user_message: str
    details: dict[str, Any]
    timestamp: datetime
    recoverable: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "recoverable": self.recoverable,
        }


class GalleryGuardError(Exception):
    """Base exception class for galleryguard."""

    _USER_MESSAGES = {
        ErrorCategory.IMAGE_LOAD: "The image could not be loaded.",
        ErrorCategory.CONFIGURATION: "The gallery is not configured correctly.",
        ErrorCategory.LISTENER: "Image protection could not be activated.",
        ErrorCategory.UNKNOWN: "An unexpected error occurred.",
    }

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        recoverable: bool = True,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.severity = severity
        self.code = code or f"{category.value}_error"
        self.user_message = user_message or self._USER_MESSAGES.get(category, "An error occurred.")
        self.details = details or {}
        self.recoverable = recoverable
        self.original_exception = original_exception
        self.timestamp = datetime.now()

        self._log_error()

    def _log_error(self) -> None:
        error_context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "recoverable": self.recoverable,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

        log_error(self, error_context)

    def get_error_info(self) -> ErrorInfo:
        """Get structured error information."""
        return ErrorInfo(
            category=self.category,
            severity=self.severity,
            code=self.code,
            message=str(self),
            user_message=self.user_message,
            details=self.details,
            timestamp=self.timestamp,
            recoverable=self.recoverable,
        )


class ImageLoadError(GalleryGuardError):
    """Raised by image loaders when a source cannot be fetched or decoded."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.IMAGE_LOAD,
            severity=ErrorSeverity.LOW,
            code=code or "image_load_failed",
            details=details,
            recoverable=True,
            original_exception=original_exception,
        )


class ConfigurationError(GalleryGuardError):
    """Invalid gallery manifest or settings."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            code=code or "invalid_configuration",
            details=details,
            recoverable=False,
            original_exception=original_exception,
        )


class ListenerError(GalleryGuardError):
    """A protection listener could not be attached."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.LISTENER,
            severity=ErrorSeverity.HIGH,
            code=code or "listener_attach_failed",
            details=details,
            recoverable=True,
            original_exception=original_exception,
        )
