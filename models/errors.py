"""Error models and exception hierarchy for the MIME guard service."""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

# --- Error Handling Enums ---


class ErrorSeverity(Enum):
    """Enumeration for error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Enumeration for error categories."""

    VALIDATION = "validation"
    SYSTEM = "system"


# --- Error Context and Result Models ---


@dataclass
class ErrorContext:
    """Captures contextual information about an error occurrence."""

    error_id: str
    timestamp: datetime.datetime
    request_id: Optional[str]
    user_agent: Optional[str]
    endpoint: Optional[str]
    stack_trace: Optional[str]
    request_data: Dict[str, Any]


@dataclass
class ErrorResult:
    """Complete error processing result with context and user-friendly messages."""

    error_code: str
    severity: ErrorSeverity
    category: ErrorCategory
    technical_message: str
    user_message: str
    suggested_actions: List[str]
    context: ErrorContext


# --- Application Exception Hierarchy ---


class ApplicationError(Exception):
    """Base exception for application errors with enhanced metadata."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity,
        user_message: Optional[str] = None,
        suggested_actions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.severity = severity
        self.user_message = user_message or message
        self.suggested_actions = suggested_actions or []


class ConfigurationError(ApplicationError):
    """Configuration and environment errors."""

    pass


class MissingOptionError(ConfigurationError):
    """A required validator option was not supplied."""

    def __init__(self, option: str, message: str):
        super().__init__(
            message,
            error_code="MISSING_OPTION",
            severity=ErrorSeverity.MEDIUM,
            suggested_actions=[f"Provide the '{option}' option"],
        )
        self.option = option


class InvalidOptionError(ConfigurationError):
    """An optional validator option has a value of the wrong type."""

    def __init__(self, option: str, message: str):
        super().__init__(
            message,
            error_code="INVALID_OPTION",
            severity=ErrorSeverity.MEDIUM,
            suggested_actions=[f"Check the value of the '{option}' option"],
        )
        self.option = option
