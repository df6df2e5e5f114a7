"""Error handling and user feedback for the HTTP surface."""

import datetime
import json
import logging
import re
import traceback
import uuid
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from models.errors import (
    ApplicationError,
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ErrorResult,
    ErrorSeverity,
    InvalidOptionError,
    MissingOptionError,
)

_BASE64_PATTERN = re.compile(r"data:[^;]+;base64,[A-Za-z0-9+/]{50,}={0,2}|[A-Za-z0-9+/]{100,}={0,2}")
_LONG_STRING_PATTERN = re.compile(r"(?=.*[A-Za-z].*[A-Za-z].*[A-Za-z])\S{200,}")
MAX_TECHNICAL_MESSAGE_LENGTH = 500


class ErrorContextCapture:
    """Captures contextual information for error tracking and debugging."""

    async def capture_request_context(
        self, request: Optional[Request] = None, additional_data: Optional[Dict[str, Any]] = None
    ) -> ErrorContext:
        """
        Capture context from a FastAPI request.

        Args:
            request: FastAPI Request object
            additional_data: Additional context data

        Returns:
            ErrorContext: Captured context information
        """
        request_data = dict(additional_data or {})
        user_agent = None
        endpoint = None

        if request is not None:
            request_data.update(
                {
                    "method": request.method,
                    "client_host": request.client.host if request.client else None,
                    "content_type": request.headers.get("content-type"),
                }
            )
            user_agent = request.headers.get("user-agent")
            endpoint = request.url.path

        return ErrorContext(
            error_id=uuid.uuid4().hex,
            timestamp=datetime.datetime.now(),
            request_id=request.headers.get("x-request-id") if request is not None else None,
            user_agent=user_agent,
            endpoint=endpoint,
            stack_trace=traceback.format_exc(),
            request_data=request_data,
        )


class ErrorMessageTranslator:
    """Translates technical error messages to user-friendly messages with suggested actions."""

    def __init__(self):
        """Initialize the translator with predefined message mappings."""
        self._translation_rules = {
            MissingOptionError: {
                "suggested_actions": ["Provide all required validator options"],
                "severity": ErrorSeverity.MEDIUM,
                "category": ErrorCategory.VALIDATION,
            },
            InvalidOptionError: {
                "suggested_actions": ["Use true or false for boolean options"],
                "severity": ErrorSeverity.MEDIUM,
                "category": ErrorCategory.VALIDATION,
            },
            ConfigurationError: {
                "user_message": "The validator options are invalid.",
                "suggested_actions": ["Check the request options"],
                "severity": ErrorSeverity.MEDIUM,
                "category": ErrorCategory.VALIDATION,
            },
            Exception: {
                "user_message": "An unexpected error occurred. Please try again.",
                "suggested_actions": [
                    "Try your request again",
                    "Contact support with the error ID if needed",
                ],
                "severity": ErrorSeverity.HIGH,
                "category": ErrorCategory.SYSTEM,
            },
        }

    def translate_error(self, exception: Exception, context: ErrorContext) -> ErrorResult:
        """
        Translate a technical error to a user-friendly error result.

        Args:
            exception: The exception to translate
            context: Error context information

        Returns:
            ErrorResult: User-friendly error result
        """
        rule = self._get_translation_rule(exception)
        technical_message = self.sanitize_technical_message(str(exception))

        if isinstance(exception, ApplicationError):
            error_code = exception.error_code
            user_message = rule.get("user_message", exception.user_message)
            suggested_actions = exception.suggested_actions or rule.get("suggested_actions", [])
        else:
            error_code = type(exception).__name__
            user_message = rule.get("user_message", technical_message)
            suggested_actions = rule.get("suggested_actions", [])

        return ErrorResult(
            error_code=error_code,
            severity=rule.get("severity", ErrorSeverity.MEDIUM),
            category=rule.get("category", ErrorCategory.SYSTEM),
            technical_message=technical_message,
            user_message=user_message,
            suggested_actions=suggested_actions,
            context=context,
        )

    def _get_translation_rule(self, exception: Exception) -> Dict[str, Any]:
        """Get the most specific translation rule for an exception."""
        exception_type = type(exception)
        if exception_type in self._translation_rules:
            return self._translation_rules[exception_type]

        for rule_type, rule in self._translation_rules.items():
            if isinstance(exception, rule_type):
                return rule

        return self._translation_rules[Exception]

    def sanitize_technical_message(self, message: str) -> str:
        """
        Sanitize technical message so file content never ends up in logs.

        Args:
            message: Raw technical message from exception

        Returns:
            str: Sanitized message safe for logging
        """
        message = _BASE64_PATTERN.sub("[BASE64_CONTENT_TRUNCATED]", message)
        message = _LONG_STRING_PATTERN.sub("[LONG_CONTENT_TRUNCATED]", message)

        if len(message) > MAX_TECHNICAL_MESSAGE_LENGTH:
            message = message[:MAX_TECHNICAL_MESSAGE_LENGTH] + "... [TRUNCATED]"

        return message


class ErrorHandler:
    """Main error handler that orchestrates error processing."""

    def __init__(self):
        self.context_capture = ErrorContextCapture()
        self.message_translator = ErrorMessageTranslator()

    async def handle_error(
        self,
        exception: Exception,
        request: Optional[Request] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ErrorResult:
        """
        Capture context, translate and log an exception.

        Args:
            exception: The exception to handle
            request: FastAPI request object
            additional_context: Additional context data

        Returns:
            ErrorResult: Complete error handling result
        """
        context = await self.context_capture.capture_request_context(request, additional_context)
        error_result = self.message_translator.translate_error(exception, context)
        self._log_error(error_result)
        return error_result

    def _log_error(self, error_result: ErrorResult) -> None:
        """Log error with appropriate level based on severity."""
        log_data = {
            "error_id": error_result.context.error_id,
            "error_code": error_result.error_code,
            "category": error_result.category.value,
            "severity": error_result.severity.value,
            "endpoint": error_result.context.endpoint,
            "technical_message": error_result.technical_message,
        }

        if error_result.severity == ErrorSeverity.CRITICAL:
            logging.critical(f"Critical error: {json.dumps(log_data)}")
        elif error_result.severity == ErrorSeverity.HIGH:
            logging.error(f"High severity error: {json.dumps(log_data)}")
        elif error_result.severity == ErrorSeverity.MEDIUM:
            logging.warning(f"Medium severity error: {json.dumps(log_data)}")
        else:
            logging.info(f"Low severity error: {json.dumps(log_data)}")


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware for centralized error handling."""

    def __init__(self, app, error_handler: ErrorHandler):
        super().__init__(app)
        self.error_handler = error_handler

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            error_result = await self.error_handler.handle_error(e, request)
            return self._create_error_response(error_result)

    def _create_error_response(self, error_result: ErrorResult) -> JSONResponse:
        """Create appropriate HTTP response for error result."""
        category_status_map = {
            ErrorCategory.VALIDATION: 400,
            ErrorCategory.SYSTEM: 500,
        }

        return JSONResponse(
            status_code=category_status_map.get(error_result.category, 500),
            content={
                "error": True,
                "error_id": error_result.context.error_id,
                "error_code": error_result.error_code,
                "message": error_result.user_message,
                "suggested_actions": error_result.suggested_actions,
                "severity": error_result.severity.value,
                "category": error_result.category.value,
            },
        )
