"""Maps relay failures to SMTP replies for the sending client."""

import logging

from .errors import (
    ConversionError,
    MessageParseError,
    PartReadError,
    ServiceSendError,
    TegamiError,
)


class ErrorHandler:
    """Centralized error handling for the SMTP session handler."""

    @staticmethod
    def handle_parse_error(error_message: str, session_id: str) -> str:
        """Malformed envelope or headers (permanent failure)."""
        return ErrorHandler._build_error_reply(
            code="554 5.6.0",
            category="PARSE_ERROR",
            message="Message could not be parsed",
            details=error_message,
            session_id=session_id,
            log_level=logging.WARNING,
        )

    @staticmethod
    def handle_part_read_error(error_message: str, session_id: str) -> str:
        """A text part could not be decoded (permanent failure)."""
        return ErrorHandler._build_error_reply(
            code="554 5.6.0",
            category="PART_READ_ERROR",
            message="Message body could not be read",
            details=error_message,
            session_id=session_id,
            log_level=logging.WARNING,
        )

    @staticmethod
    def handle_conversion_error(error_message: str, session_id: str) -> str:
        """Markdown conversion failed; no service was contacted."""
        return ErrorHandler._build_error_reply(
            code="554 5.6.0",
            category="CONVERSION_ERROR",
            message="Message body could not be converted",
            details=error_message,
            session_id=session_id,
            log_level=logging.ERROR,
        )

    @staticmethod
    def handle_service_error(service: str, error_message: str, session_id: str) -> str:
        """A notification service failed (transient, the client may retry)."""
        return ErrorHandler._build_error_reply(
            code="451 4.3.0",
            category="SERVICE_ERROR",
            message=f"Delivery to {service} failed",
            details=error_message,
            session_id=session_id,
            log_level=logging.ERROR,
        )

    @staticmethod
    def handle_unexpected_error(error_message: str, session_id: str) -> str:
        """Anything else raised while handling DATA."""
        return ErrorHandler._build_error_reply(
            code="451 4.3.0",
            category="INTERNAL_ERROR",
            message="Local error in processing",
            details=f"Internal error: {error_message}",
            session_id=session_id,
            log_level=logging.ERROR,
        )

    @staticmethod
    def reply_for(error: Exception, session_id: str) -> str:
        """Pick the handler matching the exception type."""
        if isinstance(error, MessageParseError):
            return ErrorHandler.handle_parse_error(str(error), session_id)
        if isinstance(error, PartReadError):
            return ErrorHandler.handle_part_read_error(str(error), session_id)
        if isinstance(error, ConversionError):
            return ErrorHandler.handle_conversion_error(str(error), session_id)
        if isinstance(error, ServiceSendError):
            return ErrorHandler.handle_service_error(error.service, str(error), session_id)
        if isinstance(error, TegamiError):
            return ErrorHandler.handle_unexpected_error(str(error), session_id)
        return ErrorHandler.handle_unexpected_error(f"{type(error).__name__}: {error}", session_id)

    @staticmethod
    def _build_error_reply(
        code: str,
        category: str,
        message: str,
        details: str,
        session_id: str,
        log_level: int = logging.ERROR,
    ) -> str:
        """
        Log the failure and build the SMTP reply line.

        Args:
            code: SMTP reply code with enhanced status code
            category: Error category used in the log line
            message: Text sent back to the client
            details: Detailed error information, logged only
            session_id: Identifier of the SMTP session
            log_level: Logging level for this error

        Returns:
            SMTP reply string, e.g. "554 5.6.0 Message could not be parsed"
        """
        log_message = f"Session {session_id} error [{category}]: {message} - {details}"

        if log_level == logging.WARNING:
            logging.warning(log_message)
        elif log_level == logging.ERROR:
            logging.error(log_message)
        else:
            logging.info(log_message)

        return f"{code} {message}"
