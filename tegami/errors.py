# ============================================================================
# tegami/errors.py
# ============================================================================


class TegamiError(Exception):
    """Base class for every error raised while relaying a message."""


class MessageParseError(TegamiError):
    """The message envelope or headers could not be read."""


class NotMultipartError(TegamiError):
    """Raised by the multipart scan when the message has a single body."""


class PartReadError(TegamiError):
    """A text part of a multipart message could not be decoded."""


class ConversionError(TegamiError):
    """HTML to Markdown conversion failed.

    The HTML body computed before the failure is kept on ``html_body``.
    """

    def __init__(self, message: str, html_body: str = ""):
        super().__init__(message)
        self.html_body = html_body


class ServiceSendError(TegamiError):
    """A notification service refused or failed to deliver a message."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service


class ConfigurationError(TegamiError):
    """Invalid gateway configuration."""
