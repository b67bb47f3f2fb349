# ============================================================================
# tegami/interfaces.py
# ============================================================================

from abc import ABC, abstractmethod


class ContentNormalizer(ABC):
    """Interface for body clean-up strategies."""

    @abstractmethod
    def normalize(self, body: str) -> str:
        """Return the cleaned-up body. Must never fail."""
        pass


class MarkupConverter(ABC):
    """Interface for HTML to lightweight markup conversion."""

    @abstractmethod
    def convert(self, body: str) -> str:
        """Convert the body, raising ConversionError on failure."""
        pass


class NotificationService(ABC):
    """Interface for downstream notification targets (chat bots, webhooks)."""

    name: str = "service"

    @abstractmethod
    def is_markdown_service(self) -> bool:
        """True if the service wants the Markdown form instead of HTML."""
        pass

    @abstractmethod
    def send(self, text: str) -> None:
        """Deliver the text, raising ServiceSendError on failure."""
        pass
