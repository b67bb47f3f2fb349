# ============================================================================
# tegami/dispatcher.py
# ============================================================================

import logging
from typing import Sequence

from .interfaces import NotificationService


class ServiceDispatcher:
    """Sends a processed message to every configured service, in order."""

    def __init__(self, services: Sequence[NotificationService], logger: logging.Logger):
        self.services = tuple(services)
        self.logger = logger

    def dispatch(self, html: str, markdown: str) -> None:
        """Stop at the first failing service; earlier deliveries stand."""
        for service in self.services:
            if service.is_markdown_service():
                text = markdown
            else:
                text = html

            service.send(text)
            self.logger.info(f"Delivered message to {service.name}")
