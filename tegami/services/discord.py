# ============================================================================
# tegami/services/discord.py
# ============================================================================

import logging
from typing import Optional

import requests

from .base import DEFAULT_TIMEOUT, BaseHttpService


class DiscordWebhookService(BaseHttpService):
    """Sends the Markdown form to a Discord channel webhook."""

    name = "discord"
    # Discord message limit is 2000 characters
    max_length = 2000

    def __init__(
        self,
        logger: logging.Logger,
        webhook_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(logger, timeout=timeout, session=session)
        self.webhook_url = webhook_url

    def is_markdown_service(self) -> bool:
        return True

    def send(self, text: str) -> None:
        self._post(self.webhook_url, json={"content": self._truncate(text)})
