# ============================================================================
# tegami/services/telegram.py
# ============================================================================

import html
import logging
import re
from typing import Optional

import requests

from .base import DEFAULT_TIMEOUT, BaseHttpService

TELEGRAM_API_BASE_URL = "https://api.telegram.org"

TAG = re.compile(r"<[^>]*>")


class TelegramService(BaseHttpService):
    """Sends the HTML form through the Telegram Bot API."""

    name = "telegram"
    # Telegram message limit is 4096 characters
    max_length = 4096

    def __init__(
        self,
        logger: logging.Logger,
        bot_token: str,
        chat_id: str,
        api_base_url: str = TELEGRAM_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(logger, timeout=timeout, session=session)
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_base_url = api_base_url.rstrip("/")

    @property
    def api_endpoint(self) -> str:
        return f"{self.api_base_url}/bot{self.bot_token}/sendMessage"

    def is_markdown_service(self) -> bool:
        return False

    def _truncate(self, text: str) -> str:
        """Cut an oversized message on its visible text, never inside markup.

        Telegram counts the limit after entity parsing and rejects cut tags,
        so a message over the limit is sent as escaped plain text.
        """
        if len(text) <= self.max_length:
            return text

        plain = html.unescape(TAG.sub("", text))
        return html.escape(super()._truncate(plain), quote=False)

    def send(self, text: str) -> None:
        params = {
            "chat_id": self.chat_id,
            "text": self._truncate(text),
            "parse_mode": "HTML",
        }
        self._post(self.api_endpoint, data=params)
