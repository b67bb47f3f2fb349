# ============================================================================
# tegami/normalizers.py
# ============================================================================

import logging
import re

from .interfaces import ContentNormalizer


class BreakTagNormalizer(ContentNormalizer):
    """Turns HTML line breaks into newlines and trims the body.

    html2text renders every <br> as a blank line, which looks excessive in
    chat clients, and Telegram rejects <br> tags in HTML messages.
    """

    BREAK_TAG = re.compile(r"<br *(?:/ *)?>", re.IGNORECASE)

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def normalize(self, body: str) -> str:
        normalized = self.BREAK_TAG.sub("\n", body).strip()
        self.logger.debug(f"Normalized body, length {len(body)} -> {len(normalized)}")
        return normalized
