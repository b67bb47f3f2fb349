# ============================================================================
# tegami/converters.py
# ============================================================================

import logging

import html2text

from .errors import ConversionError
from .interfaces import MarkupConverter


class HtmlToMarkdownConverter(MarkupConverter):
    """Converts HTML bodies to Markdown for clients that do not render HTML."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _build_converter(self) -> html2text.HTML2Text:
        # A fresh instance per message: HTML2Text keeps parser state between calls.
        h = html2text.HTML2Text()
        h.body_width = 0
        h.unicode_snob = True
        h.ignore_links = False
        h.ignore_images = True
        h.mark_code = False
        return h

    def convert(self, body: str) -> str:
        """Convert HTML content to Markdown."""
        self.logger.debug(f"Converting HTML to Markdown, input length: {len(body) if body else 0}")

        if not body:
            return ""

        try:
            result = self._build_converter().handle(body).strip()
        except Exception as e:
            raise ConversionError(f"HTML to Markdown conversion failed: {e}") from e

        self.logger.debug("html2text conversion successful")
        return result
