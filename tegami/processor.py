from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Union

from .errors import ConversionError
from .interfaces import ContentNormalizer, MarkupConverter
from .reader import MimeBodyReader


@dataclass(frozen=True)
class ProcessedMessage:
    html: str
    markdown: str


class MessageProcessor:
    """Turns one raw SMTP DATA payload into its HTML and Markdown forms."""

    def __init__(
        self,
        reader: MimeBodyReader,
        normalizer: ContentNormalizer,
        converter: MarkupConverter,
        logger: logging.Logger,
    ) -> None:
        self.reader = reader
        self.normalizer = normalizer
        self.converter = converter
        self.logger = logger

    def process(self, data: Union[bytes, bytearray, BinaryIO]) -> ProcessedMessage:
        """Read, normalize and convert a message.

        Reader errors propagate untouched. A conversion failure is raised as
        ConversionError carrying the HTML form that was already computed.
        """
        body = self.reader.read(data)
        html_body = self.normalizer.normalize(body)

        try:
            markdown_body = self.converter.convert(html_body)
        except ConversionError as exc:
            exc.html_body = html_body
            raise
        except Exception as exc:
            raise ConversionError(str(exc), html_body=html_body) from exc

        self.logger.debug(
            f"Processed message: html {len(html_body)} chars, markdown {len(markdown_body)} chars"
        )
        return ProcessedMessage(html=html_body, markdown=markdown_body)
