from __future__ import annotations

import email.errors
import email.parser
import email.policy
import logging
from email.message import Message
from typing import BinaryIO, Union

import chardet

from .errors import MessageParseError, NotMultipartError, PartReadError

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"

# Defects that get_payload(decode=True) records when a base64 body is broken.
_BASE64_DEFECTS = (
    email.errors.InvalidBase64CharactersDefect,
    email.errors.InvalidBase64PaddingDefect,
    email.errors.InvalidBase64LengthDefect,
)

# Header defects that leave the message without a readable header block.
_HEADER_DEFECTS = (
    email.errors.MissingHeaderBodySeparatorDefect,
    email.errors.FirstHeaderLineIsContinuationDefect,
)


class MimeBodyReader:
    """Reads the most useful textual body out of a raw MIME message."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger
        self.bytes_parser = email.parser.BytesParser(policy=email.policy.default)

    # ------------------------------------------------------------------
    def read(self, data: Union[bytes, bytearray, BinaryIO]) -> str:
        message = self._parse_message(data)

        try:
            return self._read_multipart_body(message)
        except NotMultipartError:
            self.logger.debug("Message is not multipart, reading whole body")

        return self._decode_part(message, whole_body=True)

    # ------------------------------------------------------------------
    def _parse_message(self, data: Union[bytes, bytearray, BinaryIO]) -> Message:
        if hasattr(data, "read"):
            try:
                data = data.read()
            except OSError as exc:
                raise MessageParseError(f"Failed to read message data: {exc}") from exc

        if not data:
            raise MessageParseError("Message is empty")

        try:
            message = self.bytes_parser.parsebytes(bytes(data))
        except Exception as exc:  # pragma: no cover - the parser is lenient
            raise MessageParseError(f"Failed to parse message: {exc}") from exc

        for defect in message.defects:
            if isinstance(defect, _HEADER_DEFECTS):
                raise MessageParseError("Malformed message header block")

        return message

    # ------------------------------------------------------------------
    def _read_multipart_body(self, message: Message) -> str:
        """Scan the parts in order; the first HTML part replaces everything."""
        if message.get_content_maintype() != "multipart":
            raise NotMultipartError(message.get_content_type())

        parts = message.get_payload()
        if not isinstance(parts, list):
            # boundary declared but never found in the body
            raise MessageParseError(f"Malformed {message.get_content_type()} body")

        body = ""
        for part in parts:
            content_type = part.get_content_type()
            if content_type not in (TEXT_PLAIN, TEXT_HTML):
                self.logger.debug(f"Skipping {content_type} part")
                continue

            text = self._decode_part(part)
            if content_type == TEXT_HTML:
                body = text
                break
            body += text

        return body

    # ------------------------------------------------------------------
    def _decode_part(self, part: Message, whole_body: bool = False) -> str:
        """Undo the transfer encoding and the charset of a part."""
        known_defects = len(part.defects)
        payload = part.get_payload(decode=True)

        if payload is None:
            if not whole_body:
                raise PartReadError(f"{part.get_content_type()} part has no readable body")
            # message/* containers have no decodable payload of their own
            payload = b"".join(sub.as_bytes() for sub in part.get_payload())

        for defect in part.defects[known_defects:]:
            if isinstance(defect, _BASE64_DEFECTS):
                raise PartReadError(
                    f"Invalid base64 body in {part.get_content_type()} part: {type(defect).__name__}"
                )

        charset = part.get_content_charset()
        if charset:
            try:
                return payload.decode(charset)
            except (LookupError, UnicodeDecodeError) as exc:
                self.logger.debug(f"Declared charset {charset} failed ({exc}), detecting")

        return self._decode_detected(payload)

    def _decode_detected(self, payload: bytes) -> str:
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError:
            pass

        detected = chardet.detect(payload).get("encoding")
        if detected:
            try:
                self.logger.debug(f"Decoding part as detected charset {detected}")
                return payload.decode(detected, errors="replace")
            except LookupError:
                pass

        self.logger.warning("Used fallback decoding with errors='replace'")
        return payload.decode("utf-8", errors="replace")
