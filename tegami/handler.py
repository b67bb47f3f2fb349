from __future__ import annotations

import asyncio
import logging
import uuid
from typing import BinaryIO, Union

from aiosmtpd.smtp import AuthResult

from .dispatcher import ServiceDispatcher
from .error_handler import ErrorHandler
from .processor import MessageProcessor


class TegamiSession:
    """The DATA step of a relay: process the message, then notify services."""

    def __init__(
        self,
        processor: MessageProcessor,
        dispatcher: ServiceDispatcher,
        logger: logging.Logger,
    ) -> None:
        self.processor = processor
        self.dispatcher = dispatcher
        self.logger = logger

    def data(self, data: Union[bytes, bytearray, BinaryIO]) -> None:
        processed = self.processor.process(data)
        self.dispatcher.dispatch(processed.html, processed.markdown)


class TegamiHandler:
    """aiosmtpd handler accepting mail from anyone to anyone."""

    def __init__(self, session: TegamiSession, logger: logging.Logger) -> None:
        self.session = session
        self.logger = logger

    async def handle_MAIL(self, server, session, envelope, address, mail_options):
        envelope.mail_from = address
        envelope.mail_options.extend(mail_options)
        return "250 OK"

    async def handle_RCPT(self, server, session, envelope, address, rcpt_options):
        envelope.rcpt_tos.append(address)
        envelope.rcpt_options.extend(rcpt_options)
        return "250 OK"

    async def handle_RSET(self, server, session, envelope):
        return "250 OK"

    async def handle_QUIT(self, server, session, envelope):
        return "221 Bye"

    async def handle_DATA(self, server, session, envelope):
        session_id = uuid.uuid4().hex[:12]
        self.logger.info(
            f"Session {session_id}: message from {envelope.mail_from} "
            f"to {', '.join(envelope.rcpt_tos)} ({len(envelope.content or b'')} bytes)"
        )

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.session.data, envelope.content)
        except Exception as e:
            return ErrorHandler.reply_for(e, session_id)

        self.logger.info(f"Session {session_id}: message relayed")
        return "250 Message accepted for delivery"


def accept_any_login(server, session, envelope, mechanism, auth_data):
    """Authenticator for aiosmtpd that lets every credential through."""
    return AuthResult(success=True)
