import asyncio
import logging

import pytest
from aiosmtpd.smtp import Envelope

from tegami import create_message_processor
from tegami.dispatcher import ServiceDispatcher
from tegami.errors import ConversionError, ServiceSendError
from tegami.handler import TegamiHandler, TegamiSession, accept_any_login
from tegami.interfaces import MarkupConverter
from tegami.normalizers import BreakTagNormalizer
from tegami.processor import MessageProcessor
from tegami.reader import MimeBodyReader
from tegami.tests.fakes import FakeService

MESSAGE = (
    b"From: sender@example.com\r\n"
    b'Content-Type: multipart/alternative; boundary="B"\r\n\r\n'
    b"--B\r\n"
    b"Content-Type: text/plain\r\n\r\n"
    b"plain text\r\n"
    b"--B\r\n"
    b"Content-Type: text/html\r\n\r\n"
    b"<p><b>Hi</b></p>\r\n"
    b"--B--\r\n"
)


def _handler(services):
    logger = logging.getLogger("test")
    session = TegamiSession(
        create_message_processor(logger), ServiceDispatcher(services, logger), logger
    )
    return TegamiHandler(session, logger)


def _envelope(content):
    envelope = Envelope()
    envelope.mail_from = "sender@example.com"
    envelope.rcpt_tos = ["bot@example.com"]
    envelope.content = content
    return envelope


def test_data_relays_to_all_services():
    html = FakeService("telegram", markdown=False)
    md = FakeService("discord", markdown=True)

    reply = asyncio.run(_handler([html, md]).handle_DATA(None, None, _envelope(MESSAGE)))

    assert reply.startswith("250")
    assert html.sent == ["<p><b>Hi</b></p>"]
    assert md.sent == ["**Hi**"]


def test_parse_error_is_a_permanent_failure():
    service = FakeService("telegram", markdown=False)
    reply = asyncio.run(_handler([service]).handle_DATA(None, None, _envelope(b"")))
    assert reply.startswith("554")
    assert service.sent == []


def test_service_failure_stops_dispatch_and_is_reported():
    first = FakeService("discord", markdown=True, error=ServiceSendError("discord", "HTTP 500"))
    second = FakeService("telegram", markdown=False)

    reply = asyncio.run(_handler([first, second]).handle_DATA(None, None, _envelope(MESSAGE)))

    assert reply.startswith("451")
    assert "discord" in reply
    assert second.sent == []


def test_session_data_propagates_service_error():
    logger = logging.getLogger("test")
    error = ServiceSendError("discord", "down")
    first = FakeService("discord", markdown=True, error=error)
    session = TegamiSession(
        create_message_processor(logger), ServiceDispatcher([first], logger), logger
    )
    with pytest.raises(ServiceSendError) as excinfo:
        session.data(MESSAGE)
    assert excinfo.value is error


def test_envelope_commands_accept_anything():
    handler = _handler([])
    envelope = Envelope()

    assert asyncio.run(handler.handle_MAIL(None, None, envelope, "anyone@anywhere", [])) == "250 OK"
    assert asyncio.run(handler.handle_RCPT(None, None, envelope, "x@y", [])) == "250 OK"
    assert asyncio.run(handler.handle_RSET(None, None, envelope)) == "250 OK"
    assert envelope.mail_from == "anyone@anywhere"
    assert envelope.rcpt_tos == ["x@y"]


def test_any_login_is_accepted():
    assert accept_any_login(None, None, None, "PLAIN", None).success is True


class _FailingConverter(MarkupConverter):
    def convert(self, body):
        raise ConversionError("cannot convert")


def test_conversion_error_contacts_no_service():
    logger = logging.getLogger("test")
    processor = MessageProcessor(
        MimeBodyReader(logger), BreakTagNormalizer(logger), _FailingConverter(), logger
    )
    html = FakeService("telegram", markdown=False)
    md = FakeService("discord", markdown=True)
    handler = TegamiHandler(
        TegamiSession(processor, ServiceDispatcher([html, md], logger), logger), logger
    )

    reply = asyncio.run(handler.handle_DATA(None, None, _envelope(MESSAGE)))

    assert reply.startswith("554")
    assert html.sent == []
    assert md.sent == []
