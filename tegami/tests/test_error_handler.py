from tegami.error_handler import ErrorHandler
from tegami.errors import (
    ConfigurationError,
    ConversionError,
    MessageParseError,
    PartReadError,
    ServiceSendError,
)


def test_reader_errors_are_permanent():
    assert ErrorHandler.reply_for(MessageParseError("bad"), "s1").startswith("554 5.6.0")
    assert ErrorHandler.reply_for(PartReadError("bad"), "s1").startswith("554 5.6.0")


def test_conversion_error_is_permanent():
    assert ErrorHandler.reply_for(ConversionError("bad"), "s1").startswith("554 5.6.0")


def test_service_error_is_transient_and_names_service():
    reply = ErrorHandler.reply_for(ServiceSendError("telegram", "HTTP 502"), "s1")
    assert reply == "451 4.3.0 Delivery to telegram failed"


def test_other_errors_are_internal():
    assert ErrorHandler.reply_for(ConfigurationError("x"), "s1").startswith("451")
    assert ErrorHandler.reply_for(RuntimeError("x"), "s1").startswith("451")


def test_details_are_logged_not_replied(caplog):
    reply = ErrorHandler.reply_for(MessageParseError("secret detail"), "abc")
    assert "secret detail" not in reply
    assert "Session abc error [PARSE_ERROR]" in caplog.text
    assert "secret detail" in caplog.text
