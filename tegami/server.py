# ============================================================================
# tegami/server.py
# ============================================================================

import logging
from typing import Sequence

from aiosmtpd.controller import Controller

from .config import GatewayConfig
from .dispatcher import ServiceDispatcher
from .handler import TegamiHandler, TegamiSession, accept_any_login
from .interfaces import NotificationService
from .processor import MessageProcessor


def create_smtp_server(
    config: GatewayConfig,
    services: Sequence[NotificationService],
    processor: MessageProcessor,
    logger: logging.Logger,
) -> Controller:
    """Create the SMTP server for the given configuration. It is not started."""
    session = TegamiSession(processor, ServiceDispatcher(services, logger), logger)
    handler = TegamiHandler(session, logger)

    return Controller(
        handler,
        hostname=config.host,
        port=config.port,
        authenticator=accept_any_login,
        auth_required=False,
        auth_require_tls=False,
        decode_data=False,
    )
