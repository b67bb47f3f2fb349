# ============================================================================
# tegami/__init__.py - Factory and DI setup
# ============================================================================

import logging
import sys
from typing import List

from .config import GatewayConfig, ServiceConfig, load_config
from .converters import HtmlToMarkdownConverter
from .interfaces import NotificationService
from .normalizers import BreakTagNormalizer
from .processor import MessageProcessor, ProcessedMessage
from .reader import MimeBodyReader
from .server import create_smtp_server
from .services import DiscordWebhookService, TelegramService

__all__ = [
    "GatewayConfig",
    "MessageProcessor",
    "ProcessedMessage",
    "ServiceConfig",
    "build_services",
    "create_gateway",
    "create_message_processor",
    "load_config",
    "setup_logging",
]


def setup_logging(log_level: int = logging.INFO) -> logging.Logger:
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    return logging.getLogger(__name__)


def create_message_processor(logger: logging.Logger) -> MessageProcessor:
    """Factory function to create a fully configured MessageProcessor."""
    return MessageProcessor(
        MimeBodyReader(logger),
        BreakTagNormalizer(logger),
        HtmlToMarkdownConverter(logger),
        logger,
    )


def build_services(config: GatewayConfig, logger: logging.Logger) -> List[NotificationService]:
    """Instantiate the configured services, keeping their order."""
    services: List[NotificationService] = []
    for service_config in config.services:
        if service_config.kind == "telegram":
            services.append(TelegramService(
                logger,
                bot_token=service_config.get("bot_token"),
                chat_id=service_config.get("chat_id"),
                timeout=config.request_timeout,
            ))
        elif service_config.kind == "discord":
            services.append(DiscordWebhookService(
                logger,
                webhook_url=service_config.get("webhook_url"),
                timeout=config.request_timeout,
            ))
    return services


def create_gateway(config: GatewayConfig):
    """Wire logging, processor, services and the SMTP server (not started)."""
    logger = setup_logging(getattr(logging, config.log_level))
    logger.info(f"Gateway configuration: {config.get_config_dict()}")

    services = build_services(config, logger)
    if not services:
        logger.warning("No notification services configured, mail will be accepted and dropped")
    for service in services:
        logger.info(f"Configured service: {service.name} (markdown={service.is_markdown_service()})")

    return create_smtp_server(config, services, create_message_processor(logger), logger)
