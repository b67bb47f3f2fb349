from .base import BaseHttpService
from .discord import DiscordWebhookService
from .telegram import TelegramService

__all__ = ["BaseHttpService", "DiscordWebhookService", "TelegramService"]
