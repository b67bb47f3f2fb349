"""
Gateway configuration loaded from environment variables.
Values are immutable once loaded and are passed explicitly to the server factory.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConfigurationError

ENV_PREFIX = "TEGAMI_"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 2525
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_REQUEST_TIMEOUT = 10.0

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
SERVICE_KINDS = ["telegram", "discord"]

# Option keys never printed by get_config_dict
SECRET_OPTIONS = {"bot_token", "webhook_url"}


@dataclass(frozen=True)
class ServiceConfig:
    kind: str
    options: Tuple[Tuple[str, str], ...] = ()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return dict(self.options).get(key, default)


@dataclass(frozen=True)
class GatewayConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    services: Tuple[ServiceConfig, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"Invalid SMTP port: {self.port}")
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}")
        if self.request_timeout <= 0:
            raise ConfigurationError(f"Invalid request timeout: {self.request_timeout}")
        for service in self.services:
            if service.kind not in SERVICE_KINDS:
                raise ConfigurationError(f"Unknown service kind: {service.kind}")

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def get_config_dict(self) -> Dict[str, Any]:
        """Get all configuration values as a dictionary, secrets redacted"""
        return {
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
            "request_timeout": self.request_timeout,
            "services": [
                {
                    "kind": service.kind,
                    **{
                        key: ("***" if key in SECRET_OPTIONS else value)
                        for key, value in service.options
                    },
                }
                for service in self.services
            ],
        }


def _get(environ: Mapping[str, str], name: str, default: str = "") -> str:
    return environ.get(ENV_PREFIX + name, default).strip()


def _load_services(environ: Mapping[str, str]) -> Tuple[ServiceConfig, ...]:
    services = []

    bot_token = _get(environ, "TELEGRAM_BOT_TOKEN")
    chat_id = _get(environ, "TELEGRAM_CHAT_ID")
    if bot_token or chat_id:
        if not (bot_token and chat_id):
            raise ConfigurationError(
                f"{ENV_PREFIX}TELEGRAM_BOT_TOKEN and {ENV_PREFIX}TELEGRAM_CHAT_ID must be set together"
            )
        services.append(
            ServiceConfig("telegram", (("bot_token", bot_token), ("chat_id", chat_id)))
        )

    webhook_url = _get(environ, "DISCORD_WEBHOOK_URL")
    if webhook_url:
        if not webhook_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Invalid Discord webhook URL: {webhook_url!r}")
        services.append(ServiceConfig("discord", (("webhook_url", webhook_url),)))

    return tuple(services)


def load_config(environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> GatewayConfig:
    """Build a GatewayConfig from TEGAMI_* variables; keyword overrides win."""
    if environ is None:
        environ = os.environ

    try:
        values: Dict[str, Any] = {
            "host": _get(environ, "SMTP_HOST", DEFAULT_HOST),
            "port": int(_get(environ, "SMTP_PORT", str(DEFAULT_PORT))),
            "log_level": _get(environ, "LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            "request_timeout": float(_get(environ, "REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))),
        }
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}") from e

    values["services"] = _load_services(environ)
    values.update({key: value for key, value in overrides.items() if value is not None})
    return GatewayConfig(**values)
