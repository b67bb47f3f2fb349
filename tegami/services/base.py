# ============================================================================
# tegami/services/base.py
# ============================================================================

import logging
from typing import Any, Optional

import requests

from ..errors import ServiceSendError
from ..interfaces import NotificationService

DEFAULT_TIMEOUT = 10.0


class BaseHttpService(NotificationService):
    """Base service posting to an HTTP endpoint with a shared requests session."""

    max_length: Optional[int] = None

    def __init__(
        self,
        logger: logging.Logger,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.logger = logger
        self.timeout = timeout
        self.session = session or requests.Session()

    def _truncate(self, text: str) -> str:
        if self.max_length is not None and len(text) > self.max_length:
            self.logger.debug(f"{self.name}: truncating message of {len(text)} chars")
            return text[: self.max_length - 3] + "..."
        return text

    def _post(self, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self.session.post(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ServiceSendError(self.name, f"request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ServiceSendError(
                self.name, f"HTTP {response.status_code}: {response.text[:500]}"
            )
        return response
