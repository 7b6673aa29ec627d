"""
Operator alerts for failed publish requests.

Alerts go to a Telegram chat through the Bot API ``sendMessage`` method. The
notifier is best-effort: it never raises, and with no NotifierConfig every
call is a logged no-op.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from reader_publish.config import NotifierConfig
from reader_publish.errors import NotificationError

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 4096  # counted in UTF-16 code units, as the Bot API does
TITLE = "🚨 Reader Publish Error:"


def _truncate_utf16(text: str, limit: int) -> str:
    # a surrogate pair split at the limit is dropped whole
    return text.encode("utf-16-le")[:2 * limit].decode("utf-16-le", "ignore")


def format_message(message: str, context: Optional[Dict[str, Any]] = None) -> str:
    text = f"{TITLE}\n\n{message}"
    if context:
        text += f"\n\nContext: {json.dumps(context, indent=2, ensure_ascii=False, default=str)}"
    return _truncate_utf16(text, MAX_MESSAGE_LENGTH)


class Notifier:
    def __init__(self, config: Optional[NotifierConfig], client: Optional[httpx.Client] = None):
        self.config = config
        self._client = client

    @property
    def enabled(self) -> bool:
        return self.config is not None

    def notify(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        if not self.enabled:
            logger.warning("Notification channel not configured, skipping notification")
            return
        try:
            self._send(format_message(message, context))
        except NotificationError as e:
            logger.error(f"Failed to send error notification: {e}")
        except Exception as e:
            logger.error(f"Failed to send error notification: {e}", exc_info=True)

    def _send(self, text: str) -> None:
        url = f"{self.config.api_base_url}/bot{self.config.bot_token}/sendMessage"
        payload = {"chat_id": self.config.chat_id, "text": text, "parse_mode": "HTML"}
        kwargs: Dict[str, Any] = {"json": payload}
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout

        try:
            if self._client is not None:
                response = self._client.post(url, **kwargs)
            else:
                with httpx.Client() as client:
                    response = client.post(url, **kwargs)
        except httpx.HTTPError as e:
            raise NotificationError(f"{type(e).__name__}: {e}") from e

        if response.status_code >= 400:
            raise NotificationError(f"alert channel returned status {response.status_code}")
        logger.debug("Operator notification sent")


__all__ = ["Notifier", "format_message", "MAX_MESSAGE_LENGTH"]
