"""Telegram Bot API sink."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import aiohttp

from tracker.errors import NotificationError
from .base import Notification
from .writer import BAR_CHART, TradeWriter

logger = logging.getLogger(__name__)

API_URL = "https://api.telegram.org"
MONEY_BAG = "\U0001F4B0"


class TelegramSink:
    """Posts rendered notifications to a chat or channel via sendMessage."""

    def __init__(
        self,
        token: str,
        chat_id: int,
        writer: TradeWriter,
        buttons: Optional[List[Tuple[str, str]]] = None,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
        api_url: str = API_URL,
    ):
        if not token:
            raise ValueError("Telegram bot token is required")
        self.chat_id = chat_id
        self.writer = writer
        self.buttons = buttons or []
        self.timeout = timeout
        self._url = f"{api_url}/bot{token}/sendMessage"
        self._session = session
        self._owns_session = session is None

    @classmethod
    def with_links(cls, token: str, chat_id: int, writer: TradeWriter, buy_url: str, chart_url: str, **kwargs) -> "TelegramSink":
        buttons = [(f"{MONEY_BAG}Buy on Dedust", buy_url), (f"{BAR_CHART}Chart", chart_url)]
        return cls(token, chat_id, writer, buttons=buttons, **kwargs)

    async def connect(self):
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
            self._owns_session = True

    async def disconnect(self):
        if self._session and self._owns_session:
            await self._session.close()
        if self._owns_session:
            self._session = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    def build_payload(self, notification: Notification) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "chat_id": self.chat_id,
            "text": self.writer.render(notification),
            "parse_mode": "MarkdownV2",
            "disable_web_page_preview": True,
        }
        if self.buttons:
            payload["reply_markup"] = {
                "inline_keyboard": [[{"text": text, "url": url} for text, url in self.buttons]]
            }
        return payload

    async def send(self, notification: Notification) -> None:
        if self._session is None:
            await self.connect()
        payload = self.build_payload(notification)
        try:
            async with self._session.post(self._url, json=payload) as response:
                body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise NotificationError(f"sendMessage failed: {e}") from e
        if not isinstance(body, dict):
            raise NotificationError(f"sendMessage returned unexpected body ({response.status}): {body!r}")
        if response.status != 200 or not body.get("ok"):
            raise NotificationError(f"sendMessage rejected ({response.status}): {body.get('description', body)}")
        logger.debug(f"Sent {len(notification.trades)} trades to chat {self.chat_id}")


class LogSink:
    """Writes rendered notifications to the log instead of Telegram (dry run)."""

    def __init__(self, writer: TradeWriter):
        self.writer = writer

    async def send(self, notification: Notification) -> None:
        logger.info(f"Notification:\n{self.writer.render(notification)}")
