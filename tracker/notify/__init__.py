"""Trade notifications."""

from .base import Notification, NotificationSink
from .telegram import LogSink, TelegramSink
from .writer import TradeWriter, escape_markdown, short_address

__all__ = [
    "Notification", "NotificationSink", "LogSink", "TelegramSink",
    "TradeWriter", "escape_markdown", "short_address",
]
