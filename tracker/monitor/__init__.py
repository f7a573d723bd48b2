"""Trade monitoring loop."""

from .clock import AsyncioClock, Clock
from .loop import TradeMonitor
from .retry import RETRYABLE, RetryPolicy

__all__ = ["AsyncioClock", "Clock", "RETRYABLE", "RetryPolicy", "TradeMonitor"]
