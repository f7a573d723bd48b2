"""Telegram MarkdownV2 rendering of trade notifications."""

from typing import List

from tracker.types import Asset, AssetKind, Trade
from .base import Notification

GREEN_DOT = "\U0001F7E2"
RED_DOT = "\U0001F534"
BAR_CHART = "\U0001F4CA"
UPTREND_CHART = "\U0001F4C8"
DOWNTREND_CHART = "\U0001F4C9"

# https://core.telegram.org/bots/api#markdownv2-style
MARKDOWN_RESERVED = set("\\_*[]()~`>#+-=|{}.!")

NATIVE_DECIMALS = 9


def escape_markdown(text: str) -> str:
    return "".join("\\" + ch if ch in MARKDOWN_RESERVED else ch for ch in text)


def short_address(address: str, escape: bool = True) -> str:
    """First and last 4 characters (`EQAA...FOO_`) for link captions; addresses up to 10 characters are kept."""
    short = address if len(address) <= 10 else f"{address[:4]}...{address[-4:]}"
    return escape_markdown(short) if escape else short


class TradeWriter:
    """
    Renders a notification as a Telegram message.

    One line per trade, e.g. (before escaping):

        🔴SELL 500.00 OPEN for 5.00 TON ($2.50) [EQAA...FOO_](https://tonviewer.com/EQAA..FOO_)

    followed by an empty line and the settled price.
    """

    def __init__(
        self,
        asset_symbol: str,
        asset_address: str,
        asset_decimals: int,
        explorer_url: str,
        native_symbol: str = "TON",
    ):
        self.asset_symbol = asset_symbol
        self.asset = Asset(kind=AssetKind.JETTON, address=asset_address, symbol=asset_symbol, decimals=asset_decimals)
        self.asset_decimals = asset_decimals
        self.explorer_url = explorer_url
        self.native_symbol = native_symbol

    def is_buy(self, trade: Trade) -> bool:
        return trade.asset_out.matches(self.asset)

    def trade_line(self, trade: Trade, notification: Notification) -> str:
        buy = self.is_buy(trade)
        native = (trade.amount_in if buy else trade.amount_out) / 10 ** NATIVE_DECIMALS
        jetton = (trade.amount_out if buy else trade.amount_in) / 10 ** self.asset_decimals
        pool = notification.quote_pool
        usd = pool.quote_left_to_right(native) if pool is not None and native > 0 else 0.0
        return (
            f"{GREEN_DOT if buy else RED_DOT}{'BUY' if buy else 'SELL'} "
            f"{escape_markdown(f'{jetton:.2f}')} {escape_markdown(self.asset_symbol)} for "
            f"{escape_markdown(f'{native:.2f}')} {escape_markdown(self.native_symbol)} "
            f"\\(${escape_markdown(f'{usd:.2f}')}\\) "
            f"[{short_address(trade.sender)}]({self.explorer_url}{trade.sender})"
        )

    def price_line(self, notification: Notification) -> str:
        up = notification.is_up
        change = escape_markdown(f"{abs(notification.price_change * 100):.2f}")
        return (
            f"{BAR_CHART}Price: {escape_markdown(f'{notification.price:.6f}')} "
            f"{escape_markdown(self.native_symbol)} \\(${escape_markdown(f'{notification.secondary_price:.6f}')}\\) "
            f"{UPTREND_CHART if up else DOWNTREND_CHART} \\{'+' if up else '-'}{change}%"
        )

    def render(self, notification: Notification) -> str:
        lines: List[str] = [self.trade_line(t, notification) for t in notification.trades]
        lines.append("")
        lines.append(self.price_line(notification))
        return "\n".join(lines)
