"""
Configuration settings - edit values directly here

Secrets are read from the environment (or a .env file) by Settings.from_env().
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

BOT_TOKEN_ENV = "TG_BOT_TOKEN"
CHAT_ID_ENV = "TG_CHAT_ID"
LOG_LEVEL_ENV = "TRACKER_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """Application settings - configure values below"""

    # ===================
    # Tracked pool
    # ===================
    pool_address: str = "EQClitEiuIqbEs7QX06Bo75E6nx9C6h4VYS1TDxh2dAYtKpQ"  # TON/OPEN
    quote_pool_address: str = "EQCk6tGPlFoQ_1TgZJjuiulfSJz5aoJgnyy29eLsXtOmeYDw"  # TON/jUSDT
    asset_address: str = "EQDf84FT8tdHZeI2-LXdb8gPMRqHRSABrmi8jI7MzvVpGJKZ"
    asset_symbol: str = "OPEN"
    asset_decimals: int = 5  # pool metadata reports the default 9
    native_symbol: str = "TON"

    # ===================
    # Links
    # ===================
    explorer_url: str = "https://tonviewer.com/"
    buy_url: str = "https://dedust.io/swap/TON/OPEN"
    chart_url: str = "https://dyor.io/ru/token/EQDf84FT8tdHZeI2-LXdb8gPMRqHRSABrmi8jI7MzvVpGJKZ"

    # ===================
    # Dedust API
    # ===================
    api_url: str = "https://api.dedust.io/v2/"
    request_timeout: float = 100.0
    trade_page_size: int = 5

    # ===================
    # Monitor timings (seconds)
    # ===================
    poll_interval: float = 10.0
    error_backoff: float = 10.0
    warmup_delay: float = 4.0
    prefetch_delay: float = 0.25
    settle_delay: float = 0.12
    settle_retries: int = 4

    # ===================
    # Telegram
    # ===================
    telegram_token: Optional[str] = None
    chat_id: int = -1002056517262
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "Settings":
        """Defaults overridden by .env / environment variables, then by `overrides`."""
        load_dotenv(dotenv_path)
        env = {}
        if token := os.getenv(BOT_TOKEN_ENV):
            env["telegram_token"] = token
        if chat_id := os.getenv(CHAT_ID_ENV):
            env["chat_id"] = int(chat_id)
        if level := os.getenv(LOG_LEVEL_ENV):
            env["log_level"] = level.upper()
        env.update({k: v for k, v in overrides.items() if v is not None})
        return replace(cls(), **env)


# Global settings instance - import this
settings = Settings()
