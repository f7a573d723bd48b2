from .settings import BOT_TOKEN_ENV, Settings, settings

__all__ = ["BOT_TOKEN_ENV", "Settings", "settings"]
