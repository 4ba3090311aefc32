"""
loguru2telegram - send loguru records to Telegram chats.

A loguru sink that:
- Delivers each record to one or more chats through the Bot API
- Sends silently unless the record's level asks for attention
- Raises on the first failed delivery and lets loguru report it

Basic usage:
    from loguru import logger
    from loguru2telegram import TelegramHook

    hook = TelegramHook.from_env()  # Reads TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID
    hook.attach(logger)
    logger.error("Training crashed 💥")

The package's own diagnostics are disabled by default; turn them on with
``logger.enable("loguru2telegram")``.
"""

from loguru import logger

__version__ = "0.1.0"

from .telegramConfig import ALL_LEVELS, DEFAULT_LEVELS, HookConfig, Level
from .telegramErrors import (
    ConfigError,
    DeliveryError,
    FormatError,
    TelegramHookError,
    TransportError,
)
from .telegramFormat import TextFormatter
from .telegramHook import OutboundMessage, TelegramHook

logger.disable(__name__)

__all__ = [
    "TelegramHook",
    "OutboundMessage",
    "HookConfig",
    "Level",
    "ALL_LEVELS",
    "DEFAULT_LEVELS",
    "TextFormatter",
    "TelegramHookError",
    "ConfigError",
    "FormatError",
    "TransportError",
    "DeliveryError",
    "__version__",
]
