"""
telegramHook.py

Loguru sink that forwards log records to Telegram chats via the Bot API.

Environment variables (read by TelegramHook.from_env only):
  TELEGRAM_BOT_TOKEN  -> your BotFather token (e.g., 123456:ABC-DEF...)
  TELEGRAM_CHAT_ID    -> destination chat id, or several separated by commas

Basic usage:
  from loguru import logger
  from loguru2telegram import TelegramHook

  hook = TelegramHook(token, [chat_id])
  hook.attach(logger)
  logger.error("Disk almost full")

Advanced:
  hook = TelegramHook(
      token,
      [ops_chat, oncall_chat],
      levels=["WARNING", "ERROR", "CRITICAL"],
      notify_on=["ERROR", "CRITICAL"],          # WARNING arrives silently
      format=lambda r: f"{r['level'].name}: {r['message']}",
      request_timeout=5,
  )
  handler_id = hook.attach(logger, enqueue=True)  # deliver from loguru's worker thread
"""

from __future__ import annotations

import os
import typing as t
from dataclasses import dataclass

import requests
from loguru import logger

from loguru2telegram.telegramConfig import DEFAULT, HookConfig, Level, build_config
from loguru2telegram.telegramErrors import (
    ConfigError,
    DeliveryError,
    FormatError,
    TransportError,
)

_PACKAGE = __name__.partition(".")[0]
_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class OutboundMessage:
    """sendMessage payload for one destination chat."""

    chat_id: int
    text: str
    disable_notification: bool

    def to_payload(self) -> dict[str, t.Any]:
        return {
            "chat_id": self.chat_id,
            "text": self.text,
            "disable_notification": self.disable_notification,
        }


class TelegramHook:
    """
    Send loguru records to one or more Telegram chats.

    - Delivers each record to every chat in order, one POST per chat.
    - Stops at the first failed chat and raises; never retries.
    - Sends silently unless the record's level is in ``notify_on``
      (an omitted ``notify_on`` notifies on every level).
    """

    def __init__(
        self,
        token: str,
        chat_ids: t.Iterable[int | str] | int | str,
        *,
        session: requests.Session = DEFAULT,
        notify_on: t.Iterable[Level | str] = DEFAULT,
        levels: t.Iterable[Level | str] = DEFAULT,
        format: t.Callable[[t.Mapping[str, t.Any]], str] = DEFAULT,
        request_timeout: float = DEFAULT,
    ) -> None:
        """
        Args:
            token: Bot token, embedded in the sendMessage URL as-is.
            chat_ids: Destination chats; numeric strings are accepted.
            session: HTTP session used for every request.
            notify_on: Levels that trigger a sound/vibration notification.
            levels: Levels the hook handles; replaces the default set.
            format: Callable rendering a loguru record to message text.
            request_timeout: Per-request deadline in seconds or a timedelta;
                0 disables the deadline rather than failing at once.

        Raises:
            ConfigError: On empty chat ids, a None option, an empty level
                set or a negative timeout.
        """
        self._cfg = build_config(
            token,
            chat_ids,
            session=session,
            notify_on=notify_on,
            levels=levels,
            format=format,
            request_timeout=request_timeout,
        )

    @classmethod
    def from_env(cls, **options: t.Any) -> "TelegramHook":
        """Create a hook from TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID."""
        token = os.getenv("TELEGRAM_BOT_TOKEN")
        chat_ids = os.getenv("TELEGRAM_CHAT_ID")

        if not token:
            raise ConfigError("Missing bot token. Set TELEGRAM_BOT_TOKEN")
        if not chat_ids:
            raise ConfigError("Missing chat id. Set TELEGRAM_CHAT_ID")

        return cls(token, [c for c in chat_ids.split(",") if c.strip()], **options)

    # ----------------------------- Public API -----------------------------

    @property
    def config(self) -> HookConfig:
        return self._cfg

    def levels(self) -> frozenset[Level]:
        """Levels this hook handles."""
        return self._cfg.levels

    def filter(self, record: t.Mapping[str, t.Any]) -> bool:
        """Loguru filter: enabled levels only, never this package's own records."""
        name = record.get("name") or ""
        if name == _PACKAGE or name.startswith(_PACKAGE + "."):
            return False
        return Level.of(record) in self._cfg.levels

    def attach(self, target: t.Any = logger, **kwargs: t.Any) -> int:
        """
        Register the hook as a sink of ``target`` (the global loguru logger by default).

        Extra keyword arguments (catch, enqueue, ...) go to ``logger.add``.
        A callable ``filter`` is applied on top of the hook's own filter.

        Returns:
            Handler id for ``logger.remove``.
        """
        kwargs.setdefault("level", min(level.value for level in self._cfg.levels))
        kwargs.setdefault("format", "{message}")
        extra_filter = kwargs.pop("filter", None)
        if extra_filter is None:
            return target.add(self, filter=self.filter, **kwargs)
        if not callable(extra_filter):
            raise ConfigError("attach() only accepts a callable filter")

        def combined(record):
            return self.filter(record) and bool(extra_filter(record))

        return target.add(self, filter=combined, **kwargs)

    def __call__(self, message: t.Any) -> None:
        self.fire(message.record)

    def fire(self, record: t.Mapping[str, t.Any]) -> None:
        """
        Format the record and deliver it to every chat.

        Raises:
            FormatError: The format function failed; nothing was sent.
            TransportError: A request could not be completed.
            DeliveryError: Telegram answered with a status other than 200.
        """
        try:
            text = self._cfg.format(record)
        except Exception as e:
            raise FormatError(f"failed to format log entry: {e}") from e
        if not isinstance(text, str):
            raise FormatError(f"failed to format log entry: expected str, got {type(text).__name__}")

        disable_notification = not self._notify(Level.of(record))
        for chat_id in self._cfg.chat_ids:
            self._send(OutboundMessage(chat_id, text, disable_notification))

    # --------------------------- Internal helpers -------------------------

    def _notify(self, level: Level | None) -> bool:
        return not self._cfg.notify_on or level in self._cfg.notify_on

    def _send(self, message: OutboundMessage) -> None:
        logger.debug(f"Sending log entry to chat {message.chat_id}")
        try:
            resp = self._cfg.session.post(
                self._cfg.url,
                json=message.to_payload(),
                headers=_HEADERS,
                timeout=self._cfg.request_timeout,
            )
        except (requests.RequestException, OSError) as e:
            logger.error(f"Request to chat {message.chat_id} failed: {e}")
            raise TransportError(f"failed to send HTTP request to Telegram API: {e}") from e

        try:
            if resp.status_code != 200:
                logger.error(f"Telegram API answered {resp.status_code} for chat {message.chat_id}")
                raise DeliveryError(resp.status_code)
        finally:
            resp.close()
