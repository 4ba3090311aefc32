from __future__ import annotations

import datetime
import enum
import typing as t
from dataclasses import dataclass

import requests

from loguru2telegram.telegramErrors import ConfigError
from loguru2telegram.telegramFormat import TextFormatter

SEND_MESSAGE_URL = "https://api.telegram.org/bot{token}/sendMessage"
DEFAULT_REQUEST_TIMEOUT = 3.0

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


class Level(enum.Enum):
    """Loguru's built-in severities, valued by their severity number."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    SUCCESS = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def of(cls, record: t.Mapping[str, t.Any]) -> Level | None:
        """Level of a loguru record, or None for custom levels."""
        return cls.__members__.get(record["level"].name)

    @classmethod
    def parse(cls, value: Level | str) -> Level:
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        raise ConfigError(f"Unknown log level: {value!r}")


ALL_LEVELS = tuple(Level)
DEFAULT_LEVELS = frozenset(
    {Level.INFO, Level.SUCCESS, Level.WARNING, Level.ERROR, Level.CRITICAL}
)


class _Default:
    def __repr__(self) -> str:
        return "DEFAULT"


# Marks an omitted option; an explicit None is rejected.
DEFAULT: t.Any = _Default()


@dataclass(frozen=True)
class HookConfig:
    url: str
    chat_ids: tuple[int, ...]
    levels: frozenset[Level]
    notify_on: frozenset[Level]                   # empty -> notify on every level
    format: t.Callable[[t.Mapping[str, t.Any]], str]
    request_timeout: float | None                 # seconds, None -> no deadline
    session: t.Any                                # requests.Session or anything with post()


def build_config(
    token: str,
    chat_ids: t.Iterable[int | str] | int | str,
    *,
    session: t.Any = DEFAULT,
    notify_on: t.Any = DEFAULT,
    levels: t.Any = DEFAULT,
    format: t.Any = DEFAULT,
    request_timeout: t.Any = DEFAULT,
) -> HookConfig:
    """
    Validate the options in declaration order and freeze them into a HookConfig.

    Raises:
        ConfigError: On the first invalid option.
    """
    ids = _chat_ids(chat_ids)

    if session is DEFAULT:
        session = requests.Session()
    elif session is None:
        raise ConfigError("HTTP session is not specified")
    elif not callable(getattr(session, "post", None)):
        raise ConfigError("HTTP session must provide a post() method")

    notify = frozenset() if notify_on is DEFAULT else _levels(
        notify_on, "at least one level for notification is required"
    )
    enabled = DEFAULT_LEVELS if levels is DEFAULT else _levels(
        levels, "at least one level is required"
    )

    if format is DEFAULT:
        format = TextFormatter()
    elif format is None:
        raise ConfigError("the format function is None")
    elif not callable(format):
        raise ConfigError(f"the format function must be callable, got {type(format).__name__}")

    timeout = DEFAULT_REQUEST_TIMEOUT if request_timeout is DEFAULT else _timeout(request_timeout)

    return HookConfig(
        url=SEND_MESSAGE_URL.format(token=token),
        chat_ids=ids,
        levels=enabled,
        notify_on=notify,
        format=format,
        request_timeout=timeout,
        session=session,
    )


def _chat_ids(chat_ids: t.Any) -> tuple[int, ...]:
    if chat_ids is None:
        raise ConfigError("at least one chat id is required")
    if isinstance(chat_ids, (int, str)):
        chat_ids = [chat_ids]
    ids = tuple(_chat_id(c) for c in chat_ids)
    if not ids:
        raise ConfigError("at least one chat id is required")
    return ids


def _chat_id(value: t.Any) -> int:
    # Numeric strings come from env vars and CLI args, e.g. "-1001234567890".
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        chat_id = int(value.strip())
    elif isinstance(value, int) and not isinstance(value, bool):
        chat_id = value
    else:
        raise ConfigError(f"Invalid chat id: {value!r}")
    if not _INT64_MIN <= chat_id <= _INT64_MAX:
        raise ConfigError(f"Invalid chat id: {value!r} is outside the signed 64-bit range")
    return chat_id


def _levels(value: t.Any, empty_message: str) -> frozenset[Level]:
    if value is None:
        raise ConfigError(empty_message)
    if isinstance(value, (Level, str)):
        value = [value]
    parsed = frozenset(Level.parse(v) for v in value)
    if not parsed:
        raise ConfigError(empty_message)
    return parsed


def _timeout(value: t.Any) -> float | None:
    if isinstance(value, datetime.timedelta):
        value = value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"the request timeout must be a number of seconds, got {value!r}")
    if value < 0:
        raise ConfigError("the request timeout must not be negative")
    return float(value) or None
