"""
Default text rendering of loguru records.

Produces one ``key=value`` line per record, e.g.::

    time="2024-05-01T12:00:00+00:00" level=info msg="disk almost full" host=db1
"""

from __future__ import annotations

import json
import re
import typing as t

_BARE_VALUE = re.compile(r"[A-Za-z0-9\-._/@^+]+")


class TextFormatter:
    """
    Render a record as ``time=... level=... msg=... <extra fields>``.

    Args:
        disable_timestamp: Omit the ``time`` field.
        timestamp_format: strftime pattern for ``time``; ISO-8601 when None.
    """

    def __init__(self, *, disable_timestamp: bool = False, timestamp_format: str | None = None) -> None:
        self.disable_timestamp = disable_timestamp
        self.timestamp_format = timestamp_format

    def __call__(self, record: t.Mapping[str, t.Any]) -> str:
        fields: list[tuple[str, t.Any]] = []
        if not self.disable_timestamp:
            fields.append(("time", self._timestamp(record["time"])))
        fields.append(("level", record["level"].name.lower()))
        fields.append(("msg", record["message"]))

        extra = record.get("extra") or {}
        fields.extend((key, extra[key]) for key in sorted(extra))

        exception = record.get("exception")
        if exception is not None and exception.value is not None:
            fields.append(("error", str(exception.value)))

        return " ".join(f"{key}={_quote(value)}" for key, value in fields) + "\n"

    def __repr__(self) -> str:
        return (
            f"TextFormatter(disable_timestamp={self.disable_timestamp!r}, "
            f"timestamp_format={self.timestamp_format!r})"
        )

    def _timestamp(self, moment) -> str:
        if self.timestamp_format:
            return moment.strftime(self.timestamp_format)
        return moment.isoformat(timespec="seconds")


def _quote(value: t.Any) -> str:
    text = value if isinstance(value, str) else str(value)
    if _BARE_VALUE.fullmatch(text):
        return text
    return json.dumps(text, ensure_ascii=False)
