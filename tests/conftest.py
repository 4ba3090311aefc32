"""
conftest.py - shared fixtures.

Records are captured from a real loguru logger so the hook sees exactly what
loguru hands to its sinks; the HTTP session is a MagicMock so no request ever
leaves the test process.
"""

from unittest.mock import MagicMock

import pytest
import requests
from loguru import logger


def _response(status_code=200):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    return response


@pytest.fixture
def make_record():
    def _make(level="INFO", message="some_log_message", exception=None, **extra):
        records = []
        handler_id = logger.add(lambda m: records.append(m.record), level="TRACE", format="{message}")
        try:
            logger.bind(**extra).opt(exception=exception).log(level, message)
        finally:
            logger.remove(handler_id)
        return records[0]

    return _make


@pytest.fixture
def make_response():
    """Factory for a requests.Response stub with the given status code."""
    return _response


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.post.return_value = _response(200)
    return s


@pytest.fixture
def sent_payloads():
    """JSON bodies posted through a mocked session, in call order."""
    def _payloads(session):
        return [c.kwargs["json"] for c in session.post.call_args_list]

    return _payloads
