class TelegramHookError(Exception):
    """Base class for errors raised by the Telegram hook."""


class ConfigError(TelegramHookError, ValueError):
    """Invalid hook configuration. No hook instance is produced."""


class FormatError(TelegramHookError):
    """The format function failed for a log record."""


class TransportError(TelegramHookError):
    """The HTTP request to the Telegram API could not be completed."""


class DeliveryError(TelegramHookError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"response status code is not 200, it is {status_code}")
        self.status_code = status_code
