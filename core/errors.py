"""Error taxonomy for the generation pipeline.

Every error raised by the studio carries a ``user_message`` suitable for the
status line of the card that failed, and a ``retryable`` flag consulted by
the retry driver. Only upstream request failures are retried.
"""

from typing import Optional


class StudioError(Exception):
    """Base class for all studio errors"""

    retryable = False

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class ConfigurationError(StudioError):
    """A required setting (usually the API key) is missing or invalid"""


class ValidationError(StudioError):
    """The caller supplied an unusable request (empty prompt, bad scene count)"""


class UpstreamRequestError(StudioError):
    """Non-2xx response or network failure talking to an upstream service"""

    retryable = True

    def __init__(self, message: str, status: Optional[int] = None, retryable: Optional[bool] = None):
        super().__init__(message)
        self.status = status
        if retryable is not None:
            self.retryable = retryable


class RetryExhaustedError(UpstreamRequestError):
    """A bounded retry policy gave up"""

    retryable = False

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class NoResultError(StudioError):
    """The request succeeded but produced no usable resource"""


class ScriptParseError(StudioError):
    """Expected markers were missing from a text-generation response"""

    def __init__(self, message: str = "Failed to parse generated content. Please try again."):
        super().__init__(message)
