"""Core components - client plumbing, retry, batching, sync and session state"""

from .errors import (
    StudioError,
    ConfigurationError,
    ValidationError,
    UpstreamRequestError,
    RetryExhaustedError,
    NoResultError,
    ScriptParseError,
)
from .retry import RetryPolicy, retry_with_backoff
from .batching import BatchedExecutor, BatchReport, TaskOutcome
from .sync import MediaElement, MediaEvent, SyncBinder, bind_narration

# Note: StudioSession and StudioConfig are NOT imported here to avoid circular imports
# Import them directly: from core.session import StudioSession

__all__ = [
    # Errors
    "StudioError",
    "ConfigurationError",
    "ValidationError",
    "UpstreamRequestError",
    "RetryExhaustedError",
    "NoResultError",
    "ScriptParseError",

    # Retry
    "RetryPolicy",
    "retry_with_backoff",

    # Batching
    "BatchedExecutor",
    "BatchReport",
    "TaskOutcome",

    # Sync
    "MediaElement",
    "MediaEvent",
    "SyncBinder",
    "bind_narration",
]
