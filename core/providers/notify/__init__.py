"""Result sharing sinks"""

from ..base import NullSink
from .telegram import TelegramSink, build_caption

__all__ = [
    "NullSink",
    "TelegramSink",
    "build_caption",
]
