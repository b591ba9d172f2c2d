"""Event channel, console rendering and logging."""

from .channels import EventChannel, EventKind, GameEvent, GameObserver
from .console_renderer import ConsoleRenderer
from .markdown_logger import MarkdownLogger

__all__ = [
    "EventChannel",
    "EventKind",
    "GameEvent",
    "GameObserver",
    "ConsoleRenderer",
    "MarkdownLogger",
]
