"""
Structured Logging for the Funny Face Overlay Engine
====================================================

Bounded Context: Observability

JSON-structured logging with typed event names.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from funnyface_overlay.logging import create_logger, LogEvent
    >>> logger = create_logger("renderer")
    >>> logger.debug(
    ...     event=LogEvent.IMAGE_ORIENTATION,
    ...     message="Source orientation resolved",
    ...     metadata={'source': 'up', 'output': 'down_mirrored'}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
