"""Structured event sinks injected into the pantry services."""

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Receives named events with structured fields."""

    def emit(self, event: str, **fields: Any) -> None: ...


class LoggingEventSink:
    """Forward events to the standard logging module."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO):
        self.log = log or logger
        self.level = level

    def emit(self, event: str, **fields: Any) -> None:
        details = " ".join(f"{key}={value!r}" for key, value in fields.items())
        self.log.log(self.level, f"{event} {details}".rstrip(), extra={"event": event, "event_fields": fields})


class NullEventSink:
    """Discard all events."""

    def emit(self, event: str, **fields: Any) -> None:
        return None


class RecordingEventSink:
    """Keep events in memory, mostly useful for tests."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]
