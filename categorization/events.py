"""Run event stream: human-readable log lines and progress updates.

Every event is mirrored into the application logger and handed to any
registered listeners (e.g. a UI).
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from logger import get_logger

logger = get_logger()


class EventLevel(str, Enum):
    INFO = "info"
    OK = "ok"
    WARN = "warn"
    ERROR = "error"


_LOG_LEVELS = {
    EventLevel.INFO: logging.INFO,
    EventLevel.OK: logging.INFO,
    EventLevel.WARN: logging.WARNING,
    EventLevel.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class RunEvent:
    message: str
    level: EventLevel
    timestamp: datetime


@dataclass(frozen=True)
class Progress:
    completed: int
    total: int

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 0.0
        return max(0.0, min(100.0, self.completed / self.total * 100))


EventListener = Callable[[RunEvent], None]
ProgressListener = Callable[[Progress], None]


class EventStream:
    """Fan-out for run events and progress updates."""

    def __init__(self):
        self._event_listeners: List[EventListener] = []
        self._progress_listeners: List[ProgressListener] = []
        self.events: List[RunEvent] = []
        self.progress: Optional[Progress] = None

    def subscribe(
        self,
        on_event: Optional[EventListener] = None,
        on_progress: Optional[ProgressListener] = None,
    ) -> None:
        if on_event is not None:
            self._event_listeners.append(on_event)
        if on_progress is not None:
            self._progress_listeners.append(on_progress)

    def emit(self, message: str, level: EventLevel = EventLevel.INFO) -> RunEvent:
        event = RunEvent(message=message, level=level, timestamp=datetime.now())
        self.events.append(event)

        prefix = "✓ " if level is EventLevel.OK else ""
        logger.log(_LOG_LEVELS[level], f"{prefix}{message}")

        for listener in self._event_listeners:
            listener(event)
        return event

    def info(self, message: str) -> RunEvent:
        return self.emit(message, EventLevel.INFO)

    def ok(self, message: str) -> RunEvent:
        return self.emit(message, EventLevel.OK)

    def warn(self, message: str) -> RunEvent:
        return self.emit(message, EventLevel.WARN)

    def error(self, message: str) -> RunEvent:
        return self.emit(message, EventLevel.ERROR)

    def update_progress(self, completed: int, total: int) -> Progress:
        self.progress = Progress(completed=completed, total=total)
        for listener in self._progress_listeners:
            listener(self.progress)
        return self.progress
