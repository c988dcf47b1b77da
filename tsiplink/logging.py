"""
Receiver diagnostics kept in memory.

The receiver reports framing and decoding events through standard ``logging``
records that carry a ``details`` dict. ``DiagnosticsHandler`` keeps the most
recent of them so an application can inspect what the decoder saw without
configuring any log output.
"""
import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional


class DiagnosticsHandler(logging.Handler):
    def __init__(self, max_entries: int = 200):
        super().__init__()
        self.max_entries = max_entries
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        self._append({
            "event": record.getMessage(),
            "level": record.levelname,
            "ts": record.created,
            "source": record.name,
            "details": dict(getattr(record, "details", None) or {}),
        })

    def _append(self, event: Dict) -> None:
        with self._lock:
            self._events.append(event)

    def get_events(self, event: Optional[str] = None) -> List[Dict]:
        """Recorded events, oldest first, optionally only those named ``event``."""
        with self._lock:
            events = list(self._events)
        if event is None:
            return events
        return [e for e in events if e["event"] == event]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def create_logger(name: str, ring_size: int) -> logging.Logger:
    """Return the logger ``name`` with one ``DiagnosticsHandler`` installed."""
    logger = logging.getLogger(name)
    if ring_buffer(logger) is None:
        logger.addHandler(DiagnosticsHandler(max_entries=ring_size))
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def ring_buffer(logger: logging.Logger) -> Optional[DiagnosticsHandler]:
    for handler in logger.handlers:
        if isinstance(handler, DiagnosticsHandler):
            return handler
    return None
