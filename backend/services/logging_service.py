import logging
import os
from logging.handlers import RotatingFileHandler
from collections import deque
from typing import Deque, Dict, Any

from config import settings


class RingBufferHandler(logging.Handler):
    def __init__(self, maxlen: int = 2000):
        super().__init__()
        self.buffer: Deque[Dict[str, Any]] = deque(maxlen=maxlen)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.buffer.append({
                "ts": record.created,
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
                "pathname": record.pathname,
                "lineno": record.lineno,
            })
        except Exception:
            self.handleError(record)

    def get_recent(self, limit: int = 500):
        if limit <= 0:
            return list(self.buffer)
        return list(self.buffer)[-limit:]


_ring_handler: RingBufferHandler | None = None


def get_ring_handler() -> RingBufferHandler:
    global _ring_handler
    if _ring_handler is None:
        _ring_handler = RingBufferHandler(maxlen=settings.RING_BUFFER_SIZE)
    return _ring_handler


def init_logging(level: str | None = None):
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = logging.getLogger()
    level_name = (level or settings.LOG_LEVEL).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # Rotating file handler only when a log directory is configured
    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_path = os.path.abspath(os.path.join(settings.LOG_DIR, "geodesy.log"))
        already_installed = any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == log_path
            for h in root.handlers
        )
        if not already_installed:
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=5_000_000,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(fmt)
            root.addHandler(file_handler)

    # In-memory ring buffer
    ring = get_ring_handler()
    ring.setFormatter(fmt)
    ring.setLevel(getattr(logging, settings.RING_BUFFER_MIN_LEVEL, logging.INFO))
    if ring not in root.handlers:
        root.addHandler(ring)

    # pyproj logs PROJ internals at DEBUG
    logging.getLogger("pyproj").setLevel(logging.WARNING)
    return ring
