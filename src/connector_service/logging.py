"""
Logging for the connector service.

Features:
- structlog configuration (console for humans, JSON for pipes/files)
- Request correlation id bound through contextvars
- ClientLogger: the diagnostic channel back to the editor
"""

import logging
import sys
import threading
import uuid
from collections.abc import Callable
from enum import IntEnum
from typing import Any

import structlog

__all__ = [
    "ClientLogger",
    "MessageType",
    "bind_request_id",
    "configure_logging",
    "generate_request_id",
]

logger = structlog.get_logger(__name__)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level name (DEBUG, INFO, ...)
        json_output: Render one JSON object per line instead of console output
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def generate_request_id() -> str:
    """Generate a new request ID."""
    return str(uuid.uuid4())[:8]  # Short ID for readability


def bind_request_id(request_id: str) -> None:
    """Attach a request id to every log entry of the current context."""
    structlog.contextvars.bind_contextvars(request_id=request_id)


class MessageType(IntEnum):
    """LSP window/logMessage types."""

    ERROR = 1
    WARNING = 2
    INFO = 3
    LOG = 4


ClientSink = Callable[[dict[str, Any]], None]


class ClientLogger:
    """Per-server diagnostic logger.

    Every error goes to the server log. When client debugging is enabled
    and a sink is attached, the error is also forwarded as a
    window/logMessage payload. Safe to share between concurrent requests.

    Example:
        client_logger = ClientLogger(debug=True, sink=send_notification)
        client_logger.log_error("Operation 'x' failed!", error)
    """

    def __init__(self, debug: bool = False, sink: ClientSink | None = None) -> None:
        self.debug = debug
        self._sink = sink
        self._lock = threading.Lock()

    def attach(self, sink: ClientSink | None) -> None:
        """Attach (or detach with None) the client sink."""
        with self._lock:
            self._sink = sink

    def log_error(self, message: str, error: BaseException, **context: Any) -> None:
        """Log a failed operation with its cause."""
        logger.error(message, error=str(error), exc_info=error, **context)
        self._forward(MessageType.ERROR, f"{message} {error}")

    def log_info(self, message: str, **context: Any) -> None:
        logger.info(message, **context)
        self._forward(MessageType.INFO, message)

    def _forward(self, message_type: MessageType, message: str) -> None:
        if not self.debug:
            return

        with self._lock:
            if self._sink is None:
                return
            try:
                self._sink({"type": int(message_type), "message": message})
            except Exception as e:
                logger.warning("client_log_forward_failed", error=str(e))
