"""
Logging configuration for the IT Repair Desk application.
Provides structured logging with different levels and formats.

File handlers sit behind a QueueHandler so log writes never block the
event loop; a QueueListener thread performs the file I/O.
"""

import atexit
import logging
import logging.handlers
import queue
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel


# Global queue listener for cleanup
_queue_listener: Optional[logging.handlers.QueueListener] = None


class LogConfig(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    enable_file_logging: bool = False
    log_dir: str = "logs"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_console: bool = True


class ColoredFormatter(logging.Formatter):
    """Formatter with ANSI colors on the level name for console output."""

    grey = "\x1b[38;21m"
    yellow = "\x1b[33;21m"
    red = "\x1b[31;21m"
    bold_red = "\x1b[31;1m"
    blue = "\x1b[34;21m"
    reset = "\x1b[0m"

    COLORS = {
        logging.DEBUG: grey,
        logging.INFO: blue,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def format(self, record):
        # Work on a copy so file handlers sharing the record stay uncolored
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, self.grey)
        record.levelname = f"{color}{record.levelname}{self.reset}"
        return f"{super().format(record)}{self.reset}"


def _rotating_handler(config: LogConfig, filename: str, formatter: logging.Formatter):
    handler = logging.handlers.RotatingFileHandler(
        Path(config.log_dir) / filename,
        maxBytes=config.max_file_size,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(getattr(logging, config.level.upper()))
    handler.setFormatter(formatter)
    return handler


def setup_logging(config: Optional[LogConfig] = None) -> None:
    """Setup application logging with configuration.

    - Console handler writes directly (stdout is non-blocking)
    - app.log receives everything, audit.log only the ticket/auth audit
      loggers; both are driven by a QueueListener thread
    """
    global _queue_listener

    if config is None:
        config = LogConfig()

    level = getattr(logging, config.level.upper())

    if _queue_listener:
        _queue_listener.stop()
        _queue_listener = None

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(
            ColoredFormatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt=config.date_format,
            )
        )
        root_logger.addHandler(console_handler)

    file_handlers = []

    if config.enable_file_logging:
        Path(config.log_dir).mkdir(exist_ok=True)

        file_formatter = logging.Formatter(
            fmt="%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s",
            datefmt=config.date_format,
        )
        file_handlers.append(_rotating_handler(config, "app.log", file_formatter))

        audit_handler = _rotating_handler(config, "audit.log", file_formatter)
        audit_handler.addFilter(logging.Filter("audit"))
        file_handlers.append(audit_handler)

    if file_handlers:
        log_queue = queue.Queue(-1)
        root_logger.addHandler(logging.handlers.QueueHandler(log_queue))

        _queue_listener = logging.handlers.QueueListener(
            log_queue,
            *file_handlers,
            respect_handler_level=True,
        )
        _queue_listener.start()
        atexit.register(stop_queue_listener)

    from .config import settings

    sqlalchemy_logger = logging.getLogger("sqlalchemy.engine")
    if settings.logging.enable_query_logging:
        sqlalchemy_logger.setLevel(level)
    else:
        sqlalchemy_logger.setLevel(logging.WARNING)


def stop_queue_listener() -> None:
    """Stop the queue listener gracefully.

    Called automatically on exit via atexit.
    Can also be called manually during shutdown.
    """
    global _queue_listener

    if _queue_listener:
        _queue_listener.stop()
        _queue_listener = None


def _context(**fields) -> str:
    parts = [f"{key}: {value}" for key, value in fields.items() if value is not None]
    return " | ".join(parts) if parts else "No context"


class TicketLogger:
    """Structured audit logger for ticket lifecycle events."""

    def __init__(self, name: str = "tickets"):
        self.logger = logging.getLogger(f"audit.{name}")

    def ticket_created(
        self,
        ticket_id: int,
        service_request_id: Optional[int],
        client_id: Optional[int],
        assigned_to: Optional[str] = None,
    ) -> None:
        """Log when a ticket is created."""
        self.logger.info(
            f"Ticket created | Ticket ID: {ticket_id} | "
            + _context(
                **{
                    "Service Request ID": service_request_id,
                    "Client ID": client_id,
                    "Assigned To": assigned_to,
                }
            )
        )

    def ticket_reused(self, ticket_id: int, service_request_id: int) -> None:
        """Log when get-or-create resolves to an existing ticket."""
        self.logger.debug(
            f"Ticket reused | Ticket ID: {ticket_id} | "
            f"Service Request ID: {service_request_id}"
        )

    def field_changed(self, ticket_id: int, field: str, old: str, new: str) -> None:
        """Log a status or priority change."""
        self.logger.info(
            f"Ticket {field} changed | Ticket ID: {ticket_id} | {old} -> {new}"
        )

    def message_appended(
        self,
        ticket_id: int,
        message_id: int,
        sender_type: str,
        message_type: str,
        is_internal: bool,
    ) -> None:
        """Log when a message is appended to a ticket."""
        self.logger.info(
            f"Message appended | Ticket ID: {ticket_id} | Message ID: {message_id} | "
            f"Sender: {sender_type} | Type: {message_type} | Internal: {is_internal}"
        )


class ClientAuthLogger:
    """Structured audit logger for client portal authentication."""

    def __init__(self, name: str = "client_auth"):
        self.logger = logging.getLogger(f"audit.{name}")

    def signup(self, client_id: int, email: str) -> None:
        self.logger.info(f"Client signup | Client ID: {client_id} | Email: {email}")

    def signup_rejected(self, email: str, reason: str) -> None:
        self.logger.warning(f"Client signup rejected | Email: {email} | Reason: {reason}")

    def login_succeeded(self, client_id: int, ip_address: Optional[str] = None) -> None:
        self.logger.info(
            f"Client login | Client ID: {client_id} | " + _context(IP=ip_address)
        )

    def login_failed(self, email: str, ip_address: Optional[str] = None) -> None:
        self.logger.warning(
            f"Client login failed | Email: {email} | " + _context(IP=ip_address)
        )

    def logout(self, client_id: Optional[int]) -> None:
        self.logger.info("Client logout | " + _context(**{"Client ID": client_id}))
