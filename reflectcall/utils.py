"""
Utility functions for reflectcall.

Includes logging setup, payload echo formatting, and console output.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape


# Global console for pretty output
console = Console()
err_console = Console(stderr=True)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "pretty",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up logging for the reflectcall package.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "structured" (JSON) or "pretty" (human-readable)
        log_file: Optional path to a log file

    Returns:
        Configured logger
    """
    logger = logging.getLogger("reflectcall")
    logger.setLevel(getattr(logging, log_level.upper()))
    logger.handlers = []  # Clear existing handlers

    if log_format == "pretty":
        console_handler = RichHandler(console=err_console, rich_tracebacks=True, show_time=False)
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        if log_format == "structured":
            file_handler.setFormatter(StructuredFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
        logger.addHandler(file_handler)

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Dispatch context passed via extra=
        if hasattr(record, "method"):
            log_data["method"] = record.method
        if hasattr(record, "target_type"):
            log_data["target_type"] = record.target_type

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def echo_payload(payload: Any, max_length: int = 500) -> str:
    """
    Render a raw payload for inclusion in an error message.

    Args:
        payload: Raw payload (str, bytes, or anything else)
        max_length: Maximum rendered length

    Returns:
        Printable payload text, truncated with "..." if too long
    """
    if isinstance(payload, (bytes, bytearray)):
        text = bytes(payload).decode("utf-8", errors="replace")
    elif isinstance(payload, str):
        text = payload
    else:
        text = repr(payload)

    text = text.strip()
    if len(text) > max_length:
        text = text[:max_length] + "..."
    return text


def to_display(value: Any) -> str:
    """Render a result value as JSON when possible, repr otherwise."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]✗[/bold red] {escape(message)}", soft_wrap=True, highlight=False, emoji=False)


def print_info(message: str) -> None:
    """Print info message to console."""
    console.print(f"[bold cyan]ℹ[/bold cyan] {escape(message)}", soft_wrap=True)
