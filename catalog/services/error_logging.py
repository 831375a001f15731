"""
Error Logging Service

Logging setup and error reporting for the catalog:
- Console output for every module logger
- Log files with rotation (errors only, and everything)
- Detailed error blocks with context and traceback
- Sanitizes sensitive data in context

Usage:
    from catalog.services.error_logging import error_logger

    try:
        # some code
    except CatalogError as e:
        error_logger.log_error(e, context={"barcode": barcode})
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional


LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
DETAILED_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Create specific error logger
logger = logging.getLogger("error_logging")


# Sensitive fields to sanitize
SENSITIVE_FIELDS = {'password', 'token', 'authorization', 'api_key', 'secret', 'credential'}


def sanitize_data(data: Any, depth: int = 0) -> Any:
    """
    Sanitize sensitive data from dictionaries and lists.
    Replaces sensitive field values with '[REDACTED]'.
    """
    if depth > 10:  # Prevent infinite recursion
        return "[MAX_DEPTH]"

    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(sensitive in key_lower for sensitive in SENSITIVE_FIELDS):
                sanitized[key] = "[REDACTED]"
            else:
                sanitized[key] = sanitize_data(value, depth + 1)
        return sanitized
    elif isinstance(data, (list, tuple)):
        return [sanitize_data(item, depth + 1) for item in data]
    else:
        return data


def truncate_string(s: str, max_length: int = 10000) -> str:
    """Truncate string to max length."""
    if len(s) > max_length:
        return s[:max_length] + f"... [TRUNCATED, total {len(s)} chars]"
    return s


def _writable_dir(path: Path) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
        # Test if we can write to the directory
        test_file = path / ".write_test"
        test_file.touch()
        test_file.unlink()
        return True
    except OSError as e:
        print(f"Warning: Cannot write to logs directory {path}: {e}")
        print("File logging disabled, using console only.")
        return False


def configure_error_logging(
    log_dir: Optional[str] = None,
    level: str = "INFO",
    file_logging: bool = True,
) -> Optional[Path]:
    """
    Configure the root logger for the application.

    Adds a console handler, and when file_logging is on and log_dir is
    writable, two rotating files: errors.log (ERROR and above) and
    app_detailed.log (all levels). Calling it again replaces the handlers
    installed by a previous call.

    Returns the log directory in use, or None for console-only logging.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(root_logger.handlers):
        if getattr(handler, "_catalog_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handlers: list[logging.Handler] = [console_handler]

    logs_dir = Path(log_dir) if log_dir else None
    if logs_dir is not None and (not file_logging or not _writable_dir(logs_dir)):
        logs_dir = None

    if logs_dir is not None:
        # Configure file logger
        file_handler = RotatingFileHandler(
            logs_dir / "errors.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=10,  # Keep 10 backup files
            encoding='utf-8'
        )
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

        # Configure detailed file logger (all levels)
        detailed_handler = RotatingFileHandler(
            logs_dir / "app_detailed.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        detailed_handler.setLevel(logging.DEBUG)
        detailed_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
        handlers.extend([file_handler, detailed_handler])

    for handler in handlers:
        handler._catalog_handler = True
        root_logger.addHandler(handler)

    error_logger.set_log_dir(logs_dir)
    return logs_dir


class ErrorLogger:
    """
    Error logging service that writes a summary line to the log and a
    detailed block to errors_detailed.log.
    """

    def __init__(self):
        self.log_dir: Optional[Path] = None

    def set_log_dir(self, log_dir: Optional[Path]):
        """Set the directory for detailed error blocks (None disables them)."""
        self.log_dir = log_dir

    def log_error(
        self,
        error: BaseException,
        severity: str = "error",
        context: Optional[Dict] = None,
    ) -> str:
        """
        Log an error with full context.

        Args:
            error: The exception that occurred
            severity: debug, info, warning, error, critical
            context: Additional context data

        Returns:
            The detailed error block
        """
        timestamp = datetime.now(timezone.utc)

        # Extract error information
        error_type = type(error).__name__
        error_message = str(error)

        # Get full traceback
        if error.__traceback__ is not None:
            stack_trace = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        else:
            exc_type, exc_value, exc_tb = sys.exc_info()
            stack_trace = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb)) if exc_tb else ""

        # Build error buffer with all available info
        error_buffer_parts = [
            "=== ERROR LOG ===",
            f"Timestamp: {timestamp.isoformat()}",
            f"Type: {error_type}",
            f"Message: {error_message}",
            f"Severity: {severity}",
        ]

        code = getattr(error, "code", None)
        if code:
            error_buffer_parts.append(f"Code: {code}")

        cause = getattr(error, "cause", None) or error.__cause__
        if cause is not None:
            error_buffer_parts.append(f"Cause: {type(cause).__name__}: {cause}")

        # Add context
        if context:
            sanitized_context = sanitize_data(context)
            error_buffer_parts.extend([
                "\n=== CONTEXT ===",
                json.dumps(sanitized_context, indent=2, default=str),
            ])

        # Add stack trace
        if stack_trace:
            error_buffer_parts.extend([
                "\n=== STACK TRACE ===",
                stack_trace,
            ])

        error_buffer = "\n".join(error_buffer_parts)
        error_buffer = truncate_string(error_buffer, 50000)  # Max 50KB

        # Log summary line
        log_message = f"{error_type}: {error_message}"

        if severity == "critical":
            logger.critical(log_message)
        elif severity == "error":
            logger.error(log_message)
        elif severity == "warning":
            logger.warning(log_message)
        else:
            logger.info(log_message)

        # Write detailed error to separate file (only if file logging is enabled)
        if self.log_dir is not None:
            error_file = self.log_dir / "errors_detailed.log"
            try:
                with open(error_file, "a", encoding="utf-8") as f:
                    f.write(f"\n{'='*80}\n")
                    f.write(error_buffer)
                    f.write(f"\n{'='*80}\n")
            except OSError as file_err:
                logger.error(f"Failed to write to error file: {file_err}")

        return error_buffer

    def log_warning(self, message: str):
        """Log a warning message."""
        logger.warning(message)

    def log_info(self, message: str):
        """Log an info message."""
        logger.info(message)


# Singleton instance
error_logger = ErrorLogger()
