"""Sanitized logging utilities for the uniqueness rule.

Collection values often carry personal data (emails, account ids, tokens),
so any context passed to the helpers below is serialized and scrubbed before
it reaches the log output.
"""
import json
import logging
import re
from typing import Any

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger('unique-rule')


def sanitize_text(text: str) -> str:
    """Remove sensitive information from text.

    Args:
        text: Input text that may contain sensitive data

    Returns:
        Sanitized text with sensitive patterns replaced
    """
    if not text:
        return text

    # Email addresses
    text = re.sub(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}', '<email>', text)

    # URLs with potential sensitive data
    text = re.sub(r'https?://[^\s"]+', '<url>', text)

    # UUIDs
    text = re.sub(r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}', '<uuid>', text, flags=re.IGNORECASE)

    # Long opaque strings (tokens, keys, hashes)
    text = re.sub(r'[a-zA-Z0-9]{32,}', '<token>', text)

    return text


def safe_json(obj: Any, max_length: int = 1000) -> str:
    """Safely serialize object to JSON with sensitive data sanitized.

    Args:
        obj: Object to serialize
        max_length: Maximum length of output string

    Returns:
        Sanitized JSON string
    """
    try:
        json_str = json.dumps(obj, ensure_ascii=False, default=str, sort_keys=True)
    except (TypeError, ValueError):
        return "<unable to serialize>"

    sanitized = sanitize_text(json_str)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "... [truncated]"
    return sanitized


def configure_logging(level: str = "INFO", fmt: str = None) -> None:
    """Apply level and format settings to the package logger."""
    logger.setLevel(level.upper())
    if fmt:
        formatter = logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S')
        for handler in logging.getLogger().handlers:
            handler.setFormatter(formatter)


def _context(kwargs: dict) -> str:
    from unique_rule.config import get_config

    return safe_json(kwargs, max_length=get_config().max_json_output_length)


def log_info(message: str, **kwargs) -> None:
    """Log info message with optional sanitized context."""
    if kwargs:
        logger.info(f"{message} | Context: {_context(kwargs)}")
    else:
        logger.info(message)


def log_warning(message: str, **kwargs) -> None:
    """Log warning message with optional sanitized context."""
    if kwargs:
        logger.warning(f"{message} | Context: {_context(kwargs)}")
    else:
        logger.warning(message)


def log_error(message: str, **kwargs) -> None:
    """Log error message with optional sanitized context."""
    if kwargs:
        logger.error(f"{message} | Context: {_context(kwargs)}")
    else:
        logger.error(message)


def log_debug(message: str, **kwargs) -> None:
    """Log debug message with optional sanitized context."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if kwargs:
        logger.debug(f"{message} | Context: {_context(kwargs)}")
    else:
        logger.debug(message)


def log_duplicate_detection(index: Any, message: str, **kwargs) -> None:
    """Log a single duplicate hit.

    Args:
        index: Position (or mapping key) of the duplicated item
        message: Violation message reported for the item
        **kwargs: Additional context
    """
    log_debug("Duplicate detected", index=index, violation=message, **kwargs)
