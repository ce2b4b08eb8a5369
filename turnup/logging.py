"""
turnup logging utilities.

Provides configurable logging for HTTP requests/responses and for the
progress notices emitted while updating repositories. Access tokens are
never logged.
"""

import logging
import re
from typing import Any

# Create turnup loggers
_root_logger = logging.getLogger("turnup")
_http_logger = logging.getLogger("turnup.http")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # GitHub classic and fine-grained tokens
    (re.compile(r"\b(gh[pousr]_[A-Za-z0-9]{20,})\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # Authorization header values
    (re.compile(r"(Bearer|token)\s+[A-Za-z0-9_\-.]+", re.IGNORECASE), r"\1 [REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {"authorization", "token", "secret", "password", "api_key"}

# File contents are base64 blobs; only show a short prefix
_CONTENT_PREVIEW_LENGTH = 16


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure turnup logging.

    Args:
        level: Default log level for all turnup loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from turnup.logging import configure_logging

        # Trace every GitHub API call
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _root_logger.setLevel(level)
    _root_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a turnup logger.

    Args:
        name: Logger name suffix (e.g., "http", "update"). If None, returns the root turnup logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _root_logger
    return logging.getLogger(f"turnup.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces access tokens and credential-looking assignments with
    redacted placeholders.

    Args:
        text: Text that may contain sensitive data

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def truncate_content(content: str) -> str:
    """Shorten an encoded file body for safe logging."""
    if len(content) <= _CONTENT_PREVIEW_LENGTH:
        return content
    return f"{content[:_CONTENT_PREVIEW_LENGTH]}...({len(content)} chars)"


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: authorization, token, secret, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]" and
        encoded file contents truncated
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif key_lower == "content" and isinstance(value, str):
            result[key] = truncate_content(value)
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        headers: Request headers (optional)
        body: Request body (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if headers:
        safe_headers = safe_log_dict(headers)
        log_parts.append(f"headers={safe_headers}")

    if body:
        safe_body = safe_log_dict(body)
        log_parts.append(f"body={safe_body}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    _http_logger.debug(" | ".join(log_parts))


class Notifier:
    """
    Progress reporter for a single turnup action.

    Passed explicitly to the orchestrator and publish pipeline so that
    callers (the CLI, tests) decide where notices go.

    Example:
        ```python
        notifier = Notifier("turnup.update")
        notifier.notify("Creating branch.")
        ```
    """

    def __init__(self, action: str, logger: logging.Logger | None = None) -> None:
        self.action = action
        self.logger = logger or logging.getLogger(action)

    def notify(self, message: str) -> None:
        """Report an informational progress notice."""
        self.logger.info(mask_sensitive_data(message))

    def warn(self, message: str) -> None:
        """Report a recoverable problem."""
        self.logger.warning(mask_sensitive_data(message))

    def fatal(self, error: BaseException) -> None:
        """Report the error that terminates the run."""
        self.logger.error(mask_sensitive_data(f"{type(error).__name__}: {error}"))


# Export public API
__all__ = [
    "Notifier",
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "truncate_content",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
]
