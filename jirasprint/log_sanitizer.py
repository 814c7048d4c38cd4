"""
Log sanitization utilities to prevent credential leakage.

Diagnostics printed on failure may echo request details or exception
text from requests. These helpers redact API tokens and authorization
headers before anything reaches stderr or the log.
"""

import re
from typing import Iterable


# Patterns that might indicate sensitive data
SENSITIVE_PATTERNS = [
    (re.compile(r'(api_token["\']?\s*[:=]\s*["\']?)([^"\'\s,}]+)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([^"\'\s,}]+)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^"\'\s,}]+)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(basic\s+)([a-zA-Z0-9+/]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(bearer\s+)([a-zA-Z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(authorization["\']?\s*[:=]\s*["\']?)(?!basic\s|bearer\s)([^"\'\s,}]+)', re.IGNORECASE), r'\1***REDACTED***'),
]


def sanitize_log_message(message: str, secrets: Iterable[str] = ()) -> str:
    """
    Sanitize a log message by redacting sensitive information.

    Args:
        message: The log message to sanitize
        secrets: Literal values (such as the configured API token) that
                 must never appear, whatever their context

    Returns:
        Sanitized log message with sensitive data redacted
    """
    if not message:
        return message

    sanitized = message
    for secret in secrets:
        if secret:
            sanitized = sanitized.replace(secret, '***REDACTED***')
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    return sanitized


def safe_log_error(error: Exception, context: str = "", secrets: Iterable[str] = ()) -> str:
    """
    Create a safe error message for logging.

    Args:
        error: The exception
        context: Additional context (e.g., "search failed")
        secrets: Literal values to redact

    Returns:
        Safe error message for logging
    """
    sanitized_error = sanitize_log_message(str(error), secrets)
    error_type = type(error).__name__

    if context:
        return f"{context}: {error_type}: {sanitized_error}"
    return f"{error_type}: {sanitized_error}"
