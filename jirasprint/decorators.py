"""
Decorators for error handling and execution logging.

Jira requests are single-shot: there is no retry and no timeout
wrapper. The decorators here only translate library exceptions into the
helper's error taxonomy and log what ran.
"""

import logging
from functools import wraps
from typing import Callable, TypeVar

import requests

from .errors import JiraSprintError, TransportError
from .log_sanitizer import sanitize_log_message

# Type variable for generic function signatures
T = TypeVar('T')

logger = logging.getLogger(__name__)


def handle_transport_error(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator to map requests exceptions to TransportError.

    Errors that are already part of the taxonomy pass through untouched.

    Example:
        @handle_transport_error
        def execute_json(self, method, path, body=None, decoder=None):
            return self.session.request(method, url)
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except JiraSprintError:
            raise
        except requests.RequestException as e:
            message = sanitize_log_message(str(e))
            logger.error(f"Transport failure in {func.__name__}: {message}")
            raise TransportError(message=f"request failed: {message}", original_error=e)

    return wrapper


def log_execution(
    level: int = logging.DEBUG,
    log_args: bool = False
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to log function execution.

    Args:
        level: Logging level (default: DEBUG)
        log_args: Whether to log positional arguments after self

    Example:
        @log_execution(log_args=True)
        def fetch_transitions(self, issue_key: str):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs):
            func_name = func.__name__

            if log_args:
                logger.log(level, f"Calling {func_name} with args={args[1:]}, kwargs={kwargs}")
            else:
                logger.log(level, f"Calling {func_name}")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.log(level, f"{func_name} failed with error: {sanitize_log_message(str(e))}")
                raise

            logger.log(level, f"{func_name} completed successfully")
            return result

        return wrapper
    return decorator
