"""
Input validation for command-line arguments and interactive answers.
"""

import re
from typing import Sequence

from .errors import UsageError


# Characters that would change the meaning of the REST path
_UNSAFE_KEY_CHARS = re.compile(r'[\s/?#%\\]')


def validate_issue_key(issue_key: str) -> str:
    """
    Validate an issue key supplied by the user.

    The key is returned exactly as given (case preserved); Jira matches
    keys case-insensitively itself.

    Raises:
        UsageError: If the key is empty or contains path-breaking characters
    """
    if issue_key is None or not issue_key.strip():
        raise UsageError("missing issue key")
    if _UNSAFE_KEY_CHARS.search(issue_key):
        raise UsageError(f"invalid issue key: {issue_key!r}")
    return issue_key


def parse_target_status(words: Sequence[str]) -> str:
    """
    Join the remaining arguments into a target status name.

    Raises:
        UsageError: If nothing but whitespace is left
    """
    status = " ".join(words).strip()
    if not status:
        raise UsageError("missing target status")
    return status


def parse_selection(raw: str, count: int) -> int:
    """
    Parse a 1-based menu answer into a 0-based index.

    Raises:
        UsageError: If the answer is not a number in 1..count
    """
    try:
        number = int(raw)
    except ValueError:
        raise UsageError("invalid selection")
    if number < 1 or number > count:
        raise UsageError("invalid selection")
    return number - 1
