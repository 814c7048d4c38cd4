"""
interactive — Numbered single-choice prompts and the flows built on them.

Prompts block on standard input. A blank answer cancels the flow
silently; any other invalid answer is a UsageError, with no retry.
"""

import logging
import sys
from typing import Callable, Optional, Sequence, TextIO, Union

from .constants import STATUS_CHOICES
from .errors import InputReadError
from .models import Issue
from .report import format_issues_by_sprint, issue_label
from .services.issue_service import IssueService
from .services.sprint_service import SprintService
from .validation import parse_selection

logger = logging.getLogger(__name__)

CANCELLED = "__CANCELLED__"

IssueFilter = Callable[[Issue], bool]


# ── Input primitives ─────────────────────────────────────────────────────

def pick_one(prompt: str, options: Sequence[str],
             stdin: Optional[TextIO] = None,
             stdout: Optional[TextIO] = None) -> Union[int, str]:
    """
    Display numbered options and read one answer.

    Returns the 0-based index of the chosen option, or CANCELLED when the
    answer is blank.

    Raises:
        InputReadError: stdin is closed or unreadable
        UsageError: the answer is not a number in range
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    for i, option in enumerate(options, 1):
        print(f"{i}) {option}", file=stdout)
    print(f"{prompt} (1-{len(options)}, empty to cancel): ", end="", file=stdout)
    stdout.flush()

    try:
        line = stdin.readline()
    except OSError as e:
        raise InputReadError(e)
    if line == "":
        raise InputReadError()

    answer = line.strip()
    if not answer:
        logger.debug(f"Selection cancelled at '{prompt}'")
        return CANCELLED
    return parse_selection(answer, len(options))


def select_issue(service: IssueService,
                 predicate: Optional[IssueFilter] = None,
                 prompt: str = "Select issue",
                 stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None) -> Union[Issue, str, None]:
    """
    Show the sprint report and let the user pick one of their issues.

    Returns the chosen Issue, CANCELLED, or None when no issue passes the
    predicate (in which case nothing is asked).
    """
    stdout = stdout or sys.stdout

    issues = service.fetch_assigned_issues()
    print(format_issues_by_sprint(issues), file=stdout)

    candidates = [i for i in issues if predicate is None or predicate(i)]
    if not candidates:
        return None

    choice = pick_one(prompt, [issue_label(i) for i in candidates], stdin, stdout)
    if choice == CANCELLED:
        return CANCELLED
    return candidates[choice]


def has_no_sprint(issue: Issue) -> bool:
    return not issue.fields.sprints


# ── Flows ────────────────────────────────────────────────────────────────

def interactive_flow(service: IssueService, sprints: SprintService,
                     stdin: Optional[TextIO] = None,
                     stdout: Optional[TextIO] = None) -> None:
    """
    Pick an issue and a new status, then transition it.

    An issue that had no sprint when the list was fetched is also added to
    the active sprint.
    """
    stdout = stdout or sys.stdout

    issue = select_issue(service, None, "Select issue", stdin, stdout)
    if issue is None or issue == CANCELLED:
        return

    choice = pick_one("Select new status", STATUS_CHOICES, stdin, stdout)
    if choice == CANCELLED:
        return
    status = STATUS_CHOICES[choice]

    service.apply_transition(issue.key, status)
    print(f'Transitioned {issue.key} to "{status}"', file=stdout)

    if has_no_sprint(issue):
        sprints.move_issue_to_current_sprint(issue.key)
        print(f"Added {issue.key} to active sprint", file=stdout)


def move_flow(service: IssueService, sprints: SprintService,
              issue_key: Optional[str] = None,
              stdin: Optional[TextIO] = None,
              stdout: Optional[TextIO] = None) -> None:
    """Add an issue to the active sprint, asking for a backlog issue when no key is given."""
    stdout = stdout or sys.stdout

    if not issue_key:
        issue = select_issue(service, has_no_sprint, "Select issue to move", stdin, stdout)
        if issue is None or issue == CANCELLED:
            return
        issue_key = issue.key

    sprints.move_issue_to_current_sprint(issue_key)
    print(f"Added {issue_key.upper()} to active sprint", file=stdout)


def transition_flow(service: IssueService, issue_key: str, status: str,
                    stdout: Optional[TextIO] = None) -> None:
    stdout = stdout or sys.stdout
    service.apply_transition(issue_key, status)
    print(f'Transitioned {issue_key} to "{status}"', file=stdout)
