"""
Sprint service for Jira operations
Infers the active sprint from the user's own issues, without a board id
"""
import logging
from typing import Iterable

from ..constants import SprintStates
from ..decorators import log_execution
from ..errors import NoActiveSprintError
from ..models import Issue, Sprint
from .issue_service import IssueService

logger = logging.getLogger(__name__)


def find_active_sprint(issues: Iterable[Issue]) -> Sprint:
    """
    Return the first active sprint carried by any of the issues

    Issues are scanned in order, and each issue's sprints in order.
    Only sprints visible through these issues are considered, so this
    fails when an active sprint exists but none of the issues is in it.

    Raises:
        NoActiveSprintError: If no issue belongs to an active sprint
    """
    for issue in issues:
        for sprint in issue.fields.sprints:
            if sprint.state.casefold() == SprintStates.ACTIVE:
                return sprint
    raise NoActiveSprintError()


class SprintService:
    """Service for sprint membership operations"""

    def __init__(self, issues: IssueService):
        """
        Initialize sprint service

        Args:
            issues: IssueService used for fetching and sprint membership
        """
        self.issues = issues

    @log_execution(log_args=True)
    def move_issue_to_current_sprint(self, issue_key: str) -> Sprint:
        """
        Add an issue to the sprint that is active right now

        The issue itself does not need to be among the assigned issues
        used to find the sprint.

        Args:
            issue_key: Issue key, sent exactly as given

        Returns:
            The sprint the issue was added to
        """
        sprint = find_active_sprint(self.issues.fetch_assigned_issues())
        logger.debug(f"Active sprint is {sprint.name} ({sprint.id})")

        self.issues.add_issue_to_sprint(sprint.id, issue_key)
        return sprint
