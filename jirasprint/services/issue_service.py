"""
Issue service for Jira operations
Fetches assigned issues and their transitions, applies transitions and
adds issues to sprints
"""
import logging
from functools import partial
from typing import List

from ..auth import FieldMapping
from ..constants import ASSIGNED_ISSUES_JQL, Endpoints, search_fields
from ..decorators import log_execution
from ..errors import NoSuchTransitionError
from ..models import (
    Issue,
    Transition,
    SearchRequest,
    SearchResponse,
    TransitionRequest,
    TransitionsResponse,
    SprintIssuesRequest,
)
from ..transport import JiraTransport
from ..validation import validate_issue_key

logger = logging.getLogger(__name__)


class IssueService:
    """Service for issue operations. Every call is a fresh read; nothing is cached."""

    def __init__(self, transport: JiraTransport, fields: FieldMapping = FieldMapping()):
        """
        Initialize issue service

        Args:
            transport: JiraTransport bound to the user's credentials
            fields: Custom field ids for story points and sprints
        """
        self.transport = transport
        self.fields = fields

    @log_execution()
    def fetch_assigned_issues(self) -> List[Issue]:
        """
        Get open, non-epic issues assigned to the current user

        Returns:
            Issues in the order the server returned them
        """
        request = SearchRequest(
            jql=ASSIGNED_ISSUES_JQL,
            fields=search_fields(self.fields.points, self.fields.sprints)
        )
        response = self.transport.execute_json(
            'POST',
            Endpoints.SEARCH,
            body=request,
            decoder=partial(SearchResponse.model_validate, context={'fields': self.fields})
        )
        logger.debug(f"Fetched {len(response.issues)} assigned issues")
        return response.issues

    @log_execution(log_args=True)
    def fetch_transitions(self, issue_key: str) -> List[Transition]:
        """
        Get the transitions currently available for an issue

        Args:
            issue_key: Issue key, e.g. "ABC-123"
        """
        issue_key = validate_issue_key(issue_key)
        response = self.transport.execute_json(
            'GET',
            Endpoints.TRANSITIONS.format(issue_key=issue_key),
            decoder=TransitionsResponse.model_validate
        )
        return response.transitions

    @log_execution(log_args=True)
    def apply_transition(self, issue_key: str, target_status: str) -> Transition:
        """
        Move an issue to the status with the given name

        The first available transition whose target status matches
        case-insensitively is applied. When several transitions lead to
        the same status name, the first one returned by Jira wins.

        Args:
            issue_key: Issue key
            target_status: Human-readable status name, e.g. "in review"

        Returns:
            The transition that was applied

        Raises:
            NoSuchTransitionError: If no available transition matches
        """
        transitions = self.fetch_transitions(issue_key)

        wanted = target_status.casefold()
        match = next((t for t in transitions if t.to_status.casefold() == wanted), None)
        if match is None:
            raise NoSuchTransitionError(
                issue_key=issue_key,
                target_status=target_status,
                available=[t.to_status for t in transitions]
            )

        self.transport.execute_json(
            'POST',
            Endpoints.TRANSITIONS.format(issue_key=issue_key),
            body=TransitionRequest(transition_id=match.id)
        )
        logger.info(f"Applied transition {match.id} ({match.to_status}) to {issue_key}")
        return match

    @log_execution(log_args=True)
    def add_issue_to_sprint(self, sprint_id: int, issue_key: str) -> None:
        """
        Add an issue to a sprint

        Args:
            sprint_id: Sprint id assigned by Jira
            issue_key: Issue key, sent exactly as given
        """
        issue_key = validate_issue_key(issue_key)
        self.transport.execute_json(
            'POST',
            Endpoints.SPRINT_ISSUES.format(sprint_id=sprint_id),
            body=SprintIssuesRequest(issues=[issue_key])
        )
