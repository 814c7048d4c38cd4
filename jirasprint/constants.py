"""
Constants for Jira REST operations.

Defines the assigned-issues query, endpoint paths, default custom field
ids and the fixed status menu offered by the interactive flow.
"""

from typing import List


# ============================================================================
# Environment
# ============================================================================

class EnvVars:
    """Environment variable names read at startup."""

    EMAIL = "JIRA_EMAIL"
    API_TOKEN = "JIRA_API_TOKEN"
    URL = "JIRA_URL"
    POINTS_FIELD = "JIRA_POINTS_FIELD"
    SPRINT_FIELD = "JIRA_SPRINT_FIELD"

    REQUIRED = [EMAIL, API_TOKEN, URL]


# ============================================================================
# Field ids
# ============================================================================

class FieldNames:
    """Jira field ids requested by the assigned-issues search."""

    SUMMARY = "summary"
    ISSUE_TYPE = "issuetype"
    STATUS = "status"

    # Site-specific custom fields; overridable through EnvVars
    DEFAULT_POINTS = "customfield_10004"
    DEFAULT_SPRINT = "customfield_10007"


# ============================================================================
# Queries and endpoints
# ============================================================================

ASSIGNED_ISSUES_JQL = (
    "assignee = currentUser() AND statusCategory != Done AND issuetype != Epic"
)


class Endpoints:
    """REST paths relative to the site base URL."""

    SEARCH = "/rest/api/3/search/jql"
    TRANSITIONS = "/rest/api/3/issue/{issue_key}/transitions"
    SPRINT_ISSUES = "/rest/agile/1.0/sprint/{sprint_id}/issue"


# ============================================================================
# Sprints and statuses
# ============================================================================

class SprintStates:
    """Sprint states reported by Jira Software."""

    ACTIVE = "active"


BACKLOG_LABEL = "Backlog"

# Statuses offered by the interactive flow, in menu order
STATUS_CHOICES: List[str] = [
    "Open",
    "In Progress",
    "In Review",
    "In Testing",
    "Resolved",
]


def search_fields(points_field: str, sprint_field: str) -> List[str]:
    """
    Build the field list for the assigned-issues search.

    Args:
        points_field: Custom field id holding story points
        sprint_field: Custom field id holding sprints

    Returns:
        Field ids in request order
    """
    return [
        FieldNames.SUMMARY,
        points_field,
        FieldNames.ISSUE_TYPE,
        FieldNames.STATUS,
        sprint_field,
    ]
