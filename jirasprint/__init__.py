"""
jirasprint — List, transition and sprint-assign the Jira issues assigned to you.

Usage:
    jira-sprint                 # assigned issues grouped by sprint
    jira-sprint -i              # pick an issue and a new status
    jira-sprint -m [KEY]        # add an issue to the active sprint
    jira-sprint KEY STATUS...   # transition an issue

Requires JIRA_EMAIL, JIRA_API_TOKEN and JIRA_URL (environment or .env).
"""

__version__ = "0.1.0"
