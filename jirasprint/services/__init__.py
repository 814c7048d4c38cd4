"""Jira issue and sprint services."""
