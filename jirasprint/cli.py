"""
cli — Argparse entry point and the single top-level error handler.

    jira-sprint                 report of assigned issues by sprint
    jira-sprint -i              pick an issue and a new status
    jira-sprint -m [KEY]        add an issue to the active sprint
    jira-sprint KEY STATUS...   transition KEY to STATUS
"""

import argparse
import logging
import sys
import textwrap
from typing import List, Optional

from .auth import Config, load_config
from .errors import JiraSprintError, UsageError
from .interactive import interactive_flow, move_flow, transition_flow
from .log_sanitizer import safe_log_error, sanitize_log_message
from .report import format_issues_by_sprint
from .services.issue_service import IssueService
from .services.sprint_service import SprintService
from .transport import JiraTransport
from .validation import parse_target_status, validate_issue_key

logger = logging.getLogger(__name__)

MOVE_WITHOUT_KEY = ""


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad input as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="jira-sprint",
        description="List, transition and sprint-assign your Jira issues.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Environment: JIRA_EMAIL, JIRA_API_TOKEN, JIRA_URL (a .env file is read).
            Optional:    JIRA_POINTS_FIELD, JIRA_SPRINT_FIELD.

            Examples:
              jira-sprint
              jira-sprint ABC-123 in review
              jira-sprint -m abc-124
        """),
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-i", "--interactive", action="store_true",
                      help="pick an issue and a new status interactively")
    mode.add_argument("-m", "--move", nargs="?", const=MOVE_WITHOUT_KEY, metavar="KEY",
                      help="add KEY (or a picked backlog issue) to the active sprint")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log requests to stderr")
    parser.add_argument("args", nargs="*", metavar="KEY STATUS",
                        help="issue key followed by the target status name")
    return parser


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(args: argparse.Namespace, config: Config) -> None:
    """Dispatch one command against Jira."""
    transport = JiraTransport(config.credentials)
    try:
        issues = IssueService(transport, config.fields)
        sprints = SprintService(issues)

        if args.interactive:
            if args.args:
                raise UsageError("-i takes no arguments")
            interactive_flow(issues, sprints)
        elif args.move is not None:
            if args.args:
                raise UsageError("-m takes at most one issue key")
            key = validate_issue_key(args.move) if args.move else None
            move_flow(issues, sprints, key)
        elif args.args:
            key = validate_issue_key(args.args[0])
            status = parse_target_status(args.args[1:])
            transition_flow(issues, key, status)
        else:
            print(format_issues_by_sprint(issues.fetch_assigned_issues()))
    finally:
        transport.close()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, run the command and map the outcome to an exit code.

    Returns 0 on success or cancellation, 1 on any error, 130 on Ctrl-C.
    """
    parser = build_parser()
    secrets: List[str] = []
    try:
        args = parser.parse_args(argv)
        configure_logging(args.verbose)
        config = load_config()
        secrets.append(config.credentials.api_token)
        run(args, config)
    except JiraSprintError as e:
        logger.debug(safe_log_error(e, "Command failed", secrets))
        print(f"error: {sanitize_log_message(str(e), secrets)}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130
    return 0
