"""
Credentials and configuration loading for Jira Cloud.

Jira Cloud accepts HTTP Basic authentication with the account email as
user name and an API token as password.
"""
import os
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

import requests
from dotenv import load_dotenv
from msrest.authentication import BasicAuthentication

from .constants import EnvVars, FieldNames
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Immutable Jira credentials, passed explicitly to the transport."""
    email: str
    api_token: str = field(repr=False)
    base_url: str

    def session(self, session: Optional[requests.Session] = None) -> requests.Session:
        """
        Return a requests session signed with HTTP Basic auth.

        Args:
            session: Existing session to sign, or None for a new one

        Returns:
            Session whose requests carry base64("email:token")
        """
        return BasicAuthentication(self.email, self.api_token).signed_session(session)


@dataclass(frozen=True)
class FieldMapping:
    """Ids of the site-specific custom fields for points and sprints."""
    points: str = FieldNames.DEFAULT_POINTS
    sprints: str = FieldNames.DEFAULT_SPRINT


@dataclass(frozen=True)
class Config:
    """Everything a command needs to talk to Jira."""
    credentials: Credentials
    fields: FieldMapping = field(default_factory=FieldMapping)


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Load configuration from the environment.

    A .env file in the working directory is read first; values already
    present in the real environment take precedence.

    Args:
        environ: Mapping to read instead of os.environ (the .env file is
                 not consulted in that case)

    Returns:
        Config built from the environment

    Raises:
        ConfigError: If any required variable is missing or blank
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    values = {name: (environ.get(name) or "").strip() for name in EnvVars.REQUIRED}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigError(missing)

    credentials = Credentials(
        email=values[EnvVars.EMAIL],
        api_token=values[EnvVars.API_TOKEN],
        base_url=values[EnvVars.URL].rstrip("/"),
    )
    fields = FieldMapping(
        points=(environ.get(EnvVars.POINTS_FIELD) or "").strip() or FieldNames.DEFAULT_POINTS,
        sprints=(environ.get(EnvVars.SPRINT_FIELD) or "").strip() or FieldNames.DEFAULT_SPRINT,
    )

    logger.debug(f"Loaded config for {credentials.base_url} as {credentials.email}")
    return Config(credentials=credentials, fields=fields)
