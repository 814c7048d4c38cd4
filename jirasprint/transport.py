"""
Authenticated JSON request/response exchange with a Jira site.
"""
import json
import logging
from typing import Any, Callable, Optional, TypeVar

import requests
from pydantic import ValidationError

from .auth import Credentials
from .decorators import handle_transport_error
from .errors import DecodeError, map_status_code_to_error
from .log_sanitizer import sanitize_log_message

logger = logging.getLogger(__name__)

T = TypeVar('T')


class JiraTransport:
    """
    Executes one JSON exchange per call against the Jira REST API.

    Every request carries HTTP Basic auth built from the credentials.
    There are no retries and no timeout: a command is a short sequence of
    blocking round trips.
    """

    def __init__(self, credentials: Credentials, session: Optional[requests.Session] = None):
        """
        Initialize the transport

        Args:
            credentials: Jira credentials and site URL
            session: Session to sign and reuse; a new one is created if None
        """
        self.credentials = credentials
        self.session = credentials.session(session)

    def url(self, path: str) -> str:
        return f"{self.credentials.base_url}{path}"

    @handle_transport_error
    def execute_json(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        decoder: Optional[Callable[[Any], T]] = None
    ) -> Optional[T]:
        """
        Send one request and decode its JSON response.

        Args:
            method: HTTP method
            path: Path relative to the site base URL
            body: Request model with to_dict(), or None for no body
            decoder: Callable turning the parsed JSON into a response model,
                     usually a pydantic model_validate; None to ignore the
                     response body

        Returns:
            The decoded response, or None when no decoder is given

        Raises:
            RemoteError: Status outside [200, 300)
            DecodeError: Body is not JSON or does not match the decoder
            TransportError: Connection-level failure
        """
        headers = {'Accept': 'application/json'}
        payload = None
        if body is not None:
            headers['Content-Type'] = 'application/json'
            payload = json.dumps(body.to_dict())

        response = self.session.request(
            method,
            self.url(path),
            data=payload,
            headers=headers,
            timeout=None
        )
        logger.debug(f"{method} {path} -> {response.status_code}")

        if not 200 <= response.status_code < 300:
            excerpt = sanitize_log_message((response.text or "")[:500], [self.credentials.api_token])
            raise map_status_code_to_error(
                response.status_code,
                status_text=response.reason or "",
                details=excerpt or None
            )

        if decoder is None:
            return None

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"{method} {path}: body is not valid JSON", original_error=e)

        try:
            return decoder(data)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "body"
            raise DecodeError(
                f"{method} {path}: {location}: {first['msg']}",
                original_error=e
            )

    def close(self):
        """Release pooled connections"""
        self.session.close()
