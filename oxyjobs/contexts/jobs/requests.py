"""HTTP helpers shared by the submit, poll and fetch stages."""

from typing import Optional

import requests
from loguru import logger

from oxyjobs.contexts.jobs.config import ApiCredentials
from oxyjobs.errors import TransportError

JSON_HEADERS = {"Content-Type": "application/json"}


def create_session(credentials: ApiCredentials) -> requests.Session:
    """
    Session carrying basic auth and JSON headers.

    Only configuration lives on the session, so one session can serve many
    concurrent jobs.
    """
    session = requests.Session()
    session.auth = (credentials.username, credentials.password)
    session.headers.update(JSON_HEADERS)
    return session


def status_line(response: requests.Response) -> str:
    """HTTP status line, e.g. '200 OK'."""
    reason = response.reason or ""
    return f"{response.status_code} {reason}".strip()


def send_request(
    session: requests.Session,
    method: str,
    url: str,
    timeout: float,
    json: Optional[dict] = None,
) -> requests.Response:
    """
    Make one HTTP request and read its body. No retries.

    Args:
        session: Session with auth and headers attached
        method: HTTP method - either 'GET' or 'POST'
        url: The URL to request
        timeout: Seconds to wait for connect/read
        json: JSON body for POST requests

    Returns:
        requests.Response with its body already read

    Raises:
        TransportError: On connection failure or body-read failure
    """
    logger.debug(f"{method} {url}")
    try:
        response = session.request(method, url, json=json, timeout=timeout)
        # Force the body read here so read errors surface as transport failures
        response.content
    except requests.RequestException as e:
        raise TransportError(f"{method} {url} failed: {e}") from e
    return response
