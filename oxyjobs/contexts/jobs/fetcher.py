"""Retrieval of a finished job's results."""

import requests

from oxyjobs.contexts.jobs.config import ClientConfig
from oxyjobs.contexts.jobs.requests import send_request, status_line
from oxyjobs.contexts.jobs.schema import ScrapeResponse, decode_scrape_response
from oxyjobs.errors import RemoteHTTPError


def fetch_results(session: requests.Session, config: ClientConfig, job_id: str) -> ScrapeResponse:
    """
    GET the results of a done job.

    Raises:
        TransportError: If the GET fails at the transport layer
        RemoteHTTPError: If the status is anything but 200
        DecodeError: If the 200 body is not a valid results document
    """
    response = send_request(session, "GET", config.results_url(job_id), config.request_timeout)
    status = status_line(response)

    if response.status_code != 200:
        raise RemoteHTTPError(response.status_code, status, response.text)

    return decode_scrape_response(response.content, response.status_code, status)
