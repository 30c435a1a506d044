"""Creation of scrape jobs on the job API."""

import requests
from loguru import logger

from oxyjobs.contexts.jobs.config import ClientConfig
from oxyjobs.contexts.jobs.requests import send_request
from oxyjobs.contexts.jobs.schema import Job, JobStatus
from oxyjobs.contexts.payloads.options import ScrapeRequest
from oxyjobs.errors import DecodeError


def submit_job(session: requests.Session, config: ClientConfig, request: ScrapeRequest) -> Job:
    """
    POST a scrape request and return the created job.

    The body is decoded permissively: an unknown or missing status is fine since
    the first poll re-reads it. A body with no job id cannot be polled at all, so
    that fails here instead of in the poll loop.

    Raises:
        TransportError: If the POST fails at the transport layer
        DecodeError: If the response carries no job id
    """
    response = send_request(
        session, "POST", config.submit_url, config.request_timeout, json=request.to_payload()
    )

    job = Job.from_body(response.content)
    if not job.id:
        raise DecodeError(
            f"job submission returned no job id (HTTP {response.status_code}): "
            f"{response.text[:200]}"
        )

    if job.status == JobStatus.UNKNOWN:
        logger.warning(f"[{request.source}] Job {job.id} submitted with unrecognised status")
    logger.info(f"[{request.source}] Submitted job {job.id} ({job.status.value})")
    return job
