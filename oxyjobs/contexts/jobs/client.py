"""
Public entry point for scrape jobs.

ScraperClient.submit() validates and submits synchronously, then hands the job to
a background poller and returns a Future. ScraperClient.scrape() is the blocking
form. Submission-time failures (validation, transport, missing job id) are
raised directly and never start a poller.
"""

from concurrent.futures import Future
from typing import Optional

import requests
from loguru import logger

from oxyjobs.contexts.jobs.bridge import start_polling
from oxyjobs.contexts.jobs.config import ApiCredentials, ClientConfig, load_client_config
from oxyjobs.contexts.jobs.poller import JobPoller
from oxyjobs.contexts.jobs.requests import create_session
from oxyjobs.contexts.jobs.schema import ScrapeResponse
from oxyjobs.contexts.jobs.submitter import submit_job
from oxyjobs.contexts.payloads.builder import build_request
from oxyjobs.contexts.payloads.options import ScrapeOptions, ScrapeRequest


class ScraperClient:
    """
    Client for the push-pull job API.

    Holds only configuration (credentials, endpoints, timing), so one instance can
    run any number of jobs concurrently; each job owns its own poller thread.

    Example:
        >>> client = ScraperClient.from_env()
        >>> future = client.google_search("adidas", ScrapeOptions(parse=True))
        >>> response = future.result()
    """

    def __init__(
        self,
        credentials: ApiCredentials,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        poller: Optional[JobPoller] = None,
    ):
        self.credentials = credentials
        self.config = config or load_client_config()
        self.session = session or create_session(credentials)
        self.poller = poller or JobPoller(self.session, self.config)

    @classmethod
    def from_env(cls, config: Optional[ClientConfig] = None) -> "ScraperClient":
        """Create a client using OXYLABS_USERNAME / OXYLABS_PASSWORD."""
        return cls(ApiCredentials.from_env(), config=config)

    def submit(self, request: ScrapeRequest) -> "Future[ScrapeResponse]":
        """
        Submit a built request and poll it in the background.

        Raises:
            TransportError: If the submission POST fails
            DecodeError: If the submission response has no job id
        """
        job = submit_job(self.session, self.config, request)
        return start_polling(self.poller, job)

    def submit_source(
        self, source: str, target: str, options: Optional[ScrapeOptions] = None
    ) -> "Future[ScrapeResponse]":
        """
        Build, validate and submit a request for any supported source.

        Raises:
            ValidationError: Before any HTTP call, if target or options are invalid
            TransportError: If the submission POST fails
            DecodeError: If the submission response has no job id
        """
        request = build_request(source, target, options)
        return self.submit(request)

    def scrape(
        self, source: str, target: str, options: Optional[ScrapeOptions] = None
    ) -> ScrapeResponse:
        """Blocking form of submit_source: returns the response or raises its ScrapeError."""
        future = self.submit_source(source, target, options)
        logger.debug(f"[{source}] Waiting for job outcome")
        return future.result()

    def google_search(self, query: str, options: Optional[ScrapeOptions] = None):
        return self.submit_source("google_search", query, options)

    def google_url(self, url: str, options: Optional[ScrapeOptions] = None):
        return self.submit_source("google", url, options)

    def bing_search(self, query: str, options: Optional[ScrapeOptions] = None):
        return self.submit_source("bing_search", query, options)

    def bing_url(self, url: str, options: Optional[ScrapeOptions] = None):
        return self.submit_source("bing", url, options)

    def google_shopping_search(self, query: str, options: Optional[ScrapeOptions] = None):
        return self.submit_source("google_shopping_search", query, options)
