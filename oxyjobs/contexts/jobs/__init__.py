"""
Scrape job domain.

Submits jobs to the push-pull API, polls them to a terminal state and delivers
the decoded results.
"""

from oxyjobs.contexts.jobs.client import ScraperClient
from oxyjobs.contexts.jobs.config import (
    ApiCredentials,
    ClientConfig,
    load_client_config,
)
from oxyjobs.contexts.jobs.poller import JobPoller
from oxyjobs.contexts.jobs.schema import (
    Job,
    JobStatus,
    PollOutcome,
    ResultEntry,
    ScrapeResponse,
    decode_scrape_response,
)
from oxyjobs.contexts.jobs.orchestration import run_scrape, run_scrapes

__all__ = [
    "ScraperClient",
    "ApiCredentials",
    "ClientConfig",
    "load_client_config",
    "JobPoller",
    "Job",
    "JobStatus",
    "PollOutcome",
    "ResultEntry",
    "ScrapeResponse",
    "decode_scrape_response",
    "run_scrape",
    "run_scrapes",
]
