"""
Poll loop for submitted jobs.

A JobPoller drives one job from submission to its single terminal outcome:

    Submitted -> Polling -> Succeeded | Faulted | TimedOut | TransportError

Each iteration polls the status endpoint once and then checks, in order:
done (fetch results), faulted, elapsed time past the budget. Only if none of
those ends the loop does it sleep for the fixed wait time and poll again. A
"done" seen on the same iteration the budget runs out still wins.
"""

import time
from typing import Callable

import requests
from loguru import logger

from oxyjobs.contexts.jobs.config import ClientConfig
from oxyjobs.contexts.jobs.fetcher import fetch_results
from oxyjobs.contexts.jobs.requests import send_request
from oxyjobs.contexts.jobs.schema import Job, JobStatus, PollOutcome
from oxyjobs.errors import RemoteFault, ScrapeError, TimeoutExceeded


class JobPoller:
    def __init__(
        self,
        session: requests.Session,
        config: ClientConfig,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session
        self.config = config
        self.clock = clock
        self.sleep = sleep

    def poll_status(self, job: Job) -> Job:
        """Issue one status request and return the re-decoded job."""
        response = send_request(
            self.session, "GET", self.config.status_url(job.id), self.config.request_timeout
        )
        return Job.from_body(response.content, previous=job)

    def run(self, job: Job) -> PollOutcome:
        """
        Poll `job` until it reaches a terminal state.

        Never raises for job failures; every failure comes back as
        PollOutcome.failure so the caller sees exactly one outcome.
        """
        started = self.clock()
        polls = 0

        try:
            while True:
                job = self.poll_status(job)
                polls += 1

                if job.status == JobStatus.DONE:
                    response = fetch_results(self.session, self.config, job.id)
                    logger.info(
                        f"Job {job.id} done after {polls} poll(s), "
                        f"{len(response.results)} result(s) ({response.status})"
                    )
                    return PollOutcome.success(response)

                if job.status == JobStatus.FAULTED:
                    raise RemoteFault(job.id)

                elapsed = self.clock() - started
                if elapsed > self.config.timeout:
                    raise TimeoutExceeded(job.id, self.config.timeout)

                logger.debug(f"Job {job.id} is {job.status.value} ({elapsed:.1f}s elapsed)")
                self.sleep(self.config.wait_time)

        except ScrapeError as e:
            logger.error(f"Job {job.id} failed after {polls} poll(s): {e}")
            return PollOutcome.failure(e)
