"""
Delivery of a poll loop's outcome to the caller.

Each submitted job gets one daemon thread running its JobPoller and one Future.
The thread resolves the Future exactly once: with the ScrapeResponse on success,
or with the failure as its exception.
"""

import threading
from concurrent.futures import Future

from loguru import logger

from oxyjobs.contexts.jobs.poller import JobPoller
from oxyjobs.contexts.jobs.schema import Job


def _resolve(future: Future, poller: JobPoller, job: Job) -> None:
    try:
        outcome = poller.run(job)
    except Exception as e:
        # Anything that escapes the poller is a bug, but the caller still gets an outcome
        logger.exception(f"Job {job.id} poll loop crashed")
        future.set_exception(e)
        return

    if outcome.ok:
        future.set_result(outcome.response)
    else:
        future.set_exception(outcome.error)


def start_polling(poller: JobPoller, job: Job) -> "Future":
    """
    Start polling `job` in the background.

    Returns:
        Future resolving to a ScrapeResponse, or raising the job's ScrapeError
        from result()
    """
    future: Future = Future()
    future.set_running_or_notify_cancel()
    thread = threading.Thread(
        target=_resolve,
        args=(future, poller, job),
        name=f"poll-{job.id}",
        daemon=True,
    )
    thread.start()
    return future
