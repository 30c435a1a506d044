"""Exceptions raised while building, submitting, polling and fetching scrape jobs."""


class ScrapeError(Exception):
    """Base class for every failure a scrape call can produce."""


class ValidationError(ScrapeError, ValueError):
    """Bad target URL or conflicting/invalid parameters. Raised before any HTTP call."""


class TransportError(ScrapeError):
    """Connection or body-read failure on any HTTP call."""


class DecodeError(ScrapeError):
    """Response body could not be decoded into the expected shape."""


class RemoteFault(ScrapeError):
    """The service reported the job as faulted."""

    def __init__(self, job_id: str, message: str = "There was an error processing your query"):
        super().__init__(message)
        self.job_id = job_id


class RemoteHTTPError(ScrapeError):
    """The results endpoint answered with a non-200 status."""

    def __init__(self, status_code: int, status: str, body: str):
        super().__init__(f"error with status code {status}: {body}")
        self.status_code = status_code
        self.status = status
        self.body = body


class TimeoutExceeded(ScrapeError, TimeoutError):
    """The job did not reach a terminal state within the polling budget."""

    def __init__(self, job_id: str, timeout: float):
        super().__init__(f"timeout exceeded: {timeout}s")
        self.job_id = job_id
        self.timeout = timeout
