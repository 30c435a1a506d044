"""
Job and response values exchanged with the job API.

Job decoding is permissive: the submission and poll stages only need an id and a
status, and anything unexpected degrades to JobStatus.UNKNOWN. Result decoding is
strict: a terminal body that is not the expected shape raises DecodeError.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from oxyjobs.errors import DecodeError, ScrapeError


class JobStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"
    FAULTED = "faulted"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "JobStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.DONE, JobStatus.FAULTED)


@dataclass(frozen=True)
class Job:
    id: str
    status: JobStatus = JobStatus.UNKNOWN

    @classmethod
    def from_body(cls, body: Union[str, bytes], previous: Optional["Job"] = None) -> "Job":
        """
        Decode a submission or status body.

        Malformed JSON or a missing status yields UNKNOWN. A missing id keeps the
        previous job's id, so a garbled poll response never loses track of the job.
        """
        try:
            data = json.loads(body)
        except (TypeError, ValueError):
            data = None
        if not isinstance(data, dict):
            data = {}

        job_id = data.get("id") or (previous.id if previous else "")
        return cls(id=str(job_id), status=JobStatus.parse(data.get("status")))


@dataclass(frozen=True)
class ResultEntry:
    """One page of a job's results. `content` is raw HTML or parsed JSON."""

    content: Any = None
    url: Optional[str] = None
    page: Optional[int] = None
    job_id: Optional[str] = None
    status_code: Optional[int] = None
    parser_type: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_parsed(self) -> bool:
        return isinstance(self.content, (dict, list))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResultEntry":
        return cls(
            content=data.get("content"),
            url=data.get("url"),
            page=data.get("page"),
            job_id=data.get("job_id"),
            status_code=data.get("status_code"),
            parser_type=data.get("parser_type"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class ScrapeResponse:
    """Decoded terminal result, with the HTTP status of the fetch that returned it."""

    status_code: int
    status: str
    results: Tuple[ResultEntry, ...] = ()
    job: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status_code": self.status_code,
            "status": self.status,
            "job": self.job,
            "results": [entry.__dict__ for entry in self.results],
        }


def decode_scrape_response(body: Union[str, bytes], status_code: int, status: str) -> ScrapeResponse:
    """
    Decode a results body into a ScrapeResponse.

    Args:
        body: Raw response body
        status_code: HTTP status code of the results fetch
        status: HTTP status line of the results fetch (e.g. "200 OK")

    Raises:
        DecodeError: If the body is not JSON or has no list of results
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"failed to parse JSON object: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise DecodeError("failed to parse JSON object: missing 'results' list")

    entries = []
    for item in data["results"]:
        if not isinstance(item, dict):
            raise DecodeError(f"failed to parse JSON object: unexpected result entry {item!r}")
        entries.append(ResultEntry.from_dict(item))

    job = data.get("job")
    return ScrapeResponse(
        status_code=status_code,
        status=status,
        results=tuple(entries),
        job=job if isinstance(job, dict) else {},
    )


@dataclass(frozen=True)
class PollOutcome:
    """Terminal value of a poll loop: exactly one of `response` or `error` is set."""

    response: Optional[ScrapeResponse] = None
    error: Optional[ScrapeError] = None

    def __post_init__(self):
        if (self.response is None) == (self.error is None):
            raise ValueError("PollOutcome needs exactly one of response or error")

    @classmethod
    def success(cls, response: ScrapeResponse) -> "PollOutcome":
        return cls(response=response)

    @classmethod
    def failure(cls, error: ScrapeError) -> "PollOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ScrapeResponse:
        if self.error is not None:
            raise self.error
        return self.response
