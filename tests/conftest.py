"""Shared fixtures: fake HTTP sessions, canned API bodies and a manual clock."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock

import pytest
from loguru import logger

from oxyjobs.contexts.jobs.config import ApiCredentials, ClientConfig
from oxyjobs.contexts.jobs.poller import JobPoller

RESULTS_BODY = {
    "results": [
        {
            "content": {"results": {"organic": [{"pos": 1, "url": "https://adidas.com", "title": "adidas"}]}},
            "created_at": "2024-01-01 10:00:00",
            "updated_at": "2024-01-01 10:00:05",
            "page": 1,
            "url": "https://www.google.com/search?q=adidas",
            "job_id": "job-1",
            "status_code": 200,
            "parser_type": "",
        }
    ],
    "job": {"id": "job-1", "status": "done", "source": "google_search"},
}


def make_response(body=None, status_code: int = 200, reason: str = "OK") -> MagicMock:
    """Build a requests.Response-like mock with its body already read."""
    if isinstance(body, (dict, list)):
        text = json.dumps(body)
    else:
        text = body or ""
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason = reason
    resp.text = text
    resp.content = text.encode()
    return resp


def job_body(status: str, job_id: str = "job-1") -> MagicMock:
    return make_response({"id": job_id, "status": status})


class ManualClock:
    """Clock that only moves when the poller sleeps (or a test advances it)."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        submit_url="https://data.example.test/v1/queries",
        results_host="https://data.example.test",
        timeout=5.0,
        wait_time=2.0,
        request_timeout=10.0,
    )


@pytest.fixture
def credentials() -> ApiCredentials:
    return ApiCredentials(username="user", password="pass")


@pytest.fixture
def session() -> MagicMock:
    return MagicMock()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def poller(session, config, clock) -> JobPoller:
    return JobPoller(session, config, clock=clock, sleep=clock.sleep)


def requested_urls(session: MagicMock) -> list[tuple[str, str]]:
    """(method, url) for every request made through a fake session."""
    return [(c.args[0], c.args[1]) for c in session.request.call_args_list]
