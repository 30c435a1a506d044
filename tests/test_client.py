"""Tests for submission, the future-based delivery and the public client."""

from __future__ import annotations

from concurrent.futures import Future

import pytest
import requests

from conftest import RESULTS_BODY, job_body, make_response, requested_urls
from oxyjobs.contexts.jobs.bridge import start_polling
from oxyjobs.contexts.jobs.client import ScraperClient
from oxyjobs.contexts.jobs.schema import Job, JobStatus, PollOutcome, ScrapeResponse
from oxyjobs.contexts.jobs.submitter import submit_job
from oxyjobs.contexts.payloads import ScrapeOptions, google_search
from oxyjobs.errors import (
    DecodeError,
    RemoteFault,
    RemoteHTTPError,
    TransportError,
    ValidationError,
)

SUBMIT_URL = "https://data.example.test/v1/queries"


@pytest.fixture
def client(credentials, config, session, poller) -> ScraperClient:
    return ScraperClient(credentials, config=config, session=session, poller=poller)


# ---------------------------------------------------------------------------
# Job submission
# ---------------------------------------------------------------------------

class TestSubmitJob:
    def test_posts_payload(self, session, config) -> None:
        session.request.return_value = job_body("pending")
        request = google_search("adidas")

        job = submit_job(session, config, request)

        assert job == Job(id="job-1", status=JobStatus.PENDING)
        session.request.assert_called_once_with(
            "POST", SUBMIT_URL, json=request.to_payload(), timeout=10.0
        )

    def test_unknown_status_is_tolerated(self, session, config) -> None:
        session.request.return_value = make_response({"id": "job-9"})

        job = submit_job(session, config, google_search("adidas"))

        assert job.id == "job-9"
        assert job.status == JobStatus.UNKNOWN

    def test_missing_job_id_fails_fast(self, session, config) -> None:
        session.request.return_value = make_response(
            {"message": "Unauthorized"}, status_code=401, reason="Unauthorized"
        )

        with pytest.raises(DecodeError, match="no job id"):
            submit_job(session, config, google_search("adidas"))

    def test_transport_failure(self, session, config) -> None:
        session.request.side_effect = requests.ConnectTimeout("timed out")

        with pytest.raises(TransportError):
            submit_job(session, config, google_search("adidas"))


# ---------------------------------------------------------------------------
# Future delivery
# ---------------------------------------------------------------------------

class _StubPoller:
    def __init__(self, outcome=None, crash=None):
        self.outcome = outcome
        self.crash = crash

    def run(self, job):
        if self.crash:
            raise self.crash
        return self.outcome


class TestStartPolling:
    def test_success_sets_result(self) -> None:
        response = ScrapeResponse(status_code=200, status="200 OK")
        future = start_polling(_StubPoller(PollOutcome.success(response)), Job(id="j"))

        assert future.result(timeout=5) is response

    def test_failure_sets_exception(self) -> None:
        error = RemoteFault("j")
        future = start_polling(_StubPoller(PollOutcome.failure(error)), Job(id="j"))

        assert future.exception(timeout=5) is error

    def test_unexpected_crash_still_resolves(self) -> None:
        future = start_polling(_StubPoller(crash=RuntimeError("boom")), Job(id="j"))

        with pytest.raises(RuntimeError, match="boom"):
            future.result(timeout=5)


class TestPollOutcome:
    def test_needs_exactly_one_side(self) -> None:
        with pytest.raises(ValueError):
            PollOutcome()
        with pytest.raises(ValueError):
            PollOutcome(response=ScrapeResponse(200, "200 OK"), error=RemoteFault("j"))

    def test_unwrap_raises_failure(self) -> None:
        with pytest.raises(RemoteFault):
            PollOutcome.failure(RemoteFault("j")).unwrap()


# ---------------------------------------------------------------------------
# ScraperClient
# ---------------------------------------------------------------------------

class TestScraperClient:
    def test_full_lifecycle(self, client, session) -> None:
        session.request.side_effect = [
            job_body("pending"),
            job_body("pending"),
            job_body("done"),
            make_response(RESULTS_BODY),
        ]

        future = client.google_search("adidas", ScrapeOptions(parse=True))
        response = future.result(timeout=5)

        assert isinstance(future, Future)
        assert response.status_code == 200
        methods = [method for method, _ in requested_urls(session)]
        assert methods == ["POST", "GET", "GET", "GET"]
        assert requested_urls(session)[-1][1].endswith("/v1/queries/job-1/results")

    def test_validation_error_makes_no_calls(self, client, session) -> None:
        options = ScrapeOptions(pages=2, context={"limit_per_page": [{"page": 1, "limit": 10}]})

        with pytest.raises(ValidationError):
            client.google_search("adidas", options)

        session.request.assert_not_called()

    def test_bad_url_makes_no_calls(self, client, session) -> None:
        with pytest.raises(ValidationError):
            client.google_url("https://evil.com")

        session.request.assert_not_called()

    def test_submission_transport_error_is_synchronous(self, client, session) -> None:
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError):
            client.bing_search("nike")

    def test_fault_delivered_through_future(self, client, session) -> None:
        session.request.side_effect = [job_body("pending"), job_body("faulted")]

        future = client.google_shopping_search("shoes")

        assert isinstance(future.exception(timeout=5), RemoteFault)
        assert session.request.call_count == 2

    def test_results_error_delivered_through_future(self, client, session) -> None:
        session.request.side_effect = [
            job_body("pending"),
            job_body("done"),
            make_response("oops", status_code=500, reason="Internal Server Error"),
        ]

        future = client.bing_url("https://www.bing.com/search?q=nike")

        error = future.exception(timeout=5)
        assert isinstance(error, RemoteHTTPError)
        assert error.status_code == 500
        assert error.body == "oops"

    def test_scrape_blocks_and_raises(self, client, session) -> None:
        session.request.side_effect = [job_body("pending"), job_body("faulted")]

        with pytest.raises(RemoteFault):
            client.scrape("google_search", "adidas")

    def test_scrape_returns_response(self, client, session) -> None:
        session.request.side_effect = [
            job_body("pending"),
            job_body("done"),
            make_response(RESULTS_BODY),
        ]

        response = client.scrape("google", "https://www.google.com/search?q=adidas")

        assert response.results[0].url == "https://www.google.com/search?q=adidas"

    def test_default_session_carries_auth(self, credentials, config) -> None:
        client = ScraperClient(credentials, config=config)

        assert client.session.auth == ("user", "pass")
        assert client.session.headers["Content-Type"] == "application/json"
