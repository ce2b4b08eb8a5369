"""
Tests for the async HTTP transport: retry behavior and error mapping.
"""

import json
import time
from collections.abc import Callable
from unittest.mock import MagicMock

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from turnup.exceptions import (
    AuthorizationError,
    NotFoundError,
    RateLimitedError,
    ServerError,
)
from turnup.transport import API_VERSION, AsyncHTTPTransport, RetryConfig

BASE_URL = "https://api.github.test"

# Test strategies
backoff_factor_strategy = st.floats(min_value=1.1, max_value=5.0)
attempt_strategy = st.integers(min_value=0, max_value=5)
retry_after_strategy = st.integers(min_value=1, max_value=120)


def _transport(
    handler: Callable[[httpx.Request], httpx.Response] | None = None,
    **retry: object,
) -> AsyncHTTPTransport:
    """Transport that never sleeps between retries."""
    retry.setdefault("max_backoff", 0.0)
    return AsyncHTTPTransport(
        base_url=BASE_URL,
        token="ghp_testtoken",
        retry_config=RetryConfig(**retry),  # type: ignore[arg-type]
        http_transport=httpx.MockTransport(handler) if handler else None,
    )


class Recorder:
    """MockTransport handler replaying canned responses in order."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        template = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        # Fresh response per request; the last one repeats
        return httpx.Response(
            template.status_code, headers=template.headers, content=template.content
        )


@given(
    backoff_factor=backoff_factor_strategy,
    attempt=attempt_strategy,
)
@settings(max_examples=100)
def test_exponential_backoff_timing(backoff_factor: float, attempt: int) -> None:
    """
    For any retry configuration with backoff_factor B and attempt number N,
    the wait time before attempt N is approximately B^N seconds (with jitter).
    """
    transport = _transport(backoff_factor=backoff_factor, jitter=0.1, max_backoff=1000.0)

    expected_base = backoff_factor ** attempt
    actual = transport._get_backoff_time(attempt, None)

    min_expected = min(expected_base * 0.9, 1000.0)
    max_expected = min(expected_base * 1.1, 1000.0)

    assert min_expected <= actual <= max_expected, (
        f"Backoff time {actual} not in expected range [{min_expected}, {max_expected}] "
        f"for attempt {attempt} with factor {backoff_factor}"
    )


@given(retry_after=retry_after_strategy)
@settings(max_examples=100)
def test_retry_after_header_respected(retry_after: int) -> None:
    """A Retry-After value of T seconds is waited exactly."""
    transport = _transport(respect_retry_after=True, max_backoff=60.0)

    actual = transport._get_backoff_time(0, str(retry_after))

    assert actual == float(retry_after)


@given(
    status_code=st.sampled_from([400, 401, 403, 404, 409, 422]),
    attempt=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=100)
def test_no_retry_on_non_retryable_errors(status_code: int, attempt: int) -> None:
    """Client errors other than 429 are never retried by status code alone."""
    transport = _transport(max_retries=3)

    assert not transport._should_retry(status_code, attempt)


@given(
    status_code=st.sampled_from([429, 500, 502, 503]),
    attempt=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=100)
def test_retry_on_retryable_errors(status_code: int, attempt: int) -> None:
    """Retryable status codes trigger a retry while under max_retries."""
    transport = _transport(max_retries=3)

    assert transport._should_retry(status_code, attempt)


def test_max_retries_exceeded() -> None:
    """Retries stop once max_retries is reached."""
    transport = _transport(max_retries=2)

    assert not transport._should_retry(500, 2)
    assert not transport._should_retry(500, 3)
    assert transport._should_retry(500, 0)
    assert transport._should_retry(500, 1)


def test_backoff_respects_max_backoff() -> None:
    """Backoff time is capped at max_backoff."""
    transport = _transport(backoff_factor=10.0, max_backoff=5.0, jitter=0.0)

    assert transport._get_backoff_time(3, None) == 5.0


def test_reset_wait_capped() -> None:
    """Waiting for a rate limit reset never exceeds max_backoff."""
    transport = _transport(max_backoff=30.0)

    assert transport._get_reset_wait(str(int(time.time()) + 3600)) == 30.0
    assert transport._get_reset_wait(None) == 1.0
    assert transport._get_reset_wait("garbage") == 1.0


# Status code to exception type mapping for property test
STATUS_CODE_TO_EXCEPTION = {
    401: "AuthenticationError",
    403: "AuthorizationError",
    404: "NotFoundError",
    409: "ConflictError",
    429: "RateLimitedError",
    500: "ServerError",
    502: "ServerError",
    503: "ServerError",
    400: "ValidationError",
    422: "ValidationError",
}


@given(
    status_code=st.sampled_from(sorted(STATUS_CODE_TO_EXCEPTION)),
    error_message=st.text(min_size=1, max_size=200),
    request_id=st.text(min_size=1, max_size=50, alphabet=st.characters(
        whitelist_categories=("Lu", "Ll", "Nd"),
        whitelist_characters="-:"
    )),
    retry_after=st.integers(min_value=1, max_value=3600),
)
@settings(max_examples=100)
def test_property_error_response_parsing(
    status_code: int,
    error_message: str,
    request_id: str,
    retry_after: int,
) -> None:
    """
    Every error response becomes a typed exception carrying the status
    code, the API message and the request id; rate limit errors also carry
    the retry delay.
    """
    transport = _transport()

    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = {"message": error_message}
    mock_response.headers = {"Retry-After": str(retry_after), "X-GitHub-Request-Id": request_id}

    error = transport._parse_error_response(mock_response)

    assert type(error).__name__ == STATUS_CODE_TO_EXCEPTION[status_code]
    assert error.code == f"HTTP_{status_code}"
    assert error.message == error_message
    assert error.request_id == request_id

    if status_code == 429:
        assert isinstance(error, RateLimitedError)
        assert error.retry_after == retry_after


def test_exhausted_rate_limit_403_is_rate_limited() -> None:
    transport = _transport()

    mock_response = MagicMock()
    mock_response.status_code = 403
    mock_response.json.return_value = {"message": "API rate limit exceeded"}
    mock_response.headers = {"X-RateLimit-Remaining": "0"}

    assert isinstance(transport._parse_error_response(mock_response), RateLimitedError)


class TestRequests:
    """End-to-end requests through httpx.MockTransport."""

    @pytest.mark.asyncio
    async def test_authentication_headers(self) -> None:
        recorder = Recorder(httpx.Response(200, json={"ok": True}))
        transport = _transport(recorder)

        data = await transport.request("GET", "/repos/octo/widgets", params={"page": 2})
        await transport.close()

        [request] = recorder.requests
        assert data == {"ok": True}
        assert request.headers["Authorization"] == "Bearer ghp_testtoken"
        assert request.headers["X-GitHub-Api-Version"] == API_VERSION
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.url.path == "/repos/octo/widgets"
        assert request.url.params["page"] == "2"

    @pytest.mark.asyncio
    async def test_json_body_sent(self) -> None:
        recorder = Recorder(httpx.Response(201, json={"number": 1}))
        transport = _transport(recorder)

        await transport.request("POST", "/repos/octo/widgets/pulls", body={"title": "t"})

        assert json.loads(recorder.requests[0].content) == {"title": "t"}
        assert recorder.requests[0].method == "POST"

    @pytest.mark.asyncio
    async def test_not_found_not_retried(self) -> None:
        recorder = Recorder(httpx.Response(
            404,
            json={"message": "Not Found"},
            headers={"X-GitHub-Request-Id": "ABCD:1234"},
        ))
        transport = _transport(recorder, max_retries=3)

        with pytest.raises(NotFoundError) as exc_info:
            await transport.request("GET", "/repos/octo/missing")

        assert len(recorder.requests) == 1
        assert exc_info.value.code == "HTTP_404"
        assert exc_info.value.message == "Not Found"
        assert exc_info.value.request_id == "ABCD:1234"

    @pytest.mark.asyncio
    async def test_server_error_retried_until_success(self) -> None:
        recorder = Recorder(
            httpx.Response(502, json={"message": "Bad Gateway"}),
            httpx.Response(503),
            httpx.Response(200, json=[1, 2]),
        )
        transport = _transport(recorder, max_retries=3)

        assert await transport.request("GET", "/users/octo/repos") == [1, 2]
        assert len(recorder.requests) == 3

    @pytest.mark.asyncio
    async def test_server_error_after_max_retries(self) -> None:
        recorder = Recorder(httpx.Response(500, json={"message": "boom"}))
        transport = _transport(recorder, max_retries=2)

        with pytest.raises(ServerError):
            await transport.request("GET", "/repos/octo/widgets")

        assert len(recorder.requests) == 3

    @pytest.mark.asyncio
    async def test_exhausted_rate_limit_waits_and_retries(self) -> None:
        recorder = Recorder(
            httpx.Response(
                403,
                json={"message": "API rate limit exceeded"},
                headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": str(int(time.time()))},
            ),
            httpx.Response(200, json={"ok": True}),
        )
        transport = _transport(recorder, max_retries=1)

        assert await transport.request("GET", "/repos/octo/widgets") == {"ok": True}
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_forbidden_not_retried(self) -> None:
        recorder = Recorder(httpx.Response(403, json={"message": "Resource not accessible"}))
        transport = _transport(recorder, max_retries=3)

        with pytest.raises(AuthorizationError):
            await transport.request("POST", "/repos/octo/widgets/git/refs", body={})

        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_no_content(self) -> None:
        transport = _transport(Recorder(httpx.Response(204)))

        assert await transport.request("DELETE", "/repos/octo/widgets/git/refs/heads/x") == {}

    @pytest.mark.asyncio
    async def test_network_error_becomes_server_error(self) -> None:
        attempts: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        transport = _transport(handler, max_retries=2)

        with pytest.raises(ServerError) as exc_info:
            await transport.request("GET", "/repos/octo/widgets")

        assert exc_info.value.code == "CONNECTION_ERROR"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self) -> None:
        async with _transport(Recorder(httpx.Response(200, json={}))) as transport:
            await transport.request("GET", "/")

        assert transport._client.is_closed
