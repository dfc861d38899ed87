import base64
from types import SimpleNamespace

import httpx
import pytest

from config import HTTP_MAX_RETRIES
from services import image_fetcher
from services.image_fetcher import fetch_image


@pytest.mark.asyncio
async def test_reads_local_file(tmp_path):
    shot = tmp_path / "shot.png"
    shot.write_bytes(b"\x89PNG data")
    assert await fetch_image(str(shot)) == b"\x89PNG data"


@pytest.mark.asyncio
async def test_missing_local_file(tmp_path):
    assert await fetch_image(str(tmp_path / "nope.png")) is None


@pytest.mark.asyncio
async def test_decodes_base64_data_uri():
    payload = base64.b64encode(b"\x89PNG data").decode("ascii")
    assert await fetch_image(f"data:image/png;base64,{payload}") == b"\x89PNG data"


@pytest.mark.asyncio
@pytest.mark.parametrize("ref", ["", "   ", "data:image/png,raw", "data:image/png;base64,%%%"])
async def test_unusable_refs(ref):
    assert await fetch_image(ref) is None


URL = "https://cdn.example.com/shots/offer.png"


@pytest.fixture
def http_stub(monkeypatch):
    """Route fetch_image through an httpx.MockTransport; record requests and backoff sleeps."""
    state = SimpleNamespace(responses=[], requests=[], sleeps=[])
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        state.requests.append(request)
        outcome = state.responses.pop(0) if len(state.responses) > 1 else state.responses[0]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome[0], content=outcome[1], request=request)

    async def no_sleep(seconds):
        state.sleeps.append(seconds)

    monkeypatch.setattr(
        image_fetcher.httpx,
        "AsyncClient",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )
    monkeypatch.setattr(image_fetcher.asyncio, "sleep", no_sleep)
    return state


@pytest.mark.asyncio
async def test_fetches_remote_image(http_stub):
    http_stub.responses = [(200, b"\x89PNG remote")]
    assert await fetch_image(URL) == b"\x89PNG remote"
    assert len(http_stub.requests) == 1
    assert http_stub.requests[0].headers["Accept"] == "image/*"


@pytest.mark.asyncio
async def test_client_error_is_not_retried(http_stub):
    http_stub.responses = [(404, b"not found")]
    assert await fetch_image(URL) is None
    assert len(http_stub.requests) == 1
    assert http_stub.sleeps == []


@pytest.mark.asyncio
async def test_timeout_is_retried_until_attempts_run_out(http_stub):
    http_stub.responses = [httpx.ConnectTimeout("timed out")]
    assert await fetch_image(URL) is None
    assert len(http_stub.requests) == HTTP_MAX_RETRIES
    assert http_stub.sleeps == [float(n) for n in range(1, HTTP_MAX_RETRIES)]


@pytest.mark.asyncio
async def test_server_error_then_success(http_stub):
    http_stub.responses = [(503, b"busy"), (200, b"\x89PNG later")]
    assert await fetch_image(URL) == b"\x89PNG later"
    assert len(http_stub.requests) == 2
    assert http_stub.sleeps == [1.0]
