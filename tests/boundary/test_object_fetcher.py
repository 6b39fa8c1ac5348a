"""
Tests for ObjectFetcher and iter_body over an httpx mock transport.
"""

import httpx
import pytest

from pdf_qa.boundary.http.object_fetcher import ObjectFetcher, iter_body
from pdf_qa.core.exceptions import UpstreamUnavailableError


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_open_should_return_streamable_response():
    async with _client(lambda request: httpx.Response(200, content=b"%PDF-1.7 data")) as client:
        response = await ObjectFetcher(client).open("https://objects.test/PDF_STAGE/a.pdf")
        body = b"".join([chunk async for chunk in iter_body(response)])

    assert body == b"%PDF-1.7 data"
    assert response.is_closed


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [403, 404, 500])
async def test_open_should_reject_error_status(status_code):
    async with _client(lambda request: httpx.Response(status_code, content=b"nope")) as client:
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await ObjectFetcher(client).open("https://objects.test/x.pdf")

    assert exc_info.value.details == {"operation": "fetch", "status_code": status_code}


@pytest.mark.asyncio
async def test_open_should_reject_empty_body():
    async with _client(lambda request: httpx.Response(200, content=b"")) as client:
        with pytest.raises(UpstreamUnavailableError):
            await ObjectFetcher(client).open("https://objects.test/x.pdf")


@pytest.mark.asyncio
async def test_open_should_wrap_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await ObjectFetcher(client).open("https://objects.test/x.pdf")

    assert exc_info.value.details["operation"] == "fetch"
