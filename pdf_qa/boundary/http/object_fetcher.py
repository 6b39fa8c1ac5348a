"""
Streaming HTTP fetch of presigned object URLs.

Dependencies: httpx
System role: Byte transport for staged PDF streaming
"""

import logging
from collections.abc import AsyncIterator

import httpx

from pdf_qa.core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class ObjectFetcher:
    """Open presigned URLs as streaming responses."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """
        Initialize fetcher.

        Args:
            client: Shared async HTTP client
        """
        self._client = client

    async def open(self, url: str) -> httpx.Response:
        """
        Send a streaming GET and validate the response.

        The caller owns the returned response and must drain it through
        iter_body (which closes it).

        Args:
            url: Presigned download URL

        Returns:
            httpx.Response: Open response with a 2xx status

        Raises:
            UpstreamUnavailableError: Transport error, non-2xx status or empty body
        """
        try:
            response = await self._client.send(self._client.build_request("GET", url), stream=True)
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(
                f"Failed to fetch staged object: {e}",
                operation="fetch",
            ) from e

        if not response.is_success:
            await response.aclose()
            raise UpstreamUnavailableError(
                f"Failed to fetch staged object ({response.status_code})",
                operation="fetch",
                details={"status_code": response.status_code},
            )

        if response.headers.get("content-length") == "0":
            await response.aclose()
            raise UpstreamUnavailableError(
                "Staged object response has no body",
                operation="fetch",
            )

        return response


async def iter_body(response: httpx.Response) -> AsyncIterator[bytes]:
    """
    Yield the response body and close the response.

    A response the transport already read is yielded as one buffer.
    """
    try:
        if response.is_stream_consumed:
            yield response.content
            return
        async for chunk in response.aiter_bytes():
            yield chunk
    finally:
        await response.aclose()
