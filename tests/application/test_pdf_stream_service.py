"""
Test suite for PdfStreamService.

Presigning is mocked; fetches go through a real ObjectFetcher on an
httpx.MockTransport so status and body handling are exercised.

System role: Verification of candidate fallback streaming
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.application.services.pdf_stream_service import PdfStreamService
from pdf_qa.boundary.http.object_fetcher import ObjectFetcher
from pdf_qa.core.exceptions import ClientInputError, UpstreamUnavailableError

STAGE = "@PDF_STAGE"
FILE_ID = "a1b2c3d4-e5f6-7890-abcd-1234567890ab"
MODULE = "pdf_qa.application.services.pdf_stream_service"
PDF_BYTES = b"%PDF-1.4 test body"


def _presign(stage: str, identifier: str, expires_in: int):
    return f"https://objects.test/{stage.lstrip('@')}/{identifier}", datetime.now(timezone.utc)


def _transport(found_key: str, requested: list[str]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        if request.url.path == f"/{found_key}":
            return httpx.Response(200, content=PDF_BYTES)
        return httpx.Response(404, content=b"missing")

    return httpx.MockTransport(handler)


async def _read(stream) -> bytes:
    return b"".join([chunk async for chunk in stream.body])


@pytest.fixture
def mock_stage_client() -> MagicMock:
    client = MagicMock()
    client.generate_presigned_download_url.side_effect = _presign
    return client


@pytest.fixture
def requested() -> list[str]:
    return []


def _service(stage_client: MagicMock, client: httpx.AsyncClient) -> PdfStreamService:
    return PdfStreamService(
        db=AsyncMock(spec=AsyncSession),
        stage_client=stage_client,
        fetcher=ObjectFetcher(client),
        default_stage=STAGE,
        presign_ttl=3600,
    )


class TestOpenStream:
    """Tests for PdfStreamService.open_stream."""

    @pytest.mark.asyncio
    async def test_should_stream_from_first_working_candidate(
        self,
        mock_stage_client: MagicMock,
        requested: list[str],
    ) -> None:
        """Test the third candidate succeeds after two 404s and headers describe it."""
        identifier = f"{FILE_ID}-report.pdf"
        found_key = f"PDF_STAGE/{FILE_ID}/report.pdf/{FILE_ID}-report.pdf"

        async with httpx.AsyncClient(transport=_transport(found_key, requested)) as client:
            service = _service(mock_stage_client, client)
            stream = await service.open_stream(identifier=identifier)
            body = await _read(stream)

        assert body == PDF_BYTES
        assert requested == [
            f"/PDF_STAGE/{identifier}",
            f"/PDF_STAGE/{FILE_ID}/report.pdf",
            f"/{found_key}",
        ]
        assert stream.headers["Content-Type"] == "application/pdf"
        assert stream.headers["Cache-Control"] == "no-store"
        assert stream.headers["X-Pdf-Stage-Path"] == f"{FILE_ID}/report.pdf/{FILE_ID}-report.pdf"
        assert stream.headers["X-Pdf-Stage-Reference"] == STAGE
        assert stream.headers["X-Pdf-Filename"] == f"{FILE_ID}-report.pdf"
        assert stream.headers["Content-Disposition"] == f'inline; filename="{FILE_ID}-report.pdf"'
        assert "X-Pdf-File-Id" not in stream.headers

    @pytest.mark.asyncio
    async def test_known_document_should_use_pointer_for_headers(
        self,
        mock_stage_client: MagicMock,
        requested: list[str],
    ) -> None:
        document = SimpleNamespace(
            file_id=FILE_ID,
            filename="report.pdf",
            stage_path=f"{FILE_ID}/report.pdf",
            stage_reference="@OLD_STAGE",
            metadata_={},
        )

        async with httpx.AsyncClient(
            transport=_transport(f"OLD_STAGE/{FILE_ID}/report.pdf", requested)
        ) as client:
            service = _service(mock_stage_client, client)
            with patch(f"{MODULE}.document_crud") as mock_document_crud:
                mock_document_crud.get_by_file_id = AsyncMock(return_value=document)
                stream = await service.open_stream(file_id=FILE_ID)
            body = await _read(stream)

        assert body == PDF_BYTES
        assert requested == [f"/OLD_STAGE/{FILE_ID}/report.pdf"]
        assert stream.headers["X-Pdf-File-Id"] == FILE_ID
        assert stream.headers["X-Pdf-Filename"] == "report.pdf"
        assert stream.headers["X-Pdf-Stage-Reference"] == "@OLD_STAGE"

    @pytest.mark.asyncio
    async def test_exhausted_candidates_should_raise_last_error(
        self,
        mock_stage_client: MagicMock,
        requested: list[str],
    ) -> None:
        async with httpx.AsyncClient(transport=_transport("nowhere", requested)) as client:
            service = _service(mock_stage_client, client)
            with pytest.raises(UpstreamUnavailableError) as exc_info:
                await service.open_stream(identifier=f"{FILE_ID}-report.pdf")

        assert len(requested) == 3
        assert exc_info.value.details["status_code"] == 404

    @pytest.mark.asyncio
    async def test_presign_failures_should_be_skipped(
        self,
        mock_stage_client: MagicMock,
        requested: list[str],
    ) -> None:
        """Test a presign error on one candidate does not stop the traversal."""
        def flaky_presign(stage: str, identifier: str, expires_in: int):
            if "/" not in identifier:
                raise UpstreamUnavailableError("presign failed", operation="presign")
            return _presign(stage, identifier, expires_in)

        mock_stage_client.generate_presigned_download_url.side_effect = flaky_presign

        async with httpx.AsyncClient(
            transport=_transport(f"PDF_STAGE/{FILE_ID}/report.pdf", requested)
        ) as client:
            service = _service(mock_stage_client, client)
            stream = await service.open_stream(identifier=f"{FILE_ID}-report.pdf")
            await _read(stream)

        assert requested == [f"/PDF_STAGE/{FILE_ID}/report.pdf"]
        assert stream.headers["X-Pdf-Stage-Path"] == f"{FILE_ID}/report.pdf"

    @pytest.mark.asyncio
    async def test_empty_body_should_count_as_failure(self, mock_stage_client: MagicMock) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b""))

        async with httpx.AsyncClient(transport=transport) as client:
            service = _service(mock_stage_client, client)
            with pytest.raises(UpstreamUnavailableError):
                await service.open_stream(identifier="folder/file.pdf")

    @pytest.mark.asyncio
    async def test_missing_reference_should_be_client_error(self, mock_stage_client: MagicMock) -> None:
        async with httpx.AsyncClient() as client:
            service = _service(mock_stage_client, client)
            with pytest.raises(ClientInputError):
                await service.open_stream()

        mock_stage_client.generate_presigned_download_url.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_file_id_should_have_no_candidates(self, mock_stage_client: MagicMock) -> None:
        async with httpx.AsyncClient() as client:
            service = _service(mock_stage_client, client)
            with patch(f"{MODULE}.document_crud") as mock_document_crud:
                mock_document_crud.get_by_file_id = AsyncMock(return_value=None)
                with pytest.raises(ClientInputError) as exc_info:
                    await service.open_stream(file_id=FILE_ID)

        assert exc_info.value.message == "Document identifier is missing."

    @pytest.mark.asyncio
    async def test_malformed_identifier_should_be_rejected_up_front(self, mock_stage_client: MagicMock) -> None:
        async with httpx.AsyncClient() as client:
            service = _service(mock_stage_client, client)
            with pytest.raises(ClientInputError):
                await service.open_stream(identifier="../etc/passwd")

        mock_stage_client.generate_presigned_download_url.assert_not_called()
