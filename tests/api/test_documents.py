"""
Tests for the documents router (listing and upload).

Services are replaced through dependency_overrides; no database or model
client is created.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.api.deps.dependencies import (
    get_document_service,
    get_ingestion_service,
    get_settings_dependency,
)
from pdf_qa.api.main import create_app
from pdf_qa.application.services.ingestion_service import IngestionService
from pdf_qa.boundary.pdf.pdf_reader import PdfTextReader
from pdf_qa.configs import Settings
from pdf_qa.configs.pipeline import PipelineSettings
from pdf_qa.core.exceptions import NoReadableTextError, UpstreamUnavailableError
from pdf_qa.models.document import DocumentSummary, IngestionSummary

PDF = "application/pdf"
INGESTION_MODULE = "pdf_qa.application.services.ingestion_service"


@pytest.fixture
def settings():
    return Settings(pipeline=PipelineSettings(max_files=2, max_upload_bytes=1024))


@pytest.fixture
def mock_ingestion_service():
    return AsyncMock()


@pytest.fixture
def mock_document_service():
    return AsyncMock()


@pytest.fixture
def client(settings, mock_ingestion_service, mock_document_service):
    app = create_app()
    app.dependency_overrides[get_settings_dependency] = lambda: settings
    app.dependency_overrides[get_ingestion_service] = lambda: mock_ingestion_service
    app.dependency_overrides[get_document_service] = lambda: mock_document_service
    return TestClient(app)


def _summary(file_id: str, filename: str) -> IngestionSummary:
    return IngestionSummary(
        file_id=file_id,
        filename=filename,
        stage_path=f"{file_id}/{filename}",
        chunk_count=2,
    )


class TestListDocuments:
    def test_list_documents_should_return_camel_case_entries(self, client, mock_document_service):
        mock_document_service.list_documents.return_value = [
            DocumentSummary(
                file_id="f-1",
                filename="report.pdf",
                stage_path="f-1/report.pdf",
                stage_reference="@PDF_STAGE",
                chunk_count=4,
                created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
            )
        ]

        response = client.get("/api/documents")

        assert response.status_code == 200
        entry = response.json()["documents"][0]
        assert entry["fileId"] == "f-1"
        assert entry["stagePath"] == "f-1/report.pdf"
        assert entry["stageReference"] == "@PDF_STAGE"
        assert entry["chunkCount"] == 4

    def test_list_documents_should_hide_upstream_details(self, client, mock_document_service):
        mock_document_service.list_documents.side_effect = UpstreamUnavailableError(
            "connection refused on 10.0.0.5", operation="list"
        )

        response = client.get("/api/documents")

        assert response.status_code == 502
        assert response.json() == {"detail": "Unable to load documents."}


class TestUploadDocuments:
    def test_upload_should_ingest_files_in_order(self, client, mock_ingestion_service):
        mock_ingestion_service.ingest.side_effect = [
            _summary("id-1", "a.pdf"),
            _summary("id-2", "b.pdf"),
        ]

        response = client.post(
            "/api/upload",
            files=[
                ("files", ("a.pdf", b"%PDF-a", PDF)),
                ("files", ("b.pdf", b"%PDF-b", PDF)),
            ],
        )

        assert response.status_code == 200
        documents = response.json()["documents"]
        assert [d["fileId"] for d in documents] == ["id-1", "id-2"]
        assert documents[0]["stagePath"] == "id-1/a.pdf"
        assert documents[0]["chunkCount"] == 2
        calls = mock_ingestion_service.ingest.await_args_list
        assert [c.args for c in calls] == [(b"%PDF-a", "a.pdf"), (b"%PDF-b", "b.pdf")]

    def test_upload_without_files_should_return_400(self, client, mock_ingestion_service):
        response = client.post("/api/upload", data={"note": "nothing attached"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Attach at least one PDF."}
        mock_ingestion_service.ingest.assert_not_called()

    def test_upload_too_many_files_should_return_400(self, client, mock_ingestion_service):
        files = [("files", (f"{n}.pdf", b"%PDF", PDF)) for n in range(3)]

        response = client.post("/api/upload", files=files)

        assert response.status_code == 400
        mock_ingestion_service.ingest.assert_not_called()

    def test_upload_oversized_file_should_return_400(self, client, mock_ingestion_service):
        response = client.post("/api/upload", files=[("files", ("big.pdf", b"x" * 2048, PDF))])

        assert response.status_code == 400
        assert "exceeds the upload size limit" in response.json()["detail"]
        mock_ingestion_service.ingest.assert_not_called()

    def test_failure_mid_batch_should_report_prior_successes(self, client, mock_ingestion_service):
        """Test the batch stops at the first failure and keeps earlier results."""
        # Arrange
        mock_ingestion_service.ingest.side_effect = [
            _summary("id-1", "a.pdf"),
            NoReadableTextError("Unable to extract readable text from the PDF.", file_id="id-2"),
        ]

        # Act
        response = client.post(
            "/api/upload",
            files=[
                ("files", ("a.pdf", b"%PDF-a", PDF)),
                ("files", ("scan.pdf", b"%PDF-b", PDF)),
            ],
        )

        # Assert
        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Unable to extract readable text from the PDF."
        assert [d["fileId"] for d in body["documents"]] == ["id-1"]

    def test_non_pdf_content_type_should_fail_the_batch(self, client, mock_ingestion_service):
        response = client.post(
            "/api/upload",
            files=[("files", ("notes.txt", b"hello", "text/plain"))],
        )

        assert response.status_code == 500
        assert response.json() == {"message": '"notes.txt" is not a PDF.', "documents": []}
        mock_ingestion_service.ingest.assert_not_called()

    def test_upstream_failure_should_use_generic_message(self, client, mock_ingestion_service):
        mock_ingestion_service.ingest.side_effect = UpstreamUnavailableError(
            "S3 AccessDenied for arn:aws:...", operation="upload"
        )

        response = client.post("/api/upload", files=[("files", ("a.pdf", b"%PDF", PDF))])

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to upload PDF."


class TestUploadErrorBody:
    """Upload failures run through a real IngestionService with mocked storage."""

    @pytest.fixture
    def ingestion_client(self, settings):
        pdf_reader = MagicMock()
        pdf_reader.read_pages.return_value = ["First page.", "Second page.", "Third page."]
        stage_client = MagicMock()
        stage_client.put_file.side_effect = lambda local_path, stage, prefix: f"{prefix}/a.pdf"
        embeddings = MagicMock()
        embeddings.embed_query.return_value = [0.1, 0.2]
        service = IngestionService(
            db=AsyncMock(spec=AsyncSession),
            stage_client=stage_client,
            embeddings=embeddings,
            stage_reference="@PDF_STAGE",
            pdf_reader=pdf_reader,
        )
        app = create_app()
        app.dependency_overrides[get_settings_dependency] = lambda: settings
        app.dependency_overrides[get_ingestion_service] = lambda: service
        return TestClient(app)

    def test_partial_ingestion_should_not_leak_store_errors(self, ingestion_client):
        # Arrange
        store_error = SQLAlchemyError("INSERT INTO pdf_vectors dsn=postgres://u:pw@db")
        with patch(f"{INGESTION_MODULE}.document_crud") as mock_document_crud, patch(
            f"{INGESTION_MODULE}.chunk_crud"
        ) as mock_chunk_crud:
            mock_document_crud.create = AsyncMock()
            mock_chunk_crud.create_chunk = AsyncMock(side_effect=[MagicMock(), store_error])

            # Act
            response = ingestion_client.post("/api/upload", files=[("files", ("a.pdf", b"%PDF", PDF))])

        # Assert
        assert response.status_code == 500
        assert response.json()["message"] == "Ingestion stopped after 1 of 3 chunks."
        assert "pdf_vectors" not in response.text
        assert "postgres://" not in response.text

    def test_parse_failure_should_not_leak_parser_errors(self, settings):
        service = IngestionService(
            db=AsyncMock(spec=AsyncSession),
            stage_client=MagicMock(),
            embeddings=MagicMock(),
            stage_reference="@PDF_STAGE",
            pdf_reader=PdfTextReader(),
        )
        app = create_app()
        app.dependency_overrides[get_settings_dependency] = lambda: settings
        app.dependency_overrides[get_ingestion_service] = lambda: service

        with patch("pdf_qa.boundary.pdf.pdf_reader.PyPDFLoader") as mock_loader:
            mock_loader.return_value.load.side_effect = ValueError("/tmp/pdfqa_x/a.pdf: EOF marker not found")
            response = TestClient(app).post("/api/upload", files=[("files", ("a.pdf", b"%PDF", PDF))])

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to parse PDF.", "documents": []}
