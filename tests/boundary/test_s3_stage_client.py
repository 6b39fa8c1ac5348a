"""
Tests for S3StageClient key mapping and error wrapping.
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from pdf_qa.boundary.aws.s3_stage_client import S3StageClient, stage_prefix
from pdf_qa.core.exceptions import UpstreamUnavailableError


@pytest.fixture
def mock_boto_client():
    return MagicMock()


@pytest.fixture
def stage_client(mock_boto_client):
    return S3StageClient(bucket="docs-bucket", region="us-east-1", s3_client=mock_boto_client)


def _client_error(operation: str) -> ClientError:
    return ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, operation)


@pytest.mark.parametrize(
    "reference,expected",
    [("@PDF_STAGE", "PDF_STAGE/"), ("PDF_STAGE", "PDF_STAGE/"), (" @archive.v1 ", "archive.v1/")],
)
def test_stage_prefix_should_strip_marker(reference, expected):
    assert stage_prefix(reference) == expected


def test_put_file_should_upload_under_stage_folder(stage_client, mock_boto_client):
    key = stage_client.put_file("/tmp/pdfqa_x/report.pdf", "@PDF_STAGE", "f-1")

    assert key == "f-1/report.pdf"
    mock_boto_client.upload_file.assert_called_once_with(
        Filename="/tmp/pdfqa_x/report.pdf",
        Bucket="docs-bucket",
        Key="PDF_STAGE/f-1/report.pdf",
        ExtraArgs={"ContentType": "application/pdf"},
    )


def test_put_file_failure_should_raise_upstream_error(stage_client, mock_boto_client):
    mock_boto_client.upload_file.side_effect = _client_error("PutObject")

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        stage_client.put_file("/tmp/report.pdf", "@PDF_STAGE", "f-1")

    assert exc_info.value.details["operation"] == "upload"


def test_presign_should_target_stage_key(stage_client, mock_boto_client):
    mock_boto_client.generate_presigned_url.return_value = "https://signed.example/obj"

    url, expires_at = stage_client.generate_presigned_download_url("@OLD", "f-1/a.pdf", expires_in=60)

    assert url == "https://signed.example/obj"
    assert expires_at.tzinfo is not None
    mock_boto_client.generate_presigned_url.assert_called_once_with(
        ClientMethod="get_object",
        Params={"Bucket": "docs-bucket", "Key": "OLD/f-1/a.pdf"},
        ExpiresIn=60,
    )


def test_presign_failure_should_raise_upstream_error(stage_client, mock_boto_client):
    mock_boto_client.generate_presigned_url.side_effect = _client_error("GetObject")

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        stage_client.generate_presigned_download_url("@PDF_STAGE", "f-1/a.pdf")

    assert exc_info.value.details["operation"] == "presign"
