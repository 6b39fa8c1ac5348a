"""
S3 client for staged PDF storage.

A stage reference '@NAME' is a key prefix 'NAME/' inside the documents
bucket; keys handed to and returned from this client are relative to the
stage. Calls are blocking and are run in a threadpool by the services.

Dependencies: boto3
System role: Object PUT and presigned GET for the PDF stages
"""

import os
from datetime import datetime, timedelta, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from pdf_qa.core.exceptions import UpstreamUnavailableError


def stage_prefix(stage_reference: str) -> str:
    """Map '@NAME' (or 'NAME') to the bucket prefix 'NAME/'."""
    return f"{stage_reference.strip().lstrip('@').strip('/')}/"


class S3StageClient:
    """S3 client for stage uploads and presigned downloads."""

    def __init__(self, bucket: str, region: str = "us-east-1", s3_client=None) -> None:
        """
        Initialize S3 client for the stage bucket.

        Args:
            bucket: S3 bucket holding every stage
            region: AWS region for the bucket
            s3_client: Preconfigured boto3 S3 client (created when omitted)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = s3_client or boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    def object_key(self, stage_reference: str, identifier: str) -> str:
        """Full bucket key for a stage-relative identifier."""
        return f"{stage_prefix(stage_reference)}{identifier.lstrip('/')}"

    def put_file(self, local_path: str, stage_reference: str, prefix: str) -> str:
        """
        Upload a local file into a stage folder.

        Args:
            local_path: File to upload; its basename becomes the object name
            stage_reference: Target stage ('@NAME')
            prefix: Folder inside the stage (the file id)

        Returns:
            str: Key relative to the stage ('<prefix>/<basename>')

        Raises:
            UpstreamUnavailableError: If the upload fails
        """
        relative_key = f"{prefix.strip('/')}/{os.path.basename(local_path)}"
        try:
            self._s3_client.upload_file(
                Filename=local_path,
                Bucket=self._bucket,
                Key=self.object_key(stage_reference, relative_key),
                ExtraArgs={"ContentType": "application/pdf"},
            )
        except (BotoCoreError, ClientError) as e:
            raise UpstreamUnavailableError(
                f"Failed to upload PDF to stage: {e}",
                operation="upload",
                details={"stage": stage_reference, "key": relative_key},
            ) from e
        return relative_key

    def generate_presigned_download_url(
        self,
        stage_reference: str,
        identifier: str,
        expires_in: int = 3600,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for downloading a staged object.

        Args:
            stage_reference: Stage holding the object
            identifier: Key relative to the stage
            expires_in: URL expiry in seconds (default 1 hour)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            UpstreamUnavailableError: If presigned URL generation fails
        """
        try:
            presigned_url = self._s3_client.generate_presigned_url(
                ClientMethod="get_object",
                Params={
                    "Bucket": self._bucket,
                    "Key": self.object_key(stage_reference, identifier),
                },
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            raise UpstreamUnavailableError(
                f"Failed to presign staged object: {e}",
                operation="presign",
                details={"stage": stage_reference, "identifier": identifier},
            ) from e
        if not presigned_url:
            raise UpstreamUnavailableError(
                "Presign returned an empty URL",
                operation="presign",
                details={"stage": stage_reference, "identifier": identifier},
            )
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at
