"""AWS boundary: S3 stage storage."""

from pdf_qa.boundary.aws.s3_stage_client import S3StageClient, stage_prefix

__all__ = ["S3StageClient", "stage_prefix"]
