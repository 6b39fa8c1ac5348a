"""HTTP boundary: presigned URL fetches."""

from pdf_qa.boundary.http.object_fetcher import ObjectFetcher, iter_body

__all__ = ["ObjectFetcher", "iter_body"]
