"""
PDF text extraction using LangChain PyPDFLoader.

Dependencies: langchain_community.document_loaders, pypdf
System role: Page text extraction for ingestion
"""

from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from pdf_qa.core.exceptions import IngestionError


class PdfTextReader:
    """Extract per-page text from a PDF on disk."""

    def read_pages(self, file_path: str) -> list[str]:
        """
        Extract page texts in page order.

        Pages without extractable text are returned as empty strings so
        page numbers stay aligned with the PDF.

        Args:
            file_path: Path to a PDF file

        Returns:
            list[str]: One entry per page, page 1 first

        Raises:
            IngestionError: When the file is missing or cannot be parsed
        """
        path = Path(file_path)
        if not path.exists():
            raise IngestionError("PDF file not found.", details={"path": file_path})

        try:
            documents = PyPDFLoader(str(path)).load()
        except Exception as e:
            raise IngestionError(
                "Failed to parse PDF.",
                details={"error_type": type(e).__name__, "error_msg": str(e)},
            ) from e

        page_count = 0
        for document in documents:
            page_count = max(page_count, int(document.metadata.get("page", 0)) + 1)

        pages = [""] * page_count
        for document in documents:
            pages[int(document.metadata.get("page", 0))] = document.page_content or ""
        return pages
