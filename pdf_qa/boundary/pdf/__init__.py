"""PDF boundary: text extraction."""

from pdf_qa.boundary.pdf.pdf_reader import PdfTextReader

__all__ = ["PdfTextReader"]
