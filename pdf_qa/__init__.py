"""PDF ingestion, grounded question answering and staged PDF streaming."""

__version__ = "0.1.0"
