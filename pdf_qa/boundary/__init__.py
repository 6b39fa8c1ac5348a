"""
Boundary layer: adapters for S3 stages, PostgreSQL/pgvector, LLM providers,
HTTP fetches and PDF parsing.
"""
