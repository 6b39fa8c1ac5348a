"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from pdf_qa.boundary.db.CRUD import document_crud, chunk_crud

    document = await document_crud.get_by_file_id(db, file_id)
"""

from pdf_qa.boundary.db.CRUD.base_crud import BaseCRUD
from pdf_qa.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from pdf_qa.boundary.db.CRUD.chunk_crud import ChunkCRUD, ChunkSearchRow, chunk_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "ChunkCRUD",
    "ChunkSearchRow",
    "chunk_crud",
]
