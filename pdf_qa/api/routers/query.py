"""
Query API endpoint.

Routes: POST /query

Dependencies: pdf_qa.application.services.query_service, pdf_qa.models.query
System role: Question answering HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from pdf_qa.api.deps import get_query_service
from pdf_qa.api.routers.errors import to_http_exception
from pdf_qa.application.services.query_service import QueryService
from pdf_qa.core.exceptions import PdfQaException
from pdf_qa.models.query import QueryRequest, QueryResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["query"])


@router.post("/query", response_model=QueryResult, response_model_by_alias=True)
async def query_documents(
    request: QueryRequest,
    query_service: QueryService = Depends(get_query_service),
) -> QueryResult:
    """
    Answer a question from the selected PDFs.

    Args:
        request: Question, optional file filter and result count
        query_service: Injected QueryService

    Returns:
        QueryResult: Answer plus the chunks it was grounded in

    Raises:
        HTTPException(400): Empty question
        HTTPException(502): Embedding, search or completion unavailable
    """
    try:
        return await query_service.query(
            question=request.question,
            file_ids=request.file_ids,
            top_k=request.top_k,
        )
    except PdfQaException as e:
        raise to_http_exception(
            e,
            logger,
            "Unable to run the question against the knowledge base.",
            file_ids=request.file_ids,
        )
