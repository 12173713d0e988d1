"""
Router for question answering over uploaded document text.
"""

import logging

from fastapi import APIRouter, Depends

# Handle both package imports and standalone imports
try:
    from ..models import AskRequest, AskResponse
    from ..services.ai import AIService, get_ai_service
except ImportError:
    from models import AskRequest, AskResponse
    from services.ai import AIService, get_ai_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["ask"])


@router.post("/ask", response_model=AskResponse)
async def ask_question(
    request: AskRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> AskResponse:
    """
    Answer a question using the supplied document text as context.

    AIServiceError propagates to the application handler (503).
    """
    answer = await ai_service.ask(request.question, request.pdf_text)
    return AskResponse(answer=answer)
