"""Question answering route."""

import logging

from fastapi import APIRouter, HTTPException, status

from coursehub.mock import data
from coursehub.schemas import AskRequest, AskResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ask"])


@router.post("/ask", response_model=AskResponse)
async def ask(request: AskRequest) -> AskResponse:
    """Answer a question scoped to a course and optional category."""
    course = data.get_course(request.course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    logger.info("Question for %s/%s", course.id, request.category or "-")
    return AskResponse(answer=data.answer_question(course, request.category, request.question))
