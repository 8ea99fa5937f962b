"""Pydantic schemas for chat operations."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One entry of the chat history."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


# Request schemas
class AskRequest(BaseModel):
    """Request to ask the assistant a question."""

    course_id: str
    category: str | None = None
    question: str = Field(..., min_length=1)


# Response schemas
class AskResponse(BaseModel):
    """Assistant answer. The backend may omit the answer entirely."""

    answer: str | None = None
