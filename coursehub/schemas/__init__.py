"""Pydantic schemas for backend payloads and client state."""

from coursehub.schemas.context import AcademicContext, SetupForm
from coursehub.schemas.courses import Course, CourseFile
from coursehub.schemas.chat import AskRequest, AskResponse, ChatMessage

__all__ = [
    # Context
    "AcademicContext",
    "SetupForm",
    # Courses
    "Course",
    "CourseFile",
    # Chat
    "AskRequest",
    "AskResponse",
    "ChatMessage",
]
