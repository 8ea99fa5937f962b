"""Course and course file routes."""

from typing import Literal

from fastapi import APIRouter, HTTPException, status

from coursehub.mock import data
from coursehub.schemas import Course, CourseFile

router = APIRouter(prefix="/courses", tags=["courses"])

CategoryKey = Literal["past-papers", "slides", "homeworks", "other"]


@router.get("", response_model=list[Course])
async def list_courses(
    major: str | None = None,
    year: str | None = None,
    semester: str | None = None,
) -> list[Course]:
    """List courses, optionally filtered by the student's context."""
    return data.list_courses(major=major, year=year, semester=semester)


@router.get("/{course_id}/files", response_model=list[CourseFile])
async def list_course_files(
    course_id: str,
    category: CategoryKey,
    major: str | None = None,
    year: str | None = None,
    semester: str | None = None,
) -> list[CourseFile]:
    """List files of one category for a course."""
    if data.get_course(course_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return data.list_files(course_id, category, major=major, year=year, semester=semester)
