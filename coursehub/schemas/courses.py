"""Course and course file schemas."""

from typing import Any

from pydantic import Field, field_validator

from coursehub.schemas.base import BaseSchema


class Course(BaseSchema):
    """A course as listed by the backend."""

    id: str = Field(..., min_length=1)
    name: str
    code: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Ids are opaque strings, but some backends send integers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class CourseFile(BaseSchema):
    """A retrievable file for a (course, category, context) triple."""

    id: str = Field(..., min_length=1)
    label: str
    url: str
    date: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Ids are opaque strings, but some backends send integers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v
