"""Academic context schemas."""

from pydantic import BaseModel, ConfigDict

from coursehub.schemas.base import BaseSchema


class SetupForm(BaseSchema):
    """Current values of the setup modal. Empty string means unselected."""

    major: str = ""
    year: str = ""
    semester: str = ""


class AcademicContext(BaseModel):
    """The student's completed setup. Immutable for the rest of the session."""

    model_config = ConfigDict(frozen=True)

    major: str
    year: str
    semester: str | None = None

    def as_query_params(self) -> dict[str, str]:
        """Return the context as query parameters, omitting unset fields."""
        return self.model_dump(exclude_none=True)
