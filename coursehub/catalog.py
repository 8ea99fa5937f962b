"""Static domain tables: majors, years, semesters and material categories."""

from pydantic import BaseModel, ConfigDict


class Option(BaseModel):
    """A selectable setup value."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str


class Category(BaseModel):
    """A material category used to scope file listings and chat."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    color: str


MAJORS: tuple[Option, ...] = (
    Option(key="SoftwareEngineering", label="Software Engineering"),
    Option(key="DataScience", label="Data Science"),
    Option(key="Cybersecurity", label="Cybersecurity"),
    Option(key="ArtificialIntelligence", label="Artificial Intelligence"),
)

YEARS: tuple[Option, ...] = (
    Option(key="Year1", label="1st Year"),
    Option(key="Year2", label="2nd Year"),
    Option(key="Year3", label="3rd Year"),
    Option(key="Year4", label="4th Year"),
)

SEMESTERS: tuple[Option, ...] = (
    Option(key="Semester-a", label="Semester 1"),
    Option(key="Semester-b", label="Semester 2"),
)

CATEGORIES: tuple[Category, ...] = (
    Category(key="past-papers", label="Past Papers", color="#667eea"),
    Category(key="slides", label="Lecture Slides", color="#764ba2"),
    Category(key="homeworks", label="Assignments", color="#f093fb"),
    Category(key="other", label="Course Resources", color="#48bb78"),
)

DOMAINS: dict[str, tuple[Option, ...]] = {
    "major": MAJORS,
    "year": YEARS,
    "semester": SEMESTERS,
}


def allowed_keys(field: str) -> frozenset[str]:
    """Return the valid keys for a setup field."""
    return frozenset(option.key for option in DOMAINS[field])


def get_category(key: str) -> Category:
    """Look up a category by key. Raises KeyError for unknown keys."""
    for category in CATEGORIES:
        if category.key == key:
            return category
    raise KeyError(key)
