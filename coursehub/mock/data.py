"""In-memory catalog served by the mock backend."""

from coursehub.schemas import Course, CourseFile

FILE_HOST = "https://files.coursehub.local"

# (major, year) -> courses, each tagged with the semester it runs in
_COURSES: dict[tuple[str, str], list[tuple[str, str, str, str]]] = {
    ("DataScience", "Year2"): [
        ("cs201", "Data Structures", "CS201", "Semester-a"),
        ("ds210", "Probability and Statistics", "DS210", "Semester-a"),
        ("ds220", "Data Wrangling", "DS220", "Semester-b"),
        ("ma205", "Linear Algebra", "MA205", "Semester-b"),
    ],
    ("SoftwareEngineering", "Year1"): [
        ("cs101", "Introduction to Programming", "CS101", "Semester-a"),
        ("ma101", "Discrete Mathematics", "MA101", "Semester-a"),
        ("se110", "Software Design Basics", "SE110", "Semester-b"),
    ],
    ("Cybersecurity", "Year3"): [
        ("cy310", "Network Security", "CY310", "Semester-a"),
        ("cy320", "Applied Cryptography", "CY320", "Semester-b"),
    ],
    ("ArtificialIntelligence", "Year4"): [
        ("ai410", "Deep Learning", "AI410", "Semester-a"),
        ("ai420", "Reinforcement Learning", "AI420", "Semester-b"),
    ],
}

# Titles of the documents available per category. Courses without an entry
# for a category have no files there.
_FILE_TITLES: dict[str, list[str]] = {
    "past-papers": ["Midterm 2023", "Final 2023", "Final 2024"],
    "slides": ["Week 1 - Introduction", "Week 2 - Fundamentals", "Week 3 - Applications"],
    "homeworks": ["Homework 1", "Homework 2"],
}

_ANSWER_STYLE = {
    "past-papers": "Past exams on this usually test it directly",
    "slides": "The lecture slides cover this",
    "homeworks": "The assignments practice this",
    "other": "The course resources discuss this",
}


def _all_courses() -> list[tuple[str, str, str, str]]:
    return [row for rows in _COURSES.values() for row in rows]


def list_courses(
    major: str | None = None,
    year: str | None = None,
    semester: str | None = None,
) -> list[Course]:
    """List courses, narrowed by whichever context fields are given."""
    if major and year:
        rows = _COURSES.get((major, year), [])
    else:
        rows = [
            row
            for (row_major, row_year), group in _COURSES.items()
            if (not major or row_major == major) and (not year or row_year == year)
            for row in group
        ]
    if semester:
        rows = [row for row in rows if row[3] == semester]
    return [Course(id=row[0], name=row[1], code=row[2]) for row in rows]


def get_course(course_id: str) -> Course | None:
    for row in _all_courses():
        if row[0] == course_id:
            return Course(id=row[0], name=row[1], code=row[2])
    return None


def list_files(
    course_id: str,
    category: str,
    major: str | None = None,
    year: str | None = None,
    semester: str | None = None,
) -> list[CourseFile]:
    """List files for a course and category. Unknown categories have none."""
    titles = _FILE_TITLES.get(category, [])
    prefix = "/".join(part for part in (major, year, semester) if part)
    base = f"{FILE_HOST}/{prefix}/{course_id}/{category}" if prefix else f"{FILE_HOST}/{course_id}/{category}"
    files = []
    for index, title in enumerate(titles, start=1):
        slug = title.lower().replace(" - ", "-").replace(" ", "-")
        files.append(
            CourseFile(
                id=f"{course_id}-{category}-{index}",
                label=title,
                url=f"{base}/{slug}.pdf",
            )
        )
    return files


def answer_question(course: Course, category: str | None, question: str) -> str:
    """Produce a canned answer mentioning the course and category."""
    lead = _ANSWER_STYLE.get(category or "", f"{course.name} covers this")
    return f"{lead} in {course.name}. You asked: {question.strip()}"
