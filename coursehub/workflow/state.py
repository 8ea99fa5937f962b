"""State held by the client workflow."""

from enum import Enum

from pydantic import BaseModel, Field

from coursehub.catalog import Category
from coursehub.schemas import AcademicContext, ChatMessage, Course, CourseFile, SetupForm


class Phase(str, Enum):
    SETUP = "setup"
    ACTIVE = "active"


class View(str, Enum):
    """Which screen the client should currently render."""

    SETUP = "setup"
    COURSES = "courses"
    CATEGORY_PICKER = "category_picker"
    FILES = "files"


class FilesStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"


class WorkflowState(BaseModel):
    """Everything the client knows about the current session.

    Only CourseHubWorkflow mutates this. Readers should treat it as a snapshot.
    """

    phase: Phase = Phase.SETUP
    session_id: int = 0
    setup: SetupForm = Field(default_factory=SetupForm)
    context: AcademicContext | None = None

    courses: list[Course] = Field(default_factory=list)
    courses_loading: bool = False
    selected_course: Course | None = None

    show_category_picker: bool = False
    selected_category: Category | None = None

    files: list[CourseFile] = Field(default_factory=list)
    files_loading: bool = False
    # Set once a fetch for the current triple has completed successfully
    files_loaded: bool = False

    show_chat: bool = False
    chat_history: list[ChatMessage] = Field(default_factory=list)
    chat_epoch: int = 0
    question: str = ""
    pending_answers: int = 0

    error: str = ""

    @property
    def loading_answer(self) -> bool:
        return self.pending_answers > 0

    @property
    def view(self) -> View:
        if self.phase is Phase.SETUP:
            return View.SETUP
        if self.show_category_picker and self.selected_course is not None:
            return View.CATEGORY_PICKER
        if self.selected_category is not None and self.selected_course is not None:
            return View.FILES
        return View.COURSES

    @property
    def files_status(self) -> FilesStatus:
        if self.files_loading:
            return FilesStatus.LOADING
        if not self.files_loaded:
            return FilesStatus.IDLE
        return FilesStatus.READY if self.files else FilesStatus.EMPTY
