"""
CourseHub selection-and-retrieval workflow.

Transitions:
    setup --complete_setup--> courses --select_course--> category picker
    category picker --select_category--> files --back_to_courses--> courses

Chat is an orthogonal sub-session scoped to the selected course/category.

All transitions are synchronous methods that mutate WorkflowState and then
ask the EffectRunner to recompute derived fetches. Fetches run as asyncio
tasks, so callers inside an event loop can keep issuing transitions while
requests are in flight. Errors never escape an operation: they are turned
into the single-slot error notice on the state.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError as SchemaError

from coursehub import catalog
from coursehub.catalog import Category
from coursehub.config import get_settings
from coursehub.exceptions import CourseHubError, FetchError, PreconditionError, ValidationError
from coursehub.schemas import AcademicContext, ChatMessage, Course, SetupForm
from coursehub.services.api_client import CourseHubClient
from coursehub.workflow.effects import DerivedFetch, EffectRunner
from coursehub.workflow.state import Phase, WorkflowState

logger = logging.getLogger(__name__)

NO_ANSWER = "No answer received."
SELECT_COURSE_FIRST = "Please select a course first."

CoursesKey = tuple[int, AcademicContext]
FilesKey = tuple[str, str, AcademicContext]
ChatTag = tuple[int, str, str | None]


def _join_fields(fields: list[str]) -> str:
    if len(fields) == 1:
        return fields[0]
    if len(fields) == 2:
        return f"{fields[0]} and {fields[1]}"
    return ", ".join(fields[:-1]) + f", and {fields[-1]}"


def validate_setup(form: SetupForm, required: list[str]) -> AcademicContext:
    """
    Build an AcademicContext from the setup form.

    Raises:
        ValidationError: If a required field is empty or outside its domain
    """
    values = form.model_dump()
    if any(not values[field] for field in required):
        raise ValidationError(f"Please select {_join_fields(required)}.")
    for field in required:
        if values[field] not in catalog.allowed_keys(field):
            raise ValidationError(f"Please select a valid {field}.")
    return AcademicContext(**{field: values[field] for field in required})


class CourseHubWorkflow:
    """State machine driving the client. Owns WorkflowState exclusively."""

    def __init__(self, client: CourseHubClient, context_fields: list[str] | None = None):
        self.client = client
        self.context_fields = list(context_fields or get_settings().context_fields)
        self.state = WorkflowState()
        self.effects = EffectRunner()
        self._courses_fetch = self.effects.register(
            DerivedFetch(
                "courses",
                self._courses_dependencies,
                self._load_courses,
                on_change=self._mark_courses_loading,
            )
        )
        self._files_fetch = self.effects.register(
            DerivedFetch(
                "files",
                self._files_dependencies,
                self._load_files,
                on_change=self._reset_files,
            )
        )

    # =========================================================================
    # ERROR NOTICE
    # =========================================================================

    def _fail(self, error: CourseHubError) -> None:
        """Show an error in the single notice slot, replacing any older one."""
        self.state.error = error.message

    def _clear_error(self) -> None:
        self.state.error = ""

    # =========================================================================
    # CONTEXT SELECTOR
    # =========================================================================

    def _apply_setup(self, values: dict[str, str | None]) -> None:
        """
        Replace the setup form with `values` merged in. None means unselected.

        Raises:
            ValidationError: If a value cannot be a setup field value
        """
        updates = {}
        for field, value in values.items():
            if field not in SetupForm.model_fields:
                logger.warning("Ignoring unknown setup field %r", field)
                continue
            updates[field] = "" if value is None else value
        try:
            form = SetupForm.model_validate({**self.state.setup.model_dump(), **updates})
        except SchemaError as e:
            field = e.errors()[0]["loc"][0]
            raise ValidationError(f"Please select a valid {field}.") from e
        self.state.setup = form

    def update_setup(self, **values: str | None) -> None:
        """Edit setup form fields. Ignored once setup is complete."""
        if self.state.phase is not Phase.SETUP:
            logger.debug("Ignoring setup edit outside of setup phase")
            return
        try:
            self._apply_setup(values)
        except ValidationError as e:
            self._fail(e)

    def complete_setup(self, **values: str | None) -> bool:
        """
        Validate the setup form and enter the active phase.

        Returns True on success. On failure the error notice is set and the
        workflow stays in setup.
        """
        if self.state.phase is not Phase.SETUP:
            logger.debug("Setup already complete for session %d", self.state.session_id)
            return True
        try:
            self._apply_setup(values)
            context = validate_setup(self.state.setup, self.context_fields)
        except ValidationError as e:
            self._fail(e)
            return False

        self.state.context = context
        self.state.phase = Phase.ACTIVE
        self._clear_error()
        logger.info("Setup complete: %s", context.as_query_params())
        self.effects.recompute()
        return True

    def start_new_session(self) -> None:
        """Discard every piece of session state and reopen the setup modal."""
        self.state = WorkflowState(
            session_id=self.state.session_id + 1,
            chat_epoch=self.state.chat_epoch + 1,
            setup=self.state.setup.model_copy(),
            # Asks still in flight release their own hold on the loading flag
            pending_answers=self.state.pending_answers,
        )
        self.effects.recompute()

    # =========================================================================
    # COURSE BROWSER
    # =========================================================================

    def _courses_dependencies(self) -> CoursesKey | None:
        if self.state.phase is not Phase.ACTIVE or self.state.context is None:
            return None
        return (self.state.session_id, self.state.context)

    def _mark_courses_loading(self, key: CoursesKey | None) -> None:
        self.state.courses_loading = key is not None

    async def _load_courses(self, key: CoursesKey) -> None:
        _, context = key
        try:
            courses = await self.client.list_courses(context)
        except FetchError as e:
            if self._courses_fetch.is_current(key):
                self._fail(e)
            else:
                logger.debug("Dropping stale course fetch failure for %r", key)
            return
        finally:
            if self._courses_fetch.is_current(key):
                self.state.courses_loading = False

        if not self._courses_fetch.is_current(key):
            logger.debug("Dropping stale course list for %r", key)
            return
        self.state.courses = courses
        self._clear_error()
        logger.info("Loaded %d courses", len(courses))

    def select_course(self, course: Course) -> None:
        """Select a course, open the category picker and forget old files."""
        self.state.selected_course = course
        self.state.show_category_picker = True
        self.state.selected_category = None
        self.state.files = []
        self.effects.recompute()

    # =========================================================================
    # CATEGORY GATE
    # =========================================================================

    def select_category(self, category: Category | str) -> None:
        """Select one of the fixed categories and close the picker."""
        if isinstance(category, str):
            try:
                category = catalog.get_category(category)
            except KeyError:
                self._fail(ValidationError("Please select a valid category."))
                return
        self.state.selected_category = category
        self.state.show_category_picker = False
        self.effects.recompute()

    def close_category_picker(self) -> None:
        """Dismiss the picker without choosing. The selected course stays."""
        self.state.show_category_picker = False

    # =========================================================================
    # FILE LISTER
    # =========================================================================

    def _files_dependencies(self) -> FilesKey | None:
        course = self.state.selected_course
        category = self.state.selected_category
        context = self.state.context
        if course is None or category is None or context is None:
            return None
        return (course.id, category.key, context)

    def _reset_files(self, key: FilesKey | None) -> None:
        # Runs before the new fetch starts so old files never show under a new heading
        self.state.files = []
        self.state.files_loaded = False
        self.state.files_loading = key is not None

    async def _load_files(self, key: FilesKey) -> None:
        course_id, category_key, context = key
        try:
            files = await self.client.list_files(course_id, category_key, context)
        except FetchError as e:
            if not self._files_fetch.is_current(key):
                logger.debug("Dropping stale file fetch failure for %r", key[:2])
                return
            self.state.files = []
            self.state.files_loading = False
            self._fail(e)
            return

        if not self._files_fetch.is_current(key):
            logger.debug("Dropping stale file list for %r", key[:2])
            return
        self.state.files = files
        self.state.files_loading = False
        self.state.files_loaded = True
        self._clear_error()
        logger.info("Loaded %d files for %s/%s", len(files), course_id, category_key)

    # =========================================================================
    # CHAT SESSION
    # =========================================================================

    def open_chat(self) -> None:
        self.state.show_chat = True

    def close_chat(self) -> None:
        self.state.show_chat = False

    def toggle_chat(self) -> None:
        self.state.show_chat = not self.state.show_chat

    def set_question(self, question: str) -> None:
        self.state.question = question

    def _chat_tag(self) -> ChatTag | None:
        course = self.state.selected_course
        if course is None:
            return None
        category = self.state.selected_category
        return (self.state.chat_epoch, course.id, category.key if category else None)

    @contextmanager
    def _pending_answer(self) -> Iterator[None]:
        """Hold the loading-answer flag for the duration of one ask."""
        self.state.pending_answers += 1
        try:
            yield
        finally:
            self.state.pending_answers -= 1

    async def ask(self, question: str | None = None) -> None:
        """
        Ask the assistant about the selected course/category.

        The user message is appended before the request and kept even when
        the request fails. The draft question is cleared only on success.
        """
        if question is not None:
            self.state.question = question
        question = self.state.question

        tag = self._chat_tag()
        if tag is None:
            self._fail(PreconditionError(SELECT_COURSE_FIRST))
            return
        if not question.strip():
            return

        _, course_id, category_key = tag
        self.state.chat_history.append(ChatMessage(role="user", content=question))
        with self._pending_answer():
            self._clear_error()
            try:
                response = await self.client.ask(course_id, category_key, question)
            except FetchError as e:
                if self._chat_tag() == tag:
                    self._fail(e)
                else:
                    logger.debug("Dropping stale ask failure for %r", tag)
                return

        if self._chat_tag() != tag:
            logger.debug("Dropping stale answer for %r", tag)
            return
        answer = response.answer or NO_ANSWER
        self.state.chat_history.append(ChatMessage(role="assistant", content=answer))
        self.state.question = ""

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    def back_to_courses(self) -> None:
        """Return to the course list, dropping course, category, files and chat together."""
        self.state = self.state.model_copy(
            update={
                "selected_category": None,
                "files": [],
                "selected_course": None,
                "chat_history": [],
                "chat_epoch": self.state.chat_epoch + 1,
                "show_category_picker": False,
            }
        )
        self.effects.recompute()

    async def wait_idle(self) -> None:
        """Wait for every in-flight course and file fetch to finish."""
        await self.effects.wait_idle()
