"""Tests for course selection, category selection, file listing and navigation."""

import httpx
import pytest

from coursehub.catalog import CATEGORIES, get_category
from coursehub.schemas import ChatMessage, Course, CourseFile
from coursehub.workflow import CourseHubWorkflow, FilesStatus, View

from tests.conftest import SETUP


def _course(workflow: CourseHubWorkflow, course_id: str) -> Course:
    return next(c for c in workflow.state.courses if c.id == course_id)


class TestCourseBrowser:
    async def test_course_failure_leaves_list_empty_and_sets_error(self, make_workflow):
        workflow = make_workflow(lambda request: httpx.Response(500))
        workflow.complete_setup(**SETUP)
        await workflow.wait_idle()

        assert workflow.state.courses == []
        assert not workflow.state.courses_loading
        assert workflow.state.error == "Failed to load courses."

    async def test_courses_fetched_once_per_context(self, make_workflow):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path == "/courses":
                return httpx.Response(200, json=[{"id": "cs201", "name": "Data Structures"}])
            return httpx.Response(200, json=[])

        workflow = make_workflow(handler)
        workflow.complete_setup(**SETUP)
        await workflow.wait_idle()
        workflow.select_course(workflow.state.courses[0])
        workflow.select_category("slides")
        await workflow.wait_idle()
        workflow.back_to_courses()
        workflow.complete_setup(**SETUP)
        await workflow.wait_idle()

        assert [r.url.path for r in requests].count("/courses") == 1

    async def test_new_session_refetches_courses(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.start_new_session()

        assert active_workflow.state.view is View.SETUP
        assert active_workflow.state.courses == []
        assert active_workflow.state.selected_course is None
        assert active_workflow.state.setup.major == "DataScience"

        active_workflow.complete_setup(year="Year1", major="SoftwareEngineering")
        await active_workflow.wait_idle()
        assert [c.id for c in active_workflow.state.courses] == ["cs101", "ma101"]

    async def test_select_course_opens_category_picker(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))

        assert active_workflow.state.selected_course.id == "cs201"
        assert active_workflow.state.show_category_picker
        assert active_workflow.state.view is View.CATEGORY_PICKER

    @pytest.mark.parametrize("category", [c.key for c in CATEGORIES])
    async def test_select_course_clears_category_and_files(
        self, active_workflow: CourseHubWorkflow, category: str
    ):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.select_category(category)
        await active_workflow.wait_idle()

        active_workflow.select_course(_course(active_workflow, "ds210"))

        assert active_workflow.state.selected_category is None
        assert active_workflow.state.files == []
        assert active_workflow.state.files_status is FilesStatus.IDLE
        await active_workflow.wait_idle()
        assert active_workflow.state.files == []


class TestCategoryGate:
    async def test_select_category_closes_picker(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.select_category(get_category("slides"))

        assert active_workflow.state.selected_category.key == "slides"
        assert not active_workflow.state.show_category_picker
        assert active_workflow.state.view is View.FILES

    async def test_unknown_category_key_sets_notice(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.select_category("memes")
        await active_workflow.wait_idle()

        assert active_workflow.state.error == "Please select a valid category."
        assert active_workflow.state.selected_category is None
        assert active_workflow.state.show_category_picker
        assert active_workflow.state.files_status is FilesStatus.IDLE

    async def test_close_picker_keeps_course(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.close_category_picker()

        assert active_workflow.state.selected_course.id == "cs201"
        assert active_workflow.state.selected_category is None
        assert active_workflow.state.view is View.COURSES


class TestFileLister:
    async def test_files_load_when_course_and_category_set(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.select_category("slides")
        assert active_workflow.state.files_status is FilesStatus.LOADING
        await active_workflow.wait_idle()

        files = active_workflow.state.files
        assert active_workflow.state.files_status is FilesStatus.READY
        assert [f.label for f in files] == [
            "Week 1 - Introduction",
            "Week 2 - Fundamentals",
            "Week 3 - Applications",
        ]
        assert "/DataScience/Year2/Semester-a/cs201/slides/" in files[0].url

    async def test_empty_result_is_explicit_empty_state(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.select_category("other")
        await active_workflow.wait_idle()

        assert active_workflow.state.files == []
        assert active_workflow.state.files_status is FilesStatus.EMPTY
        assert active_workflow.state.error == ""

    async def test_fetch_needs_both_course_and_category(self, make_workflow):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request.url.path)
            if request.url.path == "/courses":
                return httpx.Response(200, json=[{"id": "cs201", "name": "Data Structures"}])
            return httpx.Response(200, json=[])

        workflow = make_workflow(handler)
        workflow.complete_setup(**SETUP)
        await workflow.wait_idle()

        workflow.select_course(workflow.state.courses[0])
        await workflow.wait_idle()
        assert requests == ["/courses"]

        workflow.close_category_picker()
        await workflow.wait_idle()
        assert requests == ["/courses"]

        workflow.select_category("homeworks")
        await workflow.wait_idle()
        assert requests == ["/courses", "/courses/cs201/files"]

    async def test_category_alone_does_not_fetch(self, make_workflow):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request.url.path)
            return httpx.Response(200, json=[])

        workflow = make_workflow(handler)
        workflow.complete_setup(**SETUP)
        workflow.select_category("slides")
        await workflow.wait_idle()

        assert requests == ["/courses"]
        assert workflow.state.files_status is FilesStatus.IDLE

    async def test_category_switch_discards_files_before_refetch(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.select_category("slides")
        await active_workflow.wait_idle()
        assert active_workflow.state.files

        active_workflow.select_category("homeworks")
        assert active_workflow.state.files == []
        assert active_workflow.state.files_loading
        await active_workflow.wait_idle()

        assert [f.label for f in active_workflow.state.files] == ["Homework 1", "Homework 2"]

    async def test_file_failure_sets_error_and_empties_list(self, make_workflow):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/courses":
                return httpx.Response(200, json=[{"id": "cs201", "name": "Data Structures"}])
            raise httpx.ReadTimeout("timed out", request=request)

        workflow = make_workflow(handler)
        workflow.complete_setup(**SETUP)
        await workflow.wait_idle()
        workflow.select_course(workflow.state.courses[0])
        workflow.select_category("slides")
        await workflow.wait_idle()

        assert workflow.state.files == []
        assert not workflow.state.files_loading
        assert workflow.state.files_status is FilesStatus.IDLE
        assert workflow.state.error == "Failed to load files."


class TestBackToCourses:
    async def test_back_resets_course_category_files_and_chat(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.select_category("slides")
        await active_workflow.wait_idle()
        await active_workflow.ask("What is a stack?")
        active_workflow.open_chat()
        assert len(active_workflow.state.chat_history) == 2

        active_workflow.back_to_courses()

        state = active_workflow.state
        assert state.selected_category is None
        assert state.files == []
        assert state.selected_course is None
        assert state.chat_history == []
        assert state.view is View.COURSES
        # The course list and chat visibility are not part of the reset
        assert [c.id for c in state.courses] == ["cs201", "ds210"]
        assert state.show_chat

    async def test_back_without_selection_is_harmless(self, active_workflow: CourseHubWorkflow):
        active_workflow.back_to_courses()
        await active_workflow.wait_idle()

        assert active_workflow.state.view is View.COURSES
        assert active_workflow.state.error == ""

    async def test_back_replaces_state_in_one_step(self, active_workflow: CourseHubWorkflow):
        active_workflow.select_course(_course(active_workflow, "cs201"))
        active_workflow.select_category("slides")
        await active_workflow.wait_idle()
        active_workflow.state.chat_history.append(ChatMessage(role="user", content="hi"))
        before = active_workflow.state

        active_workflow.back_to_courses()

        # The previous snapshot is untouched, so no observer can see a partial reset
        assert before.selected_course is not None
        assert before.selected_category is not None
        assert before.files and isinstance(before.files[0], CourseFile)
        assert before.chat_history
        assert active_workflow.state is not before
