"""Command-line entry point for the interactive CourseHub client."""

import argparse
import asyncio
import logging
import shlex
import sys
from typing import TextIO

from coursehub import catalog
from coursehub.config import get_settings
from coursehub.services.api_client import CourseHubClient
from coursehub.workflow import CourseHubWorkflow, FilesStatus, View

HELP = """Commands:
  setup MAJOR YEAR [SEMESTER]  complete the setup form
  courses                      list courses
  open COURSE_ID               select a course
  category KEY                 pick a category ({categories})
  close                        close the category picker
  files                        show files for the current course/category
  chat                         show or hide the assistant
  ask QUESTION                 ask the assistant
  back                         back to the course list
  restart                      start a new session
  help                         show this help
  quit                         exit"""


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="CourseHub interactive client")
    parser.add_argument("--base-url", type=str, default=settings.api_base_url, help="Backend base URL.")
    parser.add_argument("--major", type=str, default=None, help="Major key, e.g. DataScience.")
    parser.add_argument("--year", type=str, default=None, help="Year key, e.g. Year2.")
    parser.add_argument("--semester", type=str, default=None, help="Semester key, e.g. Semester-a.")
    parser.add_argument("--log-level", type=str, default=settings.log_level, help="Logging level.")
    return parser.parse_args(argv)


def render(workflow: CourseHubWorkflow, out: TextIO) -> None:
    """Print the current view and any error notice."""
    state = workflow.state
    if state.error:
        print(f"! {state.error}", file=out)

    view = state.view
    if view is View.SETUP:
        for field in workflow.context_fields:
            keys = ", ".join(option.key for option in catalog.DOMAINS[field])
            print(f"{field}: {getattr(state.setup, field) or '-'} (choose from {keys})", file=out)
    elif view is View.COURSES:
        if state.courses_loading:
            print("Loading courses...", file=out)
        elif not state.courses:
            print("No courses.", file=out)
        for course in state.courses:
            code = f" [{course.code}]" if course.code else ""
            print(f"- {course.id}: {course.name}{code}", file=out)
    elif view is View.CATEGORY_PICKER:
        print(f"{state.selected_course.name}: what would you like to access?", file=out)
        for category in catalog.CATEGORIES:
            print(f"- {category.key}: {category.label}", file=out)
    elif view is View.FILES:
        print(f"{state.selected_course.name} / {state.selected_category.label}", file=out)
        status = state.files_status
        if status is FilesStatus.LOADING:
            print("Loading files...", file=out)
        elif status is FilesStatus.EMPTY:
            print("No files available. Check back later for updates.", file=out)
        for course_file in state.files:
            date = f" ({course_file.date})" if course_file.date else ""
            print(f"- {course_file.label}{date}: {course_file.url}", file=out)

    if state.show_chat:
        scope = state.selected_category.label if state.selected_category else "this course"
        print(f"--- Assistant ({scope}) ---", file=out)
        if not state.chat_history:
            print("Ask me anything about these materials.", file=out)
        for message in state.chat_history:
            speaker = "you" if message.role == "user" else "ai"
            print(f"{speaker}> {message.content}", file=out)


async def run_command(workflow: CourseHubWorkflow, line: str, out: TextIO) -> bool:
    """Apply one command line to the workflow. Returns False when the user quits."""
    try:
        parts = shlex.split(line)
    except ValueError as exc:
        print(f"Could not parse command: {exc}", file=out)
        return True
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]
    if command in ("quit", "exit"):
        return False
    if command == "help":
        print(HELP.format(categories=", ".join(c.key for c in catalog.CATEGORIES)), file=out)
        return True

    if command == "setup":
        values = dict(zip(workflow.context_fields, args))
        workflow.complete_setup(**values)
    elif command == "open" and args:
        course = next((c for c in workflow.state.courses if c.id == args[0]), None)
        if course is None:
            print(f"Unknown course: {args[0]}", file=out)
            return True
        workflow.select_course(course)
    elif command == "category" and args:
        if args[0] not in {c.key for c in catalog.CATEGORIES}:
            print(f"Unknown category: {args[0]}", file=out)
            return True
        workflow.select_category(args[0])
    elif command == "close":
        workflow.close_category_picker()
    elif command == "chat":
        workflow.toggle_chat()
    elif command == "ask":
        workflow.open_chat()
        await workflow.ask(" ".join(args))
    elif command == "back":
        workflow.back_to_courses()
    elif command == "restart":
        workflow.start_new_session()
    elif command not in ("courses", "files"):
        print(f"Unknown command: {line.strip()} (try 'help')", file=out)
        return True

    await workflow.wait_idle()
    render(workflow, out)
    return True


async def run_interactive(args: argparse.Namespace) -> None:
    async with CourseHubClient(args.base_url) as client:
        workflow = CourseHubWorkflow(client)
        preset = {
            field: value
            for field, value in (("major", args.major), ("year", args.year), ("semester", args.semester))
            if value
        }
        if preset:
            workflow.complete_setup(**preset)
            await workflow.wait_idle()
        render(workflow, sys.stdout)

        while True:
            try:
                line = await asyncio.to_thread(input, "coursehub> ")
            except EOFError:
                break
            if not await run_command(workflow, line, sys.stdout):
                break


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.log_level)
    try:
        asyncio.run(run_interactive(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
