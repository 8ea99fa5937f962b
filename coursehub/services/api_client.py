"""HTTP client for the CourseHub backend."""

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as SchemaError

from coursehub.config import get_settings
from coursehub.exceptions import FetchError
from coursehub.schemas import AcademicContext, AskRequest, AskResponse, Course, CourseFile

logger = logging.getLogger(__name__)

COURSES_FAILED = "Failed to load courses."
FILES_FAILED = "Failed to load files."
ASK_FAILED = "AI failed to respond."

_courses_adapter = TypeAdapter(list[Course])
_files_adapter = TypeAdapter(list[CourseFile])

ItemT = TypeVar("ItemT", Course, CourseFile)


def _unique_by_id(items: list[ItemT], what: str) -> list[ItemT]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for item in items:
        if item.id in seen:
            logger.warning("Duplicate %s id %r in backend response, skipping", what, item.id)
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


class CourseHubClient:
    """Async client for the courses, files and ask endpoints.

    Every failure (transport error, non-2xx status, invalid JSON, schema
    mismatch) is raised as FetchError carrying the message to show the user.
    Nothing is retried.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Create the underlying httpx client unless one is supplied."""
        settings = get_settings()
        if http_client is None:
            client_kwargs: dict[str, Any] = {"base_url": base_url or settings.api_base_url}
            # Only override httpx's default timeout when explicitly configured
            if settings.request_timeout is not None:
                client_kwargs["timeout"] = settings.request_timeout
            http_client = httpx.AsyncClient(**client_kwargs)
            self._owns_client = True
        else:
            self._owns_client = False
        self.http = http_client

    async def __aenter__(self) -> "CourseHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._owns_client:
            await self.http.aclose()

    async def _request_json(self, method: str, url: str, error_message: str, **kwargs: Any) -> Any:
        try:
            response = await self.http.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("%s %s returned %d", method, url, e.response.status_code)
            raise FetchError(error_message) from e
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, str(e))
            raise FetchError(error_message) from e
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("%s %s returned invalid JSON", method, url)
            raise FetchError(error_message) from e

    def _parse(self, adapter: TypeAdapter | type[BaseModel], data: Any, error_message: str) -> Any:
        try:
            if isinstance(adapter, TypeAdapter):
                return adapter.validate_python(data)
            return adapter.model_validate(data)
        except SchemaError as e:
            logger.warning("Unexpected response shape: %s", str(e))
            raise FetchError(error_message) from e

    async def list_courses(self, context: AcademicContext) -> list[Course]:
        """GET /courses for the given academic context."""
        data = await self._request_json(
            "GET", "/courses", COURSES_FAILED, params=context.as_query_params()
        )
        courses = self._parse(_courses_adapter, data, COURSES_FAILED)
        return _unique_by_id(courses, "course")

    async def list_files(
        self,
        course_id: str,
        category: str,
        context: AcademicContext,
    ) -> list[CourseFile]:
        """GET /courses/{course_id}/files filtered by category and context."""
        params = {"category": category, **context.as_query_params()}
        data = await self._request_json(
            "GET", f"/courses/{quote(course_id, safe='')}/files", FILES_FAILED, params=params
        )
        files = self._parse(_files_adapter, data, FILES_FAILED)
        return _unique_by_id(files, "file")

    async def ask(self, course_id: str, category: str | None, question: str) -> AskResponse:
        """POST /ask and return the parsed answer (which may be missing)."""
        payload = AskRequest(course_id=course_id, category=category, question=question)
        data = await self._request_json("POST", "/ask", ASK_FAILED, json=payload.model_dump())
        return self._parse(AskResponse, data, ASK_FAILED)
