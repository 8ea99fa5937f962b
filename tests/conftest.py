"""Pytest configuration and fixtures."""

import asyncio
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from coursehub.mock.main import app
from coursehub.services.api_client import CourseHubClient
from coursehub.workflow import CourseHubWorkflow

SETUP = {"major": "DataScience", "year": "Year2", "semester": "Semester-a"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the mock backend."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def api(client: AsyncClient) -> CourseHubClient:
    """CourseHub API client talking to the mock backend."""
    return CourseHubClient(http_client=client)


@pytest.fixture
def workflow(api: CourseHubClient) -> CourseHubWorkflow:
    """Workflow backed by the mock backend."""
    return CourseHubWorkflow(api, context_fields=["major", "year", "semester"])


@pytest.fixture
async def active_workflow(workflow: CourseHubWorkflow) -> CourseHubWorkflow:
    """Workflow past setup with its course list loaded."""
    assert workflow.complete_setup(**SETUP)
    await workflow.wait_idle()
    return workflow


class ControlledBackend:
    """
    Transport handler that holds every request until the test answers it.

    Lets tests control the order in which responses arrive.
    """

    def __init__(self):
        self.pending: list[tuple[httpx.Request, asyncio.Future]] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        future = asyncio.get_running_loop().create_future()
        self.pending.append((request, future))
        return await future

    @property
    def requests(self) -> list[httpx.Request]:
        return [request for request, _ in self.pending]

    async def wait_for_requests(self, count: int) -> None:
        for _ in range(200):
            if len(self.pending) >= count:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"expected {count} requests, saw {len(self.pending)}")

    def respond(self, index: int, status_code: int = 200, json: object = None) -> None:
        _, future = self.pending[index]
        future.set_result(httpx.Response(status_code, json=json))


@pytest.fixture
async def make_workflow() -> AsyncGenerator[Callable[..., CourseHubWorkflow], None]:
    """Build workflows on top of an arbitrary httpx transport handler."""
    clients: list[AsyncClient] = []

    def _make(handler, context_fields=("major", "year", "semester")) -> CourseHubWorkflow:
        http = AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
        clients.append(http)
        return CourseHubWorkflow(CourseHubClient(http_client=http), context_fields=list(context_fields))

    yield _make
    for http in clients:
        await http.aclose()
