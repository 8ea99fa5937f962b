"""
CourseHub mock backend.

Serves an in-memory catalog over the same endpoints the client talks to.

Run with: uvicorn coursehub.mock.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coursehub.config import get_settings
from coursehub.mock.routes import ask, courses

settings = get_settings()

app = FastAPI(
    title=f"{settings.app_name} Mock Backend",
    description="Courses, course files and question answering with canned data",
    version="0.1.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(courses.router)
app.include_router(ask.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
