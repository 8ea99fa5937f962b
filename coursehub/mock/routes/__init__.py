"""Mock backend routes package."""

from coursehub.mock.routes import ask, courses

__all__ = [
    "ask",
    "courses",
]
