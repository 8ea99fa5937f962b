"""Services for external integrations."""

from coursehub.services.api_client import CourseHubClient

__all__ = ["CourseHubClient"]
