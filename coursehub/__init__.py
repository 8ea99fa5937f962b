"""CourseHub: browse course materials and ask questions about them."""

__version__ = "0.1.0"
