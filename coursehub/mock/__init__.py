"""In-process mock of the CourseHub backend."""
