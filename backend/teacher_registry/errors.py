"""Typed errors raised by services and renderers.

Controllers translate these into HTTP responses: `NotFoundError` -> 404,
`RecordValidationError` -> 400 and `InternalError` -> 500.
"""


class TeacherRegistryError(Exception):
    """Base class for every error surfaced to the web layer."""


class NotFoundError(TeacherRegistryError):
    """An id-addressed operation targeted a record that does not exist."""

    def __init__(self, teacher_id: int):
        super().__init__(f"teacher not found: {teacher_id}")
        self.teacher_id = teacher_id


class RecordValidationError(TeacherRegistryError, ValueError):
    """Input violates a record constraint; raised before any store mutation."""


class InternalError(TeacherRegistryError):
    """Store or render failure. The original exception is kept as `__cause__`."""
