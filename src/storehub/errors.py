"""Error taxonomy for the storage hub core."""

from __future__ import annotations


class StorehubError(Exception):
    """Base class for errors raised by the core operations."""


class ValidationError(StorehubError):
    """A required field is missing or a record breaks a data rule.

    Raised before anything is written, so the stored document is unchanged.
    """


class PersistenceError(StorehubError):
    """Writing the system document failed.

    The local fallback copy is not refreshed when this is raised; callers
    should fetch again before retrying.
    """


class JobNotFoundError(StorehubError):
    def __init__(self, job_id: str) -> None:
        super().__init__(f"Job '{job_id}' not found")
        self.job_id = job_id


class BoxNotFoundError(StorehubError):
    def __init__(self, job_id: str, box_id: str) -> None:
        super().__init__(f"Box '{box_id}' not found in job '{job_id}'")
        self.job_id = job_id
        self.box_id = box_id


class InvalidTransitionError(StorehubError):
    """The job's current status does not allow the requested operation."""

    def __init__(self, job_id: str, status: str, operation: str) -> None:
        super().__init__(f"Cannot {operation} job '{job_id}' while it is {status}")
        self.job_id = job_id
        self.status = status
        self.operation = operation
