"""Job lifecycle services."""

from .rules import JobDraft
from .service import JobService

__all__ = ["JobDraft", "JobService"]
