"""Domain models for customers, jobs, boxes and the system aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional, Union


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    STORED = "stored"
    PULLED = "pulled"
    # Part of the stored format but never produced; returning a job sets STORED.
    RETURNED = "returned"
    DELETED = "deleted"


class DataSource(str, Enum):
    """Where an in-memory aggregate was read from. Never persisted."""

    REMOTE = "remote"
    CACHE = "cache"
    EMPTY = "empty"
    LOCAL = "local"


@dataclass(slots=True)
class Customer:
    id: str
    name: str
    contact: str
    created_at: datetime


@dataclass(slots=True)
class Box:
    """Smallest trackable unit of a job."""

    id: str
    box_number: str
    color: str
    box_size: str
    price: float
    contents: str
    has_issue: bool = False
    issue_note: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Stored:
    """Job sits in its zone. Carries the history of its last operation, if any."""

    status: ClassVar[JobStatus] = JobStatus.STORED

    pulled_at: Optional[datetime] = None
    returned_at: Optional[datetime] = None
    line_production: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Pulled:
    """Job is on a production line.

    Pulls made here always set ``pulled_at`` and ``line_production``; older documents may lack them.
    """

    status: ClassVar[JobStatus] = JobStatus.PULLED

    pulled_at: Optional[datetime] = None
    line_production: Optional[int] = None
    returned_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class Deleted:
    """Job is in the recovery bin. ``previous`` keeps the state it was deleted from."""

    status: ClassVar[JobStatus] = JobStatus.DELETED

    deleted_at: Optional[datetime] = None
    previous: Union[Stored, Pulled] = field(default_factory=Stored)


JobState = Union[Stored, Pulled, Deleted]


@dataclass(slots=True)
class Job:
    """A customer's storage assignment made of one or more boxes."""

    id: str
    job_number: str
    job_name: str
    product_size: str
    customer_id: str
    zone: str
    boxes: list[Box]
    created_at: datetime
    state: JobState = field(default_factory=Stored)

    @property
    def status(self) -> JobStatus:
        return self.state.status

    @property
    def _active_state(self) -> Union[Stored, Pulled]:
        return self.state.previous if isinstance(self.state, Deleted) else self.state

    @property
    def pulled_at(self) -> Optional[datetime]:
        return self._active_state.pulled_at

    @property
    def returned_at(self) -> Optional[datetime]:
        return self._active_state.returned_at

    @property
    def line_production(self) -> Optional[int]:
        return self._active_state.line_production

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self.state.deleted_at if isinstance(self.state, Deleted) else None

    def find_box(self, box_id: str) -> Optional[Box]:
        return next((box for box in self.boxes if box.id == box_id), None)

    @property
    def total_value(self) -> float:
        return sum(box.price for box in self.boxes)


@dataclass(slots=True)
class SystemData:
    """The aggregate root: the whole persisted document."""

    jobs: list[Job] = field(default_factory=list)
    customers: list[Customer] = field(default_factory=list)
    source: DataSource = DataSource.EMPTY

    def find_job(self, job_id: str) -> Optional[Job]:
        return next((job for job in self.jobs if job.id == job_id), None)

    def find_customer(self, customer_id: str) -> Optional[Customer]:
        return next((customer for customer in self.customers if customer.id == customer_id), None)
