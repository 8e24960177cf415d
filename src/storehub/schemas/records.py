"""Persisted document shape and conversion to and from the domain model."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer

from ..models.domain import (
    Box,
    Customer,
    DataSource,
    Deleted,
    Job,
    JobState,
    JobStatus,
    Pulled,
    Stored,
    SystemData,
)

logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing ``Z``."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _assume_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


Timestamp = Annotated[
    datetime,
    AfterValidator(_assume_utc),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


class BoxRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    boxNumber: str = ""
    color: str = ""
    boxSize: str = ""
    price: float = 0.0
    contents: str = ""
    hasIssue: Optional[bool] = None
    issueNote: Optional[str] = None


class CustomerRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    contact: str = ""
    createdAt: Timestamp


class JobRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    jobNumber: str
    jobName: str
    productSize: str
    customerId: str
    zone: str
    status: JobStatus
    boxes: list[BoxRecord] = []
    createdAt: Timestamp
    pulledAt: Optional[Timestamp] = None
    returnedAt: Optional[Timestamp] = None
    deletedAt: Optional[Timestamp] = None
    lineProduction: Optional[int] = None


class SystemDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    jobs: list[JobRecord] = []
    customers: list[CustomerRecord] = []


def box_from_record(record: BoxRecord) -> Box:
    has_issue = bool(record.hasIssue)
    return Box(
        id=record.id,
        box_number=record.boxNumber,
        color=record.color,
        box_size=record.boxSize,
        price=record.price,
        contents=record.contents,
        has_issue=has_issue,
        issue_note=(record.issueNote or "") if has_issue else None,
    )


def box_to_record(box: Box) -> BoxRecord:
    return BoxRecord(
        id=box.id,
        boxNumber=box.box_number,
        color=box.color,
        boxSize=box.box_size,
        price=box.price,
        contents=box.contents,
        hasIssue=box.has_issue,
        issueNote=box.issue_note if box.has_issue else None,
    )


def _state_from_record(record: JobRecord) -> JobState:
    if record.status == JobStatus.PULLED:
        if record.pulledAt is None or record.lineProduction is None:
            logger.warning(f"Pulled job {record.id} has no pulledAt or lineProduction; keeping it as is")
        return Pulled(
            pulled_at=record.pulledAt,
            line_production=record.lineProduction,
            returned_at=record.returnedAt,
        )

    stored = Stored(
        pulled_at=record.pulledAt,
        returned_at=record.returnedAt,
        line_production=record.lineProduction,
    )
    if record.status == JobStatus.DELETED:
        if record.deletedAt is None:
            logger.warning(f"Deleted job {record.id} has no deletedAt; keeping it as is")
        # A job deleted while on a line has a pull newer than its last return.
        on_line = (
            record.pulledAt is not None
            and record.lineProduction is not None
            and (record.returnedAt is None or record.returnedAt < record.pulledAt)
        )
        previous = (
            Pulled(pulled_at=record.pulledAt, line_production=record.lineProduction, returned_at=record.returnedAt)
            if on_line
            else stored
        )
        return Deleted(deleted_at=record.deletedAt, previous=previous)

    if record.status == JobStatus.RETURNED:
        logger.warning(f"Job {record.id} has vestigial status 'returned'; reading it as 'stored'")
    return stored


def job_from_record(record: JobRecord) -> Job:
    return Job(
        id=record.id,
        job_number=record.jobNumber,
        job_name=record.jobName,
        product_size=record.productSize,
        customer_id=record.customerId,
        zone=record.zone,
        boxes=[box_from_record(box) for box in record.boxes],
        created_at=record.createdAt,
        state=_state_from_record(record),
    )


def job_to_record(job: Job) -> JobRecord:
    return JobRecord(
        id=job.id,
        jobNumber=job.job_number,
        jobName=job.job_name,
        productSize=job.product_size,
        customerId=job.customer_id,
        zone=job.zone,
        status=job.status,
        boxes=[box_to_record(box) for box in job.boxes],
        createdAt=job.created_at,
        pulledAt=job.pulled_at,
        returnedAt=job.returned_at,
        deletedAt=job.deleted_at,
        lineProduction=job.line_production,
    )


def customer_from_record(record: CustomerRecord) -> Customer:
    return Customer(id=record.id, name=record.name, contact=record.contact, created_at=record.createdAt)


def customer_to_record(customer: Customer) -> CustomerRecord:
    return CustomerRecord(
        id=customer.id,
        name=customer.name,
        contact=customer.contact,
        createdAt=customer.created_at,
    )


def system_data_from_payload(payload: Any, source: DataSource) -> SystemData:
    """Parse a raw JSON document. Raises ``pydantic.ValidationError`` when malformed."""
    document = SystemDocument.model_validate(payload)
    return SystemData(
        jobs=[job_from_record(record) for record in document.jobs],
        customers=[customer_from_record(record) for record in document.customers],
        source=source,
    )


def system_data_to_payload(data: SystemData) -> dict[str, Any]:
    document = SystemDocument(
        jobs=[job_to_record(job) for job in data.jobs],
        customers=[customer_to_record(customer) for customer in data.customers],
    )
    return document.model_dump(mode="json", exclude_none=True)
