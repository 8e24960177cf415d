"""Job lifecycle rules: validation and status transitions on in-memory jobs.

Nothing here performs I/O. Transitions mutate the job in place and raise
``InvalidTransitionError`` when the current status does not allow them:

    stored --pull--> pulled --return--> stored
    stored|pulled --soft delete--> deleted
"""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Sequence

from ...errors import InvalidTransitionError, ValidationError
from ...models.domain import Box, Deleted, Job, Pulled, Stored


@dataclass(slots=True)
class JobDraft:
    """Caller-editable fields of a job, used for both create and edit."""

    job_name: str
    product_size: str
    customer_id: str
    zone: str
    boxes: list[Box] = field(default_factory=list)


def new_id() -> str:
    return uuid.uuid4().hex


def new_job_number(now: datetime) -> str:
    return f"JOB-{int(now.timestamp() * 1000) % 1_000_000:06d}"


def new_box_number() -> str:
    return f"BX-{random.randint(1000, 9999)}"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def prepare_boxes(boxes: Sequence[Box]) -> list[Box]:
    """Validate boxes and fill in generated ids and labels.

    A note on a box that is not flagged is dropped so the issue fields stay consistent.
    """
    if not boxes:
        raise ValidationError("A job needs at least one box")

    prepared: list[Box] = []
    seen_ids: set[str] = set()
    for box in boxes:
        if box.price < 0:
            raise ValidationError(f"Box price must not be negative (got {box.price})")
        if box.has_issue and _is_blank(box.issue_note):
            raise ValidationError("A flagged box needs an issue note")

        box_id = box.id or new_id()
        if box_id in seen_ids:
            raise ValidationError(f"Duplicate box id '{box_id}'")
        seen_ids.add(box_id)

        prepared.append(
            replace(
                box,
                id=box_id,
                box_number=box.box_number.strip() or new_box_number(),
                issue_note=box.issue_note.strip() if box.has_issue else None,
            )
        )
    return prepared


def validate_draft(draft: JobDraft) -> list[Box]:
    """Check the fields required at create and edit time and return the prepared boxes."""
    missing = [
        name
        for name, value in (
            ("jobName", draft.job_name),
            ("productSize", draft.product_size),
            ("customerId", draft.customer_id),
        )
        if _is_blank(value)
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    return prepare_boxes(draft.boxes)


def new_job(draft: JobDraft, boxes: list[Box], now: datetime) -> Job:
    return Job(
        id=new_id(),
        job_number=new_job_number(now),
        job_name=draft.job_name.strip(),
        product_size=draft.product_size.strip(),
        customer_id=draft.customer_id,
        zone=draft.zone,
        boxes=boxes,
        created_at=now,
        state=Stored(),
    )


def apply_edit(job: Job, draft: JobDraft, boxes: list[Box]) -> None:
    if isinstance(job.state, Deleted):
        raise InvalidTransitionError(job.id, job.status.value, "edit")
    job.job_name = draft.job_name.strip()
    job.product_size = draft.product_size.strip()
    job.customer_id = draft.customer_id
    job.zone = draft.zone
    job.boxes = boxes


def pull(job: Job, line: int, now: datetime) -> None:
    state = job.state
    if not isinstance(state, Stored):
        raise InvalidTransitionError(job.id, job.status.value, "pull")
    job.state = Pulled(pulled_at=now, line_production=line, returned_at=state.returned_at)


def return_to_zone(job: Job, zone: str, now: datetime) -> None:
    # Status and zone change together, otherwise the job would sit in neither pool.
    state = job.state
    if not isinstance(state, Pulled):
        raise InvalidTransitionError(job.id, job.status.value, "return")
    job.state = Stored(pulled_at=state.pulled_at, returned_at=now, line_production=state.line_production)
    job.zone = zone


def soft_delete(job: Job, now: datetime) -> None:
    state = job.state
    if isinstance(state, Deleted):
        raise InvalidTransitionError(job.id, job.status.value, "delete")
    job.state = Deleted(deleted_at=now, previous=state)
