"""Recovery bin: permanent removal of boxes and jobs that were soft-deleted."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import BoxNotFoundError, InvalidTransitionError
from ..models.domain import Box, Job, JobStatus, SystemData
from .base import DocumentService, require_job

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecoveryItem:
    job_id: str
    job_number: str
    box: Box


def _require_deleted(job: Job, operation: str) -> None:
    if job.status != JobStatus.DELETED:
        raise InvalidTransitionError(job.id, job.status.value, operation)


def prune_empty_jobs(data: SystemData) -> list[Job]:
    """Remove every job whose box list is empty. Returns the removed jobs."""
    removed = [job for job in data.jobs if not job.boxes]
    if removed:
        data.jobs = [job for job in data.jobs if job.boxes]
    return removed


def remove_box(data: SystemData, job_id: str, box_id: str) -> list[Job]:
    """Drop one box from a deleted job, then enforce the no-empty-jobs rule."""
    job = require_job(data, job_id)
    _require_deleted(job, "permanently delete a box of")
    if job.find_box(box_id) is None:
        raise BoxNotFoundError(job_id, box_id)
    job.boxes = [box for box in job.boxes if box.id != box_id]
    return prune_empty_jobs(data)


def list_recovery_items(data: SystemData, query: str = "") -> list[RecoveryItem]:
    term = query.strip().lower()
    items: list[RecoveryItem] = []
    for job in data.jobs:
        if job.status != JobStatus.DELETED:
            continue
        for box in job.boxes:
            if (
                term in box.box_number.lower()
                or term in job.job_number.lower()
                or (box.box_size and term in box.box_size.lower())
            ):
                items.append(RecoveryItem(job_id=job.id, job_number=job.job_number, box=box))
    return items


class RecoveryService(DocumentService):
    def permanently_delete_box(self, job_id: str, box_id: str) -> bool:
        """Delete a box for good. Returns True when the job went with it."""
        removed_jobs = self.mutate(lambda data: remove_box(data, job_id, box_id))
        logger.info(f"Permanently deleted box {box_id} of job {job_id}")
        for job in removed_jobs:
            logger.info(f"Job {job.job_number} had no boxes left and was removed")
        return any(job.id == job_id for job in removed_jobs)

    def purge_job(self, job_id: str) -> None:
        def change(data: SystemData) -> Job:
            job = require_job(data, job_id)
            _require_deleted(job, "purge")
            data.jobs = [other for other in data.jobs if other.id != job_id]
            return job

        job = self.mutate(change)
        logger.info(f"Permanently deleted job {job.job_number} with {len(job.boxes)} boxes")
