"""Job lifecycle operations composed as fetch -> change -> persist."""

from __future__ import annotations

import logging

from ...errors import ValidationError
from ...models.domain import Job, SystemData
from ..base import DocumentService, require_job
from . import rules
from .rules import JobDraft

logger = logging.getLogger(__name__)


class JobService(DocumentService):
    def fetch_system_data(self) -> SystemData:
        return self.sync.fetch()

    def create_job(self, draft: JobDraft) -> Job:
        boxes = rules.validate_draft(draft)

        def change(data: SystemData) -> Job:
            if data.find_customer(draft.customer_id) is None:
                raise ValidationError(f"Customer '{draft.customer_id}' does not exist")
            job = rules.new_job(draft, boxes, self.clock())
            data.jobs.append(job)
            return job

        job = self.mutate(change)
        logger.info(f"Created job {job.job_number} with {len(job.boxes)} boxes in zone {job.zone}")
        return job

    def edit_job(self, job_id: str, draft: JobDraft) -> Job:
        boxes = rules.validate_draft(draft)

        def change(data: SystemData) -> Job:
            job = require_job(data, job_id)
            rules.apply_edit(job, draft, boxes)
            return job

        job = self.mutate(change)
        logger.info(f"Edited job {job.job_number}")
        return job

    def pull_job(self, job_id: str, line: int) -> Job:
        def change(data: SystemData) -> Job:
            job = require_job(data, job_id)
            rules.pull(job, line, self.clock())
            return job

        job = self.mutate(change)
        logger.info(f"Pulled job {job.job_number} to line {line}")
        return job

    def return_job(self, job_id: str, zone: str) -> Job:
        def change(data: SystemData) -> Job:
            job = require_job(data, job_id)
            rules.return_to_zone(job, zone, self.clock())
            return job

        job = self.mutate(change)
        logger.info(f"Returned job {job.job_number} to zone {zone}")
        return job

    def soft_delete_job(self, job_id: str) -> Job:
        def change(data: SystemData) -> Job:
            job = require_job(data, job_id)
            rules.soft_delete(job, self.clock())
            return job

        job = self.mutate(change)
        logger.info(f"Moved job {job.job_number} to the recovery bin")
        return job
