"""Per-box issue flags raised while a job is on a production line.

The parent job's status is not checked; flagging a box on a stored job is allowed.
"""

from __future__ import annotations

import logging

from ..errors import BoxNotFoundError, ValidationError
from ..models.domain import Box, Job, SystemData
from .base import DocumentService, require_job

logger = logging.getLogger(__name__)


def _require_box(job: Job, box_id: str) -> Box:
    box = job.find_box(box_id)
    if box is None:
        raise BoxNotFoundError(job.id, box_id)
    return box


def flag_box(box: Box, note: str | None) -> None:
    if note is None or not note.strip():
        raise ValidationError("An issue note is required to flag a box")
    box.has_issue = True
    box.issue_note = note.strip()


def clear_box(box: Box) -> None:
    box.has_issue = False
    box.issue_note = None


class IssueService(DocumentService):
    def flag_box_issue(self, job_id: str, box_id: str, note: str) -> Box:
        if note is None or not note.strip():
            raise ValidationError("An issue note is required to flag a box")

        def change(data: SystemData) -> Box:
            box = _require_box(require_job(data, job_id), box_id)
            flag_box(box, note)
            return box

        box = self.mutate(change)
        logger.info(f"Flagged box {box.box_number} of job {job_id}: {box.issue_note}")
        return box

    def clear_box_issue(self, job_id: str, box_id: str) -> Box:
        def change(data: SystemData) -> Box:
            box = _require_box(require_job(data, job_id), box_id)
            clear_box(box)
            return box

        box = self.mutate(change)
        logger.info(f"Cleared issue on box {box.box_number} of job {job_id}")
        return box

    def toggle_box_issue(self, job_id: str, box_id: str, note: str | None = None) -> Box:
        """Clear a flagged box, or flag a clear one with ``note``."""

        def change(data: SystemData) -> Box:
            box = _require_box(require_job(data, job_id), box_id)
            if box.has_issue:
                clear_box(box)
            else:
                flag_box(box, note)
            return box

        box = self.mutate(change)
        if box.has_issue:
            logger.info(f"Flagged box {box.box_number} of job {job_id}: {box.issue_note}")
        else:
            logger.info(f"Cleared issue on box {box.box_number} of job {job_id}")
        return box
