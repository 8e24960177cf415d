"""Pydantic request/response models for job, recovery and system endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import settings
from ..models.domain import Box
from ..services.jobs import JobDraft
from .records import BoxRecord, SystemDocument


def _check_zone(value: str) -> str:
    if value not in settings.zones:
        raise ValueError(f"zone must be one of {', '.join(settings.zones)}")
    return value


class BoxInput(BaseModel):
    id: Optional[str] = Field(default=None, description="Existing box id; generated when omitted.")
    boxNumber: str = Field(default="", description="Display label; generated when blank.")
    color: str = ""
    boxSize: str = ""
    price: float = Field(default=0.0, ge=0.0)
    contents: str = ""
    hasIssue: bool = False
    issueNote: Optional[str] = None

    def to_domain(self) -> Box:
        return Box(
            id=self.id or "",
            box_number=self.boxNumber,
            color=self.color,
            box_size=self.boxSize,
            price=self.price,
            contents=self.contents,
            has_issue=self.hasIssue,
            issue_note=self.issueNote,
        )


class JobInput(BaseModel):
    jobName: str
    productSize: str
    customerId: str
    zone: str = Field(default_factory=lambda: settings.zones[0])
    boxes: List[BoxInput]

    @field_validator("zone")
    @classmethod
    def validate_zone(cls, value: str) -> str:
        return _check_zone(value)

    def to_draft(self) -> JobDraft:
        return JobDraft(
            job_name=self.jobName,
            product_size=self.productSize,
            customer_id=self.customerId,
            zone=self.zone,
            boxes=[box.to_domain() for box in self.boxes],
        )


class PullRequest(BaseModel):
    line: int = Field(..., description="Production line receiving the job.")

    @field_validator("line")
    @classmethod
    def validate_line(cls, value: int) -> int:
        if value not in settings.production_lines:
            raise ValueError(f"line must be one of {', '.join(str(line) for line in settings.production_lines)}")
        return value


class ReturnRequest(BaseModel):
    zone: str = Field(..., description="Zone the job is stored in after the operation.")

    @field_validator("zone")
    @classmethod
    def validate_zone(cls, value: str) -> str:
        return _check_zone(value)


class IssueRequest(BaseModel):
    note: Optional[str] = Field(default=None, description="Required when flagging a clear box.")


class ZoneSummaryModel(BaseModel):
    zone: str
    jobCount: int
    boxCount: int
    value: float
    storedCount: int


class RecoveryItemModel(BaseModel):
    jobId: str
    jobNumber: str
    box: BoxRecord


class PermanentDeleteResponse(BaseModel):
    jobId: str
    boxId: str
    jobRemoved: bool


class SystemDataResponse(SystemDocument):
    source: str
