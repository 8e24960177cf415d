"""Job lifecycle endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...config import settings
from ...errors import StorehubError
from ...schemas.jobs import (
    IssueRequest,
    JobInput,
    PullRequest,
    ReturnRequest,
    ZoneSummaryModel,
)
from ...schemas.records import BoxRecord, JobRecord, box_to_record, job_to_record
from ...services.issues import IssueService
from ...services.jobs import JobService
from ...services.queries import (
    list_active_jobs,
    search_available_jobs,
    search_jobs,
    stored_counts_by_zone,
    zone_summaries,
)
from ..dependencies import get_issue_service, get_job_service
from ..errors import http_error

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=List[JobRecord], status_code=status.HTTP_200_OK)
def list_jobs(
    q: str = Query(default="", description="Search job number, name, product size or customer name"),
    service: JobService = Depends(get_job_service),
) -> List[JobRecord]:
    """Jobs not in the recovery bin, for editing."""
    data = service.fetch_system_data()
    return [job_to_record(job) for job in search_jobs(data, q)]


@router.get("/available", response_model=List[JobRecord], status_code=status.HTTP_200_OK)
def list_available_jobs(
    q: str = Query(default="", description="Search job number, name, product size or customer name"),
    zone: str | None = Query(default=None, description="Optional zone filter"),
    service: JobService = Depends(get_job_service),
) -> List[JobRecord]:
    data = service.fetch_system_data()
    return [job_to_record(job) for job in search_available_jobs(data, q, zone)]


@router.get("/active", response_model=List[JobRecord], status_code=status.HTTP_200_OK)
def list_active(service: JobService = Depends(get_job_service)) -> List[JobRecord]:
    data = service.fetch_system_data()
    return [job_to_record(job) for job in list_active_jobs(data)]


@router.get("/zones/summary", response_model=List[ZoneSummaryModel], status_code=status.HTTP_200_OK)
def get_zone_summary(service: JobService = Depends(get_job_service)) -> List[ZoneSummaryModel]:
    data = service.fetch_system_data()
    stored = stored_counts_by_zone(data, settings.zones)
    return [
        ZoneSummaryModel(
            zone=summary.zone,
            jobCount=summary.job_count,
            boxCount=summary.box_count,
            value=summary.value,
            storedCount=stored[summary.zone],
        )
        for summary in zone_summaries(data, settings.zones)
    ]


@router.post("", response_model=JobRecord, status_code=status.HTTP_201_CREATED)
def create_job(payload: JobInput, service: JobService = Depends(get_job_service)) -> JobRecord:
    try:
        job = service.create_job(payload.to_draft())
    except StorehubError as exc:
        raise http_error(exc) from exc
    return job_to_record(job)


@router.put("/{job_id}", response_model=JobRecord, status_code=status.HTTP_200_OK)
def edit_job(job_id: str, payload: JobInput, service: JobService = Depends(get_job_service)) -> JobRecord:
    try:
        job = service.edit_job(job_id, payload.to_draft())
    except StorehubError as exc:
        raise http_error(exc) from exc
    return job_to_record(job)


@router.post("/{job_id}/pull", response_model=JobRecord, status_code=status.HTTP_200_OK)
def pull_job(job_id: str, payload: PullRequest, service: JobService = Depends(get_job_service)) -> JobRecord:
    try:
        job = service.pull_job(job_id, payload.line)
    except StorehubError as exc:
        raise http_error(exc) from exc
    return job_to_record(job)


@router.post("/{job_id}/return", response_model=JobRecord, status_code=status.HTTP_200_OK)
def return_job(job_id: str, payload: ReturnRequest, service: JobService = Depends(get_job_service)) -> JobRecord:
    try:
        job = service.return_job(job_id, payload.zone)
    except StorehubError as exc:
        raise http_error(exc) from exc
    return job_to_record(job)


@router.delete("/{job_id}", response_model=JobRecord, status_code=status.HTTP_200_OK)
def soft_delete_job(job_id: str, service: JobService = Depends(get_job_service)) -> JobRecord:
    try:
        job = service.soft_delete_job(job_id)
    except StorehubError as exc:
        raise http_error(exc) from exc
    return job_to_record(job)


@router.post("/{job_id}/boxes/{box_id}/issue", response_model=BoxRecord, status_code=status.HTTP_200_OK)
def toggle_box_issue(
    job_id: str,
    box_id: str,
    payload: IssueRequest,
    service: IssueService = Depends(get_issue_service),
) -> BoxRecord:
    """Flag a clear box with the given note, or clear a flagged one."""
    try:
        box = service.toggle_box_issue(job_id, box_id, payload.note)
    except StorehubError as exc:
        raise http_error(exc) from exc
    return box_to_record(box)
