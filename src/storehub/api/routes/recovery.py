"""Recovery bin endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...errors import StorehubError
from ...schemas.jobs import PermanentDeleteResponse, RecoveryItemModel
from ...schemas.records import box_to_record
from ...services.recovery import RecoveryService, list_recovery_items
from ..dependencies import get_recovery_service
from ..errors import http_error

router = APIRouter(prefix="/recovery", tags=["recovery"])


@router.get("", response_model=List[RecoveryItemModel], status_code=status.HTTP_200_OK)
def list_items(
    q: str = Query(default="", description="Search box number, job number or box size"),
    service: RecoveryService = Depends(get_recovery_service),
) -> List[RecoveryItemModel]:
    data = service.sync.fetch()
    return [
        RecoveryItemModel(jobId=item.job_id, jobNumber=item.job_number, box=box_to_record(item.box))
        for item in list_recovery_items(data, q)
    ]


@router.delete(
    "/{job_id}/boxes/{box_id}",
    response_model=PermanentDeleteResponse,
    status_code=status.HTTP_200_OK,
)
def permanently_delete_box(
    job_id: str,
    box_id: str,
    service: RecoveryService = Depends(get_recovery_service),
) -> PermanentDeleteResponse:
    try:
        job_removed = service.permanently_delete_box(job_id, box_id)
    except StorehubError as exc:
        raise http_error(exc) from exc
    return PermanentDeleteResponse(jobId=job_id, boxId=box_id, jobRemoved=job_removed)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def purge_job(job_id: str, service: RecoveryService = Depends(get_recovery_service)) -> None:
    try:
        service.purge_job(job_id)
    except StorehubError as exc:
        raise http_error(exc) from exc
