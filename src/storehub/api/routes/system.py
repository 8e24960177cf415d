"""Whole-document read endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence.sync import StorageSync
from ...schemas.jobs import SystemDataResponse
from ...schemas.records import system_data_to_payload
from ..dependencies import get_storage_sync

router = APIRouter(tags=["system"])


@router.get("/system", response_model=SystemDataResponse, status_code=status.HTTP_200_OK)
def fetch_system_data(sync: StorageSync = Depends(get_storage_sync)) -> SystemDataResponse:
    """The whole system document. Falls back to the local copy when the remote is unavailable."""
    data = sync.fetch()
    return SystemDataResponse(**system_data_to_payload(data), source=data.source.value)
