"""FastAPI dependencies wiring the services to one storage sync instance."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from ..persistence.sync import StorageSync
from ..services.customers import CustomerService
from ..services.issues import IssueService
from ..services.jobs import JobService
from ..services.recovery import RecoveryService


@lru_cache()
def get_storage_sync() -> StorageSync:
    return StorageSync()


def get_job_service(sync: StorageSync = Depends(get_storage_sync)) -> JobService:
    return JobService(sync)


def get_issue_service(sync: StorageSync = Depends(get_storage_sync)) -> IssueService:
    return IssueService(sync)


def get_recovery_service(sync: StorageSync = Depends(get_storage_sync)) -> RecoveryService:
    return RecoveryService(sync)


def get_customer_service(sync: StorageSync = Depends(get_storage_sync)) -> CustomerService:
    return CustomerService(sync)
