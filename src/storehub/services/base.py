"""Read-modify-write helper shared by the services that change the system document."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, TypeVar

from ..errors import JobNotFoundError
from ..models.domain import DataSource, Job, SystemData, utc_now
from ..persistence.sync import StorageSync

logger = logging.getLogger(__name__)

T = TypeVar("T")

# One document, one writer per process. Other processes still race (last writer wins).
_write_lock = threading.Lock()


class DocumentService:
    def __init__(self, sync: StorageSync | None = None, clock: Callable[[], datetime] = utc_now) -> None:
        self.sync = sync or StorageSync()
        self.clock = clock

    def locked(self) -> threading.Lock:
        return _write_lock

    def mutate(self, change: Callable[[SystemData], T]) -> T:
        """Fetch the document, apply ``change`` to it and persist the result.

        If ``change`` raises, nothing is written.
        """
        with self.locked():
            data = self.sync.fetch()
            if data.source in (DataSource.CACHE, DataSource.EMPTY) and self.sync.remote is not None:
                logger.warning(
                    f"Writing over {data.source.value} data; remote changes since the last successful read will be lost"
                )
            result = change(data)
            self.sync.persist(data)
            return result


def require_job(data: SystemData, job_id: str) -> Job:
    job = data.find_job(job_id)
    if job is None:
        raise JobNotFoundError(job_id)
    return job
