"""Synchronization layer: the only read/write path to the system document.

Reads go to Supabase first and fall back to the local JSON copy, then to an
empty document. Writes replace the whole remote document and only refresh the
local copy once the remote write succeeded. In local mode the JSON file is
the store itself.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as RecordValidationError

from ..config import settings
from ..errors import PersistenceError
from ..models.domain import DataSource, SystemData
from ..schemas.records import system_data_from_payload, system_data_to_payload
from .filesystem import FileStorage
from .remote import SupabaseDocumentStore

logger = logging.getLogger(__name__)


class StorageSync:
    def __init__(
        self,
        remote: SupabaseDocumentStore | None = None,
        local: FileStorage | None = None,
        mode: str | None = None,
    ) -> None:
        self.mode = mode or settings.storage_mode
        self.local = local or FileStorage()
        if self.mode == "local":
            self.remote = None
        else:
            self.remote = remote or SupabaseDocumentStore()

    def fetch(self) -> SystemData:
        """Return the current system data. Never raises."""
        if self.remote is None:
            return self._read_local(DataSource.LOCAL)

        try:
            payload = self.remote.load()
            data = system_data_from_payload(payload, DataSource.REMOTE)
        except RecordValidationError as exc:
            logger.warning(f"Remote document is malformed, using local copy: {exc}")
            return self._read_local(DataSource.CACHE)
        except Exception as exc:
            # httpx errors, missing credentials and postgrest API errors alike
            logger.warning(f"Remote store unreachable, using local copy: {exc}")
            return self._read_local(DataSource.CACHE)

        try:
            self.local.write_json(system_data_to_payload(data))
        except OSError as exc:
            logger.warning(f"Could not refresh local copy at {self.local.path}: {exc}")
        return data

    def _read_local(self, source: DataSource) -> SystemData:
        try:
            payload = self.local.read_json()
        except (OSError, ValueError) as exc:
            # ValueError covers both bad JSON and bytes that are not UTF-8
            logger.warning(f"Local copy at {self.local.path} is unreadable: {exc}")
            payload = None

        if payload is None:
            return SystemData(source=DataSource.EMPTY)

        try:
            return system_data_from_payload(payload, source)
        except RecordValidationError as exc:
            logger.warning(f"Local copy at {self.local.path} is malformed: {exc}")
            return SystemData(source=DataSource.EMPTY)

    def persist(self, data: SystemData) -> None:
        """Write the whole document. Raises ``PersistenceError`` if the durable write fails."""
        payload = system_data_to_payload(data)

        if self.remote is not None:
            try:
                self.remote.save(payload)
            except Exception as exc:
                logger.error(f"Failed to save system data to remote store: {exc}")
                raise PersistenceError(f"Failed to save system data: {exc}") from exc

        try:
            self.local.write_json(payload)
        except OSError as exc:
            if self.remote is None:
                logger.error(f"Failed to save system data to {self.local.path}: {exc}")
                raise PersistenceError(f"Failed to save system data: {exc}") from exc
            logger.warning(f"Saved remotely but could not refresh local copy at {self.local.path}: {exc}")

        logger.info(f"Saved system data ({len(data.jobs)} jobs, {len(data.customers)} customers)")

    def delete_customer(self, customer_id: str) -> bool:
        """Remove a customer record. Jobs referencing it are left as they are."""
        data = self.fetch()
        remaining = [customer for customer in data.customers if customer.id != customer_id]
        if len(remaining) == len(data.customers):
            return False
        data.customers = remaining
        self.persist(data)
        return True
