import copy
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx
import pytest

from storehub.persistence.filesystem import FileStorage
from storehub.persistence.remote import SupabaseDocumentStore
from storehub.persistence.sync import StorageSync


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Just enough of the postgrest query builder for the document store."""

    def __init__(self, backend: "FakeSupabase", table: str) -> None:
        self.backend = backend
        self.table = table
        self.operation = None
        self.columns = "*"
        self.filters: dict = {}
        self.payload = None

    def select(self, columns):
        self.operation = "select"
        self.columns = columns
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def limit(self, count):
        return self

    def upsert(self, row):
        self.operation = "upsert"
        self.payload = row
        return self

    def execute(self):
        rows = self.backend.tables.setdefault(self.table, {})
        if self.operation == "select":
            if self.backend.fail_reads:
                raise httpx.ConnectError("network is unreachable")
            row = rows.get(self.filters.get("id"))
            if row is None:
                return FakeResponse([])
            return FakeResponse([{self.columns: copy.deepcopy(row[self.columns])}])
        if self.operation == "upsert":
            if self.backend.fail_writes:
                raise httpx.ReadTimeout("timed out")
            self.backend.writes += 1
            rows[self.payload["id"]] = {
                "id": self.payload["id"],
                "data": copy.deepcopy(self.payload["data"]),
                "updated_at": f"2026-01-01T00:00:{self.backend.writes:02d}+00:00",
            }
            return FakeResponse([self.payload])
        raise AssertionError(f"unexpected operation {self.operation}")


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, dict] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def table(self, name):
        return FakeQuery(self, name)

    def document(self, table: str = "system_data", document_id: str = "main"):
        row = self.tables.get(table, {}).get(document_id)
        return row["data"] if row else None

    def seed(self, data, table: str = "system_data", document_id: str = "main") -> None:
        self.tables.setdefault(table, {})[document_id] = {
            "id": document_id,
            "data": copy.deepcopy(data),
            "updated_at": "2026-01-01T00:00:00+00:00",
        }


class FakeClock:
    def __init__(self) -> None:
        self.current = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def local_storage(tmp_path: Path) -> FileStorage:
    return FileStorage(root=tmp_path)


@pytest.fixture
def sync(fake_supabase: FakeSupabase, local_storage: FileStorage) -> StorageSync:
    remote = SupabaseDocumentStore(client=fake_supabase, table="system_data", document_id="main")
    return StorageSync(remote=remote, local=local_storage, mode="supabase")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
