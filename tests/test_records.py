import logging
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as RecordValidationError

from storehub.models.domain import Box, DataSource, Deleted, Job, JobStatus, Pulled, Stored, SystemData
from storehub.schemas.records import (
    format_timestamp,
    system_data_from_payload,
    system_data_to_payload,
)


def _job_record(**overrides) -> dict:
    record = {
        "id": "j1",
        "jobNumber": "JOB-000001",
        "jobName": "Spring catalogue",
        "productSize": "A4",
        "customerId": "CUST-1",
        "zone": "A",
        "status": "stored",
        "boxes": [
            {"id": "b1", "boxNumber": "BX-1001", "color": "red", "boxSize": "20x20x20", "price": 150, "contents": "flyers"}
        ],
        "createdAt": "2026-01-05T08:00:00.000Z",
    }
    record.update(overrides)
    return record


def test_format_timestamp_uses_milliseconds_and_z_suffix():
    value = datetime(2026, 1, 5, 8, 30, 15, 123456, tzinfo=timezone.utc)
    assert format_timestamp(value) == "2026-01-05T08:30:15.123Z"


def test_returned_status_is_read_as_stored(caplog):
    payload = {"jobs": [_job_record(status="returned", returnedAt="2026-01-06T10:00:00.000Z")], "customers": []}

    with caplog.at_level(logging.WARNING):
        data = system_data_from_payload(payload, DataSource.REMOTE)

    job = data.jobs[0]
    assert job.status == JobStatus.STORED
    assert isinstance(job.state, Stored)
    assert job.returned_at == datetime(2026, 1, 6, 10, 0, tzinfo=timezone.utc)
    assert "vestigial" in caplog.text


def test_deleted_job_pulled_after_last_return_remembers_the_line():
    payload = {
        "jobs": [
            _job_record(
                status="deleted",
                pulledAt="2026-01-07T09:00:00.000Z",
                returnedAt="2026-01-06T10:00:00.000Z",
                lineProduction=4,
                deletedAt="2026-01-07T12:00:00.000Z",
            )
        ],
        "customers": [],
    }

    job = system_data_from_payload(payload, DataSource.REMOTE).jobs[0]

    assert isinstance(job.state, Deleted)
    assert isinstance(job.state.previous, Pulled)
    assert job.line_production == 4
    assert job.deleted_at == datetime(2026, 1, 7, 12, 0, tzinfo=timezone.utc)


def test_pulled_record_without_line_is_kept(caplog):
    payload = {"jobs": [_job_record(status="pulled", pulledAt="2026-01-07T09:00:00.000Z")], "customers": []}

    with caplog.at_level(logging.WARNING):
        data = system_data_from_payload(payload, DataSource.REMOTE)

    job = data.jobs[0]
    assert isinstance(job.state, Pulled)
    assert job.line_production is None
    assert "no pulledAt or lineProduction" in caplog.text

    record = system_data_to_payload(data)["jobs"][0]
    assert record["status"] == "pulled"
    assert record["pulledAt"] == "2026-01-07T09:00:00.000Z"
    assert "lineProduction" not in record


def test_record_missing_required_field_is_rejected():
    record = _job_record()
    del record["jobName"]

    with pytest.raises(RecordValidationError):
        system_data_from_payload({"jobs": [record], "customers": []}, DataSource.REMOTE)


def test_payload_keeps_history_and_omits_unset_fields():
    created = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)
    job = Job(
        id="j1",
        job_number="JOB-000001",
        job_name="Spring catalogue",
        product_size="A4",
        customer_id="CUST-1",
        zone="C",
        boxes=[
            Box(id="b1", box_number="BX-1001", color="red", box_size="20x20x20", price=150.0, contents="flyers"),
            Box(
                id="b2",
                box_number="BX-1002",
                color="blue",
                box_size="30x30x30",
                price=90.0,
                contents="posters",
                has_issue=True,
                issue_note="torn corner",
            ),
        ],
        created_at=created,
        state=Stored(pulled_at=created, returned_at=created, line_production=3),
    )

    payload = system_data_to_payload(SystemData(jobs=[job]))
    record = payload["jobs"][0]

    assert record["status"] == "stored"
    assert record["lineProduction"] == 3
    assert record["returnedAt"] == "2026-01-05T08:00:00.000Z"
    assert "deletedAt" not in record
    assert "issueNote" not in record["boxes"][0]
    assert record["boxes"][0]["hasIssue"] is False
    assert record["boxes"][1]["issueNote"] == "torn corner"


def test_note_on_unflagged_box_is_dropped_when_loading():
    record = _job_record()
    record["boxes"][0]["issueNote"] = "left over"

    box = system_data_from_payload({"jobs": [record]}, DataSource.REMOTE).jobs[0].boxes[0]

    assert box.has_issue is False
    assert box.issue_note is None
