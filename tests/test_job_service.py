import pytest

from storehub.errors import InvalidTransitionError, JobNotFoundError, PersistenceError, ValidationError
from storehub.models.domain import Box, JobStatus
from storehub.services.customers import CustomerService
from storehub.services.jobs import JobDraft, JobService


def _box(bid: str, price: float = 100.0) -> Box:
    return Box(id=bid, box_number=f"BX-{bid}", color="red", box_size="20x20x20", price=price, contents="flyers")


@pytest.fixture
def customer(sync, clock):
    return CustomerService(sync, clock=clock).create_customer("Acme Printing", "02-555-0100")


@pytest.fixture
def service(sync, clock) -> JobService:
    return JobService(sync, clock=clock)


def _draft(customer_id: str, zone: str = "A", boxes=None) -> JobDraft:
    return JobDraft(
        job_name="Spring catalogue",
        product_size="A4",
        customer_id=customer_id,
        zone=zone,
        boxes=boxes if boxes is not None else [_box("b1"), _box("b2")],
    )


def test_pull_and_return_scenario(service, customer, fake_supabase):
    job = service.create_job(_draft(customer.id, zone="A"))
    assert job.status == JobStatus.STORED

    pulled = service.pull_job(job.id, 3)
    assert pulled.status == JobStatus.PULLED
    assert pulled.line_production == 3
    assert pulled.pulled_at is not None

    returned = service.return_job(job.id, "C")
    assert returned.status == JobStatus.STORED
    assert returned.zone == "C"
    assert returned.returned_at is not None
    assert returned.line_production == 3

    record = fake_supabase.document()["jobs"][0]
    assert record["status"] == "stored"
    assert record["zone"] == "C"
    assert record["lineProduction"] == 3
    assert "returnedAt" in record and "pulledAt" in record


def test_create_job_without_boxes_does_not_touch_storage(service, customer, fake_supabase):
    writes_before = fake_supabase.writes

    with pytest.raises(ValidationError):
        service.create_job(_draft(customer.id, boxes=[]))

    assert fake_supabase.writes == writes_before
    assert fake_supabase.document()["jobs"] == []


def test_create_job_for_unknown_customer_is_rejected(service, customer, fake_supabase):
    writes_before = fake_supabase.writes

    with pytest.raises(ValidationError, match="does not exist"):
        service.create_job(_draft("CUST-MISSING"))

    assert fake_supabase.writes == writes_before


def test_edit_job_revalidates_and_keeps_timestamps(service, customer):
    job = service.create_job(_draft(customer.id))

    with pytest.raises(ValidationError):
        service.edit_job(job.id, JobDraft(job_name="", product_size="A4", customer_id=customer.id, zone="A", boxes=[_box("b1")]))

    edited = service.edit_job(job.id, _draft(customer.id, zone="F", boxes=[_box("b3", price=20)]))

    assert edited.zone == "F"
    assert edited.created_at == job.created_at
    assert edited.job_number == job.job_number
    assert [box.id for box in edited.boxes] == ["b3"]


def test_invalid_transition_is_not_persisted(service, customer, fake_supabase):
    job = service.create_job(_draft(customer.id))
    writes_before = fake_supabase.writes

    with pytest.raises(InvalidTransitionError):
        service.return_job(job.id, "B")

    assert fake_supabase.writes == writes_before
    assert fake_supabase.document()["jobs"][0]["zone"] == "A"


def test_unknown_job_raises_not_found(service, customer):
    with pytest.raises(JobNotFoundError):
        service.pull_job("missing", 1)


def test_soft_delete_allows_active_jobs(service, customer):
    job = service.create_job(_draft(customer.id))
    service.pull_job(job.id, 2)

    deleted = service.soft_delete_job(job.id)

    assert deleted.status == JobStatus.DELETED
    assert deleted.deleted_at is not None
    assert len(deleted.boxes) == 2


def test_persist_failure_propagates(service, customer, fake_supabase):
    job = service.create_job(_draft(customer.id))
    fake_supabase.fail_writes = True

    with pytest.raises(PersistenceError):
        service.pull_job(job.id, 1)

    fake_supabase.fail_writes = False
    assert service.fetch_system_data().find_job(job.id).status == JobStatus.STORED


def test_every_stored_job_has_a_valid_status_and_consistent_issue_fields(service, customer):
    first = service.create_job(_draft(customer.id))
    second = service.create_job(_draft(customer.id, zone="B"))
    service.pull_job(first.id, 4)
    service.soft_delete_job(second.id)

    data = service.fetch_system_data()

    for job in data.jobs:
        assert job.status in {JobStatus.STORED, JobStatus.PULLED, JobStatus.DELETED}
        for box in job.boxes:
            assert (box.issue_note is not None) == box.has_issue
