"""Read-only views over the system document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..models.domain import Job, JobStatus, SystemData


@dataclass(slots=True)
class ZoneSummary:
    zone: str
    job_count: int
    box_count: int
    value: float


def _matches(job: Job, term: str, customer_names: dict[str, str]) -> bool:
    if not term:
        return True
    customer_name = customer_names.get(job.customer_id, "")
    return any(
        term in field.lower()
        for field in (job.job_number, job.job_name, job.product_size, customer_name)
    )


def search_jobs(
    data: SystemData,
    query: str = "",
    zone: str | None = None,
    statuses: Iterable[JobStatus] = (JobStatus.STORED, JobStatus.PULLED),
) -> list[Job]:
    """Case-insensitive search on job number, name, product size and customer name."""
    wanted = set(statuses)
    term = query.strip().lower()
    customer_names = {customer.id: customer.name for customer in data.customers}
    return [
        job
        for job in data.jobs
        if job.status in wanted
        and (zone is None or job.zone == zone)
        and _matches(job, term, customer_names)
    ]


def search_available_jobs(data: SystemData, query: str = "", zone: str | None = None) -> list[Job]:
    return search_jobs(data, query, zone, statuses=(JobStatus.STORED,))


def list_active_jobs(data: SystemData) -> list[Job]:
    return [job for job in data.jobs if job.status == JobStatus.PULLED]


def stored_counts_by_zone(data: SystemData, zones: Sequence[str]) -> dict[str, int]:
    counts = {zone: 0 for zone in zones}
    for job in data.jobs:
        if job.status == JobStatus.STORED and job.zone in counts:
            counts[job.zone] += 1
    return counts


def zone_summaries(data: SystemData, zones: Sequence[str]) -> list[ZoneSummary]:
    """Job count, box count and box value per zone, over jobs not in the recovery bin."""
    summaries: list[ZoneSummary] = []
    for zone in zones:
        jobs = [job for job in data.jobs if job.status != JobStatus.DELETED and job.zone == zone]
        summaries.append(
            ZoneSummary(
                zone=zone,
                job_count=len(jobs),
                box_count=sum(len(job.boxes) for job in jobs),
                value=sum(job.total_value for job in jobs),
            )
        )
    return summaries
