from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, List

from .models import JobSpec


def load_workload(path: str | Path) -> List[JobSpec]:
    """
    Load a workload from a JSON or CSV file into a list of JobSpec objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        jobs = _load_json(path)
    elif suffix == ".csv":
        jobs = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    _check_unique_ids(jobs)
    return jobs


def _load_json(path: Path) -> List[JobSpec]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise ValueError("JSON workload must be a list of job objects")

    return [_job_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[JobSpec]:
    jobs: List[JobSpec] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            jobs.append(_job_from_mapping(row))
    return jobs


def _job_from_mapping(mapping) -> JobSpec:
    try:
        job_id = int(mapping["job_id"])
        arrival_time = int(mapping["arrival_time"])
        running_time = int(mapping["running_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid job entry: {mapping!r}") from exc

    if arrival_time < 0 or running_time <= 0:
        raise ValueError(f"Invalid job entry: {mapping!r} (need arrival_time >= 0 and running_time > 0)")

    priority_val = mapping.get("priority")
    try:
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid priority in job entry: {mapping!r}") from exc

    return JobSpec(
        job_id=job_id,
        arrival_time=arrival_time,
        running_time=running_time,
        priority=priority,
    )


def _check_unique_ids(jobs: List[JobSpec]) -> None:
    seen = set()
    for job in jobs:
        if job.job_id in seen:
            raise ValueError(f"Duplicate job id {job.job_id} in workload")
        seen.add(job.job_id)
