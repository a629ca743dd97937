from pathlib import Path

import pytest

from schedsim.models import JobSpec
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"job_id":0,"arrival_time":0,"running_time":3,"priority":1},'
                 '{"job_id":1,"arrival_time":1,"running_time":2}]')
    jobs = load_workload(p)
    assert isinstance(jobs[0], JobSpec)
    assert jobs[0].priority == 1
    assert jobs[1].priority == 0
    assert jobs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("job_id,arrival_time,running_time,priority\n0,0,3,1\n1,1,2,\n")
    jobs = load_workload(p)
    assert jobs[0].job_id == 0
    assert jobs[1].running_time == 2
    assert jobs[1].priority == 0


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(ValueError):
        load_workload(p)


def test_invalid_entries_rejected(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"job_id":0,"arrival_time":0}]')
    with pytest.raises(ValueError):
        load_workload(p)

    p.write_text('[{"job_id":0,"arrival_time":0,"running_time":0}]')
    with pytest.raises(ValueError):
        load_workload(p)

    p.write_text('{"job_id":0}')
    with pytest.raises(ValueError):
        load_workload(p)


def test_duplicate_ids_rejected(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("job_id,arrival_time,running_time\n3,0,3\n3,1,2\n")
    with pytest.raises(ValueError):
        load_workload(p)
