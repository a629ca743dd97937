from pathlib import Path

import pytest

from schedsim.cli import main


def _workload(tmp_path: Path) -> Path:
    p = tmp_path / "w.json"
    p.write_text('[{"job_id":0,"arrival_time":0,"running_time":5},'
                 '{"job_id":1,"arrival_time":2,"running_time":3}]')
    return p


def test_run_prints_metrics(tmp_path: Path, capsys):
    assert main(["run", "-p", "fcfs", "-w", str(_workload(tmp_path))]) == 0
    out = capsys.readouterr().out
    assert "Per-job metrics" in out
    assert "5.50" in out
    assert "1.50" in out


def test_run_round_robin_needs_quantum(tmp_path: Path, capsys):
    assert main(["run", "-p", "rr", "-w", str(_workload(tmp_path))]) == 1
    assert "quantum" in capsys.readouterr().out


def test_run_missing_workload(tmp_path: Path, capsys):
    assert main(["run", "-p", "sjf", "-w", str(tmp_path / "missing.json")]) == 1
    assert "Error" in capsys.readouterr().out


def test_run_rejects_non_positive_cores(tmp_path: Path):
    with pytest.raises(SystemExit):
        main(["run", "-p", "fcfs", "-w", str(_workload(tmp_path)), "-c", "0"])


def test_unknown_policy_rejected(tmp_path: Path):
    with pytest.raises(SystemExit):
        main(["run", "-p", "lottery", "-w", str(_workload(tmp_path))])


def test_compare_all_policies(tmp_path: Path, capsys):
    assert main(["compare", "-w", str(_workload(tmp_path)), "-c", "2"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
