from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

from .models import Job


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def fcfs(a: Job, b: Job) -> int:
    """
    Always ranks the existing job first, so new jobs go to the rear.
    """
    return -1


def sjf(a: Job, b: Job) -> int:
    """
    Shorter total running time first; earlier arrival breaks ties.
    """
    if a.running_time != b.running_time:
        return _sign(a.running_time - b.running_time)
    return _sign(a.arrival_time - b.arrival_time)


def psjf(a: Job, b: Job) -> int:
    """
    Shorter remaining time first; earlier arrival breaks ties.
    """
    if a.remaining_time != b.remaining_time:
        return _sign(a.remaining_time - b.remaining_time)
    return _sign(a.arrival_time - b.arrival_time)


def pri(a: Job, b: Job) -> int:
    """
    Lower priority value first; earlier arrival breaks ties.
    """
    if a.priority != b.priority:
        return _sign(a.priority - b.priority)
    return _sign(a.arrival_time - b.arrival_time)


def ppri(a: Job, b: Job) -> int:
    return pri(a, b)


def rr(a: Job, b: Job) -> int:
    return -1


class Policy(Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    PSJF = "psjf"
    PRI = "pri"
    PPRI = "ppri"
    RR = "rr"

    @classmethod
    def parse(cls, name: str | "Policy") -> "Policy":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown scheduling policy '{name}' (choose from {choices})") from None

    @property
    def comparator(self) -> Callable[[Job, Job], int]:
        return COMPARATORS[self]

    @property
    def preempts_on_arrival(self) -> bool:
        """
        True when an arriving job may take a core from a running one.

        Round robin preempts too, but only when the driver reports an
        expired quantum.
        """
        return self in (Policy.PSJF, Policy.PPRI)

    @property
    def label(self) -> str:
        return LABELS[self]


COMPARATORS: Dict[Policy, Callable[[Job, Job], int]] = {
    Policy.FCFS: fcfs,
    Policy.SJF: sjf,
    Policy.PSJF: psjf,
    Policy.PRI: pri,
    Policy.PPRI: ppri,
    Policy.RR: rr,
}

LABELS: Dict[Policy, str] = {
    Policy.FCFS: "FCFS",
    Policy.SJF: "SJF (non-preemptive)",
    Policy.PSJF: "PSJF (preemptive SJF)",
    Policy.PRI: "Priority (non-preemptive)",
    Policy.PPRI: "Priority (preemptive)",
    Policy.RR: "Round Robin",
}
