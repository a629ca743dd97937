from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class JobSpec:
    """
    One job of a workload, as handed to the driver.
    """

    job_id: int
    arrival_time: int
    running_time: int
    priority: int = 0


@dataclass(eq=False)
class Job:
    """
    A job owned by the scheduler engine from arrival until it finishes.

    ``core`` is None while the job is waiting. ``start_time`` is the first
    dispatch time (None until the job actually runs) and ``last_updated`` is
    the last time ``remaining_time`` was brought up to date.
    """

    job_id: int
    arrival_time: int
    running_time: int
    priority: int
    remaining_time: int
    core: Optional[int] = None
    start_time: Optional[int] = None
    last_updated: Optional[int] = None

    @property
    def running(self) -> bool:
        return self.core is not None


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a job on a core.
    """

    job_id: int
    core: int
    start_time: int
    end_time: int


@dataclass
class JobMetrics:
    job_id: int
    arrival_time: int
    running_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    starvation_count: int = 0


@dataclass
class SimulationResult:
    policy: str
    cores: int
    quantum: Optional[int]
    jobs: List[JobMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    averages: Dict[str, float] = field(default_factory=dict)
    system: Optional[SystemMetrics] = None
