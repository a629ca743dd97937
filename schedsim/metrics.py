from __future__ import annotations

from typing import Dict

from .models import SimulationResult, SystemMetrics


class MetricsAccumulator:
    """
    Running totals of waiting, response and turnaround time over finished jobs.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.total_waiting_time = 0
        self.total_response_time = 0
        self.total_turnaround_time = 0
        self.finished_jobs = 0

    def record(self, arrival_time: int, running_time: int, start_time: int, finish_time: int) -> None:
        self.total_waiting_time += finish_time - arrival_time - running_time
        self.total_response_time += start_time - arrival_time
        self.total_turnaround_time += finish_time - arrival_time
        self.finished_jobs += 1

    def _mean(self, total: int) -> float:
        return total / self.finished_jobs if self.finished_jobs else 0.0

    @property
    def average_waiting_time(self) -> float:
        return self._mean(self.total_waiting_time)

    @property
    def average_response_time(self) -> float:
        return self._mean(self.total_response_time)

    @property
    def average_turnaround_time(self) -> float:
        return self._mean(self.total_turnaround_time)

    def summary(self) -> Dict[str, float]:
        return {
            "avg_waiting": self.average_waiting_time,
            "avg_turnaround": self.average_turnaround_time,
            "avg_response": self.average_response_time,
        }


def compute_system_metrics(result: SimulationResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-job metrics
    and timeline slices. Utilization is measured over every core.
    """
    if not result.jobs:
        system = SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(j.completion_time for j in result.jobs)
    cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in result.timeline)
    capacity = makespan * result.cores

    throughput = len(result.jobs) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / capacity if capacity > 0 else 0.0

    # A job counts as starved when it waited more than twice the average.
    avg_wait = sum(j.waiting_time for j in result.jobs) / len(result.jobs)
    starvation_count = sum(1 for j in result.jobs if j.waiting_time > 2 * avg_wait)

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        starvation_count=starvation_count,
    )
    result.system = system
    return system
