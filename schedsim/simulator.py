"""
Discrete-event driver for the scheduler engine.

Time advances in whole units. At every instant the driver reports, in order,
completions, round-robin quantum expirations and arrivals to the engine, then
lets each busy core run its job for one unit.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .engine import Scheduler
from .metrics import compute_system_metrics
from .models import JobMetrics, JobSpec, ScheduledSlice, SimulationResult
from .policies import Policy

logger = logging.getLogger(__name__)

DEFAULT_CORES = 1
DEFAULT_QUANTUM = 2


def simulate(
    jobs: Sequence[JobSpec],
    policy: Policy | str,
    cores: int = DEFAULT_CORES,
    quantum: Optional[int] = None,
) -> SimulationResult:
    """
    Run ``jobs`` through a fresh scheduler and collect per-job and system metrics.
    """
    policy = Policy.parse(policy)
    if policy is Policy.RR and (quantum is None or quantum <= 0):
        raise ValueError("Round Robin requires a positive quantum (use --quantum)")

    seen: set[int] = set()
    for spec in jobs:
        if spec.job_id in seen:
            raise ValueError(f"Duplicate job id {spec.job_id} in workload")
        if spec.running_time <= 0:
            raise ValueError(f"Job {spec.job_id} must have a positive running time")
        seen.add(spec.job_id)

    # Stable sort: simultaneous arrivals are reported in workload order.
    pending = sorted(jobs, key=lambda j: j.arrival_time)
    specs = {j.job_id: j for j in jobs}

    remaining: Dict[int, int] = {}
    first_run: Dict[int, int] = {}
    completion: Dict[int, int] = {}
    running: List[Optional[int]] = [None] * cores
    slice_start: List[int] = [0] * cores
    timeline: List[ScheduledSlice] = []

    def start(core: int, job_id: Optional[int], now: int) -> None:
        running[core] = job_id
        slice_start[core] = now

    def stop(core: int, now: int) -> None:
        job_id = running[core]
        if job_id is not None and now > slice_start[core]:
            timeline.append(ScheduledSlice(job_id=job_id, core=core, start_time=slice_start[core], end_time=now))
        running[core] = None

    scheduler = Scheduler(cores, policy)
    try:
        time = 0
        next_arrival = 0

        while next_arrival < len(pending) or any(job_id is not None for job_id in running):
            if all(job_id is None for job_id in running):
                # Nothing to run: jump to the next arrival.
                time = max(time, pending[next_arrival].arrival_time)

            for core in range(cores):
                job_id = running[core]
                if job_id is not None and remaining[job_id] == 0:
                    stop(core, time)
                    completion[job_id] = time
                    start(core, scheduler.job_finished(core, job_id, time), time)

            if policy is Policy.RR:
                for core in range(cores):
                    if running[core] is not None and time - slice_start[core] >= quantum:
                        stop(core, time)
                        start(core, scheduler.quantum_expired(core, time), time)

            while next_arrival < len(pending) and pending[next_arrival].arrival_time <= time:
                spec = pending[next_arrival]
                next_arrival += 1
                remaining[spec.job_id] = spec.running_time
                core = scheduler.new_job(spec.job_id, time, spec.running_time, spec.priority)
                if core is not None:
                    stop(core, time)
                    start(core, spec.job_id, time)

            for core in range(cores):
                job_id = running[core]
                if job_id is not None:
                    first_run.setdefault(job_id, time)
                    remaining[job_id] -= 1

            time += 1

        averages = scheduler.averages()
    finally:
        scheduler.clean_up()

    metrics: List[JobMetrics] = []
    for job_id in sorted(completion):
        spec = specs[job_id]
        turnaround_time = completion[job_id] - spec.arrival_time
        metrics.append(
            JobMetrics(
                job_id=job_id,
                arrival_time=spec.arrival_time,
                running_time=spec.running_time,
                start_time=first_run[job_id],
                completion_time=completion[job_id],
                waiting_time=turnaround_time - spec.running_time,
                turnaround_time=turnaround_time,
                response_time=first_run[job_id] - spec.arrival_time,
                priority=spec.priority,
            )
        )

    result = SimulationResult(
        policy=policy.label,
        cores=cores,
        quantum=quantum if policy is Policy.RR else None,
        jobs=metrics,
        timeline=timeline,
        averages=averages,
    )
    compute_system_metrics(result)

    logger.info(
        "%s on %d core(s): %d job(s), avg waiting %.2f, avg turnaround %.2f, avg response %.2f",
        result.policy,
        cores,
        len(metrics),
        averages["avg_waiting"],
        averages["avg_turnaround"],
        averages["avg_response"],
    )
    return result
