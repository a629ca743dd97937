"""
Event-driven scheduler engine.

The driver reports arrivals, completions and (for round robin) quantum
expirations; the engine answers with a dispatch decision. Simulated time is
always supplied by the driver, the engine never reads a clock.

Every job that has not finished stays in the ordered queue, running or not,
so the queue order can be used the same way for both when picking the next
job. The core table points at the job currently running on each core.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .errors import SchedulerContractError
from .metrics import MetricsAccumulator
from .models import Job
from .policies import Policy
from .priqueue import OrderedQueue

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Decides which job runs on which core for one simulation run.

    Construct one per run. ``new_job`` returns the core index the arriving
    job should run on, ``job_finished`` and ``quantum_expired`` return the id
    of the job to run on the freed core. All three return None for "no
    scheduling change".
    """

    def __init__(self, cores: int, policy: Policy | str) -> None:
        if cores <= 0:
            raise ValueError(f"Scheduler needs at least one core, got {cores}")

        self._policy = Policy.parse(policy)
        self._cores: List[Optional[Job]] = [None] * cores
        self._queue: OrderedQueue[Job] = OrderedQueue(self._policy.comparator)
        self._metrics = MetricsAccumulator()
        self._closed = False

        logger.debug("scheduler started: %d core(s), policy %s", cores, self._policy.value)

    @property
    def policy(self) -> Policy:
        return self._policy

    @property
    def cores(self) -> int:
        return len(self._cores)

    @property
    def running(self) -> Tuple[Optional[int], ...]:
        """Job id running on each core, None for idle cores."""
        return tuple(job.job_id if job is not None else None for job in self._cores)

    @property
    def finished_count(self) -> int:
        return self._metrics.finished_jobs

    def new_job(self, job_id: int, time: int, running_time: int, priority: int) -> Optional[int]:
        """
        Called when a job arrives; returns the core it should run on.

        If the chosen core is busy, the job on it has been preempted.
        """
        self._check_open()
        job = Job(
            job_id=job_id,
            arrival_time=time,
            running_time=running_time,
            priority=priority,
            remaining_time=running_time,
        )

        if self._policy is Policy.PSJF:
            self._decay_running(time)

        index = self._queue.offer(job)
        core = None

        if index < self.cores:
            core = self._first_idle_core()
            if core is None and self._policy.preempts_on_arrival:
                core = self._preempt_for(job, time)
            if core is not None:
                self._dispatch(job, core, time)

        logger.debug(
            "t=%s job %s arrived (run=%s, pri=%s): queue index %d, core %s | %s",
            time, job_id, running_time, priority, index, core, self.queue_snapshot(),
        )
        return core

    def job_finished(self, core_id: int, job_id: int, time: int) -> Optional[int]:
        """
        Called when the job on ``core_id`` completes; returns the next job id for that core.
        """
        self._check_open()
        self._check_core(core_id)

        job = self._find(job_id)
        if job is None:
            raise SchedulerContractError(f"job {job_id} finished on core {core_id} but is not scheduled")
        if job.start_time is None or job.last_updated is None:
            raise SchedulerContractError(f"job {job_id} finished without ever being dispatched")

        self._cores[core_id] = None
        job.core = None
        self._queue.remove_matching(job)
        self._metrics.record(job.arrival_time, job.running_time, job.start_time, time)

        next_job = self._dispatch_next(core_id, time)
        logger.debug(
            "t=%s job %s finished on core %d, next %s | %s",
            time, job_id, core_id, next_job, self.queue_snapshot(),
        )
        return next_job

    def quantum_expired(self, core_id: int, time: int) -> Optional[int]:
        """
        Round robin only: move the job on ``core_id`` to the rear and pick the next one.

        The returned job may be the same one when nothing else is waiting.
        """
        self._check_open()
        self._check_core(core_id)
        if self._policy is not Policy.RR:
            raise SchedulerContractError(f"quantum expired under {self._policy.value}, only rr uses quanta")

        job = self._cores[core_id]
        if job is not None:
            self._queue.remove_matching(job)
            job.core = None
            self._cores[core_id] = None
            self._queue.offer(job)

        next_job = self._dispatch_next(core_id, time)
        logger.debug(
            "t=%s quantum expired on core %d, next %s | %s",
            time, core_id, next_job, self.queue_snapshot(),
        )
        return next_job

    def average_waiting_time(self) -> float:
        self._check_open()
        return self._metrics.average_waiting_time

    def average_turnaround_time(self) -> float:
        self._check_open()
        return self._metrics.average_turnaround_time

    def average_response_time(self) -> float:
        self._check_open()
        return self._metrics.average_response_time

    def averages(self) -> Dict[str, float]:
        """
        Averages over every finished job; all zero when nothing finished.

        Only meaningful once the run is over.
        """
        self._check_open()
        return self._metrics.summary()

    def clean_up(self) -> None:
        """
        Drop every remaining job. The engine cannot be used afterwards.
        """
        if self._closed:
            return
        for job in self._queue:
            job.core = None
        self._queue.clear()
        self._cores = [None] * len(self._cores)
        self._closed = True
        logger.debug("scheduler cleaned up after %d finished job(s)", self._metrics.finished_jobs)

    def queue_snapshot(self) -> str:
        """
        Queue in dispatch order as ``id(core)`` pairs, -1 meaning waiting.
        """
        return " ".join(
            f"{job.job_id}({job.core if job.core is not None else -1})" for job in self._queue
        )

    def _check_open(self) -> None:
        if self._closed:
            raise SchedulerContractError("scheduler used after clean_up()")

    def _check_core(self, core_id: int) -> None:
        if not 0 <= core_id < len(self._cores):
            raise SchedulerContractError(f"core {core_id} out of range (0..{len(self._cores) - 1})")

    def _find(self, job_id: int) -> Optional[Job]:
        for job in self._queue:
            if job.job_id == job_id:
                return job
        return None

    def _first_idle_core(self) -> Optional[int]:
        for core, job in enumerate(self._cores):
            if job is None:
                return core
        return None

    def _dispatch(self, job: Job, core: int, time: int) -> None:
        job.core = core
        if job.start_time is None:
            job.start_time = time
        job.last_updated = time
        self._cores[core] = job

    def _dispatch_next(self, core: int, time: int) -> Optional[int]:
        for job in self._queue:
            if not job.running:
                self._dispatch(job, core, time)
                return job.job_id
        return None

    def _decay_running(self, time: int) -> None:
        for job in self._cores:
            if job is not None:
                job.remaining_time -= time - job.last_updated
                job.last_updated = time
        self._queue.reorder()

    def _preempt_for(self, job: Job, time: int) -> Optional[int]:
        """
        Free a core for ``job`` by preempting the weakest running job, if it is weaker.
        """
        if self._policy is Policy.PSJF:
            victim_core = self._longest_remaining_core()
            victim = self._cores[victim_core]
            should_preempt = victim.remaining_time > job.remaining_time
        else:
            victim_core = self._lowest_priority_core()
            victim = self._cores[victim_core]
            should_preempt = victim.priority > job.priority

        if not should_preempt:
            return None

        victim.core = None
        # Preempted in the same instant it was dispatched: it never ran.
        if victim.start_time == time:
            victim.start_time = None
        self._cores[victim_core] = None

        logger.debug("t=%s job %s preempted job %s on core %d", time, job.job_id, victim.job_id, victim_core)
        return victim_core

    def _longest_remaining_core(self) -> int:
        best = 0
        for core, job in enumerate(self._cores):
            if job.remaining_time > self._cores[best].remaining_time:
                best = core
        return best

    def _lowest_priority_core(self) -> int:
        best = 0
        for core, job in enumerate(self._cores):
            current = self._cores[best]
            if job.priority > current.priority:
                best = core
            elif job.priority == current.priority and job.start_time > current.start_time:
                best = core
        return best
