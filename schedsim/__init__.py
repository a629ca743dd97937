"""
schedsim package.

An event-driven multi-core CPU scheduler engine (FCFS, SJF, PSJF, PRI, PPRI,
RR), a discrete-event driver that feeds it workloads, and a command-line
interface for comparing the policies.
"""

from .engine import Scheduler
from .errors import SchedulerContractError
from .policies import Policy
from .priqueue import OrderedQueue
from .simulator import simulate

__all__ = ["OrderedQueue", "Policy", "Scheduler", "SchedulerContractError", "simulate"]
