class SchedulerContractError(RuntimeError):
    """
    Raised when the driver breaks the engine's calling contract.

    These are not recoverable: they point at a bug in the caller (an engine
    used after clean-up, a finish reported for a job the engine never saw,
    and so on).
    """
