from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class InvalidProcessError(SchedulerError, ValueError):
    """A process descriptor (or a batch of them) is not valid input."""


class ZeroBurstDurationError(InvalidProcessError):
    """A process asks for no CPU time at all."""


class EmptyQueueError(SchedulerError, IndexError):
    """Raised when popping or peeking an empty ready queue."""


class WorkloadFormatError(SchedulerError, ValueError):
    """A workload file could not be parsed into process descriptors."""


class UnknownAlgorithmError(SchedulerError, ValueError):
    pass
