"""Per-operation deadlines

An engine operation receives a timeout once and checks the same Deadline
before each cache or store call, so the total time spent across both layers is
bounded by the caller's budget.

Example:
    >>> deadline = Deadline(0.5)
    >>> deadline.ensure(DataStoreError, 'store lookup')   # within budget: no-op
    >>> deadline.expired
    False
"""

import time
from collections.abc import Callable


class Deadline:
    """Absolute point in time derived from a relative timeout.

    A timeout of None means no deadline: `expired` is always False.
    """

    def __init__(self, timeout: float | None, clock: Callable[[], float] = time.monotonic):
        if timeout is not None and timeout < 0:
            raise ValueError(f'Timeout must be a non-negative number of seconds (given value: {timeout}).')

        self._clock = clock
        self.timeout = timeout
        self.expires_at = None if timeout is None else clock() + timeout

    @property
    def expired(self) -> bool:
        return self.expires_at is not None and self._clock() >= self.expires_at

    def ensure(self, error: type[Exception], operation: str) -> None:
        """Raise `error` if the deadline has passed before `operation` could start."""
        if self.expired:
            raise error(f'Deadline of {self.timeout}s exceeded before {operation}.')
