"""
Bounded retry for parameter writes.

A fixed number of attempts separated by a fixed delay. There is no backoff
and no jitter; swap in a different policy object to change that.
"""

import time
from typing import Callable, Optional, Tuple, Type, TypeVar

from .exceptions import PersistError, RemoteError, ValidationError

T = TypeVar('T')

DEFAULT_ATTEMPTS = 5
DEFAULT_DELAY = 0.2


class RetryPolicy:
    """Fixed-attempt, fixed-delay retry."""

    def __init__(self, max_attempts: int = DEFAULT_ATTEMPTS,
                 delay: float = DEFAULT_DELAY,
                 sleep: Callable[[float], None] = time.sleep,
                 retry_on: Tuple[Type[Exception], ...] = (RemoteError,),
                 give_up_on: Tuple[Type[Exception], ...] = (ValidationError,)):
        """
        Initialize the policy.

        Args:
            max_attempts: Total number of attempts, at least 1
            delay: Seconds to wait between attempts
            sleep: Function used to wait (replaced in tests)
            retry_on: Exceptions that trigger another attempt
            give_up_on: Subclasses of ``retry_on`` that are raised immediately
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.max_attempts = max_attempts
        self.delay = delay
        self.sleep = sleep
        self.retry_on = retry_on
        self.give_up_on = give_up_on

    def run(self, operation: Callable[[], T],
            on_failure: Optional[Callable[[int, Exception], None]] = None) -> T:
        """
        Call ``operation`` until it succeeds or the attempts run out.

        Args:
            operation: Zero-argument callable performing the write
            on_failure: Called with (attempt number, error) after each failed attempt

        Returns:
            Whatever ``operation`` returned on its first success

        Raises:
            PersistError: Every attempt failed
            ValidationError: The store rejected the request; not retried
        """
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return operation()
            except self.give_up_on:
                raise
            except self.retry_on as e:
                last_error = e
                if on_failure is not None:
                    on_failure(attempt, e)
            if attempt < self.max_attempts:
                self.sleep(self.delay)
        raise PersistError(self.max_attempts, last_error)
