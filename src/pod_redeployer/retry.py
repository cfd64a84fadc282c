"""
Bounded retry with backoff, used for optimistic-concurrency conflicts
"""

import random
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, TypeVar

from kubernetes.client.rest import ApiException

from pod_redeployer.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

HTTP_CONFLICT = 409


@dataclass
class Backoff:
    """Backoff policy; the defaults match client-go's retry.DefaultRetry"""

    steps: int = 5
    duration: float = 0.01
    factor: float = 1.0
    jitter: float = 0.1
    cap: Optional[float] = None

    def delays(self, rand: Callable[[], float] = random.random) -> Iterator[float]:
        """Yield the sleeps taken between attempts (steps - 1 of them)"""
        duration = self.duration
        for _ in range(self.steps - 1):
            delay = duration
            if self.jitter > 0:
                delay += rand() * self.jitter * duration
            yield delay

            duration *= self.factor
            if self.cap is not None:
                duration = min(duration, self.cap)


def retry(backoff: Backoff,
          operation: Callable[[], T],
          retriable: Callable[[BaseException], bool] = lambda exc: True,
          sleep: Callable[[float], None] = time.sleep) -> T:
    """
    Call operation until it succeeds, at most backoff.steps times.

    Exceptions rejected by retriable are raised immediately. When every
    attempt fails, the last exception is raised.
    """
    if backoff.steps < 1:
        raise ValueError(f"backoff.steps must be at least 1, got {backoff.steps}")

    delays = backoff.delays()
    attempt = 0
    while True:
        attempt += 1
        try:
            return operation()
        except Exception as e:
            if not retriable(e):
                raise
            if attempt >= backoff.steps:
                logger.debug("Giving up", attempt=attempt, error=str(e))
                raise

            delay = next(delays)
            logger.debug("Retrying", attempt=attempt, steps=backoff.steps, delay=round(delay, 3), error=str(e))
            sleep(delay)


def is_conflict(exc: BaseException) -> bool:
    return isinstance(exc, ApiException) and exc.status == HTTP_CONFLICT


def retry_on_conflict(backoff: Backoff,
                      operation: Callable[[], T],
                      sleep: Callable[[float], None] = time.sleep) -> T:
    """Retry operation only while it fails with a write conflict"""
    return retry(backoff, operation, retriable=is_conflict, sleep=sleep)
