# path: reconnect/backoff.py
"""Jittered exponential backoff for reconnect attempts.

A :class:`BackoffPlan` is an immutable triple (factor, base, attempts). Its
:meth:`BackoffPlan.iterator` yields ``attempts`` delays where the i-th delay
(1-based) is ``factor * base**i`` milliseconds scaled by a random factor in
``[0.8, 1.2]``. Consumers sleep on each delay between connection attempts.

Construction never fails: a non-positive base or factor is replaced by the
module default. Delays saturate at ``datetime.timedelta.max``.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import timedelta
from itertools import islice
from typing import Callable, Iterator, List, Optional, Protocol

logger = logging.getLogger(__name__)

EXPONENT_BASE = 2
FACTOR = 100  # ms
NUMBER_OF_RETRIES = 5

JITTER_LOW = 0.8
JITTER_HIGH = 1.2

MAX_DELAY = timedelta.max
MAX_DELAY_MS = MAX_DELAY // timedelta(milliseconds=1)


class RetryStrategyLike(Protocol):
    exponent_base: int
    factor: int
    number_of_retries: int


def jitter_range(low: float, high: float, rng: Optional[random.Random] = None) -> Callable[[timedelta], timedelta]:
    """Return a function scaling a delay by a uniform draw from ``[low, high]``."""
    rng = rng or random.Random()

    def apply(delay: timedelta) -> timedelta:
        # uniform() may round past ``high``
        scale = min(max(rng.uniform(low, high), low), high)
        try:
            return delay * scale
        except OverflowError:
            return MAX_DELAY

    return apply


def _exponential_ms(base: int, factor: int) -> Iterator[int]:
    current = base
    while True:
        delay = factor * current
        if delay >= MAX_DELAY_MS:
            logger.debug("Backoff delay saturated at %s (base=%d, factor=%d)", MAX_DELAY, base, factor)
            while True:
                yield MAX_DELAY_MS
        yield delay
        current *= base


@dataclass(frozen=True)
class BackoffPlan:
    factor: int = FACTOR
    base: int = EXPONENT_BASE
    attempts: int = NUMBER_OF_RETRIES

    def __post_init__(self) -> None:
        if self.base <= 0:
            logger.debug("Backoff base %r is not positive; using %d", self.base, EXPONENT_BASE)
            object.__setattr__(self, "base", EXPONENT_BASE)
        if self.factor <= 0:
            logger.debug("Backoff factor %r is not positive; using %d", self.factor, FACTOR)
            object.__setattr__(self, "factor", FACTOR)
        if self.attempts < 0:
            object.__setattr__(self, "attempts", 0)

    @classmethod
    def from_strategy(cls, strategy: Optional[RetryStrategyLike] = None) -> "BackoffPlan":
        """Build a plan from a connection retry strategy, or the defaults when none is given."""
        if strategy is None:
            return exponential_backoff(EXPONENT_BASE, FACTOR, NUMBER_OF_RETRIES)
        return exponential_backoff(strategy.exponent_base, strategy.factor, strategy.number_of_retries)

    def iterator(self, *, seed: int | None = None) -> Iterator[timedelta]:
        """Yield ``attempts`` jittered delays.

        Every call draws from its own RNG, so two calls on the same plan give
        independently jittered sequences unless the same ``seed`` is passed.
        """
        jitter = jitter_range(JITTER_LOW, JITTER_HIGH, random.Random(seed))
        for millis in islice(_exponential_ms(self.base, self.factor), self.attempts):
            if millis >= MAX_DELAY_MS:
                yield MAX_DELAY
            else:
                yield jitter(timedelta(milliseconds=millis))

    def __iter__(self) -> Iterator[timedelta]:
        return self.iterator()

    def delays_ms(self, *, seed: int | None = None) -> List[float]:
        return [d / timedelta(milliseconds=1) for d in self.iterator(seed=seed)]


def exponential_backoff(base: int, factor: int, attempts: int) -> BackoffPlan:
    """Plan with delays ``factor * base**i`` ms for i in 1..attempts (before jitter)."""
    return BackoffPlan(factor=factor, base=base, attempts=attempts)


def fixed_interval_backoff(interval: int, attempts: int) -> BackoffPlan:
    return exponential_backoff(1, interval, attempts)
