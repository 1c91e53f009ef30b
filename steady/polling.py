from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_INTERVAL = 0.1


@dataclass(frozen=True)
class PollConfig:
    """
    How long to wait for one condition and how often to look at it.

    `ignoring` lists exception classes that mean "not ready yet" (e.g. an
    element that is not attached yet). Anything else raised by the check
    stops the poll immediately.
    """
    timeout: float
    interval: float = DEFAULT_INTERVAL
    ignoring: Tuple[Type[BaseException], ...] = ()

    def __post_init__(self) -> None:
        # A NaN or infinite deadline never expires.
        if not (self.timeout > 0 and math.isfinite(self.timeout)):
            raise ValueError(f"timeout must be a finite number > 0, got {self.timeout}")
        if not (self.interval > 0 and math.isfinite(self.interval)):
            raise ValueError(f"interval must be a finite number > 0, got {self.interval}")


class PollTimeoutError(TimeoutError):
    """Raised when a condition never became ready within its timeout."""

    def __init__(
        self,
        elapsed: float,
        attempts: int,
        last_error: Optional[BaseException] = None,
        last_value: Any = None,
        label: str = "",
    ):
        self.elapsed = elapsed
        self.attempts = attempts
        self.last_error = last_error
        self.last_value = last_value
        self.label = label

        msg = f"Condition not met after {elapsed:.2f}s ({attempts} attempts)"
        if label:
            msg += f" ({label})"
        if last_error is not None:
            msg += f"; last error: {last_error!r}"
        super().__init__(msg)


def poll(
    check: Callable[[], T],
    config: PollConfig,
    *,
    ready: Callable[[T], Any] = bool,
    label: str = "",
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call `check` until `ready(value)` is truthy and return that value.

    The first attempt happens right away. Between attempts we sleep
    `config.interval`, clipped to what is left of the budget, so the last
    attempt lands on the deadline itself. Exceptions listed in
    `config.ignoring` count as "not ready"; any other exception propagates.
    """
    start = clock()
    deadline = start + config.timeout
    attempts = 0
    last_error: Optional[BaseException] = None
    last_value: Any = None

    while True:
        attempts += 1
        try:
            value = check()
        except config.ignoring as e:
            last_error = e
            logger.debug("poll %s: attempt %d ignored %r", label or check, attempts, e)
        else:
            if ready(value):
                logger.debug("poll %s: ready after %d attempts", label or check, attempts)
                return value
            last_value = value

        remaining = deadline - clock()
        if remaining <= 0:
            break
        sleep(min(config.interval, remaining))

    elapsed = clock() - start
    logger.debug("poll %s: timed out after %.2fs", label or check, elapsed)
    raise PollTimeoutError(
        elapsed=elapsed,
        attempts=attempts,
        last_error=last_error,
        last_value=last_value,
        label=label,
    ) from last_error


def wait_until(
    check: Callable[[], T],
    timeout: float,
    interval: float = DEFAULT_INTERVAL,
    ignoring: Tuple[Type[BaseException], ...] = (),
    label: str = "",
) -> T:
    """Explicit wait: every caller names its own timeout."""
    return poll(check, PollConfig(timeout=timeout, interval=interval, ignoring=ignoring), label=label)


def eventually(
    fn: Callable[[], T],
    timeout_s: float = 8.0,
    interval_s: float = 0.25,
    label: str = "",
    ignoring: Tuple[Type[BaseException], ...] = (AssertionError,),
) -> T:
    """
    Retries fn until it stops raising or timeout is reached.
    Use for steps that assert something the page settles into.

    The interval is coarser than DEFAULT_INTERVAL: each attempt usually
    drives the page again (click, fill), not just reads it.
    """
    config = PollConfig(timeout=timeout_s, interval=interval_s, ignoring=ignoring)
    # Returning at all means the block passed, whatever it returned.
    return poll(fn, config, ready=lambda _: True, label=label)
