"""Exponential backoff policy for client retries.

A policy is configured through :class:`ExponentialBackoffBuilder` and frozen
into an :class:`ExponentialBackoff`, which maps a one-based attempt number to
the delay to wait before that attempt::

    backoff = (
        ExponentialBackoff.builder()
        .max_delay_millis(10_000)
        .initial_delay_millis(100)
        .multiplier(2.0)
        .build()
    )
    backoff.next_delay_millis(3)  # 400

The builder validates each setter against its *current* state, so the order
of calls matters: raise ``max_delay_millis`` before raising
``initial_delay_millis`` past it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from expbackoff.constants import (
    DEFAULT_INITIAL_DELAY_MILLIS,
    DEFAULT_MAX_DELAY_MILLIS,
    DEFAULT_MULTIPLIER,
)
from expbackoff.exceptions import InvalidArgumentError
from expbackoff.logging import get_logger

logger = get_logger("retry_backoff")


def _check_argument(condition: bool, parameter: str, value: Any, expected: str) -> None:
    """Raise InvalidArgumentError naming the parameter unless condition holds."""
    if not condition:
        logger.debug(
            f"Rejected {parameter}={value} (expected: {expected})",
            extra={"parameter": parameter, "value": value},
        )
        raise InvalidArgumentError(parameter, value, expected)


def _check_integer(parameter: str, value: Any) -> None:
    """Reject delays that are not plain integers; bool is not a delay."""
    _check_argument(isinstance(value, int) and not isinstance(value, bool), parameter, value, "an integer")


@dataclass(frozen=True)
class ExponentialBackoff:
    """Immutable exponential backoff policy.

    Instances are normally produced by :meth:`builder` or :func:`exponential`.
    They hold no mutable state and may be shared between threads freely.
    """

    initial_delay_millis: int
    max_delay_millis: int
    multiplier: float

    def __post_init__(self) -> None:
        _check_integer("initial_delay_millis", self.initial_delay_millis)
        _check_integer("max_delay_millis", self.max_delay_millis)
        _check_argument(self.max_delay_millis >= 0, "max_delay_millis", self.max_delay_millis, ">= 0")
        _check_argument(
            0 <= self.initial_delay_millis <= self.max_delay_millis,
            "initial_delay_millis",
            self.initial_delay_millis,
            f">= 0 and <= {self.max_delay_millis}",
        )
        _check_argument(self.multiplier > 1.0, "multiplier", self.multiplier, "> 1.0")

    @staticmethod
    def builder() -> ExponentialBackoffBuilder:
        """Return a new builder with default parameters."""
        return ExponentialBackoffBuilder()

    def next_delay_millis(self, attempt: int) -> int:
        """Return the delay in milliseconds to wait before the given attempt.

        The delay is ``initial_delay_millis * multiplier ** (attempt - 1)``,
        capped at ``max_delay_millis``. The product is computed in floating
        point and truncated to whole milliseconds only at the end. A term too
        large to represent is treated as exceeding the cap.

        Args:
            attempt: Retry attempt number (1-based)

        Returns:
            Delay in milliseconds

        Raises:
            InvalidArgumentError: If attempt is not positive
        """
        _check_argument(attempt > 0, "attempt", attempt, "> 0")

        if attempt == 1 or self.initial_delay_millis == 0:
            return self.initial_delay_millis

        try:
            delay = self.initial_delay_millis * self.multiplier ** (attempt - 1)
        except OverflowError:
            return self.max_delay_millis

        if delay >= self.max_delay_millis:
            return self.max_delay_millis
        return int(delay)

    def next_delay(self, attempt: int) -> timedelta:
        """Return the delay before the given attempt as a timedelta."""
        return timedelta(milliseconds=self.next_delay_millis(attempt))

    def delays(self, attempts: int) -> list[int]:
        """Return the delays in milliseconds for attempts 1 through ``attempts``."""
        return [self.next_delay_millis(n) for n in range(1, attempts + 1)]


class ExponentialBackoffBuilder:
    """Mutable staging object for :class:`ExponentialBackoff`.

    Every setter validates its value immediately against the builder's
    current state and returns the builder for chaining. Defaults are an
    initial and maximum delay of 0 and a multiplier of 2.0.

    Not thread-safe; configure from a single owner, then share the built
    policy.
    """

    def __init__(self) -> None:
        self._initial_delay_millis = DEFAULT_INITIAL_DELAY_MILLIS
        self._max_delay_millis = DEFAULT_MAX_DELAY_MILLIS
        self._multiplier = DEFAULT_MULTIPLIER

    def initial_delay_millis(self, initial_delay_millis: int) -> ExponentialBackoffBuilder:
        """Set the delay before the first retry.

        Args:
            initial_delay_millis: Initial delay in milliseconds

        Returns:
            This builder

        Raises:
            InvalidArgumentError: If not an integer, negative, or above the current
                maximum delay
        """
        _check_integer("initial_delay_millis", initial_delay_millis)
        _check_argument(initial_delay_millis >= 0, "initial_delay_millis", initial_delay_millis, ">= 0")
        _check_argument(
            initial_delay_millis <= self._max_delay_millis,
            "initial_delay_millis",
            initial_delay_millis,
            f"<= {self._max_delay_millis}",
        )
        self._initial_delay_millis = initial_delay_millis
        return self

    def max_delay_millis(self, max_delay_millis: int) -> ExponentialBackoffBuilder:
        """Set the upper bound on any computed delay.

        Args:
            max_delay_millis: Maximum delay in milliseconds

        Returns:
            This builder

        Raises:
            InvalidArgumentError: If not an integer, negative, or below the current
                initial delay
        """
        _check_integer("max_delay_millis", max_delay_millis)
        _check_argument(max_delay_millis >= 0, "max_delay_millis", max_delay_millis, ">= 0")
        _check_argument(
            self._initial_delay_millis <= max_delay_millis,
            "max_delay_millis",
            max_delay_millis,
            f">= {self._initial_delay_millis}",
        )
        self._max_delay_millis = max_delay_millis
        return self

    def multiplier(self, multiplier: float) -> ExponentialBackoffBuilder:
        """Set the per-attempt growth factor.

        Raises:
            InvalidArgumentError: If not greater than 1.0
        """
        _check_argument(multiplier > 1.0, "multiplier", multiplier, "> 1.0")
        self._multiplier = multiplier
        return self

    def build(self) -> ExponentialBackoff:
        """Build a new policy from the current parameters.

        The builder is not consumed; later calls produce independent,
        equal policies.
        """
        backoff = ExponentialBackoff(
            initial_delay_millis=self._initial_delay_millis,
            max_delay_millis=self._max_delay_millis,
            multiplier=self._multiplier,
        )
        logger.debug(f"Built {backoff!r}")
        return backoff


def exponential(
    initial_delay_millis: int,
    max_delay_millis: int,
    multiplier: float = DEFAULT_MULTIPLIER,
) -> ExponentialBackoff:
    """Build an exponential backoff policy in one call.

    The maximum delay is applied before the initial delay, so any pair with
    ``initial_delay_millis <= max_delay_millis`` is accepted.

    Args:
        initial_delay_millis: Delay before the first retry in milliseconds
        max_delay_millis: Maximum delay in milliseconds
        multiplier: Per-attempt growth factor

    Returns:
        ExponentialBackoff instance
    """
    return (
        ExponentialBackoffBuilder()
        .max_delay_millis(max_delay_millis)
        .initial_delay_millis(initial_delay_millis)
        .multiplier(multiplier)
        .build()
    )
