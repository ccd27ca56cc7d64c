"""
Parameterized random-value producers.

Every function takes its randomness source explicitly. Any object with
numpy ``Generator`` semantics for ``integers(low, high)`` (high exclusive)
and ``random()`` works, so tests can pass a scripted sequence instead of a
seeded generator.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Mapping, Protocol, Sequence, TypeVar

from ..shared.exceptions import ConfigurationError

T = TypeVar("T")


class RandomSource(Protocol):
    """Subset of ``numpy.random.Generator`` the library relies on."""

    def integers(self, low: int, high: int) -> int: ...

    def random(self) -> float: ...


def uniform_int(rng: RandomSource, lo: int, hi: int) -> int:
    """Uniform integer in the closed range ``[lo, hi]``."""
    if lo > hi:
        raise ConfigurationError(
            f"Invalid integer range [{lo}, {hi}]", field="range", value=(lo, hi)
        )
    return int(rng.integers(lo, hi + 1))


def uniform_decimal(rng: RandomSource, lo: float, hi: float, places: int = 2) -> Decimal:
    """Uniform decimal in ``[lo, hi]`` quantized to ``places`` digits."""
    if lo > hi:
        raise ConfigurationError(
            f"Invalid decimal range [{lo}, {hi}]", field="range", value=(lo, hi)
        )
    value = lo + (hi - lo) * float(rng.random())
    quantum = Decimal(1).scaleb(-places)
    result = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    # Rounding may step just outside the bounds
    low = Decimal(str(lo)).quantize(quantum, rounding=ROUND_HALF_UP)
    high = Decimal(str(hi)).quantize(quantum, rounding=ROUND_HALF_UP)
    return min(max(result, low), high)


def uniform_date(rng: RandomSource, start: date, end: date) -> date:
    """Uniform calendar date in ``[start, end]``."""
    if end < start:
        raise ConfigurationError(
            f"Invalid date range [{start}, {end}]", field="period", value=(start, end)
        )
    span = (end - start).days
    return start + timedelta(days=uniform_int(rng, 0, span))


def weighted_choice(rng: RandomSource, table: Mapping[T, float] | Sequence[T]) -> T:
    """
    Pick one label from a weight table.

    Args:
        rng: Randomness source
        table: ``{label: weight}`` mapping, or a sequence of labels with
            equal weights

    Returns:
        The sampled label

    Raises:
        ConfigurationError: If the table is empty or its weights do not sum
            to a positive number
    """
    if isinstance(table, Mapping):
        labels = list(table.keys())
        weights = [float(w) for w in table.values()]
    else:
        labels = list(table)
        weights = [1.0] * len(labels)

    if not labels:
        raise ConfigurationError("Weighted pick table is empty", field="weights")
    if any(w < 0 for w in weights):
        raise ConfigurationError("Weights must be non-negative", field="weights", value=weights)

    total = sum(weights)
    if total <= 0:
        raise ConfigurationError("Weights must sum to a positive value", field="weights")

    threshold = float(rng.random()) * total
    cumulative = 0.0
    for label, weight in zip(labels, weights):
        cumulative += weight
        if threshold < cumulative:
            return label
    # Float accumulation can leave threshold == total; fall back to last positive weight
    return next(label for label, w in zip(reversed(labels), reversed(weights)) if w > 0)


def cycled_choice(index: int, labels: Sequence[T]) -> T:
    """Deterministic round-robin pick: label ``index mod len(labels)``."""
    if not labels:
        raise ConfigurationError("Label set is empty", field="labels")
    return labels[index % len(labels)]


def bernoulli(rng: RandomSource, p: float) -> bool:
    """True with probability ``p``."""
    if not 0.0 <= p <= 1.0:
        raise ConfigurationError("Probability must be within [0, 1]", field="p", value=p)
    return float(rng.random()) < p


def bernoulli_branch(
    rng: RandomSource,
    p: float,
    when_true: Callable[[], T],
    when_false: Callable[[], T],
) -> T:
    """Call ``when_true`` with probability ``p``, otherwise ``when_false``."""
    return when_true() if bernoulli(rng, p) else when_false()


def proportion_flag(index: int, ratio: float) -> bool:
    """
    Fixed pattern flag that hits ``ratio`` over every prefix.

    The flag is set for item ``index`` when the running quota
    ``floor((index + 1) * ratio)`` steps up, so after ``n`` items exactly
    ``floor(n * ratio)`` are flagged.
    """
    if not 0.0 <= ratio <= 1.0:
        raise ConfigurationError("Ratio must be within [0, 1]", field="ratio", value=ratio)
    # Work in integer thousandths to keep the quota stable under float error
    scaled = round(ratio * 1000)
    return ((index + 1) * scaled) // 1000 > (index * scaled) // 1000


def month_start(day: date) -> date:
    """First day of the month containing ``day``."""
    return day.replace(day=1)


def month_starts(start: date, end: date) -> list[date]:
    """Every first-of-month from the month of ``start`` to the month of ``end``."""
    if end < start:
        raise ConfigurationError(
            f"Invalid date range [{start}, {end}]", field="period", value=(start, end)
        )
    months: list[date] = []
    current = month_start(start)
    while current <= end:
        months.append(current)
        if current.month == 12:
            current = date(current.year + 1, 1, 1)
        else:
            current = date(current.year, current.month + 1, 1)
    return months
