"""
Time conversion utilities for pbseq.

Canonical time base is the nanosecond. Instruction durations are authored
as (magnitude, unit) pairs and converted here; display helpers turn
nanosecond counts back into human-readable strings.
"""
import logging
import math
import re
from typing import Iterable, Tuple, Union

from .types.common import UNITS_DESCENDING, Instruction, TimeUnit

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Unit constants (nanoseconds per unit)
ns = 1
us = 1_000
ms = 1_000_000
s = 1_000_000_000

# JavaScript-style parseFloat: longest numeric prefix, surrounding junk ignored
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Float products closer than this to a whole nanosecond are snapped to it
_SNAP_TOLERANCE = 1e-6


def to_nanoseconds(value: Number, unit: Union[str, TimeUnit]) -> Number:
    """Convert a magnitude in ``unit`` to nanoseconds.

    Args:
        value: Time magnitude
        unit: One of ns, us/μs, ms, s

    Returns:
        The duration in nanoseconds, an int whenever it is a whole number

    Raises:
        InvalidUnit: if ``unit`` is not a recognized symbol

    Examples:
        to_nanoseconds(1, "ms")      -> 1_000_000
        to_nanoseconds(2.5, "us")    -> 2500
        to_nanoseconds(1.005, "us")  -> 1005
        to_nanoseconds(0.5, "ns")    -> 0.5
    """
    result = value * TimeUnit.parse(unit).multiplier
    if isinstance(result, float) and math.isfinite(result):
        nearest = round(result)
        if abs(result - nearest) < _SNAP_TOLERANCE:
            return int(nearest)
    return result


def format_nanoseconds(duration_ns: Number) -> str:
    """Render with the largest unit whose scaled value is at least 1.

    Lossy, display only.
    """
    for unit in UNITS_DESCENDING[:-1]:
        if duration_ns >= unit.multiplier:
            return f"{duration_ns / unit.multiplier:.2f} {unit.value}"
    return f"{duration_ns:.0f} {TimeUnit.NANOSECOND.value}"


def format_in_scale(duration_ns: Number, unit: Union[str, TimeUnit]) -> str:
    """Render ``duration_ns`` in a caller-chosen unit, without the symbol."""
    scaled = duration_ns / TimeUnit.parse(unit).multiplier
    if scaled < 1:
        return f"{scaled:.3f}"
    if scaled < 1000:
        return f"{scaled:.1f}"
    return f"{scaled:.0f}"


def format_total(duration_ns: Number, unit: Union[str, TimeUnit]) -> str:
    """``format_in_scale`` followed by the unit symbol."""
    unit = TimeUnit.parse(unit)
    return f"{format_in_scale(duration_ns, unit)} {unit.value}"


def parse_in_scale(text: str, unit: Union[str, TimeUnit]) -> Number:
    """Parse a typed duration in ``unit`` and return nanoseconds.

    Lenient by contract: unparseable text, empty text and unknown units all
    yield 0 so an editor never fails on a half-typed value.
    """
    match = _FLOAT_PREFIX.match(text) if isinstance(text, str) else None
    value = float(match.group(1)) if match else 0.0
    try:
        return to_nanoseconds(value, unit)
    except ValueError:
        logger.debug("parse_in_scale: unknown unit %r, treating %r as zero", unit, text)
        return 0.0



def pick_optimal_unit(duration_ns: Number) -> TimeUnit:
    """Largest unit in which ``duration_ns`` is at least 1."""
    for unit in UNITS_DESCENDING[:-1]:
        if duration_ns >= unit.multiplier:
            return unit
    return TimeUnit.NANOSECOND


def optimal_unit_for_instructions(instructions: Iterable[Instruction]) -> TimeUnit:
    """Display unit for a whole program.

    Chosen from the average instruction duration, moved at most one step
    coarser towards the unit of the longest instruction.
    """
    durations = [inst.duration_ns for inst in instructions]
    if not durations:
        return TimeUnit.MICROSECOND

    ascending = tuple(reversed(UNITS_DESCENDING))
    avg_index = ascending.index(pick_optimal_unit(sum(durations) / len(durations)))
    max_index = ascending.index(pick_optimal_unit(max(durations)))
    return ascending[min(max_index, avg_index + 1)]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def requantize(duration_ns: Number) -> Tuple[Number, str]:
    """Re-express a nanosecond duration as a whole number of ms, us or ns.

    Used by the text exporters. Rounds half up, so sub-unit precision is
    lost: 1_500 ns becomes (2, "us") and 1_499_999 ns becomes (1, "ms").

    Returns:
        (value, ascii unit symbol)
    """
    if duration_ns >= ms:
        return _round_half_up(duration_ns / ms), "ms"
    if duration_ns >= us:
        return _round_half_up(duration_ns / us), "us"
    return duration_ns, "ns"


def format_number(value: Number) -> str:
    """Render a number for generated source: integral floats lose their '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
