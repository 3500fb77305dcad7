"""
Bag Format Parser
==================

A bag format is the compact way dispatch staff write down how many meals
go into a customer's delivery bag::

    "5"       -> 5 non-veg
    "5,5"     -> 10 non-veg (two bags of five)
    "5,5+7"   -> 10 non-veg, 7 veg
    "3+2,2"   -> 3 non-veg, 4 veg

Grammar::

    bag_format := group [ "+" group ]
    group      := count { "," count }
    count      := ASCII digits

Whitespace is ignored. Counts before the ``+`` are non-veg, counts after it
are veg. Every comma-separated segment must be a non-negative integer, so
``"5,,3"``, ``"+7"``, ``"5+"`` and ``"5+3+1"`` are all rejected. Neither a
single count nor the whole format may exceed ``MAX_MEALS``.

Functions:
    parse_bag_format: Parse or raise InvalidBagFormatError.
    validate_bag_format: Parse without raising; zero counts on failure.
    format_bag_display: Render counts back into the short form.
    calculate_nea_end_time: End of the delivery window for a start time.

Example::

    >>> parse_bag_format("5,5+7")
    BagCounts(non_veg_count=10, veg_count=7)
    >>> parse_bag_format("5,5+7").total_count
    17
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from .exceptions import InvalidBagFormatError

_COUNT = re.compile(r'^[0-9]+$')
_WHITESPACE = re.compile(r'\s+')

# Upper bound for a single count and for the total of one format
MAX_MEALS = 9999


@dataclass(frozen=True)
class BagCounts:
    """Meal counts for one bag format. ``total_count`` is always derived."""

    non_veg_count: int = 0
    veg_count: int = 0

    @property
    def total_count(self) -> int:
        return self.non_veg_count + self.veg_count

    def as_dict(self) -> dict:
        return {
            'non_veg_count': self.non_veg_count,
            'veg_count': self.veg_count,
            'total_count': self.total_count,
        }


@dataclass(frozen=True)
class BagFormatValidation:
    """Outcome of :func:`validate_bag_format`."""

    is_valid: bool
    counts: BagCounts = field(default_factory=BagCounts)
    error: Optional[str] = None


def _sum_group(group: str, label: str) -> int:
    if not group:
        raise InvalidBagFormatError(f"Missing {label} counts")

    total = 0
    for segment in group.split(','):
        if not segment:
            raise InvalidBagFormatError(f"Empty {label} count in '{group}'")
        if not _COUNT.match(segment):
            raise InvalidBagFormatError(
                f"'{segment}' is not a whole number ({label} counts)"
            )
        if len(segment.lstrip('0')) > len(str(MAX_MEALS)) or int(segment) > MAX_MEALS:
            raise InvalidBagFormatError(
                f"'{segment}' is too large ({label} counts, at most {MAX_MEALS})"
            )
        total += int(segment)
    return total


def parse_bag_format(bag_format: str) -> BagCounts:
    """
    Parse a bag format string into meal counts.

    Args:
        bag_format: String such as ``"5,5+7"``.

    Returns:
        BagCounts with non-veg and veg counts.

    Raises:
        InvalidBagFormatError: If the string is empty, has more than one
            ``+``, contains an empty or non-numeric segment, or counts
            more than ``MAX_MEALS`` meals.
    """
    if not isinstance(bag_format, str):
        raise InvalidBagFormatError("Bag format must be a string")

    cleaned = _WHITESPACE.sub('', bag_format)
    if not cleaned:
        raise InvalidBagFormatError("Bag format is required")

    parts = cleaned.split('+')
    if len(parts) > 2:
        raise InvalidBagFormatError("Bag format may contain at most one '+'")

    non_veg_count = _sum_group(parts[0], 'non-veg')
    veg_count = _sum_group(parts[1], 'veg') if len(parts) == 2 else 0
    if non_veg_count + veg_count > MAX_MEALS:
        raise InvalidBagFormatError(f"Bag format may describe at most {MAX_MEALS} meals")

    return BagCounts(non_veg_count=non_veg_count, veg_count=veg_count)


def validate_bag_format(bag_format, require_items: bool = True) -> BagFormatValidation:
    """
    Validate a bag format without raising.

    Args:
        bag_format: The string to check.
        require_items: Reject formats that parse to zero meals
            (``"0"``, ``"0+0"``). Defaults to True.

    Returns:
        BagFormatValidation. On failure ``counts`` are all zero and
        ``error`` holds a human-readable message.
    """
    try:
        counts = parse_bag_format(bag_format)
    except InvalidBagFormatError as e:
        return BagFormatValidation(is_valid=False, error=str(e))

    if require_items and counts.total_count == 0:
        return BagFormatValidation(
            is_valid=False,
            error="Bag format must contain at least one item",
        )

    return BagFormatValidation(is_valid=True, counts=counts)


def format_bag_display(non_veg_count: int, veg_count: int) -> str:
    """Render counts as ``"N"`` or ``"N+V"``."""
    if veg_count == 0:
        return str(non_veg_count)
    return f"{non_veg_count}+{veg_count}"


def calculate_nea_end_time(start_time: datetime, duration_hours: int = 4) -> datetime:
    """End of the delivery (NEA) window that opens at ``start_time``."""
    return start_time + timedelta(hours=duration_hours)
