"""Hour arithmetic primitives shared by every workload formula.

Remaining-hour helpers floor at zero: a lecturer may be over-allocated, but the
reported remaining capacity never goes negative. No validation happens here;
negative inputs propagate to the caller.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(float(value) + 0.5))


def total_allocated(
    teaching: float,
    admin: float,
    research: float = 0,
    other: float = 0,
) -> float:
    return teaching + admin + research + other


def capacity(total_contract: float, total_allocated_hours: float) -> float:
    return max(0, total_contract - total_allocated_hours)


def teaching_availability(max_teaching_hours: float, teaching_hours: float) -> float:
    return max(0, max_teaching_hours - teaching_hours)


def admin_availability(max_admin_hours: float, admin_hours: float) -> float:
    return max(0, max_admin_hours - admin_hours)
