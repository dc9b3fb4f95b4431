"""FTE, utilization and recommended-hours formulas.

Formulas:
- fte = contract_hours / standard_fte_hours
- utilization = round_half_up(allocated / contract * 100), 0 when contract <= 0
- hours_per_credit = (teaching + marking) / credits
- breakdown share = round_half_up(category / contract * 100), rounded per category

Breakdown shares are rounded independently, so they are not guaranteed to sum
to exactly 100.
"""

from __future__ import annotations

from typing import Literal

from workload.exceptions import DivisionError, InvalidArgument

from .hours import capacity, round_half_up, total_allocated

STANDARD_FTE_HOURS = 1650

UtilizationStatus = Literal["overloaded", "near-capacity", "good", "available"]

OVERLOADED: UtilizationStatus = "overloaded"
NEAR_CAPACITY: UtilizationStatus = "near-capacity"
GOOD: UtilizationStatus = "good"
AVAILABLE: UtilizationStatus = "available"

# (teaching, admin, research) shares; "other" takes the remainder.
FAMILY_RATIOS: dict[str, tuple[float, float, float]] = {
    "Research Academic": (0.3, 0.2, 0.4),
    "Teaching Academic": (0.6, 0.3, 0.1),
    "Academic Practitioner": (0.8, 0.2, 0.0),
}
DEFAULT_FAMILY_RATIOS = (0.6, 0.3, 0.1)


def calculate_fte(contract_hours: float, standard_fte_hours: float = STANDARD_FTE_HOURS) -> float:
    """Return the FTE fraction of a contract; not clamped, may exceed 1.0."""
    if standard_fte_hours <= 0:
        raise DivisionError("Standard FTE hours must be greater than 0")
    return contract_hours / standard_fte_hours


def utilization_ratio(allocated_hours: float, contract_hours: float) -> float:
    """Unrounded utilization percentage, 0 for a non-positive contract."""
    if contract_hours <= 0:
        return 0.0
    return (allocated_hours / contract_hours) * 100


def calculate_utilization(allocated_hours: float, contract_hours: float) -> int:
    return round_half_up(utilization_ratio(allocated_hours, contract_hours))


def get_utilization_status(utilization: float) -> UtilizationStatus:
    if utilization > 100:
        return OVERLOADED
    if utilization >= 90:
        return NEAR_CAPACITY
    if utilization >= 70:
        return GOOD
    return AVAILABLE


def calculate_hours_per_credit(credits: float, teaching_hours: float, marking_hours: float) -> float:
    if credits <= 0:
        raise InvalidArgument("Credits must be greater than 0")
    return (teaching_hours + marking_hours) / credits


def calculate_workload_breakdown(
    teaching: float,
    admin: float,
    research: float,
    other: float,
    total_contract: float,
) -> dict[str, int]:
    """Percentage share of the contract per category plus what is left."""
    if total_contract <= 0:
        return {"teaching": 0, "admin": 0, "research": 0, "other": 0, "available": 0}

    available = capacity(total_contract, total_allocated(teaching, admin, research, other))
    return {
        "teaching": round_half_up(teaching / total_contract * 100),
        "admin": round_half_up(admin / total_contract * 100),
        "research": round_half_up(research / total_contract * 100),
        "other": round_half_up(other / total_contract * 100),
        "available": round_half_up(available / total_contract * 100),
    }


def calculate_recommended_hours(
    fte: float,
    family: str | None,
    standard_contract_hours: float = STANDARD_FTE_HOURS,
) -> dict[str, int]:
    """Recommended contract split for an academic family.

    Unknown or missing families fall back to the Teaching Academic split.
    """
    contract = round_half_up(fte * standard_contract_hours)
    teaching_ratio, admin_ratio, research_ratio = FAMILY_RATIOS.get(family or "", DEFAULT_FAMILY_RATIOS)
    other_ratio = max(0.0, 1.0 - teaching_ratio - admin_ratio - research_ratio)
    return {
        "total_contract": contract,
        "max_teaching": round_half_up(contract * teaching_ratio),
        "max_admin": round_half_up(contract * admin_ratio),
        "recommended_research": round_half_up(contract * research_ratio),
        "recommended_other": round_half_up(contract * other_ratio),
    }
