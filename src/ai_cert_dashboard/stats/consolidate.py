"""Job category consolidation into an "Other" bucket."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel

from ai_cert_dashboard.stats.rates import calculate_rate

logger = logging.getLogger(__name__)

__all__ = [
    "APPOINTMENT_COUNTERS",
    "CERTIFICATION_COUNTERS",
    "OTHER_CATEGORY",
    "TOTAL_LABELS",
    "Counter",
    "consolidate_categories",
]

OTHER_CATEGORY = "其他类"
TOTAL_LABELS = frozenset({"总计", "Total"})

CategoryT = TypeVar("CategoryT", bound=BaseModel)


@dataclass(frozen=True)
class Counter:
    """One summed field of a category, with the rate derived from it.

    Attributes:
        field: Count attribute summed across the merged categories.
        rate_field: Rate attribute recomputed from the sum, if any.
        denominator: Attribute whose sum is the rate denominator.
    """

    field: str
    rate_field: str | None = None
    denominator: str = "baseline_count"


CERTIFICATION_COUNTERS: tuple[Counter, ...] = (
    Counter("baseline_count"),
    Counter("certified_count", "cert_rate"),
)

APPOINTMENT_COUNTERS: tuple[Counter, ...] = (
    Counter("baseline_count"),
    Counter("qualified_count", "qualified_rate"),
    Counter("qualified_by_requirement_count", "qualified_by_requirement_rate"),
    Counter("baseline_count_by_requirement"),
)


def consolidate_categories(
    categories: Sequence[CategoryT],
    allow_list: Iterable[str],
    counters: Sequence[Counter] = CERTIFICATION_COUNTERS,
    other_label: str = OTHER_CATEGORY,
) -> list[CategoryT]:
    """Keep allow-listed categories and merge the rest into one synthetic row.

    Args:
        categories: Job category statistics in upstream order.
        allow_list: Category names passed through unchanged.
        counters: Fields summed into the synthetic row.
        other_label: Name of the synthetic row.

    Returns:
        Kept categories in input order, followed by the synthetic row when any
        of its summed counters is non-zero. Categories named like a total row
        are dropped.
    """
    allowed = set(allow_list)
    kept: list[CategoryT] = []
    merged: list[CategoryT] = []

    for category in categories:
        name = getattr(category, "job_category", "")
        if name in allowed:
            kept.append(category)
        elif name not in TOTAL_LABELS:
            merged.append(category)

    if not merged:
        return kept

    sums = {counter.field: sum(getattr(c, counter.field, None) or 0 for c in merged) for counter in counters}
    if not any(sums.values()):
        return kept

    values: dict[str, object] = {"job_category": other_label, **sums}
    for counter in counters:
        if counter.rate_field:
            values[counter.rate_field] = calculate_rate(sums.get(counter.denominator, 0), sums[counter.field])

    logger.debug(
        "Merged %d categories into %s (%s)",
        len(merged),
        other_label,
        ", ".join(getattr(c, "job_category", "") for c in merged),
    )
    kept.append(type(merged[0])(**values))
    return kept
