"""Per-domain rollup policies for the special maturity tier.

Experts are rolled up client-side while cadre data arrives already merged by
the backend, so the two domains deliberately use different strategies.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel

from ai_cert_dashboard.stats.consolidate import (
    APPOINTMENT_COUNTERS,
    CERTIFICATION_COUNTERS,
    OTHER_CATEGORY,
    Counter,
    consolidate_categories,
)

__all__ = [
    "NON_SOFTWARE_CATEGORY",
    "ROLLUP_POLICIES",
    "SOFTWARE_CATEGORY",
    "SPECIAL_TIER",
    "Consolidate",
    "PassThrough",
    "RollupPolicy",
    "StatisticsDomain",
    "resolve_rollup",
]

SPECIAL_TIER = "L2"
SOFTWARE_CATEGORY = "软件类"
NON_SOFTWARE_CATEGORY = "非软件类"
EXPERT_CERTIFICATION_CATEGORIES = frozenset({"测试类", SOFTWARE_CATEGORY, "系统类", "研究类"})

CategoryT = TypeVar("CategoryT", bound=BaseModel)


class StatisticsDomain(Enum):
    """Which table a maturity response is flattened into."""

    CADRE_CERTIFICATION = "cadre_certification"
    CADRE_APPOINTMENT = "cadre_appointment"
    EXPERT_CERTIFICATION = "expert_certification"
    EXPERT_APPOINTMENT = "expert_appointment"


@dataclass(frozen=True)
class PassThrough:
    """Emit job categories exactly as upstream returned them."""

    def apply(self, categories: Sequence[CategoryT]) -> list[CategoryT]:
        return list(categories)


@dataclass(frozen=True)
class Consolidate:
    """Keep allow-listed job categories and merge the rest into one row."""

    allow_list: frozenset[str]
    counters: tuple[Counter, ...]
    other_label: str = OTHER_CATEGORY

    def apply(self, categories: Sequence[CategoryT]) -> list[CategoryT]:
        return consolidate_categories(categories, self.allow_list, self.counters, self.other_label)


RollupPolicy = PassThrough | Consolidate

PASS_THROUGH = PassThrough()

ROLLUP_POLICIES: dict[tuple[StatisticsDomain, str], RollupPolicy] = {
    (StatisticsDomain.EXPERT_CERTIFICATION, SPECIAL_TIER): Consolidate(
        allow_list=EXPERT_CERTIFICATION_CATEGORIES,
        counters=CERTIFICATION_COUNTERS,
    ),
    (StatisticsDomain.EXPERT_APPOINTMENT, SPECIAL_TIER): Consolidate(
        allow_list=frozenset({SOFTWARE_CATEGORY}),
        counters=APPOINTMENT_COUNTERS,
        other_label=NON_SOFTWARE_CATEGORY,
    ),
    # Cadre responses are merged server-side for the special tier.
    (StatisticsDomain.CADRE_CERTIFICATION, SPECIAL_TIER): PASS_THROUGH,
    (StatisticsDomain.CADRE_APPOINTMENT, SPECIAL_TIER): PASS_THROUGH,
}


def resolve_rollup(domain: StatisticsDomain, tier: str) -> RollupPolicy:
    """Look up the job category rollup for a maturity tier.

    Args:
        domain: Table being built.
        tier: Maturity level label of the tier.

    Returns:
        The registered policy, or pass-through when none is registered.
    """
    return ROLLUP_POLICIES.get((domain, tier), PASS_THROUGH)
