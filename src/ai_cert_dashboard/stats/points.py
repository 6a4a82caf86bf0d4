"""Chart point mapping for department and category statistics."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ai_cert_dashboard.models import ChartPoint

logger = logging.getLogger(__name__)

__all__ = [
    "CATEGORY_LABEL",
    "DEPARTMENT_LABEL",
    "METRIC_FALLBACKS",
    "UNKNOWN_DEPARTMENT",
    "resolve_label",
    "resolve_metric",
    "to_chart_points",
]

UNKNOWN_DEPARTMENT = "未知部门"

# Ordered accessors per metric. The appointment fields were called
# certified* by older backends, so they fall back to those names.
METRIC_FALLBACKS: dict[str, tuple[str, ...]] = {
    "total_count": ("total_count", "baseline_count"),
    "certified_count": ("certified_count",),
    "cert_rate": ("cert_rate",),
    "qualified_count": ("qualified_count", "certified_count"),
    "qualified_rate": ("qualified_rate", "cert_rate"),
}

DEPARTMENT_LABEL: tuple[str, ...] = ("dept_name", "dept_code")
CATEGORY_LABEL: tuple[str, ...] = ("competence_category", "job_category")


def _get(stat: Any, name: str) -> Any:
    if isinstance(stat, Mapping):
        return stat.get(name)
    return getattr(stat, name, None)


def resolve_metric(stat: Any, metric: str) -> float:
    """Read a metric through its fallback chain.

    Args:
        stat: Statistic model or mapping.
        metric: Key of :data:`METRIC_FALLBACKS`; unknown keys are read directly.

    Returns:
        The first non-None value in the chain, or 0.
    """
    for name in METRIC_FALLBACKS.get(metric, (metric,)):
        value = _get(stat, name)
        if value is not None:
            return value
    return 0


def resolve_label(stat: Any, label_fields: Iterable[str] = DEPARTMENT_LABEL) -> str:
    """First non-blank label field, or the unknown-department placeholder."""
    for name in label_fields:
        value = _get(stat, name)
        if isinstance(value, str) and value.strip():
            return value
    return UNKNOWN_DEPARTMENT


def to_chart_points(
    stats: Iterable[Any] | None,
    count_metric: str,
    rate_metric: str,
    label_fields: Iterable[str] = DEPARTMENT_LABEL,
) -> list[ChartPoint]:
    """Map statistics to ``{label, count, rate}`` chart points.

    Args:
        stats: Department or category statistics.
        count_metric: Key of :data:`METRIC_FALLBACKS` used for the count.
        rate_metric: Key of :data:`METRIC_FALLBACKS` used for the rate.
        label_fields: Label accessors tried in order.

    Returns:
        One chart point per statistic, in input order.
    """
    label_fields = tuple(label_fields)
    points = []
    for stat in stats or []:
        dept_code = _get(stat, "dept_code")
        points.append(
            ChartPoint(
                label=resolve_label(stat, label_fields),
                count=int(resolve_metric(stat, count_metric)),
                rate=float(resolve_metric(stat, rate_metric)),
                dept_code=dept_code or None,
            )
        )
    return points
