"""Rate calculation shared by every aggregation path."""

__all__ = ["calculate_rate"]


def calculate_rate(total: float | None, count: float | None) -> float:
    """Percentage of ``count`` over ``total`` rounded to 2 decimal places.

    Args:
        total: Denominator (eligible population).
        count: Numerator.

    Returns:
        ``round(count / total * 100, 2)``, or 0 when total is zero or missing.
    """
    if not total:
        return 0
    return round((count or 0) / total * 100, 2)
