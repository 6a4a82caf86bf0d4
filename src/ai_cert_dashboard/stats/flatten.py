"""Flatten maturity -> job category responses into table rows.

Every variant produces the same row order: for each maturity tier, the tier's
own row followed by its job category rows, then one grand-total row. The
variants differ only in the metric columns copied onto each row and in the
rollup applied to the special tier (see :mod:`ai_cert_dashboard.stats.policies`).
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any, TypeVar

from ai_cert_dashboard.models import (
    CadreCertMetrics,
    CadreMaturityJobCategoryCertStatisticsResponse,
    CertMetrics,
    ExpertAiCertStatisticsResponse,
    MaturityQualifiedStatisticsResponse,
    QualifiedMetrics,
)
from ai_cert_dashboard.stats.consolidate import TOTAL_LABELS
from ai_cert_dashboard.stats.policies import StatisticsDomain, resolve_rollup
from ai_cert_dashboard.stats.rows import (
    CadreAppointmentRow,
    CadreCertificationRow,
    ExpertAppointmentRow,
    ExpertCertificationRow,
    SummaryRow,
)

logger = logging.getLogger(__name__)

__all__ = [
    "TOTAL_LABEL",
    "RowPlacement",
    "flatten_cadre_appointment",
    "flatten_cadre_certification",
    "flatten_expert_appointment",
    "flatten_expert_certification",
    "flatten_maturity_statistics",
    "is_total_row",
]

TOTAL_LABEL = "总计"

RowT = TypeVar("RowT", bound=SummaryRow)


@dataclass(frozen=True)
class RowPlacement:
    """Where a statistic lands in the flattened table."""

    maturity_level: str = ""
    job_category: str = ""
    is_maturity_row: bool = False
    parent_maturity_level: str = ""


def flatten_maturity_statistics(
    response: Any,
    build_row: Callable[[Any, RowPlacement], RowT],
    domain: StatisticsDomain,
    previous_rows: list[RowT] | None = None,
) -> list[RowT]:
    """Flatten a maturity-grouped response into ordered table rows.

    Args:
        response: Response with ``maturity_statistics`` and ``total_statistics``.
        build_row: Maps one statistic and its placement to a row.
        domain: Selects the special-tier rollup policy.
        previous_rows: Last rows rendered for this table.

    Returns:
        The flattened rows, or ``previous_rows`` unchanged when the response
        carries no maturity statistics.
    """
    maturity_statistics = getattr(response, "maturity_statistics", None)
    if not maturity_statistics:
        logger.debug("No maturity statistics for %s, keeping previous rows", domain.value)
        return previous_rows if previous_rows is not None else []

    rows: list[RowT] = []
    for maturity in maturity_statistics:
        tier = maturity.maturity_level
        rows.append(build_row(maturity, RowPlacement(maturity_level=tier, is_maturity_row=True)))

        categories = resolve_rollup(domain, tier).apply(maturity.job_category_statistics or [])
        for category in categories:
            placement = RowPlacement(job_category=category.job_category, parent_maturity_level=tier)
            rows.append(build_row(category, placement))

    total = response.total_statistics
    if total is not None:
        label = total.maturity_level or TOTAL_LABEL
        rows.append(build_row(total, RowPlacement(maturity_level=label, is_maturity_row=True)))

    return rows


# ============================================================================
# Row builders
# ============================================================================


def _expert_certification_row(stat: CertMetrics, placement: RowPlacement) -> ExpertCertificationRow:
    return ExpertCertificationRow(
        maturity_level=placement.maturity_level,
        job_category=placement.job_category,
        is_maturity_row=placement.is_maturity_row,
        baseline=stat.baseline_count,
        certified=stat.certified_count,
        certification_rate=stat.cert_rate,
    )


def _expert_appointment_row(stat: QualifiedMetrics, placement: RowPlacement) -> ExpertAppointmentRow:
    return ExpertAppointmentRow(
        maturity_level=placement.maturity_level,
        job_category=placement.job_category,
        is_maturity_row=placement.is_maturity_row,
        baseline=stat.baseline_count,
        appointed=stat.qualified_count,
        appointed_by_requirement=stat.qualified_by_requirement_count or 0,
        appointment_rate=stat.qualified_rate,
        certification_compliance=stat.qualified_by_requirement_rate or 0,
        baseline_count_by_requirement=stat.baseline_count_by_requirement,
    )


def _cadre_certification_row(
    stat: CadreCertMetrics,
    placement: RowPlacement,
    include_cert_standard: bool = True,
) -> CadreCertificationRow:
    return CadreCertificationRow(
        maturity_level=placement.maturity_level,
        job_category=placement.job_category,
        is_maturity_row=placement.is_maturity_row,
        baseline=stat.baseline_count,
        ai_certificate_holders=stat.certified_count,
        subject_two_passed=stat.subject2_pass_count,
        certificate_rate=stat.cert_rate,
        subject_two_rate=stat.subject2_pass_rate,
        cert_standard_count=stat.cert_standard_count if include_cert_standard else None,
        compliance_rate=stat.cert_standard_rate if include_cert_standard else None,
        parent_maturity_level=placement.parent_maturity_level,
    )


def _cadre_appointment_row(stat: QualifiedMetrics, placement: RowPlacement) -> CadreAppointmentRow:
    return CadreAppointmentRow(
        maturity_level=placement.maturity_level,
        job_category=placement.job_category,
        is_maturity_row=placement.is_maturity_row,
        baseline=stat.baseline_count,
        appointed=stat.qualified_count,
        appointed_by_requirement=stat.qualified_by_requirement_count or 0,
        appointment_rate=stat.qualified_rate,
        certification_compliance=stat.qualified_by_requirement_rate or 0,
    )


# ============================================================================
# Public variants
# ============================================================================


def flatten_expert_certification(
    response: ExpertAiCertStatisticsResponse | None,
    previous_rows: list[ExpertCertificationRow] | None = None,
) -> list[ExpertCertificationRow]:
    """Expert certification table; the special tier keeps four categories plus "Other"."""
    return flatten_maturity_statistics(
        response, _expert_certification_row, StatisticsDomain.EXPERT_CERTIFICATION, previous_rows
    )


def flatten_expert_appointment(
    response: MaturityQualifiedStatisticsResponse | None,
    previous_rows: list[ExpertAppointmentRow] | None = None,
) -> list[ExpertAppointmentRow]:
    """Expert appointment table; the special tier splits software vs. non-software."""
    return flatten_maturity_statistics(
        response, _expert_appointment_row, StatisticsDomain.EXPERT_APPOINTMENT, previous_rows
    )


def flatten_cadre_certification(
    response: CadreMaturityJobCategoryCertStatisticsResponse | None,
    previous_rows: list[CadreCertificationRow] | None = None,
    include_cert_standard: bool = True,
) -> list[CadreCertificationRow]:
    """Cadre certification table.

    Args:
        response: Cadre certification statistics.
        previous_rows: Rows to keep when the response is empty.
        include_cert_standard: Copy the compliance columns from upstream; when
            False they are left as None.

    Returns:
        Flattened rows with the owning tier tagged on job category rows.
    """
    build_row = partial(_cadre_certification_row, include_cert_standard=include_cert_standard)
    return flatten_maturity_statistics(
        response, build_row, StatisticsDomain.CADRE_CERTIFICATION, previous_rows
    )


def flatten_cadre_appointment(
    response: MaturityQualifiedStatisticsResponse | None,
    previous_rows: list[CadreAppointmentRow] | None = None,
) -> list[CadreAppointmentRow]:
    """Cadre appointment table; job categories are emitted as returned."""
    return flatten_maturity_statistics(
        response, _cadre_appointment_row, StatisticsDomain.CADRE_APPOINTMENT, previous_rows
    )


def is_total_row(row: SummaryRow) -> bool:
    """Check whether a row is the grand-total row."""
    return row.is_maturity_row and row.maturity_level in TOTAL_LABELS
