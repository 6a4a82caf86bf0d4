"""Department overview tables for entry-level managers and cadre positions."""

from ai_cert_dashboard.models import (
    CadreAiCertificationOverviewResponse,
    CadreAiOverviewStatistics,
    PlTmCertStatisticsResponse,
    PlTmDepartmentStatistics,
    ViewModel,
)
from ai_cert_dashboard.stats.flatten import TOTAL_LABEL
from ai_cert_dashboard.stats.rates import calculate_rate

__all__ = [
    "CadreAiCertificationRow",
    "EntryLevelManagerRow",
    "flatten_cadre_ai_overview",
    "to_entry_level_manager_rows",
]


class EntryLevelManagerRow(ViewModel):
    """TM/PL and PM appointment and certification figures for one department."""

    department: str = ""
    dept_code: str = ""
    is_summary: bool = False
    tm_pl_total_count: int = 0
    tm_pl_ai3_plus_count: int = 0
    tm_pl_ai3_plus_rate: float = 0.0
    tm_pl_professional_cert_count: int = 0
    tm_pl_professional_cert_rate: float = 0.0
    pm_total_count: int = 0
    pm_ai3_plus_count: int = 0
    pm_ai3_plus_rate: float = 0.0
    pm_professional_cert_count: int = 0
    pm_professional_cert_rate: float = 0.0


class CadreAiCertificationRow(ViewModel):
    """Cadre AI appointment figures for one department of the overview tree."""

    department: str = ""
    dept_code: str = ""
    total_cadre_count: int = 0
    l2_l3_count: int = 0
    software_l2_count: int = 0
    software_l3_count: int = 0
    non_software_l2_l3_count: int = 0
    meet_requirement_l2_l3_count: int = 0
    meet_requirement_l2_l3_rate: float = 0.0
    is_level3: bool = False
    is_level4: bool = False


def _entry_level_row(stat: PlTmDepartmentStatistics, is_summary: bool = False) -> EntryLevelManagerRow:
    # Upstream ratios are 0-1 and truncated to 4 places; derive percentages from counts
    pl_tm, pm = stat.pl_tm, stat.pm
    return EntryLevelManagerRow(
        department=stat.dept_name or stat.dept_code,
        dept_code=stat.dept_code,
        is_summary=is_summary,
        tm_pl_total_count=pl_tm.total_count,
        tm_pl_ai3_plus_count=pl_tm.qualified_count,
        tm_pl_ai3_plus_rate=calculate_rate(pl_tm.total_count, pl_tm.qualified_count),
        tm_pl_professional_cert_count=pl_tm.cert_count,
        tm_pl_professional_cert_rate=calculate_rate(pl_tm.total_count, pl_tm.cert_count),
        pm_total_count=pm.total_count,
        pm_ai3_plus_count=pm.qualified_count,
        pm_ai3_plus_rate=calculate_rate(pm.total_count, pm.qualified_count),
        pm_professional_cert_count=pm.cert_count,
        pm_professional_cert_rate=calculate_rate(pm.total_count, pm.cert_count),
    )


def to_entry_level_manager_rows(response: PlTmCertStatisticsResponse | None) -> list[EntryLevelManagerRow]:
    """Summary department first, then one row per fourth-level department."""
    if response is None:
        return []

    rows = []
    if response.summary is not None:
        rows.append(_entry_level_row(response.summary, is_summary=True))
    rows.extend(_entry_level_row(stat) for stat in response.department_list)
    return rows


def _cadre_overview_row(stat: CadreAiOverviewStatistics, depth: int) -> CadreAiCertificationRow:
    return CadreAiCertificationRow(
        department=stat.dept_name or stat.dept_code,
        dept_code=stat.dept_code,
        total_cadre_count=stat.total_cadre_count,
        l2_l3_count=stat.l2_l3_count,
        software_l2_count=stat.software_l2_count,
        software_l3_count=stat.software_l3_count,
        non_software_l2_l3_count=stat.non_software_l2_l3_count,
        meet_requirement_l2_l3_count=stat.meet_requirement_l2_l3_count,
        meet_requirement_l2_l3_rate=stat.meet_requirement_l2_l3_rate,
        is_level3=depth == 0,
        is_level4=depth == 1,
    )


def flatten_cadre_ai_overview(
    response: CadreAiCertificationOverviewResponse | None,
) -> list[CadreAiCertificationRow]:
    """Flatten the cadre overview tree depth-first.

    Top-level departments are third-level units and their children
    fourth-level units. The summary row, labelled as the total, comes last.
    """
    if response is None:
        return []

    rows: list[CadreAiCertificationRow] = []
    stack = [(stat, 0) for stat in reversed(response.department_list)]
    while stack:
        stat, depth = stack.pop()
        rows.append(_cadre_overview_row(stat, depth))
        stack.extend((child, depth + 1) for child in reversed(stat.children))

    if response.summary is not None:
        total = _cadre_overview_row(response.summary, depth=-1)
        total.department = TOTAL_LABEL
        rows.append(total)

    return rows
