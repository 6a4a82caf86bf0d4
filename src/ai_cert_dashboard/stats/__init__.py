"""Statistics reshaping functions.

This package turns grouped statistics responses into table rows and chart
points ready for rendering. Everything here is synchronous and side-effect
free.

Modules:
    rates: Percentage calculation
    consolidate: Rollup of minor job categories into one synthetic row
    policies: Per-domain rollup strategies for the special maturity tier
    flatten: Maturity -> job category table flattening
    points: Chart point mapping with label and metric fallbacks
    overview: Entry-level manager and cadre overview tables
    details: Drill-down record mapping
"""

from .consolidate import (
    APPOINTMENT_COUNTERS,
    CERTIFICATION_COUNTERS,
    OTHER_CATEGORY,
    Counter,
    consolidate_categories,
)
from .details import (
    AppointmentAuditRecord,
    CertificationAuditRecord,
    distinct_values,
    to_appointment_records,
    to_certification_records,
)
from .flatten import (
    TOTAL_LABEL,
    flatten_cadre_appointment,
    flatten_cadre_certification,
    flatten_expert_appointment,
    flatten_expert_certification,
    flatten_maturity_statistics,
    is_total_row,
)
from .overview import (
    CadreAiCertificationRow,
    EntryLevelManagerRow,
    flatten_cadre_ai_overview,
    to_entry_level_manager_rows,
)
from .points import UNKNOWN_DEPARTMENT, resolve_label, resolve_metric, to_chart_points
from .policies import SPECIAL_TIER, StatisticsDomain, resolve_rollup
from .rates import calculate_rate
from .rows import (
    CadreAppointmentRow,
    CadreCertificationRow,
    ExpertAppointmentRow,
    ExpertCertificationRow,
)

__all__ = [
    "APPOINTMENT_COUNTERS",
    "CERTIFICATION_COUNTERS",
    "OTHER_CATEGORY",
    "SPECIAL_TIER",
    "TOTAL_LABEL",
    "UNKNOWN_DEPARTMENT",
    "AppointmentAuditRecord",
    "CadreAiCertificationRow",
    "CadreAppointmentRow",
    "CadreCertificationRow",
    "CertificationAuditRecord",
    "Counter",
    "EntryLevelManagerRow",
    "ExpertAppointmentRow",
    "ExpertCertificationRow",
    "StatisticsDomain",
    "calculate_rate",
    "consolidate_categories",
    "distinct_values",
    "flatten_cadre_ai_overview",
    "flatten_cadre_appointment",
    "flatten_cadre_certification",
    "flatten_expert_appointment",
    "flatten_expert_certification",
    "flatten_maturity_statistics",
    "is_total_row",
    "resolve_label",
    "resolve_metric",
    "resolve_rollup",
    "to_appointment_records",
    "to_certification_records",
    "to_chart_points",
    "to_entry_level_manager_rows",
]
