"""Flattened table row models.

Maturity rows and the grand-total row carry ``maturity_level`` and leave
``job_category`` empty; job category rows do the opposite. The presentation
layer renders the two columns as merged cells.
"""

from ai_cert_dashboard.models import ViewModel

__all__ = [
    "CadreAppointmentRow",
    "CadreCertificationRow",
    "ExpertAppointmentRow",
    "ExpertCertificationRow",
    "SummaryRow",
]


class SummaryRow(ViewModel):
    """Columns shared by every maturity / job category table."""

    maturity_level: str = ""
    job_category: str = ""
    is_maturity_row: bool = False
    baseline: int = 0


class ExpertCertificationRow(SummaryRow):
    certified: int = 0
    certification_rate: float = 0.0


class ExpertAppointmentRow(SummaryRow):
    appointed: int = 0
    appointed_by_requirement: int = 0
    appointment_rate: float = 0.0
    certification_compliance: float = 0.0
    baseline_count_by_requirement: int | None = None


class CadreCertificationRow(SummaryRow):
    ai_certificate_holders: int = 0
    subject_two_passed: int = 0
    certificate_rate: float = 0.0
    subject_two_rate: float = 0.0
    cert_standard_count: int | None = None
    compliance_rate: float | None = None
    # Owning tier of a job category row; empty on maturity and total rows
    parent_maturity_level: str = ""


class CadreAppointmentRow(SummaryRow):
    appointed: int = 0
    appointed_by_requirement: int = 0
    appointment_rate: float = 0.0
    certification_compliance: float = 0.0
