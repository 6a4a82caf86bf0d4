"""Drill-down record mapping for employee detail queries."""

from collections.abc import Iterable

from ai_cert_dashboard.models import EmployeeDetail, ViewModel

__all__ = [
    "AppointmentAuditRecord",
    "CertificationAuditRecord",
    "distinct_values",
    "to_appointment_records",
    "to_certification_records",
]


class AuditRecord(ViewModel):
    """Employee identity and organisation columns shared by both record kinds."""

    id: str
    name: str = ""
    employee_id: str = ""
    position_category: str = ""
    position_sub_category: str = ""
    department_level1: str = ""
    department_level2: str = ""
    department_level3: str = ""
    department_level4: str = ""
    department_level5: str = ""
    department_level6: str = ""
    min_department: str = ""
    is_cadre: bool = False
    cadre_type: str = ""
    position_maturity: str = ""


class CertificationAuditRecord(AuditRecord):
    certificate_name: str = ""
    certificate_effective_date: str = ""
    subject_two_passed: bool = False
    is_cert_standard: bool | None = None


class AppointmentAuditRecord(AuditRecord):
    professional_category: str = ""
    professional_sub_category: str = ""
    qualification_direction: str = ""
    qualification_level: str = ""
    effective_date: str = ""
    expiry_date: str = ""
    is_qualified: bool | None = None


def _flag(value: int | None) -> bool | None:
    if value is None:
        return None
    return value == 1


def _base_fields(detail: EmployeeDetail, index: int) -> dict[str, object]:
    return {
        "id": f"{detail.employee_number or 'employee'}-{index}",
        "name": detail.name,
        "employee_id": detail.employee_number,
        "position_category": detail.competence_category,
        "position_sub_category": detail.competence_subcategory,
        "department_level1": detail.first_level_dept,
        "department_level2": detail.second_level_dept,
        "department_level3": detail.third_level_dept,
        "department_level4": detail.fourth_level_dept,
        "department_level5": detail.fifth_level_dept,
        "department_level6": detail.sixth_level_dept,
        "min_department": detail.mini_dept_name,
        "is_cadre": detail.is_cadre == 1 or bool(detail.cadre_type),
        "cadre_type": detail.cadre_type,
        "position_maturity": detail.ai_maturity,
    }


def to_certification_records(details: Iterable[EmployeeDetail]) -> list[CertificationAuditRecord]:
    """Map drill-down employees to certification audit records."""
    return [
        CertificationAuditRecord(
            **_base_fields(detail, index),
            certificate_name=detail.cert_title,
            certificate_effective_date=detail.cert_start_time,
            subject_two_passed=detail.is_passed_subject2 == 1,
            is_cert_standard=_flag(detail.is_cert_standard),
        )
        for index, detail in enumerate(details)
    ]


def to_appointment_records(details: Iterable[EmployeeDetail]) -> list[AppointmentAuditRecord]:
    """Map drill-down employees to appointment audit records."""
    return [
        AppointmentAuditRecord(
            **_base_fields(detail, index),
            professional_category=detail.competence_category_cn,
            professional_sub_category=detail.competence_subcategory_cn,
            qualification_direction=detail.direction_cn_name,
            qualification_level=detail.competence_rating_cn,
            effective_date=detail.competence_from,
            expiry_date=detail.competence_to,
            is_qualified=_flag(detail.is_qualifications_standard),
        )
        for index, detail in enumerate(details)
    ]


def distinct_values(details: Iterable[EmployeeDetail], field: str) -> list[str]:
    """Non-empty values of ``field`` in first-seen order."""
    seen: dict[str, None] = {}
    for detail in details:
        value = getattr(detail, field, "")
        if value:
            seen.setdefault(value, None)
    return list(seen)
