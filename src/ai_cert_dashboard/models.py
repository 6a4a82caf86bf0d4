"""Pydantic models for statistics API payloads.

Upstream payloads use camelCase keys; the models expose snake_case attributes
through an alias generator so responses validate directly and serialize back
with ``model_dump(by_alias=True)``. Explicit ``null`` values are dropped
before validation so the field defaults apply.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model for camelCase API payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls as missing so field defaults apply."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ViewModel(BaseModel):
    """Base model for payloads handed to the presentation layer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the presentation layer expects."""
        return self.model_dump(by_alias=True)


# ============================================================================
# Department level statistics
# ============================================================================


class DepartmentCertStatistic(WireModel):
    """Certification and appointment counts for one department."""

    dept_code: str = ""
    dept_name: str = ""
    total_count: int = 0
    certified_count: int = 0
    cert_rate: float = 0.0
    qualified_count: int | None = None
    qualified_rate: float | None = None


class EmployeeCertStatisticsResponse(WireModel):
    """Per-department statistics with an overall total."""

    department_statistics: list[DepartmentCertStatistic] = Field(default_factory=list)
    total_statistics: DepartmentCertStatistic | None = None


class CompetenceCategoryCertStatistics(WireModel):
    """Certification and appointment counts for one competence category."""

    competence_category: str = ""
    total_count: int = 0
    certified_count: int = 0
    qualified_count: int = 0
    cert_rate: float = 0.0
    qualified_rate: float = 0.0


class CompetenceCategoryCertStatisticsResponse(WireModel):
    """Per-category statistics for one department."""

    dept_code: str = ""
    dept_name: str = ""
    category_statistics: list[CompetenceCategoryCertStatistics] = Field(default_factory=list)
    total_statistics: CompetenceCategoryCertStatistics | None = None


# ============================================================================
# Maturity -> job category statistics
# ============================================================================


class CertMetrics(WireModel):
    """Certification counters shared by tiers and job categories."""

    baseline_count: int = 0
    certified_count: int = 0
    cert_rate: float = 0.0


class CadreCertMetrics(CertMetrics):
    """Cadre certification counters, including subject two and compliance."""

    subject2_pass_count: int = 0
    subject2_pass_rate: float = 0.0
    cert_standard_count: int | None = None
    cert_standard_rate: float | None = None


class QualifiedMetrics(WireModel):
    """Appointment counters shared by tiers and job categories."""

    baseline_count: int = 0
    qualified_count: int = 0
    qualified_rate: float = 0.0
    qualified_by_requirement_count: int | None = None
    qualified_by_requirement_rate: float | None = None
    baseline_count_by_requirement: int | None = None


class ExpertJobCategoryCertStatistics(CertMetrics):
    job_category: str = ""


class ExpertMaturityCertStatistics(CertMetrics):
    maturity_level: str = ""
    job_category_statistics: list[ExpertJobCategoryCertStatistics] = Field(default_factory=list)


class CadreJobCategoryCertStatistics(CadreCertMetrics):
    job_category: str = ""


class CadreMaturityCertStatistics(CadreCertMetrics):
    maturity_level: str = ""
    job_category_statistics: list[CadreJobCategoryCertStatistics] = Field(default_factory=list)


class JobCategoryQualifiedStatistics(QualifiedMetrics):
    job_category: str = ""


class MaturityQualifiedStatistics(QualifiedMetrics):
    maturity_level: str = ""
    job_category_statistics: list[JobCategoryQualifiedStatistics] = Field(default_factory=list)


class ExpertAiCertStatisticsResponse(WireModel):
    """Expert certification statistics grouped by maturity and job category."""

    dept_code: str = ""
    dept_name: str = ""
    maturity_statistics: list[ExpertMaturityCertStatistics] = Field(default_factory=list)
    total_statistics: ExpertMaturityCertStatistics | None = None


class CadreMaturityJobCategoryCertStatisticsResponse(WireModel):
    """Cadre certification statistics grouped by maturity and job category."""

    dept_code: str = ""
    dept_name: str = ""
    maturity_statistics: list[CadreMaturityCertStatistics] = Field(default_factory=list)
    total_statistics: CadreMaturityCertStatistics | None = None


class MaturityQualifiedStatisticsResponse(WireModel):
    """Appointment statistics grouped by maturity and job category.

    Cadre and expert appointment endpoints share this shape; only experts
    populate ``baseline_count_by_requirement``.
    """

    dept_code: str = ""
    dept_name: str = ""
    maturity_statistics: list[MaturityQualifiedStatistics] = Field(default_factory=list)
    total_statistics: MaturityQualifiedStatistics | None = None


# ============================================================================
# Entry-level managers and cadre overview
# ============================================================================


class PlTmPmStatistics(WireModel):
    """Appointment / certification counters for PL-TM or PM staff."""

    total_count: int = 0
    qualified_count: int = 0
    qualified_ratio: float = 0.0
    cert_count: int = 0
    cert_ratio: float = 0.0


class PlTmDepartmentStatistics(WireModel):
    dept_code: str = ""
    dept_name: str = ""
    pl_tm: PlTmPmStatistics = Field(default_factory=PlTmPmStatistics)
    pm: PlTmPmStatistics = Field(default_factory=PlTmPmStatistics)


class PlTmCertStatisticsResponse(WireModel):
    summary: PlTmDepartmentStatistics | None = None
    department_list: list[PlTmDepartmentStatistics] = Field(default_factory=list)


class CadreAiOverviewStatistics(WireModel):
    """Cadre AI appointment overview for one department subtree."""

    dept_code: str = ""
    dept_name: str = ""
    dept_level: str = ""
    total_cadre_count: int = 0
    l2_l3_count: int = 0
    software_l2_count: int = 0
    software_l3_count: int = 0
    non_software_l2_l3_count: int = 0
    meet_requirement_l2_l3_count: int = 0
    meet_requirement_l2_l3_rate: float = 0.0
    children: list["CadreAiOverviewStatistics"] = Field(default_factory=list)


class CadreAiCertificationOverviewResponse(WireModel):
    summary: CadreAiOverviewStatistics | None = None
    department_list: list[CadreAiOverviewStatistics] = Field(default_factory=list)


# ============================================================================
# Drill-down, departments and trends
# ============================================================================


class EmployeeDetail(WireModel):
    """One employee returned by a drill-down query."""

    name: str = ""
    employee_number: str = ""
    competence_category: str = ""
    competence_subcategory: str = ""
    first_level_dept: str = ""
    second_level_dept: str = ""
    third_level_dept: str = ""
    fourth_level_dept: str = ""
    fifth_level_dept: str = ""
    sixth_level_dept: str = ""
    cert_title: str = ""
    cert_start_time: str = ""
    is_passed_subject2: int | None = None
    is_cadre: int | None = None
    ai_maturity: str = ""
    mini_dept_name: str = ""
    cadre_type: str = ""
    competence_family_cn: str = ""
    competence_category_cn: str = ""
    competence_subcategory_cn: str = ""
    direction_cn_name: str = ""
    competence_rating_cn: str = ""
    competence_grade_cn: str = ""
    competence_from: str = ""
    competence_to: str = ""
    is_qualifications_standard: int | None = None
    is_cert_standard: int | None = None


class EmployeeDrillDownResponse(WireModel):
    employee_details: list[EmployeeDetail] = Field(default_factory=list)


class DepartmentInfo(WireModel):
    """Department node as returned by the department-info endpoint."""

    dept_code: str = ""
    dept_name: str = ""
    dept_level: str = ""
    parent_dept_code: str | None = None
    children: list["DepartmentInfo"] = Field(default_factory=list)


class ChartPoint(WireModel):
    """One bar/point of a dashboard chart."""

    label: str
    count: int = 0
    rate: float = 0.0
    dept_code: str | None = None


class OverallCertificationTrends(WireModel):
    department_appointment: list[ChartPoint] = Field(default_factory=list)
    organization_appointment: list[ChartPoint] = Field(default_factory=list)
    job_category_appointment: list[ChartPoint] = Field(default_factory=list)
    department_certification: list[ChartPoint] = Field(default_factory=list)
    organization_certification: list[ChartPoint] = Field(default_factory=list)
    job_category_certification: list[ChartPoint] = Field(default_factory=list)


# ============================================================================
# Personal course completion
# ============================================================================


class CourseInfo(WireModel):
    course_name: str = ""
    course_number: str = ""
    is_completed: bool = False


class CourseCategoryStatistics(WireModel):
    """Course completion for one course level (基础, 进阶, 高阶, 实战)."""

    course_level: str = ""
    total_courses: int = 0
    target_courses: int = 0
    completed_courses: int = 0
    completion_rate: float = 0.0
    course_list: list[CourseInfo] = Field(default_factory=list)


class PersonalCourseCompletionResponse(WireModel):
    """Course completion of the employee identified by the request account."""

    emp_num: str = ""
    emp_name: str = ""
    course_statistics: list[CourseCategoryStatistics] = Field(default_factory=list)
