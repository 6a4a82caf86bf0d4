"""View-models handed to the presentation layer."""

from collections.abc import Iterable

from pydantic import Field

from ai_cert_dashboard.models import (
    ChartPoint,
    CompetenceCategoryCertStatisticsResponse,
    DepartmentInfo,
    EmployeeCertStatisticsResponse,
    ViewModel,
)
from ai_cert_dashboard.stats.details import AppointmentAuditRecord, CertificationAuditRecord
from ai_cert_dashboard.stats.overview import CadreAiCertificationRow
from ai_cert_dashboard.stats.rows import (
    CadreAppointmentRow,
    CadreCertificationRow,
    ExpertAppointmentRow,
    ExpertCertificationRow,
)

ALL_MATURITY = "全部"


class SelectOption(ViewModel):
    label: str
    value: str


class DepartmentNode(ViewModel):
    """Cascader node of the department filter."""

    label: str
    value: str
    children: list["DepartmentNode"] = Field(default_factory=list)
    disabled: bool = False


class MetricItem(ViewModel):
    """Headline figure shown above the dashboard tables."""

    id: str
    title: str
    value: float
    unit: str | None = None


ROLE_OPTIONS: tuple[SelectOption, ...] = (
    SelectOption(label="全员", value="0"),
    SelectOption(label="干部", value="1"),
    SelectOption(label="专家", value="2"),
    SelectOption(label="基层主管", value="3"),
)

MATURITY_OPTIONS: tuple[SelectOption, ...] = (
    SelectOption(label="全部", value=ALL_MATURITY),
    SelectOption(label="L1", value="L1"),
    SelectOption(label="L2", value="L2"),
    SelectOption(label="L3", value="L3"),
)


def to_department_nodes(departments: Iterable[DepartmentInfo]) -> list[DepartmentNode]:
    """Convert department-info payloads into cascader nodes, recursively."""
    return [
        DepartmentNode(
            label=department.dept_name or department.dept_code,
            value=department.dept_code,
            children=to_department_nodes(department.children),
        )
        for department in departments
    ]


class FilterOptions(ViewModel):
    """Filter option bundle shared by the dashboard pages."""

    department_tree: list[DepartmentNode] = Field(default_factory=list)
    roles: list[SelectOption] = Field(default_factory=lambda: list(ROLE_OPTIONS))
    maturity_options: list[SelectOption] = Field(default_factory=lambda: list(MATURITY_OPTIONS))


class AllStaffCharts(ViewModel):
    department_appointment: list[ChartPoint] = Field(default_factory=list)
    organization_appointment: list[ChartPoint] = Field(default_factory=list)
    job_category_appointment: list[ChartPoint] = Field(default_factory=list)
    department_certification: list[ChartPoint] = Field(default_factory=list)
    organization_certification: list[ChartPoint] = Field(default_factory=list)
    job_category_certification: list[ChartPoint] = Field(default_factory=list)


class CertificationDashboard(ViewModel):
    """Certification overview page."""

    metrics: list[MetricItem] = Field(default_factory=list)
    expert_certification: list[ExpertCertificationRow] = Field(default_factory=list)
    expert_appointment: list[ExpertAppointmentRow] = Field(default_factory=list)
    cadre_certification: list[CadreCertificationRow] = Field(default_factory=list)
    cadre_appointment: list[CadreAppointmentRow] = Field(default_factory=list)
    all_staff: AllStaffCharts = Field(default_factory=AllStaffCharts)
    employee_cert_statistics: EmployeeCertStatisticsResponse | None = None
    competence_category_cert_statistics: CompetenceCategoryCertStatisticsResponse | None = None
    filters: FilterOptions = Field(default_factory=FilterOptions)


class CadreDashboard(ViewModel):
    """Cadre page: certification, appointment and the department overview."""

    certification: list[CadreCertificationRow] = Field(default_factory=list)
    appointment: list[CadreAppointmentRow] = Field(default_factory=list)
    overview: list[CadreAiCertificationRow] = Field(default_factory=list)
    filters: FilterOptions = Field(default_factory=FilterOptions)


class ExpertDashboard(ViewModel):
    certification: list[ExpertCertificationRow] = Field(default_factory=list)
    appointment: list[ExpertAppointmentRow] = Field(default_factory=list)
    filters: FilterOptions = Field(default_factory=FilterOptions)


class DetailFilters(FilterOptions):
    job_families: list[str] = Field(default_factory=list)
    job_categories: list[str] = Field(default_factory=list)
    job_sub_categories: list[str] = Field(default_factory=list)


class CertificationDetail(ViewModel):
    """Drill-down page listing the employees behind a table cell."""

    certification_records: list[CertificationAuditRecord] = Field(default_factory=list)
    appointment_records: list[AppointmentAuditRecord] = Field(default_factory=list)
    filters: DetailFilters = Field(default_factory=DetailFilters)
