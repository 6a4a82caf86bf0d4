"""Dashboard aggregation.

Each page fans out its independent fetches concurrently and assembles the
results positionally. A section whose fetch fails degrades to an empty or
last-known-good value; the page as a whole always renders.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

from ai_cert_dashboard.api.department_cache import DepartmentChildrenCache
from ai_cert_dashboard.api.endpoints import (
    ALL_STAFF,
    CADRE,
    QUERY_APPOINTED,
    ROOT_DEPT_CODE,
    StatisticsApi,
)
from ai_cert_dashboard.dashboard.views import (
    ALL_MATURITY,
    AllStaffCharts,
    CadreDashboard,
    CertificationDashboard,
    CertificationDetail,
    DepartmentNode,
    DetailFilters,
    ExpertDashboard,
    FilterOptions,
    MetricItem,
    to_department_nodes,
)
from ai_cert_dashboard.models import (
    CompetenceCategoryCertStatisticsResponse,
    DepartmentCertStatistic,
    EmployeeCertStatisticsResponse,
    OverallCertificationTrends,
)
from ai_cert_dashboard.stats.details import (
    distinct_values,
    to_appointment_records,
    to_certification_records,
)
from ai_cert_dashboard.stats.flatten import (
    flatten_cadre_appointment,
    flatten_cadre_certification,
    flatten_expert_appointment,
    flatten_expert_certification,
)
from ai_cert_dashboard.stats.overview import (
    EntryLevelManagerRow,
    flatten_cadre_ai_overview,
    to_entry_level_manager_rows,
)
from ai_cert_dashboard.stats.points import CATEGORY_LABEL, resolve_metric, to_chart_points
from ai_cert_dashboard.stats.policies import StatisticsDomain

logger = logging.getLogger(__name__)

# Cadre certification views; the overview leaves the compliance columns empty
OVERVIEW_VIEW = "overview"
COMPLIANCE_VIEW = "compliance"


async def _gather_sections(**sections: Awaitable[Any]) -> dict[str, Any]:
    """Run named fetches concurrently; a raised section resolves to None."""
    names = list(sections)
    results = await asyncio.gather(*sections.values(), return_exceptions=True)

    settled: dict[str, Any] = {}
    for name, result in zip(names, results, strict=True):
        if isinstance(result, Exception):
            logger.error("Section %s failed: %s", name, result)
            settled[name] = None
        else:
            settled[name] = result
    return settled


def build_metrics(total: DepartmentCertStatistic | None) -> list[MetricItem]:
    """Headline figures from the organisation total.

    A missing total yields zeroed metrics rather than an empty header.
    """
    total = total or DepartmentCertStatistic()
    return [
        MetricItem(id="baseline", title="基线人数", value=resolve_metric(total, "total_count"), unit="人"),
        MetricItem(id="appointed", title="任职人数", value=resolve_metric(total, "qualified_count"), unit="人"),
        MetricItem(id="appointment-rate", title="任职率", value=resolve_metric(total, "qualified_rate"), unit="%"),
        MetricItem(id="certified", title="认证人数", value=resolve_metric(total, "certified_count"), unit="人"),
        MetricItem(id="certification-rate", title="认证率", value=resolve_metric(total, "cert_rate"), unit="%"),
    ]


def build_all_staff_charts(
    employee: EmployeeCertStatisticsResponse | None,
    competence: CompetenceCategoryCertStatisticsResponse | None,
    trends: OverallCertificationTrends | None,
) -> AllStaffCharts:
    """Chart series for the all-staff section."""
    departments = employee.department_statistics if employee else []
    categories = competence.category_statistics if competence else []
    trends = trends or OverallCertificationTrends()

    return AllStaffCharts(
        department_appointment=to_chart_points(departments, "qualified_count", "qualified_rate"),
        department_certification=to_chart_points(departments, "certified_count", "cert_rate"),
        job_category_appointment=to_chart_points(
            categories, "qualified_count", "qualified_rate", CATEGORY_LABEL
        ),
        job_category_certification=to_chart_points(
            categories, "certified_count", "cert_rate", CATEGORY_LABEL
        ),
        organization_appointment=trends.organization_appointment,
        organization_certification=trends.organization_certification,
    )


class DashboardService:
    """Assembles dashboard view-models from the statistics API.

    The service remembers the last non-empty rows of every maturity table so a
    transiently empty response does not blank a rendered table. Rows are kept
    per view: the overview and cadre pages render the cadre certification table
    with different columns and never share fallbacks.
    """

    def __init__(
        self,
        api: StatisticsApi,
        department_cache: DepartmentChildrenCache | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            api: Statistics endpoint client.
            department_cache: Department children cache; a private one is
                created around ``api`` when omitted.
        """
        self._api = api
        self._departments = department_cache or DepartmentChildrenCache(api.department_children)
        self._last_rows: dict[tuple[StatisticsDomain, str], list[Any]] = {}

    @property
    def department_cache(self) -> DepartmentChildrenCache:
        return self._departments

    def _remember(self, domain: StatisticsDomain, rows: list[Any], view: str = "") -> list[Any]:
        if rows:
            self._last_rows[(domain, view)] = rows
        return rows

    def previous_rows(self, domain: StatisticsDomain, view: str = "") -> list[Any]:
        """Last rows rendered for a maturity table, empty before the first load.

        Args:
            domain: Table domain.
            view: Rendering variant of the table; only the cadre certification
                table has more than one (see :data:`COMPLIANCE_VIEW`).
        """
        return self._last_rows.get((domain, view), [])

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    async def department_tree(
        self, dept_id: str = ROOT_DEPT_CODE, force_refresh: bool = False
    ) -> list[DepartmentNode]:
        """Department cascader tree below ``dept_id``; empty if the lookup fails."""
        try:
            children = await self._departments.get(dept_id, force_refresh=force_refresh)
        except Exception as e:
            logger.warning("Department tree unavailable for %s: %s", dept_id, e)
            return []
        return to_department_nodes(children)

    async def fetch_filter_options(self, force_refresh: bool = False) -> FilterOptions:
        """Department tree, role options and maturity options."""
        return FilterOptions(department_tree=await self.department_tree(force_refresh=force_refresh))

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    async def fetch_certification_dashboard(
        self, dept_code: str = ROOT_DEPT_CODE, role: str = ALL_STAFF
    ) -> CertificationDashboard:
        """Certification overview page for a department and role.

        Args:
            dept_code: Department code; "0" is the whole organisation.
            role: Person type code ("0" all staff, "1" cadre, "2" expert,
                "3" frontline manager).

        Returns:
            The page view-model. Failed sections are empty or zeroed.
        """
        logger.info("Loading certification dashboard for dept=%s role=%s", dept_code, role)
        sections = await _gather_sections(
            employee=self._api.employee_cert_statistics(dept_code, role),
            competence=self._api.competence_category_cert_statistics(dept_code, role),
            cadre_cert=self._api.cadre_cert_statistics(dept_code),
            cadre_qualified=self._api.cadre_qualified_statistics(dept_code),
            expert_cert=self._api.expert_cert_statistics(dept_code),
            expert_qualified=self._api.expert_qualified_statistics(dept_code),
            trends=self._api.overall_certification_trends(),
            tree=self.department_tree(),
        )
        employee = sections["employee"]
        competence = sections["competence"]

        return CertificationDashboard(
            metrics=build_metrics(employee.total_statistics if employee else None),
            expert_certification=self._expert_certification(sections["expert_cert"]),
            expert_appointment=self._expert_appointment(sections["expert_qualified"]),
            # The overview table leaves the compliance columns empty
            cadre_certification=self._cadre_certification(sections["cadre_cert"], include_cert_standard=False),
            cadre_appointment=self._cadre_appointment(sections["cadre_qualified"]),
            all_staff=build_all_staff_charts(employee, competence, sections["trends"]),
            employee_cert_statistics=employee,
            competence_category_cert_statistics=competence,
            filters=FilterOptions(department_tree=sections["tree"] or []),
        )

    async def fetch_cadre_dashboard(self, dept_code: str = ROOT_DEPT_CODE) -> CadreDashboard:
        """Cadre page with compliance columns populated from upstream."""
        logger.info("Loading cadre dashboard for dept=%s", dept_code)
        sections = await _gather_sections(
            cert=self._api.cadre_cert_statistics(dept_code),
            qualified=self._api.cadre_qualified_statistics(dept_code),
            overview=self._api.cadre_ai_certification_overview(),
            tree=self.department_tree(),
        )
        return CadreDashboard(
            certification=self._cadre_certification(sections["cert"], include_cert_standard=True),
            appointment=self._cadre_appointment(sections["qualified"]),
            overview=flatten_cadre_ai_overview(sections["overview"]),
            filters=FilterOptions(department_tree=sections["tree"] or []),
        )

    async def fetch_expert_dashboard(self, dept_code: str = ROOT_DEPT_CODE) -> ExpertDashboard:
        logger.info("Loading expert dashboard for dept=%s", dept_code)
        sections = await _gather_sections(
            cert=self._api.expert_cert_statistics(dept_code),
            qualified=self._api.expert_qualified_statistics(dept_code),
            tree=self.department_tree(),
        )
        return ExpertDashboard(
            certification=self._expert_certification(sections["cert"]),
            appointment=self._expert_appointment(sections["qualified"]),
            filters=FilterOptions(department_tree=sections["tree"] or []),
        )

    async def fetch_entry_level_managers(self) -> list[EntryLevelManagerRow]:
        """PL/TM and PM appointment and certification per department."""
        return to_entry_level_manager_rows(await self._api.pl_tm_cert_statistics())

    async def fetch_certification_detail(
        self,
        dept_code: str = ROOT_DEPT_CODE,
        maturity: str | None = None,
        job_category: str | None = None,
        role: str = CADRE,
        query_type: int = QUERY_APPOINTED,
    ) -> CertificationDetail:
        """Drill-down records behind one table cell.

        Args:
            dept_code: Department code.
            maturity: Maturity filter; "全部" or None for every level, "L5" for
                L2 and L3 combined.
            job_category: Job category filter.
            role: Person type code.
            query_type: 1 for appointed employees, 2 for the whole baseline.
        """
        ai_maturity = None if maturity in (None, "", ALL_MATURITY) else maturity
        sections = await _gather_sections(
            details=self._api.cadre_qualified_details(
                dept_code,
                ai_maturity=ai_maturity,
                job_category=job_category,
                person_type=role,
                query_type=query_type,
            ),
            tree=self.department_tree(),
        )
        details = sections["details"].employee_details if sections["details"] else []

        return CertificationDetail(
            certification_records=to_certification_records(details),
            appointment_records=to_appointment_records(details),
            filters=DetailFilters(
                department_tree=sections["tree"] or [],
                job_families=distinct_values(details, "competence_family_cn"),
                job_categories=distinct_values(details, "competence_category"),
                job_sub_categories=distinct_values(details, "competence_subcategory"),
            ),
        )

    # ------------------------------------------------------------------
    # Maturity tables
    # ------------------------------------------------------------------

    def _expert_certification(self, response: Any) -> list[Any]:
        domain = StatisticsDomain.EXPERT_CERTIFICATION
        return self._remember(domain, flatten_expert_certification(response, self.previous_rows(domain)))

    def _expert_appointment(self, response: Any) -> list[Any]:
        domain = StatisticsDomain.EXPERT_APPOINTMENT
        return self._remember(domain, flatten_expert_appointment(response, self.previous_rows(domain)))

    def _cadre_certification(self, response: Any, include_cert_standard: bool) -> list[Any]:
        domain = StatisticsDomain.CADRE_CERTIFICATION
        view = COMPLIANCE_VIEW if include_cert_standard else OVERVIEW_VIEW
        rows = flatten_cadre_certification(
            response, self.previous_rows(domain, view), include_cert_standard=include_cert_standard
        )
        return self._remember(domain, rows, view)

    def _cadre_appointment(self, response: Any) -> list[Any]:
        domain = StatisticsDomain.CADRE_APPOINTMENT
        return self._remember(domain, flatten_cadre_appointment(response, self.previous_rows(domain)))
