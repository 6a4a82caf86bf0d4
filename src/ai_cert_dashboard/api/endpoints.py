"""Typed statistics API endpoints.

Each method returns a validated model, or None when the backend answers with
a non-success code or the request fails. Failures are logged, never raised,
so one broken section cannot take down a whole dashboard. The department
lookup is the exception: it raises :class:`DepartmentLookupError` so the
cache can tell "no children" from "lookup failed".
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ai_cert_dashboard.api.http import DashboardHTTPClient, DepartmentLookupError
from ai_cert_dashboard.models import (
    CadreAiCertificationOverviewResponse,
    CadreMaturityJobCategoryCertStatisticsResponse,
    CompetenceCategoryCertStatisticsResponse,
    DepartmentInfo,
    EmployeeCertStatisticsResponse,
    EmployeeDrillDownResponse,
    ExpertAiCertStatisticsResponse,
    MaturityQualifiedStatisticsResponse,
    OverallCertificationTrends,
    PersonalCourseCompletionResponse,
    PlTmCertStatisticsResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ROOT_DEPT_CODE = "0"
ALL_STAFF = "0"
CADRE = "1"
EXPERT = "2"
FRONTLINE_MANAGER = "3"
# Synthetic maturity filter meaning "L2 and L3 combined"
COMBINED_MATURITY = "L5"

QUERY_APPOINTED = 1
QUERY_BASELINE = 2

EXPERT_CERT_STATISTICS = "/expert-cert-statistics"

_DEPARTMENT_LIST = TypeAdapter(list[DepartmentInfo])


class StatisticsApi:
    """Statistics backend endpoints on top of :class:`DashboardHTTPClient`."""

    def __init__(self, http_client: DashboardHTTPClient) -> None:
        """Initialize the endpoint client.

        Args:
            http_client: HTTP client used for every request.
        """
        self._http = http_client

    async def _fetch(
        self,
        path: str,
        model: type[ModelT],
        description: str,
        params: dict[str, Any] | None = None,
    ) -> ModelT | None:
        try:
            envelope = await self._http.get(path, params)
        except Exception as e:
            logger.error("Failed to fetch %s: %s", description, e)
            return None

        if not envelope.is_success:
            logger.warning("Fetching %s returned code %d: %s", description, envelope.code, envelope.message)
            return None

        if envelope.data is None:
            logger.warning("Fetching %s returned no data", description)
            return None

        try:
            return model.model_validate(envelope.data)
        except ValidationError as e:
            logger.error("Malformed %s payload: %s", description, e)
            return None

    # ------------------------------------------------------------------
    # Department and category statistics
    # ------------------------------------------------------------------

    async def employee_cert_statistics(
        self, dept_code: str = ROOT_DEPT_CODE, person_type: str = ALL_STAFF
    ) -> EmployeeCertStatisticsResponse | None:
        """Per-department certification and appointment counts."""
        return await self._fetch(
            f"{EXPERT_CERT_STATISTICS}/employee-cert-statistics",
            EmployeeCertStatisticsResponse,
            "employee cert statistics",
            {"deptCode": dept_code, "personType": person_type},
        )

    async def competence_category_cert_statistics(
        self, dept_code: str = ROOT_DEPT_CODE, person_type: str = ALL_STAFF
    ) -> CompetenceCategoryCertStatisticsResponse | None:
        """Per-competence-category certification and appointment counts."""
        return await self._fetch(
            f"{EXPERT_CERT_STATISTICS}/competence-category-cert-statistics",
            CompetenceCategoryCertStatisticsResponse,
            "competence category cert statistics",
            {"deptCode": dept_code, "personType": person_type},
        )

    async def overall_certification_trends(self) -> OverallCertificationTrends | None:
        """Organisation-wide chart series."""
        return await self._fetch(
            f"{EXPERT_CERT_STATISTICS}/overall-certification-trends",
            OverallCertificationTrends,
            "overall certification trends",
        )

    # ------------------------------------------------------------------
    # Maturity -> job category statistics
    # ------------------------------------------------------------------

    async def cadre_cert_statistics(
        self, dept_code: str = ROOT_DEPT_CODE
    ) -> CadreMaturityJobCategoryCertStatisticsResponse | None:
        return await self._fetch(
            f"{EXPERT_CERT_STATISTICS}/cadre-cert-statistics/by-maturity-and-job-category",
            CadreMaturityJobCategoryCertStatisticsResponse,
            "cadre cert statistics",
            {"deptCode": dept_code},
        )

    async def cadre_qualified_statistics(
        self, dept_code: str = ROOT_DEPT_CODE
    ) -> MaturityQualifiedStatisticsResponse | None:
        return await self._fetch(
            f"{EXPERT_CERT_STATISTICS}/cadre-cert-statistics/by-maturity-and-job-category-qualified",
            MaturityQualifiedStatisticsResponse,
            "cadre qualified statistics",
            {"deptCode": dept_code},
        )

    async def expert_cert_statistics(
        self, dept_code: str = ROOT_DEPT_CODE
    ) -> ExpertAiCertStatisticsResponse | None:
        return await self._fetch(
            f"{EXPERT_CERT_STATISTICS}/expert-ai-cert-statistics",
            ExpertAiCertStatisticsResponse,
            "expert cert statistics",
            {"deptCode": dept_code},
        )

    async def expert_qualified_statistics(
        self, dept_code: str = ROOT_DEPT_CODE
    ) -> MaturityQualifiedStatisticsResponse | None:
        return await self._fetch(
            f"{EXPERT_CERT_STATISTICS}/expert-ai-qualified-statistics",
            MaturityQualifiedStatisticsResponse,
            "expert qualified statistics",
            {"deptCode": dept_code},
        )

    # ------------------------------------------------------------------
    # Drill-down and overview tables
    # ------------------------------------------------------------------

    async def cadre_qualified_details(
        self,
        dept_code: str,
        ai_maturity: str | None = None,
        job_category: str | None = None,
        person_type: str = CADRE,
        query_type: int = QUERY_APPOINTED,
    ) -> EmployeeDrillDownResponse | None:
        """Employees behind one cell of a maturity table.

        Args:
            dept_code: Department to drill into.
            ai_maturity: Maturity level filter; "L5" selects L2 and L3.
            job_category: Job category filter.
            person_type: Person type code.
            query_type: 1 for appointed employees, 2 for the whole baseline.
        """
        return await self._fetch(
            f"{EXPERT_CERT_STATISTICS}/cadre-qualified-details",
            EmployeeDrillDownResponse,
            "cadre qualified details",
            {
                "deptCode": dept_code,
                "aiMaturity": ai_maturity or None,
                "jobCategory": job_category or None,
                "personType": person_type,
                "queryType": query_type,
            },
        )

    async def pl_tm_cert_statistics(self) -> PlTmCertStatisticsResponse | None:
        return await self._fetch(
            "/entry-level-manager/pl-tm-cert-statistics",
            PlTmCertStatisticsResponse,
            "PL/TM cert statistics",
        )

    async def cadre_ai_certification_overview(self) -> CadreAiCertificationOverviewResponse | None:
        return await self._fetch(
            "/cadre-ai-certification-overview",
            CadreAiCertificationOverviewResponse,
            "cadre AI certification overview",
        )

    async def personal_course_completion(self) -> PersonalCourseCompletionResponse | None:
        """Course completion of the signed-in employee.

        The backend identifies the employee from the ``X-Account`` header the
        HTTP client sends when it is configured with an account.
        """
        return await self._fetch(
            "/personal-course/completion",
            PersonalCourseCompletionResponse,
            "personal course completion",
        )

    # ------------------------------------------------------------------
    # Departments
    # ------------------------------------------------------------------

    async def department_children(self, dept_id: str = ROOT_DEPT_CODE) -> list[DepartmentInfo]:
        """Child departments of ``dept_id``.

        Raises:
            DepartmentLookupError: If the request fails or the backend rejects it.
        """
        try:
            envelope = await self._http.get("/department-info/children", {"deptId": dept_id})
        except Exception as e:
            logger.error("Department lookup for %s failed: %s", dept_id, e)
            raise DepartmentLookupError(f"Department lookup for {dept_id} failed: {e}") from e

        if not envelope.is_success:
            logger.error("Department lookup for %s returned code %d: %s", dept_id, envelope.code, envelope.message)
            raise DepartmentLookupError(f"Department lookup for {dept_id} failed: {envelope.message}")

        try:
            return _DEPARTMENT_LIST.validate_python(envelope.data or [])
        except ValidationError as e:
            logger.error("Malformed department payload for %s: %s", dept_id, e)
            raise DepartmentLookupError(f"Malformed department payload for {dept_id}") from e
