"""Tests for dashboard aggregation."""

from typing import Any

import pytest

from ai_cert_dashboard.api.http import DepartmentLookupError
from ai_cert_dashboard.dashboard import DashboardService, build_metrics
from ai_cert_dashboard.models import (
    CadreMaturityJobCategoryCertStatisticsResponse,
    DepartmentCertStatistic,
    DepartmentInfo,
    EmployeeCertStatisticsResponse,
    EmployeeDrillDownResponse,
    ExpertAiCertStatisticsResponse,
    MaturityQualifiedStatisticsResponse,
)


class FakeStatisticsApi:
    """Statistics API stand-in returning canned responses.

    Responses set to an exception instance are raised instead.
    """

    def __init__(self, **responses: Any) -> None:
        self.responses = responses
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def _respond(self, name: str, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((name, args, kwargs))
        response = self.responses.get(name)
        if isinstance(response, Exception):
            raise response
        return response

    async def employee_cert_statistics(self, *args: Any) -> Any:
        return self._respond("employee", *args)

    async def competence_category_cert_statistics(self, *args: Any) -> Any:
        return self._respond("competence", *args)

    async def overall_certification_trends(self) -> Any:
        return self._respond("trends")

    async def cadre_cert_statistics(self, *args: Any) -> Any:
        return self._respond("cadre_cert", *args)

    async def cadre_qualified_statistics(self, *args: Any) -> Any:
        return self._respond("cadre_qualified", *args)

    async def expert_cert_statistics(self, *args: Any) -> Any:
        return self._respond("expert_cert", *args)

    async def expert_qualified_statistics(self, *args: Any) -> Any:
        return self._respond("expert_qualified", *args)

    async def cadre_qualified_details(self, *args: Any, **kwargs: Any) -> Any:
        return self._respond("details", *args, **kwargs)

    async def pl_tm_cert_statistics(self) -> Any:
        return self._respond("pl_tm")

    async def cadre_ai_certification_overview(self) -> Any:
        return self._respond("overview")

    async def department_children(self, dept_id: str = "0") -> list[DepartmentInfo]:
        result = self._respond("departments", dept_id)
        return result if result is not None else []


class TestBuildMetrics:
    """Tests for build_metrics."""

    def test_missing_total_zeroed(self) -> None:
        """Test a missing total produces zero-valued metrics."""
        metrics = build_metrics(None)
        assert [m.id for m in metrics] == [
            "baseline",
            "appointed",
            "appointment-rate",
            "certified",
            "certification-rate",
        ]
        assert all(m.value == 0 for m in metrics)

    def test_appointment_falls_back_to_certification(self) -> None:
        """Test appointment metrics fall back to certification values."""
        total = DepartmentCertStatistic(total_count=100, certified_count=40, cert_rate=40.0)
        values = {m.id: m.value for m in build_metrics(total)}
        assert values["baseline"] == 100
        assert values["appointed"] == 40
        assert values["appointment-rate"] == 40.0


class TestCertificationDashboard:
    """Tests for fetch_certification_dashboard."""

    @pytest.mark.asyncio
    async def test_sections_assembled(
        self, expert_cert_payload: dict[str, Any], cadre_cert_payload: dict[str, Any]
    ) -> None:
        """Test every section is fetched and combined into the page."""
        api = FakeStatisticsApi(
            employee=EmployeeCertStatisticsResponse(
                department_statistics=[DepartmentCertStatistic(dept_name="运营部", qualified_count=3, certified_count=2)],
                total_statistics=DepartmentCertStatistic(total_count=10, qualified_count=6, certified_count=4),
            ),
            expert_cert=ExpertAiCertStatisticsResponse.model_validate(expert_cert_payload),
            cadre_cert=CadreMaturityJobCategoryCertStatisticsResponse.model_validate(cadre_cert_payload),
            departments=[DepartmentInfo(dept_code="A", dept_name="部门A")],
        )
        service = DashboardService(api)

        page = await service.fetch_certification_dashboard("A", "2")

        assert {m.id: m.value for m in page.metrics}["appointed"] == 6
        assert page.expert_certification[0].maturity_level == "L2"
        assert page.all_staff.department_appointment[0].label == "运营部"
        assert page.all_staff.department_appointment[0].count == 3
        assert page.all_staff.department_certification[0].count == 2
        assert page.filters.department_tree[0].value == "A"
        assert ("employee", ("A", "2"), {}) in api.calls

    @pytest.mark.asyncio
    async def test_overview_omits_compliance(self, cadre_cert_payload: dict[str, Any]) -> None:
        """Test the overview cadre table leaves compliance columns empty."""
        api = FakeStatisticsApi(
            cadre_cert=CadreMaturityJobCategoryCertStatisticsResponse.model_validate(cadre_cert_payload)
        )

        page = await DashboardService(api).fetch_certification_dashboard()

        assert page.cadre_certification
        assert all(r.compliance_rate is None for r in page.cadre_certification)

    @pytest.mark.asyncio
    async def test_failed_sections_degrade(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test raised or empty sections leave the page renderable."""
        api = FakeStatisticsApi(
            employee=RuntimeError("boom"),
            expert_cert=None,
            departments=DepartmentLookupError("down"),
        )

        page = await DashboardService(api).fetch_certification_dashboard()

        assert all(m.value == 0 for m in page.metrics)
        assert page.expert_certification == []
        assert page.filters.department_tree == []
        assert [o.value for o in page.filters.roles] == ["0", "1", "2", "3"]
        assert "Section employee failed" in caplog.text
        assert "Department tree unavailable" in caplog.text

    @pytest.mark.asyncio
    async def test_last_rows_kept_on_empty_refresh(self, expert_cert_payload: dict[str, Any]) -> None:
        """Test a later empty response keeps the previously rendered rows."""
        api = FakeStatisticsApi(expert_cert=ExpertAiCertStatisticsResponse.model_validate(expert_cert_payload))
        service = DashboardService(api)

        first = await service.fetch_certification_dashboard()
        api.responses["expert_cert"] = ExpertAiCertStatisticsResponse()
        second = await service.fetch_certification_dashboard()

        assert second.expert_certification == first.expert_certification
        assert len(second.expert_certification) == 8


class TestCadreCertificationFallback:
    """Tests for last-known rows of the two cadre certification views."""

    @pytest.mark.asyncio
    async def test_overview_fallback_stays_blank(self, cadre_cert_payload: dict[str, Any]) -> None:
        """Test a failed overview fetch does not reuse the cadre page's compliance rows."""
        api = FakeStatisticsApi(
            cadre_cert=CadreMaturityJobCategoryCertStatisticsResponse.model_validate(cadre_cert_payload)
        )
        service = DashboardService(api)

        await service.fetch_cadre_dashboard()
        api.responses["cadre_cert"] = RuntimeError("boom")
        page = await service.fetch_certification_dashboard()

        assert page.cadre_certification == []

    @pytest.mark.asyncio
    async def test_overview_fallback_uses_overview_rows(self, cadre_cert_payload: dict[str, Any]) -> None:
        """Test a failed overview fetch falls back to the overview's own rows."""
        api = FakeStatisticsApi(
            cadre_cert=CadreMaturityJobCategoryCertStatisticsResponse.model_validate(cadre_cert_payload)
        )
        service = DashboardService(api)

        await service.fetch_certification_dashboard()
        await service.fetch_cadre_dashboard()
        api.responses["cadre_cert"] = RuntimeError("boom")
        page = await service.fetch_certification_dashboard()

        assert len(page.cadre_certification) == 6
        assert all(r.compliance_rate is None for r in page.cadre_certification)

    @pytest.mark.asyncio
    async def test_cadre_page_fallback_keeps_compliance(self, cadre_cert_payload: dict[str, Any]) -> None:
        """Test a failed cadre page fetch does not reuse the overview's blanked rows."""
        api = FakeStatisticsApi(
            cadre_cert=CadreMaturityJobCategoryCertStatisticsResponse.model_validate(cadre_cert_payload)
        )
        service = DashboardService(api)

        await service.fetch_cadre_dashboard()
        await service.fetch_certification_dashboard()
        api.responses["cadre_cert"] = None
        page = await service.fetch_cadre_dashboard()

        assert [r.compliance_rate for r in page.certification] == [50.0, 45.0, 61.11, 66.67, 58.33, 54.76]

    @pytest.mark.asyncio
    async def test_cadre_page_without_history_is_empty(self, cadre_cert_payload: dict[str, Any]) -> None:
        """Test a failed cadre page fetch after only the overview loaded stays empty."""
        api = FakeStatisticsApi(
            cadre_cert=CadreMaturityJobCategoryCertStatisticsResponse.model_validate(cadre_cert_payload)
        )
        service = DashboardService(api)

        await service.fetch_certification_dashboard()
        api.responses["cadre_cert"] = RuntimeError("boom")
        page = await service.fetch_cadre_dashboard()

        assert page.certification == []


class TestDomainPages:
    """Tests for the cadre and expert pages."""

    @pytest.mark.asyncio
    async def test_cadre_page_keeps_compliance(self, cadre_cert_payload: dict[str, Any]) -> None:
        """Test the cadre page populates compliance from upstream."""
        api = FakeStatisticsApi(
            cadre_cert=CadreMaturityJobCategoryCertStatisticsResponse.model_validate(cadre_cert_payload)
        )

        page = await DashboardService(api).fetch_cadre_dashboard("A")

        assert page.certification[0].compliance_rate == 50.0
        assert page.overview == []
        assert ("cadre_cert", ("A",), {}) in api.calls

    @pytest.mark.asyncio
    async def test_expert_page(self, expert_qualified_payload: dict[str, Any]) -> None:
        """Test the expert page rolls up the appointment table."""
        api = FakeStatisticsApi(
            expert_qualified=MaturityQualifiedStatisticsResponse.model_validate(expert_qualified_payload)
        )

        page = await DashboardService(api).fetch_expert_dashboard()

        assert [r.job_category for r in page.appointment if not r.is_maturity_row] == ["软件类", "非软件类"]
        assert page.certification == []


class TestFilters:
    """Tests for filter options."""

    @pytest.mark.asyncio
    async def test_department_tree_cached(self) -> None:
        """Test the department tree is fetched once across pages."""
        api = FakeStatisticsApi(departments=[DepartmentInfo(dept_code="A", children=[DepartmentInfo(dept_code="A1")])])
        service = DashboardService(api)

        options = await service.fetch_filter_options()
        await service.fetch_expert_dashboard()

        assert options.department_tree[0].label == "A"
        assert options.department_tree[0].children[0].value == "A1"
        assert [c[0] for c in api.calls].count("departments") == 1

    @pytest.mark.asyncio
    async def test_force_refresh(self) -> None:
        """Test force_refresh fetches the tree again."""
        api = FakeStatisticsApi(departments=[DepartmentInfo(dept_code="A")])
        service = DashboardService(api)

        await service.fetch_filter_options()
        await service.fetch_filter_options(force_refresh=True)

        assert [c[0] for c in api.calls].count("departments") == 2


class TestCertificationDetail:
    """Tests for fetch_certification_detail."""

    @pytest.mark.asyncio
    async def test_all_maturity_not_sent(self) -> None:
        """Test the 全部 option is sent as no maturity filter."""
        api = FakeStatisticsApi(
            details=EmployeeDrillDownResponse.model_validate(
                {
                    "employeeDetails": [
                        {"employeeNumber": "E1", "competenceCategory": "软件类", "competenceFamilyCn": "AI能力族"},
                        {"employeeNumber": "E2", "competenceCategory": "系统类", "competenceFamilyCn": "AI能力族"},
                    ]
                }
            )
        )

        detail = await DashboardService(api).fetch_certification_detail("A", maturity="全部", job_category="软件类")

        name, args, kwargs = next(c for c in api.calls if c[0] == "details")
        assert args == ("A",)
        assert kwargs["ai_maturity"] is None
        assert kwargs["job_category"] == "软件类"
        assert [r.employee_id for r in detail.appointment_records] == ["E1", "E2"]
        assert detail.filters.job_categories == ["软件类", "系统类"]
        assert detail.filters.job_families == ["AI能力族"]

    @pytest.mark.asyncio
    async def test_failed_detail_is_empty(self) -> None:
        """Test a failed drill-down yields an empty page."""
        api = FakeStatisticsApi(details=RuntimeError("boom"))

        detail = await DashboardService(api).fetch_certification_detail("A", maturity="L5")

        assert detail.certification_records == []
        assert detail.filters.job_categories == []


class TestEntryLevelManagers:
    """Tests for fetch_entry_level_managers."""

    @pytest.mark.asyncio
    async def test_failed_fetch_is_empty(self) -> None:
        """Test a failed fetch yields no rows."""
        assert await DashboardService(FakeStatisticsApi()).fetch_entry_level_managers() == []
