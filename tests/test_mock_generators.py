"""Tests for the mock statistics generators."""

from ai_cert_dashboard.mock import data, generators


class TestRounding:
    """Tests for round_half_up."""

    def test_half_rounds_up(self) -> None:
        """Test .5 rounds away from zero."""
        assert generators.round_half_up(2.5) == 3
        assert generators.round_half_up(3.5) == 4
        assert generators.round_half_up(2.49) == 2


class TestDepartments:
    """Tests for department lookups."""

    def test_unknown_department_falls_back(self) -> None:
        """Test unknown codes use the organisation multiplier and a generated name."""
        assert generators.department_multiplier("dept-unknown") == 1
        assert generators.department_name("dept-unknown") == "部门-dept-unknown"

    def test_blank_code_is_root(self) -> None:
        """Test blank or missing codes normalise to the root."""
        assert generators.normalize_dept_code(None) == data.DEFAULT_DEPT_CODE
        assert generators.normalize_dept_code("  ") == data.DEFAULT_DEPT_CODE

    def test_root_children_is_whole_tree(self) -> None:
        """Test the root returns every level-3 department with its children."""
        children = generators.department_children("0")
        assert [c.dept_code for c in children] == [
            "dept-ict-core-ops",
            "dept-ict-core-dev",
            "dept-ict-core-solution",
        ]
        assert all(len(c.children) == 2 for c in children)

    def test_nested_children(self) -> None:
        """Test a level-3 department returns its level-4 children."""
        children = generators.department_children("dept-ict-core-dev")
        assert [c.dept_code for c in children] == ["dept-ict-core-dev-cloud", "dept-ict-core-dev-ai"]
        assert children[0].parent_dept_code == "dept-ict-core-dev"

    def test_unknown_children_empty(self) -> None:
        """Test an unknown department has no children."""
        assert generators.department_children("dept-unknown") == []


class TestMaturityStatistics:
    """Tests for the maturity-grouped endpoints."""

    def test_expert_certification_root(self) -> None:
        """Test root figures match the base table."""
        response = generators.expert_cert_statistics("0")
        l2 = response.maturity_statistics[0]

        assert [m.maturity_level for m in response.maturity_statistics] == ["L2", "L3"]
        assert (l2.baseline_count, l2.certified_count) == (80, 58)
        assert [c.job_category for c in l2.job_category_statistics] == ["软件类", "系统类", "研究类", "管理类"]
        assert [c.baseline_count for c in l2.job_category_statistics] == [7, 14, 21, 28]
        assert response.total_statistics.maturity_level == "总计"
        assert response.total_statistics.baseline_count == 133
        assert response.total_statistics.certified_count == 95

    def test_department_multiplier_applied(self) -> None:
        """Test department figures scale by the multiplier."""
        response = generators.expert_cert_statistics("dept-ict-core-dev")
        assert response.dept_name == "云核心网研发部"
        assert response.maturity_statistics[0].baseline_count == 88

    def test_deterministic(self) -> None:
        """Test repeated calls return identical payloads."""
        assert generators.cadre_cert_statistics("dept-ict-core-ops") == generators.cadre_cert_statistics(
            "dept-ict-core-ops"
        )

    def test_counts_never_exceed_baseline(self) -> None:
        """Test scaled counts stay within the baseline."""
        response = generators.cadre_qualified_statistics("dept-ict-core-solution")
        for tier in response.maturity_statistics:
            for row in [tier, *tier.job_category_statistics]:
                assert 0 <= row.qualified_count <= row.baseline_count
                assert 0 <= (row.qualified_by_requirement_count or 0) <= row.baseline_count

    def test_cadre_l2_split_server_side(self) -> None:
        """Test the cadre L2 tier arrives as software and non-software rows."""
        response = generators.cadre_cert_statistics("0")
        tiers = {m.maturity_level: m for m in response.maturity_statistics}

        assert [c.job_category for c in tiers["L2"].job_category_statistics] == ["软件类", "非软件类"]
        assert len(tiers["L1"].job_category_statistics) == len(data.CADRE_CERT_CATEGORIES)

    def test_split_preserves_totals(self) -> None:
        """Test the split rows sum to the unsplit categories."""
        categories = [
            {"job_category": "软件类", "baseline_count": 10, "certified_count": 5},
            {"job_category": "系统类", "baseline_count": 6, "certified_count": 3},
            {"job_category": "研究类", "baseline_count": 4, "certified_count": 1},
        ]
        software, others = generators.split_software(categories, ("certified_count",))

        assert (software["baseline_count"], software["certified_count"]) == (10, 5)
        assert (others["baseline_count"], others["certified_count"]) == (10, 4)
        assert others["cert_rate"] == 40.0


class TestPopulationStatistics:
    """Tests for department and competence category endpoints."""

    def test_person_type_narrows_population(self) -> None:
        """Test role filters shrink the population."""
        everyone = generators.employee_cert_statistics("0", "0")
        cadres = generators.employee_cert_statistics("0", "1")
        assert cadres.total_statistics.total_count < everyone.total_statistics.total_count

    def test_total_is_sum_of_departments(self) -> None:
        """Test the total sums the department rows."""
        response = generators.employee_cert_statistics("0", "0")
        assert response.total_statistics.total_count == sum(
            d.total_count for d in response.department_statistics
        )
        assert len(response.department_statistics) == len(data.DEPARTMENT_STATISTICS)

    def test_competence_total_label(self) -> None:
        """Test the category total carries the total label."""
        response = generators.competence_category_cert_statistics("0", "0")
        assert response.total_statistics.competence_category == "总计"


class TestCadreOverview:
    """Tests for cadre_ai_certification_overview."""

    def test_summary_sums_departments(self) -> None:
        """Test the summary is the bottom-up sum of the department list."""
        response = generators.cadre_ai_certification_overview()

        assert response.summary.children == []
        assert response.summary.total_cadre_count == sum(d.total_cadre_count for d in response.department_list)
        for department in response.department_list:
            assert department.total_cadre_count == sum(c.total_cadre_count for c in department.children)
            assert department.l2_l3_count == (
                department.software_l2_count + department.software_l3_count + department.non_software_l2_l3_count
            )


class TestDrillDown:
    """Tests for cadre_qualified_details."""

    def test_appointed_only(self) -> None:
        """Test query type 1 keeps appointed employees."""
        response = generators.cadre_qualified_details("0", query_type=1)
        assert [e.employee_number for e in response.employee_details] == [
            "E001234",
            "E001235",
            "E001237",
            "E001239",
            "E001241",
        ]

    def test_baseline_returns_everyone(self) -> None:
        """Test query type 2 returns the whole baseline."""
        response = generators.cadre_qualified_details("0", query_type=2)
        assert len(response.employee_details) == len(data.EMPLOYEE_DETAILS)

    def test_combined_maturity(self) -> None:
        """Test L5 selects L2 and L3 employees."""
        response = generators.cadre_qualified_details("0", ai_maturity="L5", query_type=2)
        assert {e.ai_maturity for e in response.employee_details} == {"L2", "L3"}
        assert len(response.employee_details) == 6

    def test_department_and_category_filters(self) -> None:
        """Test department and job category filters combine."""
        response = generators.cadre_qualified_details("dept-ict-core-dev", job_category="软件类", query_type=2)
        assert [e.employee_number for e in response.employee_details] == ["E001236", "E001237"]


class TestPersonalCourseCompletion:
    """Tests for personal_course_completion."""

    def test_default_account(self) -> None:
        """Test a missing or blank account falls back to the demo employee."""
        assert generators.personal_course_completion(None).emp_num == data.DEFAULT_ACCOUNT
        assert generators.personal_course_completion("  ").emp_num == data.DEFAULT_ACCOUNT
        assert generators.personal_course_completion(None).emp_name == "张三"

    def test_account_echoed(self) -> None:
        """Test the trimmed account is returned as the employee number."""
        assert generators.personal_course_completion(" E001234 ").emp_num == "E001234"

    def test_level_counts(self) -> None:
        """Test completion counts and rates per course level."""
        statistics = generators.personal_course_completion(None).course_statistics

        assert [
            (s.course_level, s.total_courses, s.target_courses, s.completed_courses, s.completion_rate)
            for s in statistics
        ] == [
            ("基础", 10, 10, 8, 80.0),
            ("进阶", 8, 8, 5, 62.5),
            ("高阶", 6, 6, 3, 50.0),
            ("实战", 5, 5, 2, 40.0),
        ]

    def test_course_list_matches_counts(self) -> None:
        """Test each course list agrees with its level's counters."""
        for level in generators.personal_course_completion(None).course_statistics:
            assert len(level.course_list) == level.total_courses
            assert sum(c.is_completed for c in level.course_list) == level.completed_courses

        basic = generators.personal_course_completion(None).course_statistics[0].course_list
        assert basic[0].course_number == "COURSE_BASIC_001"
        assert basic[-1].is_completed is False
