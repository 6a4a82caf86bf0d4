"""Deterministic synthetic statistics for the mock backend.

Each maturity tier is scaled by the department multiplier and then split
across job categories: category ``i`` of ``n`` receives
``35% * (i + 1) / n`` of the tier baseline. Ratios of the base figures are
preserved when counts are scaled. Unknown departments fall back to the
organisation-level figures.
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ai_cert_dashboard.models import (
    CadreAiCertificationOverviewResponse,
    CadreAiOverviewStatistics,
    CadreJobCategoryCertStatistics,
    CadreMaturityCertStatistics,
    CadreMaturityJobCategoryCertStatisticsResponse,
    ChartPoint,
    CompetenceCategoryCertStatistics,
    CompetenceCategoryCertStatisticsResponse,
    CourseCategoryStatistics,
    CourseInfo,
    DepartmentCertStatistic,
    DepartmentInfo,
    EmployeeCertStatisticsResponse,
    EmployeeDetail,
    EmployeeDrillDownResponse,
    ExpertAiCertStatisticsResponse,
    ExpertJobCategoryCertStatistics,
    ExpertMaturityCertStatistics,
    JobCategoryQualifiedStatistics,
    MaturityQualifiedStatistics,
    MaturityQualifiedStatisticsResponse,
    OverallCertificationTrends,
    PersonalCourseCompletionResponse,
    PlTmCertStatisticsResponse,
    PlTmDepartmentStatistics,
)
from ai_cert_dashboard.stats.rates import calculate_rate

from . import data

COMBINED_MATURITY = "L5"
COMBINED_MATURITY_LEVELS = frozenset({"L2", "L3"})
SPLIT_TIER = "L2"
SOFTWARE_CATEGORY = "软件类"
NON_SOFTWARE_CATEGORY = "非软件类"
TOTAL_LABEL = "总计"
CATEGORY_SHARE = 0.35

CERT_COUNTS = ("certified_count",)
CADRE_CERT_COUNTS = ("certified_count", "subject2_pass_count", "cert_standard_count")
QUALIFIED_COUNTS = ("qualified_count", "qualified_by_requirement_count")

# count field -> rate field, both against baseline_count
RATE_FIELDS = {
    "certified_count": "cert_rate",
    "subject2_pass_count": "subject2_pass_rate",
    "cert_standard_count": "cert_standard_rate",
    "qualified_count": "qualified_rate",
    "qualified_by_requirement_count": "qualified_by_requirement_rate",
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative values used here."""
    return math.floor(value + 0.5)


def normalize_dept_code(dept_code: str | None) -> str:
    if dept_code and dept_code.strip():
        return dept_code
    return data.DEFAULT_DEPT_CODE


def department_multiplier(dept_code: str) -> float:
    return data.DEPARTMENT_MULTIPLIERS.get(dept_code, data.DEPARTMENT_MULTIPLIERS[data.DEFAULT_DEPT_CODE])


def department_name(dept_code: str) -> str:
    return data.DEPARTMENT_NAMES.get(dept_code, f"部门-{dept_code}")


def _with_rates(counts: dict[str, Any], count_fields: Iterable[str]) -> dict[str, Any]:
    for field in count_fields:
        counts[RATE_FIELDS[field]] = calculate_rate(counts["baseline_count"], counts[field])
    return counts


def _rescale(base: Mapping[str, Any], baseline: int, count_fields: Sequence[str]) -> dict[str, Any]:
    """Move ``base`` onto a new baseline keeping every count's ratio."""
    scaled = {key: value for key, value in base.items() if key not in count_fields}
    scaled["baseline_count"] = baseline
    for field in count_fields:
        ratio = base[field] / base["baseline_count"] if base["baseline_count"] else 0
        scaled[field] = max(0, min(baseline, round_half_up(baseline * ratio)))
    return _with_rates(scaled, count_fields)


def _scale(base: Mapping[str, Any], multiplier: float, count_fields: Sequence[str]) -> dict[str, Any]:
    baseline = max(1, round_half_up(base["baseline_count"] * multiplier))
    return _rescale(base, baseline, count_fields)


def _sum_counts(
    rows: Sequence[Mapping[str, Any]], count_fields: Sequence[str], **labels: str
) -> dict[str, Any]:
    summed: dict[str, Any] = dict(labels)
    summed["baseline_count"] = sum(row["baseline_count"] for row in rows)
    for field in count_fields:
        summed[field] = sum(row[field] for row in rows)
    return _with_rates(summed, count_fields)


def scale_maturity_statistics(
    maturity_data: Sequence[Mapping[str, Any]],
    job_categories: Sequence[Mapping[str, Any]],
    multiplier: float,
    count_fields: Sequence[str],
    split_software_tier: bool = False,
) -> list[dict[str, Any]]:
    """Scale base tiers and allocate their job categories.

    Args:
        maturity_data: Base tier figures.
        job_categories: Base job category figures, in allocation order.
        multiplier: Department multiplier.
        count_fields: Count fields carried by every row.
        split_software_tier: Pre-roll the L2 categories into software and
            non-software rows, as the cadre backend does.

    Returns:
        Tier dicts with a ``job_category_statistics`` list each.
    """
    scaled_categories = [_scale(category, multiplier, count_fields) for category in job_categories]
    n = len(scaled_categories)

    tiers = []
    for maturity in maturity_data:
        tier = _scale(maturity, multiplier, count_fields)
        categories = [
            _rescale(
                category,
                max(1, round_half_up(tier["baseline_count"] * CATEGORY_SHARE * (i + 1) / n)),
                count_fields,
            )
            for i, category in enumerate(scaled_categories)
        ]
        if split_software_tier and tier["maturity_level"] == SPLIT_TIER:
            categories = split_software(categories, count_fields)
        tier["job_category_statistics"] = categories
        tiers.append(tier)
    return tiers


def split_software(categories: Sequence[Mapping[str, Any]], count_fields: Sequence[str]) -> list[dict[str, Any]]:
    """Merge every non-software category into one row."""
    software = [c for c in categories if c["job_category"] == SOFTWARE_CATEGORY]
    others = [c for c in categories if c["job_category"] != SOFTWARE_CATEGORY]
    return [
        _sum_counts(software, count_fields, job_category=SOFTWARE_CATEGORY),
        _sum_counts(others, count_fields, job_category=NON_SOFTWARE_CATEGORY),
    ]


def _maturity_payload(
    dept_code: str | None,
    maturity_data: Sequence[Mapping[str, Any]],
    job_categories: Sequence[Mapping[str, Any]],
    count_fields: Sequence[str],
    split: bool = False,
) -> dict[str, Any]:
    code = normalize_dept_code(dept_code)
    tiers = scale_maturity_statistics(
        maturity_data, job_categories, department_multiplier(code), count_fields, split
    )
    total = _sum_counts(tiers, count_fields, maturity_level=TOTAL_LABEL)
    return {
        "dept_code": code,
        "dept_name": department_name(code),
        "maturity_statistics": tiers,
        "total_statistics": total,
    }


# ---------------------------------------------------------------------------
# Maturity -> job category endpoints
# ---------------------------------------------------------------------------


def expert_cert_statistics(dept_code: str | None) -> ExpertAiCertStatisticsResponse:
    payload = _maturity_payload(dept_code, data.EXPERT_CERT_MATURITY, data.EXPERT_CERT_CATEGORIES, CERT_COUNTS)
    return ExpertAiCertStatisticsResponse(
        dept_code=payload["dept_code"],
        dept_name=payload["dept_name"],
        maturity_statistics=[
            ExpertMaturityCertStatistics(
                **{k: v for k, v in tier.items() if k != "job_category_statistics"},
                job_category_statistics=[
                    ExpertJobCategoryCertStatistics(**c) for c in tier["job_category_statistics"]
                ],
            )
            for tier in payload["maturity_statistics"]
        ],
        total_statistics=ExpertMaturityCertStatistics(**payload["total_statistics"]),
    )


def _qualified_response(payload: dict[str, Any]) -> MaturityQualifiedStatisticsResponse:
    return MaturityQualifiedStatisticsResponse(
        dept_code=payload["dept_code"],
        dept_name=payload["dept_name"],
        maturity_statistics=[
            MaturityQualifiedStatistics(
                **{k: v for k, v in tier.items() if k != "job_category_statistics"},
                job_category_statistics=[
                    JobCategoryQualifiedStatistics(**c) for c in tier["job_category_statistics"]
                ],
            )
            for tier in payload["maturity_statistics"]
        ],
        total_statistics=MaturityQualifiedStatistics(**payload["total_statistics"]),
    )


def expert_qualified_statistics(dept_code: str | None) -> MaturityQualifiedStatisticsResponse:
    return _qualified_response(
        _maturity_payload(
            dept_code, data.EXPERT_QUALIFIED_MATURITY, data.EXPERT_QUALIFIED_CATEGORIES, QUALIFIED_COUNTS
        )
    )


def cadre_cert_statistics(dept_code: str | None) -> CadreMaturityJobCategoryCertStatisticsResponse:
    payload = _maturity_payload(
        dept_code, data.CADRE_CERT_MATURITY, data.CADRE_CERT_CATEGORIES, CADRE_CERT_COUNTS, split=True
    )
    return CadreMaturityJobCategoryCertStatisticsResponse(
        dept_code=payload["dept_code"],
        dept_name=payload["dept_name"],
        maturity_statistics=[
            CadreMaturityCertStatistics(
                **{k: v for k, v in tier.items() if k != "job_category_statistics"},
                job_category_statistics=[
                    CadreJobCategoryCertStatistics(**c) for c in tier["job_category_statistics"]
                ],
            )
            for tier in payload["maturity_statistics"]
        ],
        total_statistics=CadreMaturityCertStatistics(**payload["total_statistics"]),
    )


def cadre_qualified_statistics(dept_code: str | None) -> MaturityQualifiedStatisticsResponse:
    return _qualified_response(
        _maturity_payload(
            dept_code, data.CADRE_QUALIFIED_MATURITY, data.CADRE_QUALIFIED_CATEGORIES, QUALIFIED_COUNTS, split=True
        )
    )


# ---------------------------------------------------------------------------
# Department and competence category endpoints
# ---------------------------------------------------------------------------


def _population_multiplier(dept_code: str, person_type: str | None) -> float:
    share = data.PERSON_TYPE_SHARES.get(person_type or "0", data.PERSON_TYPE_SHARES["0"])
    return department_multiplier(dept_code) * share


def _scale_population(base: Mapping[str, Any], multiplier: float) -> dict[str, Any]:
    total = max(1, round_half_up(base["total_count"] * multiplier))
    scaled = dict(base, total_count=total)
    for field in ("certified_count", "qualified_count"):
        scaled[field] = max(0, min(total, round_half_up(total * base[field] / base["total_count"])))
    scaled["cert_rate"] = calculate_rate(total, scaled["certified_count"])
    scaled["qualified_rate"] = calculate_rate(total, scaled["qualified_count"])
    return scaled


def _population_total(rows: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    total = sum(row["total_count"] for row in rows)
    certified = sum(row["certified_count"] for row in rows)
    qualified = sum(row["qualified_count"] for row in rows)
    return {
        "total_count": total,
        "certified_count": certified,
        "qualified_count": qualified,
        "cert_rate": calculate_rate(total, certified),
        "qualified_rate": calculate_rate(total, qualified),
    }


def employee_cert_statistics(dept_code: str | None, person_type: str | None) -> EmployeeCertStatisticsResponse:
    code = normalize_dept_code(dept_code)
    multiplier = _population_multiplier(code, person_type)
    rows = [
        _scale_population(dict(row, dept_name=department_name(row["dept_code"])), multiplier)
        for row in data.DEPARTMENT_STATISTICS
    ]
    return EmployeeCertStatisticsResponse(
        department_statistics=[DepartmentCertStatistic(**row) for row in rows],
        total_statistics=DepartmentCertStatistic(
            dept_code=code, dept_name=department_name(code), **_population_total(rows)
        ),
    )


def competence_category_cert_statistics(
    dept_code: str | None, person_type: str | None
) -> CompetenceCategoryCertStatisticsResponse:
    code = normalize_dept_code(dept_code)
    multiplier = _population_multiplier(code, person_type)
    rows = [_scale_population(row, multiplier) for row in data.COMPETENCE_CATEGORY_STATISTICS]
    return CompetenceCategoryCertStatisticsResponse(
        dept_code=code,
        dept_name=department_name(code),
        category_statistics=[CompetenceCategoryCertStatistics(**row) for row in rows],
        total_statistics=CompetenceCategoryCertStatistics(competence_category=TOTAL_LABEL, **_population_total(rows)),
    )


def overall_certification_trends() -> OverallCertificationTrends:
    return OverallCertificationTrends(
        **{
            series: [ChartPoint(label=label, count=count, rate=rate) for label, count, rate in points]
            for series, points in data.OVERALL_TRENDS.items()
        }
    )


def pl_tm_cert_statistics() -> PlTmCertStatisticsResponse:
    return PlTmCertStatisticsResponse(
        summary=PlTmDepartmentStatistics(**data.PL_TM_SUMMARY),
        department_list=[PlTmDepartmentStatistics(**row) for row in data.PL_TM_DEPARTMENTS],
    )


# ---------------------------------------------------------------------------
# Departments
# ---------------------------------------------------------------------------


def _department_node(node: Mapping[str, Any], parent_code: str) -> DepartmentInfo:
    return DepartmentInfo(
        dept_code=node["dept_code"],
        dept_name=node["dept_name"],
        dept_level=node["dept_level"],
        parent_dept_code=parent_code,
        children=[_department_node(child, node["dept_code"]) for child in node.get("children", ())],
    )


def department_tree() -> list[DepartmentInfo]:
    return [_department_node(node, data.DEFAULT_DEPT_CODE) for node in data.DEPARTMENT_TREE]


def _find_department(nodes: Iterable[DepartmentInfo], dept_code: str) -> DepartmentInfo | None:
    for node in nodes:
        if node.dept_code == dept_code:
            return node
        found = _find_department(node.children, dept_code)
        if found is not None:
            return found
    return None


def department_children(dept_id: str | None) -> list[DepartmentInfo]:
    """Children of ``dept_id``; the root returns the whole tree, unknown ids nothing."""
    code = normalize_dept_code(dept_id)
    tree = department_tree()
    if code == data.DEFAULT_DEPT_CODE:
        return tree
    node = _find_department(tree, code)
    return node.children if node else []


def cadre_ai_certification_overview() -> CadreAiCertificationOverviewResponse:
    """Cadre appointment overview over the department tree, summed bottom-up."""

    def build(node: DepartmentInfo) -> CadreAiOverviewStatistics:
        children = [build(child) for child in node.children]
        if children:
            counts = {
                field: sum(getattr(child, field) for child in children)
                for field in (
                    "total_cadre_count",
                    "software_l2_count",
                    "software_l3_count",
                    "non_software_l2_l3_count",
                    "meet_requirement_l2_l3_count",
                )
            }
        else:
            # Leaf figures derive from the code so every department differs
            seed = sum(ord(ch) for ch in node.dept_code) % 7
            counts = {
                "total_cadre_count": 20 + seed * 3,
                "software_l2_count": 4 + seed % 3,
                "software_l3_count": 2 + seed % 2,
                "non_software_l2_l3_count": 3 + seed % 4,
            }
            counts["meet_requirement_l2_l3_count"] = round_half_up(
                (counts["software_l2_count"] + counts["software_l3_count"] + counts["non_software_l2_l3_count"]) * 0.6
            )
        l2_l3 = counts["software_l2_count"] + counts["software_l3_count"] + counts["non_software_l2_l3_count"]
        return CadreAiOverviewStatistics(
            dept_code=node.dept_code,
            dept_name=node.dept_name,
            dept_level=node.dept_level,
            l2_l3_count=l2_l3,
            meet_requirement_l2_l3_rate=calculate_rate(l2_l3, counts["meet_requirement_l2_l3_count"]),
            children=children,
            **counts,
        )

    departments = [build(node) for node in department_tree()]
    root = build(
        DepartmentInfo(
            dept_code=data.DEFAULT_DEPT_CODE,
            dept_name=department_name(data.DEFAULT_DEPT_CODE),
            dept_level="2",
            children=department_tree(),
        )
    )
    return CadreAiCertificationOverviewResponse(
        summary=root.model_copy(update={"children": []}),
        department_list=departments,
    )


# ---------------------------------------------------------------------------
# Drill-down
# ---------------------------------------------------------------------------


def _in_department(employee: Mapping[str, Any], dept_code: str) -> bool:
    if dept_code == data.DEFAULT_DEPT_CODE:
        return True
    node = _find_department(department_tree(), dept_code)
    needle = node.dept_name if node else dept_code
    return any(
        needle in (employee.get(level) or "")
        for level in ("first_level_dept", "second_level_dept", "third_level_dept")
    )


def cadre_qualified_details(
    dept_code: str,
    ai_maturity: str | None = None,
    job_category: str | None = None,
    person_type: int = 1,
    query_type: int = 1,
) -> EmployeeDrillDownResponse:
    """Employees matching a drill-down query.

    ``L5`` selects L2 and L3. Query type 1 keeps appointed employees only;
    query type 2 returns the whole baseline.
    """
    employees = [e for e in data.EMPLOYEE_DETAILS if _in_department(e, dept_code)]

    if ai_maturity and ai_maturity.strip():
        if ai_maturity == COMBINED_MATURITY:
            employees = [e for e in employees if e["ai_maturity"] in COMBINED_MATURITY_LEVELS]
        else:
            employees = [e for e in employees if e["ai_maturity"] == ai_maturity]

    if job_category and job_category.strip():
        employees = [e for e in employees if e["competence_category"] == job_category]

    if person_type == 1:
        employees = [e for e in employees if e.get("is_cadre") == 1 or e.get("cadre_type")]

    if query_type == 1:
        employees = [e for e in employees if e.get("is_qualifications_standard") == 1]

    return EmployeeDrillDownResponse(employee_details=[EmployeeDetail(**e) for e in employees])


def personal_course_completion(account: str | None) -> PersonalCourseCompletionResponse:
    """Course completion per level for ``account``; blank accounts use the demo employee."""
    emp_num = (account or "").strip() or data.DEFAULT_ACCOUNT
    statistics = []
    for level, courses in data.COURSE_LEVELS.items():
        completed = sum(1 for _, _, done in courses if done)
        statistics.append(
            CourseCategoryStatistics(
                course_level=level,
                total_courses=len(courses),
                target_courses=len(courses),
                completed_courses=completed,
                completion_rate=calculate_rate(len(courses), completed),
                course_list=[
                    CourseInfo(course_name=name, course_number=number, is_completed=done)
                    for name, number, done in courses
                ],
            )
        )
    return PersonalCourseCompletionResponse(
        emp_num=emp_num, emp_name=data.DEFAULT_EMPLOYEE_NAME, course_statistics=statistics
    )
