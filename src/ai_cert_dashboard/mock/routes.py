"""Mock statistics API routes."""

import logging

from fastapi import APIRouter, Header, HTTPException, Query

from . import generators
from .responses import success_response

logger = logging.getLogger(__name__)

API_PREFIX = "/ai_transform_webapi"
VALID_QUERY_TYPES = (1, 2)

expert_cert_statistics_router = APIRouter(prefix="/expert-cert-statistics", tags=["Statistics"])
entry_level_manager_router = APIRouter(prefix="/entry-level-manager", tags=["Entry-level managers"])
department_router = APIRouter(prefix="/department-info", tags=["Departments"])
overview_router = APIRouter(tags=["Overview"])
personal_course_router = APIRouter(prefix="/personal-course", tags=["Personal course"])


@expert_cert_statistics_router.get("/employee-cert-statistics")
def employee_cert_statistics(
    dept_code: str = Query("0", alias="deptCode"),
    person_type: str = Query("0", alias="personType"),
):
    data = generators.employee_cert_statistics(dept_code, person_type)
    return success_response(data, "mock employee cert statistics")


@expert_cert_statistics_router.get("/competence-category-cert-statistics")
def competence_category_cert_statistics(
    dept_code: str = Query("0", alias="deptCode"),
    person_type: str = Query("0", alias="personType"),
):
    data = generators.competence_category_cert_statistics(dept_code, person_type)
    return success_response(data, "mock competence category cert statistics")


@expert_cert_statistics_router.get("/overall-certification-trends")
def overall_certification_trends():
    return success_response(generators.overall_certification_trends(), "mock overall certification trends")


@expert_cert_statistics_router.get("/cadre-cert-statistics/by-maturity-and-job-category")
def cadre_cert_statistics(dept_code: str = Query("0", alias="deptCode")):
    data = generators.cadre_cert_statistics(dept_code)
    return success_response(data, "mock cadre maturity job category cert statistics")


@expert_cert_statistics_router.get("/cadre-cert-statistics/by-maturity-and-job-category-qualified")
def cadre_qualified_statistics(
    dept_code: str | None = Query(None, alias="deptCode"),
    dept_id: str | None = Query(None, alias="deptId"),
):
    # The upstream service names this parameter deptId; the dashboard sends deptCode
    data = generators.cadre_qualified_statistics(dept_code or dept_id)
    return success_response(data, "mock cadre maturity job category qualified statistics")


@expert_cert_statistics_router.get("/expert-ai-cert-statistics")
def expert_cert_statistics(dept_code: str = Query("0", alias="deptCode")):
    data = generators.expert_cert_statistics(dept_code)
    return success_response(data, "mock expert ai cert statistics")


@expert_cert_statistics_router.get("/expert-ai-qualified-statistics")
def expert_qualified_statistics(dept_code: str = Query("0", alias="deptCode")):
    data = generators.expert_qualified_statistics(dept_code)
    return success_response(data, "mock expert ai qualified statistics")


@expert_cert_statistics_router.get("/cadre-qualified-details")
def cadre_qualified_details(
    dept_code: str = Query("", alias="deptCode"),
    ai_maturity: str | None = Query(None, alias="aiMaturity"),
    job_category: str | None = Query(None, alias="jobCategory"),
    person_type: str = Query("1", alias="personType"),
    query_type: str = Query("1", alias="queryType"),
):
    if not dept_code.strip():
        raise HTTPException(400, "部门ID不能为空")

    try:
        person_type_code = int(person_type)
        query_type_code = int(query_type)
    except ValueError:
        raise HTTPException(400, "人员类型或查询类型参数错误") from None

    if query_type_code not in VALID_QUERY_TYPES:
        raise HTTPException(400, "查询类型参数错误，只支持1（任职人数）或2（基线人数）")

    data = generators.cadre_qualified_details(
        dept_code, ai_maturity, job_category, person_type_code, query_type_code
    )
    logger.debug("Drill-down for %s returned %d employees", dept_code, len(data.employee_details))
    return success_response(data, "查询成功")


@entry_level_manager_router.get("/pl-tm-cert-statistics")
def pl_tm_cert_statistics():
    return success_response(generators.pl_tm_cert_statistics(), "查询成功")


@overview_router.get("/cadre-ai-certification-overview")
def cadre_ai_certification_overview():
    return success_response(generators.cadre_ai_certification_overview(), "查询成功")


@department_router.get("/children")
def department_children(dept_id: str = Query("0", alias="deptId")):
    return success_response(generators.department_children(dept_id), "查询成功")


@personal_course_router.get("/completion")
def personal_course_completion(account: str | None = Header(None, alias="X-Account")):
    return success_response(generators.personal_course_completion(account), "查询成功")


api_router = APIRouter(prefix=API_PREFIX)
api_router.include_router(expert_cert_statistics_router)
api_router.include_router(entry_level_manager_router)
api_router.include_router(department_router)
api_router.include_router(overview_router)
api_router.include_router(personal_course_router)
