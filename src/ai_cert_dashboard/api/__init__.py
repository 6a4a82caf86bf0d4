"""Statistics API clients and utilities."""

from ai_cert_dashboard.api.department_cache import DepartmentChildrenCache, DepartmentFetcher
from ai_cert_dashboard.api.endpoints import (
    ALL_STAFF,
    CADRE,
    COMBINED_MATURITY,
    EXPERT,
    FRONTLINE_MANAGER,
    QUERY_APPOINTED,
    QUERY_BASELINE,
    ROOT_DEPT_CODE,
    StatisticsApi,
)
from ai_cert_dashboard.api.http import (
    ApiEnvelope,
    DashboardHTTPClient,
    DashboardHTTPError,
    DepartmentLookupError,
)

__all__ = [
    "ALL_STAFF",
    "CADRE",
    "COMBINED_MATURITY",
    "EXPERT",
    "FRONTLINE_MANAGER",
    "QUERY_APPOINTED",
    "QUERY_BASELINE",
    "ROOT_DEPT_CODE",
    # HTTP Client
    "ApiEnvelope",
    "DashboardHTTPClient",
    "DashboardHTTPError",
    # Department cache
    "DepartmentChildrenCache",
    "DepartmentFetcher",
    "DepartmentLookupError",
    # Endpoints
    "StatisticsApi",
]
