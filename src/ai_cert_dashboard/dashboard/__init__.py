"""Dashboard aggregation and view-models."""

from .service import DashboardService, build_all_staff_charts, build_metrics
from .views import (
    ALL_MATURITY,
    MATURITY_OPTIONS,
    ROLE_OPTIONS,
    AllStaffCharts,
    CadreDashboard,
    CertificationDashboard,
    CertificationDetail,
    DepartmentNode,
    DetailFilters,
    ExpertDashboard,
    FilterOptions,
    MetricItem,
    SelectOption,
    to_department_nodes,
)

__all__ = [
    "ALL_MATURITY",
    "MATURITY_OPTIONS",
    "ROLE_OPTIONS",
    "AllStaffCharts",
    "CadreDashboard",
    "CertificationDashboard",
    "CertificationDetail",
    "DashboardService",
    "DepartmentNode",
    "DetailFilters",
    "ExpertDashboard",
    "FilterOptions",
    "MetricItem",
    "SelectOption",
    "build_all_staff_charts",
    "build_metrics",
    "to_department_nodes",
]
