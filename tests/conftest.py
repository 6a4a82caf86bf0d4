"""Test fixtures for ai-cert-dashboard.

Provides fixtures for:
- Sample maturity-grouped statistics payloads (camelCase, as served upstream)
- An HTTP client wired to the in-process mock backend
"""

from typing import Any

import httpx
import pytest

from ai_cert_dashboard.api import DashboardHTTPClient, StatisticsApi
from ai_cert_dashboard.mock import create_app

TEST_BASE_URL = "http://testserver"


@pytest.fixture
def expert_cert_payload() -> dict[str, Any]:
    """Expert certification response with a mixed L2 tier and a plain L3 tier."""
    return {
        "deptCode": "0",
        "deptName": "云核心网产品线",
        "maturityStatistics": [
            {
                "maturityLevel": "L2",
                "baselineCount": 80,
                "certifiedCount": 58,
                "certRate": 72.5,
                "jobCategoryStatistics": [
                    {"jobCategory": "软件类", "baselineCount": 7, "certifiedCount": 5, "certRate": 71.43},
                    {"jobCategory": "系统类", "baselineCount": 14, "certifiedCount": 10, "certRate": 71.43},
                    {"jobCategory": "管理类", "baselineCount": 20, "certifiedCount": 12, "certRate": 60.0},
                    {"jobCategory": "产品类", "baselineCount": 10, "certifiedCount": 3, "certRate": 30.0},
                ],
            },
            {
                "maturityLevel": "L3",
                "baselineCount": 53,
                "certifiedCount": 37,
                "certRate": 69.81,
                "jobCategoryStatistics": [
                    {"jobCategory": "软件类", "baselineCount": 5, "certifiedCount": 4, "certRate": 80.0},
                    {"jobCategory": "管理类", "baselineCount": 18, "certifiedCount": 13, "certRate": 72.22},
                ],
            },
        ],
        "totalStatistics": {
            "maturityLevel": "总计",
            "baselineCount": 133,
            "certifiedCount": 95,
            "certRate": 71.43,
        },
    }


@pytest.fixture
def expert_qualified_payload() -> dict[str, Any]:
    """Expert appointment response with by-requirement counters."""
    return {
        "maturityStatistics": [
            {
                "maturityLevel": "L2",
                "baselineCount": 80,
                "qualifiedCount": 63,
                "qualifiedRate": 78.75,
                "qualifiedByRequirementCount": 54,
                "qualifiedByRequirementRate": 67.5,
                "jobCategoryStatistics": [
                    {
                        "jobCategory": "软件类",
                        "baselineCount": 45,
                        "qualifiedCount": 35,
                        "qualifiedRate": 77.78,
                        "qualifiedByRequirementCount": 30,
                        "qualifiedByRequirementRate": 66.67,
                    },
                    {
                        "jobCategory": "系统类",
                        "baselineCount": 30,
                        "qualifiedCount": 24,
                        "qualifiedRate": 80.0,
                        "qualifiedByRequirementCount": 21,
                        "qualifiedByRequirementRate": 70.0,
                    },
                    {
                        "jobCategory": "研究类",
                        "baselineCount": 10,
                        "qualifiedCount": 6,
                        "qualifiedRate": 60.0,
                        "qualifiedByRequirementCount": None,
                        "qualifiedByRequirementRate": None,
                    },
                ],
            },
        ],
        "totalStatistics": {
            "maturityLevel": "总计",
            "baselineCount": 80,
            "qualifiedCount": 63,
            "qualifiedRate": 78.75,
            "qualifiedByRequirementCount": 54,
            "qualifiedByRequirementRate": 67.5,
        },
    }


@pytest.fixture
def cadre_cert_payload() -> dict[str, Any]:
    """Cadre certification response with the L2 tier already split server-side."""
    return {
        "maturityStatistics": [
            {
                "maturityLevel": "L1",
                "baselineCount": 120,
                "certifiedCount": 66,
                "certRate": 55.0,
                "subject2PassCount": 48,
                "subject2PassRate": 40.0,
                "certStandardCount": 60,
                "certStandardRate": 50.0,
                "jobCategoryStatistics": [
                    {
                        "jobCategory": "管理类",
                        "baselineCount": 40,
                        "certifiedCount": 20,
                        "certRate": 50.0,
                        "subject2PassCount": 10,
                        "subject2PassRate": 25.0,
                        "certStandardCount": 18,
                        "certStandardRate": 45.0,
                    },
                ],
            },
            {
                "maturityLevel": "L2",
                "baselineCount": 90,
                "certifiedCount": 61,
                "certRate": 67.78,
                "subject2PassCount": 45,
                "subject2PassRate": 50.0,
                "certStandardCount": 55,
                "certStandardRate": 61.11,
                "jobCategoryStatistics": [
                    {
                        "jobCategory": "软件类",
                        "baselineCount": 30,
                        "certifiedCount": 22,
                        "certRate": 73.33,
                        "subject2PassCount": 16,
                        "subject2PassRate": 53.33,
                        "certStandardCount": 20,
                        "certStandardRate": 66.67,
                    },
                    {
                        "jobCategory": "非软件类",
                        "baselineCount": 60,
                        "certifiedCount": 39,
                        "certRate": 65.0,
                        "subject2PassCount": 29,
                        "subject2PassRate": 48.33,
                        "certStandardCount": 35,
                        "certStandardRate": 58.33,
                    },
                ],
            },
        ],
        "totalStatistics": {
            "maturityLevel": "总计",
            "baselineCount": 210,
            "certifiedCount": 127,
            "certRate": 60.48,
            "subject2PassCount": 93,
            "subject2PassRate": 44.29,
            "certStandardCount": 115,
            "certStandardRate": 54.76,
        },
    }


@pytest.fixture
def mock_transport() -> httpx.ASGITransport:
    """Transport routing requests into the in-process mock backend."""
    return httpx.ASGITransport(app=create_app())


@pytest.fixture
def mock_http_client(mock_transport: httpx.ASGITransport) -> DashboardHTTPClient:
    """HTTP client talking to the mock backend without a network."""
    return DashboardHTTPClient(base_url=TEST_BASE_URL, transport=mock_transport)


@pytest.fixture
def mock_api(mock_http_client: DashboardHTTPClient) -> StatisticsApi:
    """Endpoint client talking to the mock backend."""
    return StatisticsApi(mock_http_client)
