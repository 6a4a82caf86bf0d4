"""Tests for per-domain rollup policies."""

from ai_cert_dashboard.models import ExpertJobCategoryCertStatistics
from ai_cert_dashboard.stats.policies import (
    NON_SOFTWARE_CATEGORY,
    PASS_THROUGH,
    SPECIAL_TIER,
    Consolidate,
    PassThrough,
    StatisticsDomain,
    resolve_rollup,
)


class TestResolveRollup:
    """Tests for resolve_rollup."""

    def test_expert_certification_consolidates(self) -> None:
        """Test the expert certification special tier keeps four categories."""
        policy = resolve_rollup(StatisticsDomain.EXPERT_CERTIFICATION, SPECIAL_TIER)
        assert isinstance(policy, Consolidate)
        assert policy.allow_list == frozenset({"测试类", "软件类", "系统类", "研究类"})

    def test_expert_appointment_splits_software(self) -> None:
        """Test the expert appointment special tier keeps software only."""
        policy = resolve_rollup(StatisticsDomain.EXPERT_APPOINTMENT, SPECIAL_TIER)
        assert isinstance(policy, Consolidate)
        assert policy.allow_list == frozenset({"软件类"})
        assert policy.other_label == NON_SOFTWARE_CATEGORY

    def test_cadre_domains_pass_through(self) -> None:
        """Test cadre tables trust the server-side rollup."""
        assert resolve_rollup(StatisticsDomain.CADRE_CERTIFICATION, SPECIAL_TIER) is PASS_THROUGH
        assert resolve_rollup(StatisticsDomain.CADRE_APPOINTMENT, SPECIAL_TIER) is PASS_THROUGH

    def test_other_tiers_pass_through(self) -> None:
        """Test tiers without a registered policy pass through."""
        for domain in StatisticsDomain:
            assert isinstance(resolve_rollup(domain, "L3"), PassThrough)


class TestPassThrough:
    """Tests for PassThrough."""

    def test_returns_copy_in_order(self) -> None:
        """Test categories are returned in order as a new list."""
        categories = [
            ExpertJobCategoryCertStatistics(job_category="管理类"),
            ExpertJobCategoryCertStatistics(job_category="软件类"),
        ]
        result = PASS_THROUGH.apply(categories)
        assert result == categories
        assert result is not categories
