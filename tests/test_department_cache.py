"""Tests for the department children cache."""

import asyncio

import pytest

from ai_cert_dashboard.api.department_cache import DepartmentChildrenCache
from ai_cert_dashboard.api.http import DepartmentLookupError
from ai_cert_dashboard.models import DepartmentInfo


class FakeFetcher:
    """Department fetcher that counts calls and can be held open."""

    def __init__(self, fail_times: int = 0) -> None:
        self.calls: list[str] = []
        self.fail_times = fail_times
        self.release = asyncio.Event()
        self.release.set()

    async def __call__(self, dept_id: str) -> list[DepartmentInfo]:
        self.calls.append(dept_id)
        await self.release.wait()
        if self.fail_times:
            self.fail_times -= 1
            raise DepartmentLookupError(f"lookup of {dept_id} failed")
        return [DepartmentInfo(dept_code=f"{dept_id}-child-{len(self.calls)}")]


class TestDepartmentChildrenCache:
    """Tests for DepartmentChildrenCache."""

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_fetch(self) -> None:
        """Test two concurrent lookups of one id fetch once and share the result."""
        fetcher = FakeFetcher()
        fetcher.release.clear()
        cache = DepartmentChildrenCache(fetcher)

        first = asyncio.create_task(cache.get("0"))
        second = asyncio.create_task(cache.get("0"))
        await asyncio.sleep(0)
        fetcher.release.set()
        a, b = await asyncio.gather(first, second)

        assert a is b
        assert fetcher.calls == ["0"]
        assert cache.fetch_count == 1

    @pytest.mark.asyncio
    async def test_completed_result_cached(self) -> None:
        """Test a later lookup returns the cached object without fetching."""
        fetcher = FakeFetcher()
        cache = DepartmentChildrenCache(fetcher)

        first = await cache.get("0")
        second = await cache.get("0")

        assert first is second
        assert fetcher.calls == ["0"]
        assert "0" in cache

    @pytest.mark.asyncio
    async def test_distinct_ids_fetched_separately(self) -> None:
        """Test different ids each trigger one fetch."""
        fetcher = FakeFetcher()
        cache = DepartmentChildrenCache(fetcher)

        await asyncio.gather(cache.get("A"), cache.get("B"), cache.get("A"))

        assert sorted(fetcher.calls) == ["A", "B"]

    @pytest.mark.asyncio
    async def test_force_refresh_refetches(self) -> None:
        """Test force_refresh bypasses the cached result."""
        fetcher = FakeFetcher()
        cache = DepartmentChildrenCache(fetcher)

        first = await cache.get("0")
        refreshed = await cache.get("0", force_refresh=True)

        assert refreshed is not first
        assert fetcher.calls == ["0", "0"]
        assert await cache.get("0") is refreshed

    @pytest.mark.asyncio
    async def test_failure_reraised_to_every_waiter(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a failed lookup re-raises to all waiters and is logged."""
        fetcher = FakeFetcher(fail_times=1)
        fetcher.release.clear()
        cache = DepartmentChildrenCache(fetcher)

        first = asyncio.create_task(cache.get("0"))
        second = asyncio.create_task(cache.get("0"))
        await asyncio.sleep(0)
        fetcher.release.set()
        results = await asyncio.gather(first, second, return_exceptions=True)

        assert all(isinstance(r, DepartmentLookupError) for r in results)
        assert fetcher.calls == ["0"]
        assert "Failed to load children of department 0" in caplog.text

    @pytest.mark.asyncio
    async def test_failure_not_cached(self) -> None:
        """Test a failed lookup is retried on the next call."""
        fetcher = FakeFetcher(fail_times=1)
        cache = DepartmentChildrenCache(fetcher)

        with pytest.raises(DepartmentLookupError):
            await cache.get("0")
        children = await cache.get("0")

        assert children[0].dept_code == "0-child-2"
        assert fetcher.calls == ["0", "0"]

    @pytest.mark.asyncio
    async def test_invalidate(self) -> None:
        """Test invalidate drops one id or everything."""
        fetcher = FakeFetcher()
        cache = DepartmentChildrenCache(fetcher)
        await cache.get("A")
        await cache.get("B")

        cache.invalidate("A")
        assert "A" not in cache
        assert "B" in cache

        cache.invalidate()
        assert "B" not in cache
