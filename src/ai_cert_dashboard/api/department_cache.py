"""Memoized department-children lookups with in-flight de-duplication."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ai_cert_dashboard.models import DepartmentInfo

logger = logging.getLogger(__name__)

DepartmentFetcher = Callable[[str], Awaitable[list[DepartmentInfo]]]


class DepartmentChildrenCache:
    """Cache of department children keyed by department id.

    Concurrent lookups of the same id share one pending request. Completed
    results are kept for the lifetime of the cache; failed lookups are not
    cached and re-raise to every waiter.
    """

    def __init__(self, fetcher: DepartmentFetcher) -> None:
        """Initialize the cache.

        Args:
            fetcher: Coroutine function returning the children of an id.
        """
        self._fetcher = fetcher
        self._results: dict[str, list[DepartmentInfo]] = {}
        self._pending: dict[str, asyncio.Task[list[DepartmentInfo]]] = {}
        self.fetch_count = 0

    def __contains__(self, dept_id: object) -> bool:
        return dept_id in self._results

    async def get(self, dept_id: str, force_refresh: bool = False) -> list[DepartmentInfo]:
        """Children of ``dept_id``, fetched at most once per id.

        Args:
            dept_id: Department id; "0" is the root.
            force_refresh: Ignore a cached result and fetch again. A request
                already in flight is still shared.

        Returns:
            Child departments.

        Raises:
            Exception: Whatever the fetcher raised, after logging it.
        """
        if not force_refresh and dept_id in self._results:
            return self._results[dept_id]

        task = self._pending.get(dept_id)
        if task is None:
            task = asyncio.create_task(self._load(dept_id))
            self._pending[dept_id] = task

        # A cancelled caller must not cancel the shared request
        return await asyncio.shield(task)

    async def _load(self, dept_id: str) -> list[DepartmentInfo]:
        self.fetch_count += 1
        try:
            children = await self._fetcher(dept_id)
        except Exception as e:
            logger.error("Failed to load children of department %s: %s", dept_id, e)
            raise
        else:
            self._results[dept_id] = children
            logger.debug("Cached %d children for department %s", len(children), dept_id)
            return children
        finally:
            self._pending.pop(dept_id, None)

    def invalidate(self, dept_id: str | None = None) -> None:
        """Drop one cached id, or every cached id when none is given."""
        if dept_id is None:
            self._results.clear()
        else:
            self._results.pop(dept_id, None)
