"""Background eviction of stale cache entries."""

import asyncio
import logging

from bahn_route.adapters.cache.file_response_cache import FileResponseCache

logger = logging.getLogger(__name__)


class CacheJanitor:
    """Runs cache eviction once in the background.

    Eviction is best effort: it runs in a worker thread, its failures are only
    logged and nobody waits for it to finish.
    """

    def __init__(self, cache: FileResponseCache) -> None:
        """Initialize with the cache to clean up."""
        self.cache = cache
        self._task: asyncio.Task | None = None

    def start(self) -> asyncio.Task:
        """Spawn the eviction task on the running event loop."""
        if self._task is not None and not self._task.done():
            logger.warning("Cache janitor already running")
            return self._task

        self._task = asyncio.create_task(self._evict_with_error_handling())
        return self._task

    async def _evict_with_error_handling(self) -> None:
        """Evict stale entries, logging instead of raising."""
        try:
            await asyncio.to_thread(self.cache.evict_stale)
        except asyncio.CancelledError:
            logger.debug("Cache janitor cancelled")
            raise
        except Exception as e:
            logger.error(f"Cleaning cache failed: {e}", exc_info=True)
