"""On-disk cache of raw timetable responses keyed by request path."""

import logging
import os
from datetime import datetime, timedelta
from pathlib import Path

from bahn_route.domain.ports.response_cache import ResponseCache

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE = timedelta(hours=24)


class FileResponseCache(ResponseCache):
    """Stores each response body in its own file below the cache directory.

    A request path such as ``/plan/8000105/261018/14`` is stored at
    ``<cache_dir>/plan/8000105/261018/14``. Readers, writers and the eviction
    task may run concurrently; every file operation failure is logged and
    treated as a cache miss.
    """

    def __init__(self, cache_dir: Path, max_age: timedelta = DEFAULT_MAX_AGE) -> None:
        """Initialize the cache.

        Args:
            cache_dir: Root directory of the cache. Created on first write.
            max_age: Entries older than this are removed by evict_stale().
        """
        self.cache_dir = cache_dir
        self.max_age = max_age

    def _path_for(self, key: str) -> Path | None:
        """Map a request path to a file, or None if it would escape the cache."""
        relative = key.lstrip("/")
        if not relative:
            return None
        root = self.cache_dir.resolve()
        path = (root / relative).resolve()
        if path == root or not path.is_relative_to(root):
            logger.warning(f"Refusing to cache key outside cache directory: {key}")
            return None
        return path

    def read(self, key: str) -> bytes | None:
        """Return the cached body for `key`, or None on a miss."""
        path = self._path_for(key)
        if path is None:
            return None
        try:
            body = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Error reading cache entry {path}: {e}")
            return None
        logger.debug(f"Cache hit: {key}")
        return body

    def write(self, key: str, body: bytes) -> None:
        """Store `body` under `key`. Failures are logged, never raised."""
        path = self._path_for(key)
        if path is None:
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(body)
        except OSError as e:
            logger.warning(f"Writing cache entry {path} failed: {e}")

    def evict_stale(self, now: datetime | None = None) -> int:
        """Remove entries older than max_age and prune empty directories.

        Args:
            now: Reference time (defaults to the current time).

        Returns:
            Number of removed entries.
        """
        if not self.cache_dir.is_dir():
            return 0

        cutoff = (now or datetime.now()).timestamp() - self.max_age.total_seconds()
        removed = 0

        for dirpath, dirnames, filenames in os.walk(self.cache_dir, topdown=False):
            directory = Path(dirpath)
            for filename in filenames:
                if self._remove_if_stale(directory / filename, cutoff):
                    removed += 1
            for dirname in dirnames:
                self._remove_if_empty(directory / dirname)

        if removed:
            logger.info(f"Evicted {removed} stale cache entr{'y' if removed == 1 else 'ies'}")
        return removed

    @staticmethod
    def _remove_if_stale(path: Path, cutoff: float) -> bool:
        try:
            if path.stat().st_mtime >= cutoff:
                return False
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not remove {path}: {e}")
            return False
        return True

    @staticmethod
    def _remove_if_empty(path: Path) -> None:
        try:
            if path.is_dir() and not any(path.iterdir()):
                path.rmdir()
        except OSError as e:
            # A concurrent write may have repopulated the directory
            logger.debug(f"Could not remove directory {path}: {e}")
