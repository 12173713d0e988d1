"""
Persistence of rendered dashboards into the statically served directory.
"""

import logging
import threading
import time
from pathlib import Path

from .exceptions import StorageError

logger = logging.getLogger(__name__)


class DashboardPublisher:
    """
    Writes rendered documents to a flat directory and returns their URLs.

    Table dashboards are named after their source document, so publishing
    the same name again overwrites the previous file. Comparison documents
    get a ``compare-<unix-millis>.html`` name that never repeats within a
    publisher.
    """

    extension = ".html"

    def __init__(self, dashboard_dir: str | Path, url_prefix: str = "/dashboards"):
        """
        Initialize the publisher.

        Args:
            dashboard_dir: Directory the documents are written to.
            url_prefix: URL path under which the directory is served.
        """
        self.dashboard_dir = Path(dashboard_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self._last_stamp = 0
        self._stamp_lock = threading.Lock()

    def publish(self, document: str, base_name: str) -> str:
        """
        Write a table dashboard named after its source document.

        Args:
            document: Rendered HTML.
            base_name: Source document name without extension.

        Returns:
            URL path of the written document.

        Raises:
            ValueError: If ``base_name`` is not a bare file name.
            StorageError: If the directory or file cannot be written.
        """
        self._check_base_name(base_name)
        return self._write(document, f"{base_name}{self.extension}")

    def publish_comparison(self, document: str) -> str:
        """Write a comparison document under a fresh timestamped name."""
        return self._write(document, f"compare-{self._next_stamp()}{self.extension}")

    def url_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def _next_stamp(self) -> int:
        # Millisecond clock, bumped when two calls land in the same millisecond
        with self._stamp_lock:
            stamp = max(time.time_ns() // 1_000_000, self._last_stamp + 1)
            self._last_stamp = stamp
        return stamp

    def _write(self, document: str, filename: str) -> str:
        output_path = self.dashboard_dir / filename
        try:
            self.dashboard_dir.mkdir(parents=True, exist_ok=True)
            output_path.write_text(document, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write dashboard %s: %s", output_path, e)
            raise StorageError(f"Could not write dashboard {filename}: {e}") from e

        logger.info("Published %s (%d chars)", output_path, len(document))
        return self.url_for(filename)

    @staticmethod
    def _check_base_name(base_name: str) -> None:
        if (
            not base_name
            or base_name in (".", "..")
            or "/" in base_name
            or "\\" in base_name
            or "\x00" in base_name
        ):
            raise ValueError(f"Invalid dashboard name: {base_name!r}")
