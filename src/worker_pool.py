"""Fixed-size thread pool that reads one batch of tile files at a time."""

import concurrent.futures
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .config import DEFAULT_EXTENSION, default_workers
from .tile_reader import TileRecord, read_tile


@dataclass(frozen=True)
class BatchResult:
    """Outcome of reading one batch.

    ``records`` keeps the submission order of the files that were tiles;
    ``files`` is the number of paths handed in, tiles or not.
    """

    records: List[TileRecord]
    files: int

    @property
    def skipped(self) -> int:
        return self.files - len(self.records)


class BatchWorkerPool:
    """Parse and load every file of a batch in parallel.

    The pool never touches the database; it only returns records to the
    caller. Use it as a context manager so worker threads are joined.
    """

    def __init__(self, workers: Optional[int] = None, extension: str = DEFAULT_EXTENSION):
        """Initialize the worker pool.

        Args:
            workers: Number of worker threads (default: available processing units)
            extension: Recognized tile extension passed to every read
        """
        self.workers = workers or default_workers()
        self.extension = extension
        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None

    def __enter__(self) -> "BatchWorkerPool":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()

    def start(self) -> None:
        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="tile-reader"
            )

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def process(self, paths: Sequence[Path]) -> BatchResult:
        """Read a batch and block until every file has been handled.

        Args:
            paths: Snapshot of the batch; it is not modified

        Returns:
            BatchResult with records in submission order, non-tiles dropped

        Raises:
            FileReadError: The first failure in submission order, raised only
                after all tasks of the batch have finished
        """
        if self._executor is None:
            raise RuntimeError("BatchWorkerPool is not started")

        futures = [
            self._executor.submit(read_tile, path, self.extension) for path in paths
        ]
        concurrent.futures.wait(futures)

        records: List[TileRecord] = []
        for future in futures:
            record = future.result()
            if record is not None:
                records.append(record)

        return BatchResult(records=records, files=len(futures))
