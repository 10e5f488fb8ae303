"""Import a tile directory into a SQLite table in large transactions."""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

from .config import ImportSettings
from .errors import StorageWriteError
from .storage import TileStore
from .walker import walk_files
from .worker_pool import BatchWorkerPool


@dataclass(frozen=True)
class ImportResult:
    """Counters of an import run.

    ``files_seen`` counts every file handed to a batch, tiles or not;
    ``tiles_written`` counts inserted rows.
    """

    files_seen: int
    tiles_written: int
    batches: int
    elapsed: float

    @property
    def skipped(self) -> int:
        return self.files_seen - self.tiles_written


class TileImporter:
    """Walk the source tree, read tiles in parallel and write them batch by batch.

    The importer alternates between accumulating paths and flushing them:
    a full batch is read by the worker pool, inserted inside one
    transaction and committed before walking continues. Only this object
    talks to the tile store.
    """

    def __init__(
        self,
        settings: ImportSettings,
        store: Optional[TileStore] = None,
        on_flush: Optional[Callable[[ImportResult], None]] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the importer.

        Args:
            settings: Import settings; validated here if not already
            store: Tile store to write to (default: built from settings)
            on_flush: Called with the running totals after every commit
            console: Console for step and per-batch output
        """
        if not settings.validated:
            settings.validate()
        self.settings = settings
        self.store = store or TileStore(settings.destination, settings.table)
        self.on_flush = on_flush
        self.console = console if console is not None else Console()

        self.batch: List[Path] = []
        self.files_seen = 0
        self.tiles_written = 0
        self.batches = 0
        self._started: Optional[float] = None

    def _totals(self) -> ImportResult:
        elapsed = time.perf_counter() - self._started if self._started else 0.0
        return ImportResult(
            files_seen=self.files_seen,
            tiles_written=self.tiles_written,
            batches=self.batches,
            elapsed=elapsed,
        )

    def run(self) -> ImportResult:
        """Run the whole import: schema, batches, final flush, index.

        Raises:
            StorageInitError: Destination could not be recreated
            FileReadError: A tile could not be read; the batch is not written
            StorageWriteError: A batch or the index could not be written
        """
        self._started = time.perf_counter()
        self.store.create()

        self.console.print("[cyan]adding ...[/cyan]")

        try:
            with BatchWorkerPool(self.settings.workers, self.settings.extension) as pool:
                for path in walk_files(self.settings.source):
                    self.batch.append(path)
                    if len(self.batch) >= self.settings.batch_size:
                        self.flush(pool)

                if self.batch:
                    self.flush(pool)

            self.console.print("[cyan]indexing ...[/cyan]")
            self.store.create_index()
        finally:
            self.store.close()

        return self._totals()

    def flush(self, pool: BatchWorkerPool) -> None:
        """Read the current batch and commit it as one transaction."""
        result = pool.process(tuple(self.batch))

        self.store.begin()
        try:
            written = self.store.insert_batch(result.records)
            self.store.commit()
        except StorageWriteError:
            try:
                self.store.rollback()
            except StorageWriteError as rollback_error:
                self.console.print(
                    f"[yellow]Warning: {escape(str(rollback_error))}[/yellow]"
                )
            raise

        self.files_seen += result.files
        self.tiles_written += written
        self.batches += 1

        if self.settings.verbose:
            self.console.print(f"count: {self.files_seen}")
        if self.on_flush is not None:
            self.on_flush(self._totals())

        self.batch.clear()


def import_tiles(settings: ImportSettings, **kwargs) -> ImportResult:
    """Validate the settings and run one import."""
    return TileImporter(settings.validate(), **kwargs).run()
