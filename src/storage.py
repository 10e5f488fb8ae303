"""SQLite tile store: schema, batched inserts and the post-load index."""

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .config import is_valid_table_name
from .errors import ConfigurationError, StorageInitError, StorageWriteError
from .tile_reader import TileRecord

# Bulk-load tuning; durability of committed batches is left at SQLite defaults
BULK_LOAD_PRAGMAS = (
    "PRAGMA temp_store=MEMORY;",
    "PRAGMA cache_size=-50000;",
)


def index_name(table: str) -> str:
    return f"{table}_zxy"


class TileStore:
    """Single-connection gateway to the destination database.

    Only the coordinating thread may call into a TileStore. The connection
    runs in autocommit mode; ``begin``/``commit`` wrap one batch each.
    """

    def __init__(self, destination: Path, table: str):
        """Initialize the tile store.

        Args:
            destination: Path of the SQLite file to (re)create
            table: Name of the tile table, already validated as an identifier
        """
        self.destination = Path(destination)
        self.table = table
        self.conn: Optional[sqlite3.Connection] = None
        self._insert_sql = f"INSERT INTO {table} (z, x, y, data) VALUES (?, ?, ?, ?)"

    def __enter__(self) -> "TileStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    @property
    def in_transaction(self) -> bool:
        return self.conn is not None and self.conn.in_transaction

    def create(self) -> None:
        """Delete any existing destination and create an empty, unindexed table.

        Raises:
            StorageInitError: If the old file cannot be removed or the schema
                cannot be created
        """
        if self.destination.exists():
            try:
                self.destination.unlink()
            except OSError as e:
                raise StorageInitError(
                    f"Failed to remove file {self.destination}: {e}"
                ) from e

        try:
            self.destination.parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(
                str(self.destination), isolation_level=None, check_same_thread=True
            )
            cursor = self.conn.cursor()
            for pragma in BULK_LOAD_PRAGMAS:
                cursor.execute(pragma)
            cursor.execute(f"DROP TABLE IF EXISTS {self.table}")
            cursor.execute(
                f"""
                CREATE TABLE {self.table} (
                    z INTEGER NOT NULL,
                    x INTEGER NOT NULL,
                    y INTEGER NOT NULL,
                    data BLOB
                )
            """
            )
        except (sqlite3.Error, OSError) as e:
            self.close()
            raise StorageInitError(
                f"Failed to create table {self.table} in {self.destination}: {e}"
            ) from e

    def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise StorageWriteError("Tile store is not open")
        return self.conn

    def begin(self) -> None:
        try:
            self._connection().execute("BEGIN")
        except sqlite3.Error as e:
            raise StorageWriteError(f"Failed to begin transaction: {e}") from e

    def insert_batch(self, records: Iterable[TileRecord]) -> int:
        """Insert all records with one prepared statement.

        Returns:
            Number of rows inserted
        """
        rows = [record.as_row() for record in records]
        if not rows:
            return 0
        try:
            self._connection().executemany(self._insert_sql, rows)
        except sqlite3.Error as e:
            raise StorageWriteError(
                f"Failed to insert {len(rows)} tiles into {self.table}: {e}"
            ) from e
        return len(rows)

    def commit(self) -> None:
        try:
            self._connection().execute("COMMIT")
        except sqlite3.Error as e:
            raise StorageWriteError(f"Failed to commit batch: {e}") from e

    def rollback(self) -> None:
        """Abandon the open transaction, if there is one."""
        if self.in_transaction:
            try:
                self.conn.execute("ROLLBACK")
            except sqlite3.Error as e:
                raise StorageWriteError(f"Failed to roll back batch: {e}") from e

    def create_index(self) -> None:
        """Build the composite (z, x, y) index once all batches are committed."""
        if self.in_transaction:
            raise StorageWriteError("Cannot build index while a batch is uncommitted")
        try:
            self._connection().execute(
                f"CREATE INDEX {index_name(self.table)} ON {self.table} (z, x, y)"
            )
        except sqlite3.Error as e:
            raise StorageWriteError(f"Failed to create index on {self.table}: {e}") from e

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None


@dataclass(frozen=True)
class StoreSummary:
    """What a finished (or aborted) tile database contains."""

    table: str
    rows: int
    zoom_range: Optional[Tuple[int, int]]
    empty_tiles: int
    indexed: bool


def summarize(database: Path, table: str) -> StoreSummary:
    """Read back basic facts about a tile table.

    Raises:
        StorageInitError: If the database cannot be opened or has no such table
    """
    if not is_valid_table_name(table):
        raise ConfigurationError(f"Invalid table name: {table!r}")

    database = Path(database)
    if not database.is_file():
        raise StorageInitError(f"Database not found: {database}")

    try:
        conn = sqlite3.connect(f"{database.resolve().as_uri()}?mode=ro", uri=True)
    except sqlite3.Error as e:
        raise StorageInitError(f"Failed to open {database}: {e}") from e

    try:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,)
        )
        if cursor.fetchone() is None:
            raise StorageInitError(f"Table {table} not found in {database}")

        cursor.execute(f"SELECT COUNT(*), MIN(z), MAX(z) FROM {table}")
        rows, min_zoom, max_zoom = cursor.fetchone()

        cursor.execute(f"SELECT COUNT(*) FROM {table} WHERE data IS NULL")
        empty_tiles = cursor.fetchone()[0]

        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='index' AND name=?",
            (index_name(table),),
        )
        indexed = cursor.fetchone() is not None
    except sqlite3.Error as e:
        raise StorageInitError(f"Failed to read {table} from {database}: {e}") from e
    finally:
        conn.close()

    zoom_range = (min_zoom, max_zoom) if rows else None
    return StoreSummary(
        table=table,
        rows=rows,
        zoom_range=zoom_range,
        empty_tiles=empty_tiles,
        indexed=indexed,
    )
