#!/usr/bin/env python3
"""Example script demonstrating how to use tiles2db programmatically."""

import sys
import tempfile
from pathlib import Path

# Add the repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import ImportSettings
from src.importer import import_tiles
from src.storage import summarize


def build_sample_tree(root: Path) -> Path:
    """Write a tiny z/x/y tree with one empty tile and one stray file."""
    print("🗺  Building a sample tile tree...")

    tiles = root / "tiles"
    for z in range(3):
        for x in range(2 ** z):
            for y in range(2 ** z):
                tile = tiles / str(z) / str(x) / f"{y}.png"
                tile.parent.mkdir(parents=True, exist_ok=True)
                tile.write_bytes(f"tile {z}/{x}/{y}".encode())

    (tiles / "2" / "0" / "0.png").write_bytes(b"")
    (tiles / "README.txt").write_text("not a tile")

    return tiles


def example_import(source: Path, database: Path):
    """Example: Import a tile tree with small batches."""
    print("\n📥 Example: Importing tiles...")

    settings = ImportSettings(
        source=source,
        destination=database,
        table="tiles",
        workers=2,
        batch_size=8,
        verbose=True,
    )
    result = import_tiles(settings)

    print(f"Files seen: {result.files_seen}")
    print(f"Tiles written: {result.tiles_written}")
    print(f"Batches: {result.batches}")
    return result


def example_inspect(database: Path):
    """Example: Read back what was written."""
    print("\n🔍 Example: Inspecting the database...")

    summary = summarize(database, "tiles")
    print(f"Rows: {summary.rows}")
    print(f"Zoom levels: {summary.zoom_range}")
    print(f"Empty tiles: {summary.empty_tiles}")
    print(f"Indexed: {summary.indexed}")


def main():
    """Run all examples."""
    print("tiles2db - Examples")
    print("=" * 40)

    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        source = build_sample_tree(root)
        database = root / "tiles.db"

        example_import(source, database)
        example_inspect(database)

    print("\n✓ Examples completed!")


if __name__ == "__main__":
    main()
