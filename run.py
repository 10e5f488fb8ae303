#!/usr/bin/env python3
"""Runner script for tiles2db."""

import sys

from src.main import app

if __name__ == "__main__":
    valid_commands = [
        "load",
        "inspect",
        "info",
    ]
    top_level_flags = ["--help", "--install-completion", "--show-completion"]

    # Default to load so `run.py -s tiles -d tiles.db -t tiles` works
    if (
        len(sys.argv) > 1
        and sys.argv[1] not in valid_commands
        and sys.argv[1] not in top_level_flags
    ):
        sys.argv.insert(1, "load")

    app()
