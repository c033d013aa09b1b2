#!/usr/bin/env python
"""Build recipes.json from manifests/*.json in the current directory.

Usage:
  PAGES_BASE=https://example.github.io/family-recipes python scripts/build_recipes_index.py
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from recipe_index_cli.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
