"""Build configuration for the recipe index.

The core functions never read the environment or the working directory on
their own: they receive an `IndexConfig`. `IndexConfig.from_env` is the thin
adapter used by the command line entry point.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .logger import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

MANIFESTS_DIR = "manifests"
OUT_FILE = "recipes.json"

# Public URL of the published site; override with PAGES_BASE on forks or custom domains.
DEFAULT_PAGES_BASE = "https://BeatriceVaienti.github.io/family-recipes"
PAGES_BASE_ENV = "PAGES_BASE"


@dataclass(frozen=True)
class IndexConfig:
    """Where to read manifests, where to write the index and how to build links."""

    manifests_dir: Path
    output_path: Path
    pages_base: str = DEFAULT_PAGES_BASE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, cwd: Path | None = None) -> IndexConfig:
        """Build the configuration from environment variables and the working directory.

        Unset or empty variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        base_dir = cwd or Path.cwd()
        return cls(
            manifests_dir=base_dir / MANIFESTS_DIR,
            output_path=base_dir / OUT_FILE,
            pages_base=env.get(PAGES_BASE_ENV) or DEFAULT_PAGES_BASE,
            log_level=(env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper(),
        )
