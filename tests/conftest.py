"""Test bootstrap.

Ensures `src/` is importable and gives every test a fresh console handler.
"""

from __future__ import annotations

import contextlib
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _reset_logging():
    from recipe_index_core import logger as logger_mod

    for handler in list(logger_mod.app_logger.handlers):
        logger_mod.app_logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Drop build env overrides and rebind logging to the captured stderr."""
    monkeypatch.delenv("PAGES_BASE", raising=False)
    monkeypatch.delenv("RECIPES_LOG_LEVEL", raising=False)
    _reset_logging()
    yield
    _reset_logging()


@pytest.fixture
def manifests_dir(tmp_path):
    """Empty `manifests/` folder inside a temporary project directory."""
    path = tmp_path / "manifests"
    path.mkdir()
    return path


@pytest.fixture
def write_manifest(manifests_dir):
    """Write a manifest dict (or raw text) to `manifests/<name>`."""

    def _write(name: str, manifest=None, raw: str | None = None) -> Path:
        path = manifests_dir / name
        text = raw if raw is not None else json.dumps(manifest if manifest is not None else {}, ensure_ascii=False)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
