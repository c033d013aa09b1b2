"""Aggregate a folder of recipe manifests into the flat `recipes.json` index."""

from __future__ import annotations

import contextlib
import json
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tqdm import tqdm

from .config import MANIFESTS_DIR, IndexConfig
from .errors import ManifestParseError
from .logger import get_logger
from .manifest_fields import build_entry

logger = get_logger(__name__)

RE_RECIPE_FILE = re.compile(r"recipe-(\d+)\.json$", re.IGNORECASE | re.ASCII)
RE_LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")

# Sort key for files without a recipe number (largest integer exactly representable as a double).
UNNUMBERED_SORT_KEY = 2**53 - 1

# Permissions of a newly created index (temporary files start as 0600).
INDEX_FILE_MODE = 0o644


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a successful index build."""

    output_path: Path
    count: int


def is_json_file(name: str) -> bool:
    return name.lower().endswith(".json")


def natural_recipe_key(filename: str) -> int:
    """`recipe-001.json` -> 1; unnumbered files sort after every numbered one."""
    match = RE_RECIPE_FILE.search(filename)
    return int(match.group(1)) if match else UNNUMBERED_SORT_KEY


def list_manifest_files(manifests_dir: Path) -> list[str]:
    """Return the manifest file names in index order.

    The sort is stable, so unnumbered files keep their directory listing order.
    """
    names = [name for name in os.listdir(manifests_dir) if is_json_file(name) and (manifests_dir / name).is_file()]
    return sorted(names, key=natural_recipe_key)


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def load_manifest(path: Path) -> dict[str, Any]:
    """Read and parse one manifest file, which must hold a strict JSON object.

    `NaN` and `Infinity` are not JSON and are rejected like any other syntax error.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        manifest = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ManifestParseError(path, str(exc)) from exc

    if not isinstance(manifest, dict):
        raise ManifestParseError(path, f"expected a JSON object, got {type(manifest).__name__}")
    return manifest


def build_index(config: IndexConfig) -> list[dict[str, Any]]:
    """Build the ordered list of index entries without writing anything."""
    files = list_manifest_files(config.manifests_dir)
    logger.debug("Found %d manifest files in %s", len(files), config.manifests_dir)

    entries: list[dict[str, Any]] = []
    for filename in tqdm(files, desc="Indexing recipes", unit="manifest", disable=None):
        manifest = load_manifest(config.manifests_dir / filename)
        entry = build_entry(manifest, filename, config.pages_base, MANIFESTS_DIR)
        logger.debug("%s -> id=%s thumbnail=%s data=%s", filename, entry["id"], entry["thumbnail"], entry["data"])
        entries.append(entry)

    return entries


def _escape_surrogate(match: re.Match[str]) -> str:
    return f"\\u{ord(match.group(0)):04x}"


def serialize_index(entries: list[dict[str, Any]]) -> str:
    """Pretty-print the index with 2-space indentation and a trailing newline.

    Text stays unescaped except unpaired surrogates, which only survive as `\\uXXXX` escapes.
    """
    text = json.dumps(entries, indent=2, ensure_ascii=False, allow_nan=False)
    return RE_LONE_SURROGATE.sub(_escape_surrogate, text) + "\n"


def write_index(entries: list[dict[str, Any]], output_path: Path) -> None:
    """Replace the index file with the serialized entries.

    The data goes to a sibling temporary file that is then renamed over the
    index, so a failed write leaves the previous index as it was.
    """
    payload = serialize_index(entries).encode("utf-8")
    mode = output_path.stat().st_mode & 0o777 if output_path.exists() else INDEX_FILE_MODE

    tmp = tempfile.NamedTemporaryFile(
        dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp", delete=False
    )
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(payload)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, output_path)
    except Exception:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise
    logger.debug("Wrote %d entries to %s", len(entries), output_path)


def run(config: IndexConfig) -> BuildResult:
    """Build the index and write it; any failure aborts before the output is touched."""
    entries = build_index(config)
    write_index(entries, config.output_path)
    return BuildResult(output_path=config.output_path, count=len(entries))


__all__ = [
    "BuildResult",
    "UNNUMBERED_SORT_KEY",
    "build_index",
    "is_json_file",
    "list_manifest_files",
    "load_manifest",
    "natural_recipe_key",
    "run",
    "serialize_index",
    "write_index",
]
