"""Exceptions raised while building the recipe index."""

from __future__ import annotations

from pathlib import Path


class RecipeIndexError(Exception):
    """Base class for index build failures."""


class ManifestParseError(RecipeIndexError, ValueError):
    """Raised when a manifest file does not contain valid JSON."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid JSON in manifest {path}: {reason}")
