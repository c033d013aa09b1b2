"""Field extraction from already-parsed IIIF Presentation 3 recipe manifests.

Functions here operate on data only; file IO and logging belong to the
index builder. Manifests are loosely structured, so every accessor tolerates
missing keys and unexpected types and returns an empty value instead.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

RE_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
RE_JSON_SUFFIX = re.compile(r"\.json\Z", re.IGNORECASE)


def is_present(value: Any) -> bool:
    """Return True for values a manifest field is considered set with.

    Containers count as present even when empty; null, false, zero and the
    empty string do not.
    """
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def strip_json_suffix(name: str) -> str:
    """Drop one trailing `.json` (any case) from a file or path segment."""
    return RE_JSON_SUFFIX.sub("", name, count=1)


def ensure_absolute(pages_base: str, maybe_url: str) -> str:
    """Make a relative URL absolute against the pages base, keep http(s) URLs as they are."""
    if not maybe_url:
        return ""
    if RE_ABSOLUTE_URL.match(maybe_url):
        return maybe_url
    base = pages_base[:-1] if pages_base.endswith("/") else pages_base
    path = maybe_url[1:] if maybe_url.startswith("/") else maybe_url
    return f"{base}/{path}"


def infer_id_from_manifest_id(manifest_id: Any) -> str:
    """Return the last non-empty path segment of a manifest URI without `.json`.

    `.../manifests/recipe-001.json` -> `recipe-001`.
    """
    if not isinstance(manifest_id, str) or not manifest_id:
        return ""
    segments = [segment for segment in manifest_id.split("/") if segment]
    if not segments:
        return ""
    return strip_json_suffix(segments[-1])


def recipe_id(manifest: Mapping[str, Any], filename: str) -> str:
    """Derive the entry id from the manifest `id`, falling back to the source filename."""
    return infer_id_from_manifest_id(manifest.get("id")) or strip_json_suffix(filename)


def infer_data_url(pages_base: str, entry_id: str) -> str:
    """`recipe-001` -> `<pages_base>/data/recipe-001.json`."""
    if not entry_id:
        return ""
    return f"{pages_base}/data/{entry_id}.json"


def pick_lang(lang_map: Any, lang: str = "it") -> str:
    """Pick a display string from a IIIF language map.

    The lookup order is `lang`, then `en`, then `it`, whichever language was
    requested, so an `en` request may come back with Italian text.
    """
    if not is_present(lang_map):
        return ""
    if isinstance(lang_map, str):
        return lang_map
    if not isinstance(lang_map, Mapping):
        return ""

    value: Any = None
    for key in (lang, "en", "it"):
        candidate = lang_map.get(key)
        if is_present(candidate):
            value = candidate
            break

    if isinstance(value, list):
        value = value[0] if value else ""
    return value if isinstance(value, str) else ""


def _first_item(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


class RecipeManifestParser:
    """Extract the recipe index fields from IIIF manifest JSON.

    Each extraction runs an ordered chain of small strategies, each returning
    a value or None; the first non-empty result wins.
    """

    @staticmethod
    def extract_label(manifest: Mapping[str, Any]) -> Any:
        """Return the manifest `label` language map verbatim, or `{}`."""
        label = manifest.get("label")
        return label if is_present(label) else {}

    @staticmethod
    def extract_summary(manifest: Mapping[str, Any]) -> Any:
        """Return the manifest `summary` language map verbatim, or `{}`."""
        summary = manifest.get("summary")
        return summary if is_present(summary) else {}

    @staticmethod
    def extract_thumbnail(manifest: Mapping[str, Any]) -> str:
        """Return the raw thumbnail reference, possibly relative, or an empty string."""
        return (
            RecipeManifestParser._thumb_from_manifest_thumbnail(manifest)
            or RecipeManifestParser._thumb_from_painting_body(manifest)
            or ""
        )

    @staticmethod
    def _thumb_from_manifest_thumbnail(manifest: Mapping[str, Any]) -> str | None:
        """Extract thumbnail from the first entry of the top-level `thumbnail` list."""
        first = _first_item(manifest.get("thumbnail"))
        if isinstance(first, str):
            return first or None
        if isinstance(first, Mapping):
            thumb_id = first.get("id")
            return thumb_id if isinstance(thumb_id, str) and thumb_id else None
        return None

    @staticmethod
    def _thumb_from_painting_body(manifest: Mapping[str, Any]) -> str | None:
        """Extract the painting body id of the first canvas (canvas -> page -> annotation)."""
        node: Any = manifest
        for _ in range(3):
            if not isinstance(node, Mapping):
                return None
            node = _first_item(node.get("items"))

        if not isinstance(node, Mapping):
            return None
        body = node.get("body")
        if not isinstance(body, Mapping):
            return None
        body_id = body.get("id")
        return body_id if isinstance(body_id, str) and body_id else None

    @staticmethod
    def extract_data_url(manifest: Mapping[str, Any], pages_base: str, entry_id: str) -> str:
        """Return the absolute URL of the recipe data file.

        A `/data/*.json` link found in the metadata wins over the URL built
        from the pages base and the entry id.
        """
        data_url = RecipeManifestParser._data_url_from_metadata(manifest) or infer_data_url(pages_base, entry_id)
        return ensure_absolute(pages_base, data_url)

    @staticmethod
    def _data_url_from_metadata(manifest: Mapping[str, Any]) -> str | None:
        """Scan metadata values (entry order, language order, array order) for a data link."""
        metadata = manifest.get("metadata")
        if not isinstance(metadata, list):
            return None

        for entry in metadata:
            if not isinstance(entry, Mapping):
                continue
            value = entry.get("value")
            if not isinstance(value, Mapping):
                continue
            for strings in value.values():
                if not isinstance(strings, list):
                    continue
                for s in strings:
                    if isinstance(s, str) and "/data/" in s and s.endswith(".json"):
                        return s
        return None


def build_entry(manifest: Mapping[str, Any], filename: str, pages_base: str, manifests_dir: str) -> dict[str, Any]:
    """Assemble one recipe index entry from a parsed manifest and its file name."""
    entry_id = recipe_id(manifest, filename)
    label = RecipeManifestParser.extract_label(manifest)

    return {
        "id": entry_id,
        "label": label,
        "summary": RecipeManifestParser.extract_summary(manifest),
        "manifest": f"{pages_base}/{manifests_dir}/{filename}",
        "data": RecipeManifestParser.extract_data_url(manifest, pages_base, entry_id),
        "thumbnail": ensure_absolute(pages_base, RecipeManifestParser.extract_thumbnail(manifest)),
        "title_it": pick_lang(label, "it"),
        "title_en": pick_lang(label, "en"),
    }


__all__ = [
    "RecipeManifestParser",
    "build_entry",
    "ensure_absolute",
    "infer_data_url",
    "infer_id_from_manifest_id",
    "is_present",
    "pick_lang",
    "recipe_id",
    "strip_json_suffix",
]
