"""List apps or examples found across search paths."""

from __future__ import annotations

import os
from typing import Any, Iterable

from .cargo_detector import CargoDetector
from .collection_strategy import CollectionStrategy
from .errors import ConfigurationError
from .scanning import compute_relative_path, iter_cargo_project_paths


def collect_all_items(
    search_paths: Iterable[str | os.PathLike[str]], strategy: CollectionStrategy
) -> list[dict[str, Any]]:
    """Serialised items of every project found, without duplicates."""
    search_paths = list(search_paths)
    debug_info: list[str] = []
    seen: set[str] = set()
    items: list[dict[str, Any]] = []
    for project_path in iter_cargo_project_paths(search_paths, debug_info):
        try:
            detector = CargoDetector.from_path(project_path)
        except ConfigurationError:
            continue
        for item in strategy.collect_items(detector):
            key = strategy.unique_key(item)
            if key in seen:
                continue
            seen.add(key)
            relative_path = compute_relative_path(project_path, search_paths, debug_info)
            items.append(strategy.serialize_item(item, str(relative_path)))
    return items


def list_items(
    search_paths: Iterable[str | os.PathLike[str]], strategy: CollectionStrategy
) -> dict[str, Any]:
    """A success response listing the items that ``strategy`` collects."""
    items = collect_all_items(search_paths, strategy)
    return {
        "status": "success",
        "message": f"Found {len(items)} {strategy.type_name}",
        "data": {strategy.data_field_name: items},
    }