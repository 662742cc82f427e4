"""Find a single app or example by name, disambiguating by path."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Callable, Iterable, Sequence, TypeVar

from .cargo_detector import BinaryInfo, CargoDetector, ExampleInfo
from .errors import ConfigurationError, PathDisambiguationError
from .scanning import compute_relative_path, iter_cargo_project_paths

T = TypeVar("T")

RelativePathGetter = Callable[[T], "str | os.PathLike[str]"]


def _matching_targets(
    name: str,
    search_paths: Iterable[str | os.PathLike[str]],
    find: Callable[[CargoDetector], list[T]],
) -> list[T]:
    search_paths = list(search_paths)
    debug_info: list[str] = []
    found: list[T] = []
    for project_path in iter_cargo_project_paths(search_paths, debug_info):
        try:
            detector = CargoDetector.from_path(project_path)
        except ConfigurationError:
            continue
        for item in find(detector):
            if item.name != name:
                continue
            relative = compute_relative_path(project_path, search_paths, debug_info)
            found.append(dataclasses.replace(item, relative_path=relative))
    return found


def find_all_apps_by_name(
    app_name: str, search_paths: Iterable[str | os.PathLike[str]]
) -> list[BinaryInfo]:
    """Every Bevy app called ``app_name`` across all search paths."""
    return _matching_targets(app_name, search_paths, CargoDetector.find_bevy_apps)


def find_all_examples_by_name(
    example_name: str, search_paths: Iterable[str | os.PathLike[str]]
) -> list[ExampleInfo]:
    """Every Bevy example called ``example_name`` across all search paths."""
    return _matching_targets(
        example_name, search_paths, CargoDetector.find_bevy_examples
    )


def _matches_path(relative_path: str, path: str) -> bool:
    # An exact match first, then a suffix (partial path) match.
    return relative_path == path or relative_path.endswith(path)


def filter_by_path(
    items: Iterable[T],
    path: str | None,
    get_relative_path: RelativePathGetter,
) -> list[T]:
    """Items whose relative path equals or ends with ``path``; all if ``path`` is None."""
    items = list(items)
    if path is None:
        return items
    return [item for item in items if _matches_path(str(get_relative_path(item)), path)]


def path_selection_message(
    item_type: str, item_name: str, param_name: str, paths: Sequence[str]
) -> str:
    """Message asking the caller to choose one of several paths."""
    path_list = "\n".join(f"- {p}" for p in paths)
    return (
        f"Found multiple {item_type} named '{item_name}' at:\n{path_list}\n\n"
        "Please specify which path to use:\n"
        f'{{"{param_name}": "{item_name}", "path": "<one of the paths above>"}}'
    )


def single_result(
    items: Iterable[T],
    item_name: str,
    item_type: str,
    param_name: str,
    get_relative_path: RelativePathGetter,
) -> T:
    """The only item in ``items``.

    Raises :class:`ConfigurationError` when there is none and
    :class:`PathDisambiguationError` when there are several.
    """
    items = list(items)
    if not items:
        raise ConfigurationError(
            f"Bevy {item_type} '{item_name}' not found in search paths",
            f"Item type: {item_type}",
            f"Item name: {item_name}",
        )
    if len(items) == 1:
        return items[0]
    paths = [str(get_relative_path(item)) for item in items]
    non_empty = [p for p in paths if p]
    message = path_selection_message(item_type, item_name, param_name, non_empty)
    raise PathDisambiguationError(message, item_type, item_name, non_empty)


def _relative_path(item: BinaryInfo | ExampleInfo) -> Path:
    return item.relative_path


def _search_lines(kind: str, name: str, path: str | None) -> list[str]:
    lines = [f"Searching for {kind} '{name}'"]
    if path is not None:
        lines.append(f"With path filter: {path}")
    return lines


def find_required_app(
    app_name: str,
    path: str | None,
    search_paths: Iterable[str | os.PathLike[str]],
    debug_info: list[str] | None = None,
) -> BinaryInfo:
    """The one app called ``app_name``, narrowed by ``path`` if given."""
    if debug_info is None:
        debug_info = []
    debug_info.extend(_search_lines("app", app_name, path))
    apps = find_all_apps_by_name(app_name, search_paths)
    debug_info.append(f"Found {len(apps)} matching app(s)")
    filtered = filter_by_path(apps, path, _relative_path)
    return single_result(filtered, app_name, "app", "app_name", _relative_path)


def find_required_example(
    example_name: str,
    path: str | None,
    search_paths: Iterable[str | os.PathLike[str]],
    debug_info: list[str] | None = None,
) -> ExampleInfo:
    """The one example called ``example_name``, narrowed by ``path`` if given."""
    if debug_info is None:
        debug_info = []
    debug_info.extend(_search_lines("example", example_name, path))
    examples = find_all_examples_by_name(example_name, search_paths)
    debug_info.append(f"Found {len(examples)} matching example(s)")
    filtered = filter_by_path(examples, path, _relative_path)
    return single_result(
        filtered, example_name, "example", "example_name", _relative_path
    )