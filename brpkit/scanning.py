"""Discover cargo projects below a set of search paths."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping

from .cargo_detector import load_metadata
from .errors import ConfigurationError


class ProjectType(Enum):
    """How a cargo project was discovered."""

    WORKSPACE = "workspace"
    STANDALONE = "standalone"


@dataclass(frozen=True)
class DiscoveredProject:
    """A directory holding a ``Cargo.toml``, with how it was found.

    ``workspace_root`` is set for workspace members only.
    """

    path: Path
    project_type: ProjectType
    workspace_root: Path | None = None


def safe_canonicalize(
    path: str | os.PathLike[str], debug_info: list[str] | None = None
) -> Path:
    """Resolve ``path`` strictly, or return it unchanged if that fails."""
    original = Path(path)
    try:
        return original.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        if debug_info is not None:
            debug_info.append(f"Failed to canonicalize path '{original}': {exc}")
        return original


def should_skip_directory(directory: str | os.PathLike[str]) -> bool:
    """Whether ``directory`` is hidden or a ``target`` build directory."""
    name = Path(directory).name
    return bool(name) and (name.startswith(".") or name == "target")


def _discover_workspace_members(
    metadata: Mapping[str, Any],
    workspace_root: Path,
    discovered_projects: dict[Path, DiscoveredProject],
    debug_info: list[str],
) -> None:
    members = set(metadata.get("workspace_members", ()))
    for package in metadata.get("packages", ()):
        if package.get("id") not in members:
            continue
        manifest_path = safe_canonicalize(package["manifest_path"], debug_info)
        member_dir = manifest_path.parent
        if member_dir.exists():
            member_canonical = safe_canonicalize(member_dir, debug_info)
            discovered_projects[member_canonical] = DiscoveredProject(
                member_canonical, ProjectType.WORKSPACE, workspace_root
            )
        else:
            debug_info.append(
                f"Skipping workspace member '{package.get('name')}': "
                f"directory does not exist at '{member_dir}'"
            )


def process_cargo_toml(
    directory: str | os.PathLike[str],
    discovered_projects: dict[Path, DiscoveredProject],
    debug_info: list[str],
) -> None:
    """Record the project(s) that the ``Cargo.toml`` in ``directory`` describes."""
    directory = Path(directory)
    try:
        metadata = load_metadata(directory)
    except ConfigurationError:
        canonical_dir = safe_canonicalize(directory, debug_info)
        discovered_projects.setdefault(
            canonical_dir, DiscoveredProject(canonical_dir, ProjectType.STANDALONE)
        )
        return

    workspace_root = Path(metadata["workspace_root"])
    canonical_dir = safe_canonicalize(directory, debug_info)
    canonical_workspace = safe_canonicalize(workspace_root, debug_info)

    if canonical_dir != canonical_workspace:
        discovered_projects[canonical_dir] = DiscoveredProject(
            canonical_dir, ProjectType.WORKSPACE, workspace_root
        )
    elif len(metadata.get("workspace_members", ())) > 1:
        _discover_workspace_members(
            metadata, workspace_root, discovered_projects, debug_info
        )
    else:
        discovered_projects[canonical_dir] = DiscoveredProject(
            canonical_dir, ProjectType.STANDALONE
        )


def _shallow_scan(
    directory: Path,
    visited: set[Path],
    discovered_projects: dict[Path, DiscoveredProject],
    debug_info: list[str],
    check_skip: bool = False,
) -> None:
    """Scan ``directory`` and its immediate subdirectories for projects."""
    canonical = safe_canonicalize(directory, debug_info)
    if canonical in visited:
        return
    visited.add(canonical)

    if check_skip and should_skip_directory(directory):
        return

    if (directory / "Cargo.toml").exists():
        process_cargo_toml(directory, discovered_projects, debug_info)

    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return
    for entry in entries:
        if not entry.is_dir() or should_skip_directory(entry):
            continue
        if not (entry / "Cargo.toml").exists():
            continue
        sub_canonical = safe_canonicalize(entry, debug_info)
        if sub_canonical not in visited:
            visited.add(sub_canonical)
            process_cargo_toml(entry, discovered_projects, debug_info)


def iter_cargo_project_paths(
    search_paths: Iterable[str | os.PathLike[str]], debug_info: list[str]
) -> list[Path]:
    """Project paths found in ``search_paths`` and their immediate children.

    Workspace members are reported by their workspace root, which takes
    precedence over the member directory itself.
    """
    search_paths = list(search_paths)
    visited: set[Path] = set()
    discovered: dict[Path, DiscoveredProject] = {}
    for root in search_paths:
        _shallow_scan(safe_canonicalize(root, debug_info), visited, discovered, debug_info)

    workspace_members = {
        project.path
        for project in discovered.values()
        if project.project_type is ProjectType.WORKSPACE
    }
    final_paths: set[Path] = set()
    for project in discovered.values():
        if project.project_type is ProjectType.WORKSPACE:
            final_paths.add(Path(project.workspace_root))
        elif project.path not in workspace_members:
            final_paths.add(project.path)
    return sorted(final_paths)


def extract_workspace_name(workspace_root: str | os.PathLike[str]) -> str | None:
    """The last component of ``workspace_root``, or ``None`` if it has none."""
    return Path(workspace_root).name or None


def compute_relative_path(
    path: str | os.PathLike[str],
    search_paths: Iterable[str | os.PathLike[str]],
    debug_info: list[str],
) -> Path:
    """``path`` relative to the first search path that contains it.

    A path equal to a search path gives that directory's name, so it can be
    passed back as a path filter. A path under no search path is returned as is.
    """
    original = Path(path)
    for search_path in search_paths:
        search_canonical = safe_canonicalize(search_path, debug_info)
        path_canonical = safe_canonicalize(original, debug_info)
        try:
            relative = path_canonical.relative_to(search_canonical)
        except ValueError:
            continue
        if not relative.parts:
            name = path_canonical.name
            return Path(name) if name else Path(".")
        return relative
    return original


def workspace_root_from_manifest(manifest_path: str | os.PathLike[str]) -> Path | None:
    """The nearest ancestor whose ``Cargo.toml`` declares ``[workspace]``.

    Falls back to the manifest's own directory.
    """
    manifest = Path(manifest_path)
    start = manifest.parent
    if start == manifest:
        return None
    current = start
    while True:
        cargo_toml = current / "Cargo.toml"
        if cargo_toml.exists():
            try:
                if "[workspace]" in cargo_toml.read_text(encoding="utf-8"):
                    return current
            except (OSError, UnicodeDecodeError):
                pass
        parent = current.parent
        if parent == current:
            break
        current = parent
    return start