"""Find Bevy binaries and examples in a cargo project or workspace."""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

from .errors import ConfigurationError

_SELF_PACKAGE = "bevy_brp_mcp"


@dataclass
class BinaryInfo:
    """A binary target of a workspace member."""

    name: str
    workspace_root: Path
    manifest_path: Path
    relative_path: Path = field(default_factory=Path)

    def binary_path(self, profile: str) -> Path:
        """Path of the built binary for ``profile``."""
        return Path(self.workspace_root) / "target" / profile / self.name


@dataclass
class ExampleInfo:
    """An example target of a workspace member."""

    name: str
    package_name: str
    manifest_path: Path
    relative_path: Path = field(default_factory=Path)


def load_metadata(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Run ``cargo metadata`` in ``path`` and return the parsed result."""
    try:
        completed = subprocess.run(
            ["cargo", "metadata", "--format-version", "1"],
            cwd=path,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ConfigurationError(
            "Failed to execute cargo metadata", f"Path: {path}", f"Error: {exc}"
        ) from exc
    try:
        return json.loads(completed.stdout)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            "Failed to parse cargo metadata", f"Path: {path}", f"Error: {exc}"
        ) from exc


def file_uses_brp_plugins(file_path: str | os.PathLike[str]) -> bool:
    """Whether a source file imports ``RemotePlugin`` or ``BrpExtrasPlugin``."""
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False
    has_remote = "use bevy::remote::RemotePlugin" in content or (
        "use bevy::remote::{" in content and "RemotePlugin" in content
    )
    has_extras = "use bevy_brp_extras::BrpExtrasPlugin" in content or (
        "use bevy_brp_extras::{" in content and "BrpExtrasPlugin" in content
    )
    return has_remote or has_extras


def directory_uses_brp_plugins(directory: str | os.PathLike[str]) -> bool:
    """Whether any ``.rs`` file below ``directory`` uses a BRP plugin."""
    try:
        return any(
            file_uses_brp_plugins(path)
            for path in Path(directory).rglob("*.rs")
            if path.is_file()
        )
    except OSError:
        return False


def _has_kind(target: Mapping[str, Any], kind: str) -> bool:
    return kind in target.get("kind", ())


def _bevy_dependencies(package: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    return (dep for dep in package.get("dependencies", ()) if dep.get("name") == "bevy")


def _depends_on_bevy(package: Mapping[str, Any]) -> bool:
    return any(True for _ in _bevy_dependencies(package))


def _has_bevy_remote_feature(package: Mapping[str, Any]) -> bool:
    # A bevy dependency without explicit features is assumed to inherit them.
    return any(
        not dep.get("features") or "bevy_remote" in dep["features"]
        for dep in _bevy_dependencies(package)
    )


def _uses_brp_plugins(package: Mapping[str, Any]) -> bool:
    src_dir = Path(package["manifest_path"]).parent / "src"
    return src_dir.exists() and directory_uses_brp_plugins(src_dir)


def _is_bevy_app(package: Mapping[str, Any]) -> bool:
    name = package.get("name")
    return name != _SELF_PACKAGE and (name == "bevy" or _depends_on_bevy(package))


def _is_brp_app(package: Mapping[str, Any]) -> bool:
    return (
        package.get("name") != _SELF_PACKAGE
        and _has_bevy_remote_feature(package)
        and _uses_brp_plugins(package)
    )


class CargoDetector:
    """Queries the targets described by cargo metadata."""

    def __init__(self, metadata: Mapping[str, Any]) -> None:
        self.metadata = metadata

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> CargoDetector:
        """Build a detector from ``cargo metadata`` run in ``path``."""
        return cls(load_metadata(path))

    @property
    def workspace_root(self) -> Path:
        return Path(self.metadata["workspace_root"])

    def _members(
        self, predicate: Callable[[Mapping[str, Any]], bool]
    ) -> Iterator[Mapping[str, Any]]:
        members = set(self.metadata.get("workspace_members", ()))
        return (
            package
            for package in self.metadata.get("packages", ())
            if package.get("id") in members and predicate(package)
        )

    def _binaries(self, package: Mapping[str, Any]) -> Iterator[BinaryInfo]:
        return (
            BinaryInfo(
                name=target["name"],
                workspace_root=self.workspace_root,
                manifest_path=Path(package["manifest_path"]),
            )
            for target in package.get("targets", ())
            if _has_kind(target, "bin")
        )

    @staticmethod
    def _examples(package: Mapping[str, Any]) -> Iterator[ExampleInfo]:
        return (
            ExampleInfo(
                name=target["name"],
                package_name=package["name"],
                manifest_path=Path(package["manifest_path"]),
            )
            for target in package.get("targets", ())
            if _has_kind(target, "example")
        )

    def find_bevy_apps(self) -> list[BinaryInfo]:
        """All binaries of members that depend on Bevy."""
        return [b for p in self._members(_is_bevy_app) for b in self._binaries(p)]

    def find_bevy_examples(self) -> list[ExampleInfo]:
        """All examples of members that depend on Bevy, or of Bevy itself."""
        return [e for p in self._members(_is_bevy_app) for e in self._examples(p)]

    def find_brp_enabled_apps(self) -> list[BinaryInfo]:
        """All binaries of members that enable and use the remote protocol."""
        return [b for p in self._members(_is_brp_app) for b in self._binaries(p)]