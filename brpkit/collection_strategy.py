"""Strategies that collect and serialise apps or examples for listings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from .cargo_detector import BinaryInfo, CargoDetector, ExampleInfo

PROFILE_DEBUG = "debug"
PROFILE_RELEASE = "release"


def builds_json(item: BinaryInfo) -> dict[str, dict[str, Any]]:
    """Binary path and build state of ``item`` for each profile."""
    builds: dict[str, dict[str, Any]] = {}
    for profile in (PROFILE_DEBUG, PROFILE_RELEASE):
        binary_path = item.binary_path(profile)
        builds[profile] = {"path": str(binary_path), "built": binary_path.exists()}
    return builds


class CollectionStrategy(ABC):
    """How one kind of listing collects, deduplicates and serialises items."""

    type_name: ClassVar[str]
    data_field_name: ClassVar[str]

    @abstractmethod
    def collect_items(self, detector: CargoDetector) -> list[Any]:
        """Collect the items from ``detector``."""

    @abstractmethod
    def unique_key(self, item: Any) -> str:
        """A key that identifies ``item`` for deduplication."""

    @abstractmethod
    def serialize_item(self, item: Any, relative_path: str) -> dict[str, Any]:
        """A JSON-ready description of ``item``."""


class BevyAppsStrategy(CollectionStrategy):
    """Bevy apps with build information."""

    type_name = "Bevy apps"
    data_field_name = "apps"

    def collect_items(self, detector: CargoDetector) -> list[BinaryInfo]:
        return detector.find_bevy_apps()

    def unique_key(self, item: BinaryInfo) -> str:
        return f"{item.workspace_root}::{item.name}"

    def serialize_item(self, item: BinaryInfo, relative_path: str) -> dict[str, Any]:
        return {
            "name": item.name,
            "workspace_root": str(item.workspace_root),
            "manifest_path": str(item.manifest_path),
            # Usable as the path parameter of a launch to pick between duplicates.
            "relative_path": relative_path,
            "builds": builds_json(item),
        }


class BrpAppsStrategy(CollectionStrategy):
    """Bevy apps that enable the remote protocol."""

    type_name = "BRP-enabled Bevy apps"
    data_field_name = "apps"

    def collect_items(self, detector: CargoDetector) -> list[BinaryInfo]:
        return detector.find_brp_enabled_apps()

    def unique_key(self, item: BinaryInfo) -> str:
        return f"{item.workspace_root}::{item.name}"

    def serialize_item(self, item: BinaryInfo, relative_path: str) -> dict[str, Any]:
        return {
            "name": item.name,
            "workspace_root": str(item.workspace_root),
            "manifest_path": str(item.manifest_path),
            "builds": builds_json(item),
            "brp_enabled": True,
        }


class BevyExamplesStrategy(CollectionStrategy):
    """Bevy examples, without build information."""

    type_name = "Bevy examples"
    data_field_name = "examples"

    def collect_items(self, detector: CargoDetector) -> list[ExampleInfo]:
        return detector.find_bevy_examples()

    def unique_key(self, item: ExampleInfo) -> str:
        return f"{item.package_name}::{item.name}"

    def serialize_item(self, item: ExampleInfo, relative_path: str) -> dict[str, Any]:
        return {
            "name": item.name,
            "package_name": item.package_name,
            "manifest_path": str(item.manifest_path),
            "relative_path": relative_path,
        }