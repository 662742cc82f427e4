from pathlib import Path

import pytest

from brpkit.cargo_detector import (
    BinaryInfo,
    CargoDetector,
    ExampleInfo,
    directory_uses_brp_plugins,
    file_uses_brp_plugins,
    load_metadata,
)
from brpkit.errors import ConfigurationError


def _package(root, name, deps=(), targets=(("bin", None),)):
    manifest = root / name / "Cargo.toml"
    return {
        "id": f"{name}-id",
        "name": name,
        "manifest_path": str(manifest),
        "dependencies": [dict(d) for d in deps],
        "targets": [{"name": tname or name, "kind": [kind]} for kind, tname in targets],
    }


def _metadata(root, packages, members=None):
    return {
        "workspace_root": str(root),
        "packages": packages,
        "workspace_members": [p["id"] for p in packages] if members is None else members,
    }


def test_binary_path_layout(tmp_path):
    info = BinaryInfo("game", tmp_path, tmp_path / "Cargo.toml")
    assert info.binary_path("release") == tmp_path / "target" / "release" / "game"
    assert info.relative_path == Path()


def test_file_uses_brp_plugins(tmp_path):
    direct = tmp_path / "a.rs"
    direct.write_text("use bevy::remote::RemotePlugin;\n")
    grouped = tmp_path / "b.rs"
    grouped.write_text("use bevy_brp_extras::{BrpExtrasPlugin, Other};\n")
    plain = tmp_path / "c.rs"
    plain.write_text("fn main() { let RemotePlugin = 1; }\n")
    assert file_uses_brp_plugins(direct)
    assert file_uses_brp_plugins(grouped)
    assert not file_uses_brp_plugins(plain)
    assert not file_uses_brp_plugins(tmp_path / "missing.rs")


def test_directory_uses_brp_plugins_recurses(tmp_path):
    nested = tmp_path / "src" / "deep"
    nested.mkdir(parents=True)
    (tmp_path / "src" / "main.rs").write_text("fn main() {}\n")
    assert not directory_uses_brp_plugins(tmp_path / "src")
    (nested / "plugin.rs").write_text("use bevy::remote::RemotePlugin;\n")
    assert directory_uses_brp_plugins(tmp_path / "src")
    assert not directory_uses_brp_plugins(tmp_path / "nothing")


def test_find_bevy_apps_filters_packages(tmp_path):
    bevy_dep = [{"name": "bevy", "features": []}]
    packages = [
        _package(tmp_path, "game", bevy_dep),
        _package(tmp_path, "tool"),
        _package(tmp_path, "bevy_brp_mcp", bevy_dep),
        _package(tmp_path, "outside", bevy_dep),
    ]
    members = ["game-id", "tool-id", "bevy_brp_mcp-id"]
    detector = CargoDetector(_metadata(tmp_path, packages, members))
    apps = detector.find_bevy_apps()
    assert [a.name for a in apps] == ["game"]
    assert apps[0].workspace_root == tmp_path
    assert apps[0].manifest_path == tmp_path / "game" / "Cargo.toml"


def test_find_bevy_examples_includes_bevy_itself(tmp_path):
    packages = [
        _package(tmp_path, "bevy", targets=(("example", "breakout"), ("lib", "bevy"))),
        _package(
            tmp_path,
            "game",
            [{"name": "bevy", "features": []}],
            targets=(("bin", None), ("example", "demo")),
        ),
    ]
    detector = CargoDetector(_metadata(tmp_path, packages))
    examples = detector.find_bevy_examples()
    assert examples == [
        ExampleInfo("breakout", "bevy", tmp_path / "bevy" / "Cargo.toml"),
        ExampleInfo("demo", "game", tmp_path / "game" / "Cargo.toml"),
    ]


def test_find_brp_enabled_apps(tmp_path):
    for name in ("remote", "nofeature", "unused"):
        (tmp_path / name / "src").mkdir(parents=True)
    (tmp_path / "remote" / "src" / "main.rs").write_text(
        "use bevy::remote::{RemotePlugin, http::RemoteHttpPlugin};\n"
    )
    (tmp_path / "nofeature" / "src" / "main.rs").write_text(
        "use bevy::remote::RemotePlugin;\n"
    )
    (tmp_path / "unused" / "src" / "main.rs").write_text("fn main() {}\n")
    packages = [
        _package(tmp_path, "remote", [{"name": "bevy", "features": []}]),
        _package(tmp_path, "nofeature", [{"name": "bevy", "features": ["bevy_ui"]}]),
        _package(tmp_path, "unused", [{"name": "bevy", "features": ["bevy_remote"]}]),
    ]
    detector = CargoDetector(_metadata(tmp_path, packages))
    assert [a.name for a in detector.find_brp_enabled_apps()] == ["remote"]


def test_load_metadata_failure_raises(tmp_path):
    with pytest.raises(ConfigurationError) as info:
        load_metadata(tmp_path / "does-not-exist")
    assert info.value.message == "Failed to execute cargo metadata"
    with pytest.raises(ConfigurationError):
        CargoDetector.from_path(tmp_path / "does-not-exist")