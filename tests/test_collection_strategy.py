import pytest

from brpkit.cargo_detector import BinaryInfo, CargoDetector, ExampleInfo
from brpkit.collection_strategy import (
    BevyAppsStrategy,
    BevyExamplesStrategy,
    BrpAppsStrategy,
    CollectionStrategy,
    builds_json,
)


@pytest.fixture
def app(tmp_path):
    built = tmp_path / "target" / "debug"
    built.mkdir(parents=True)
    (built / "game").write_text("")
    return BinaryInfo("game", tmp_path, tmp_path / "game" / "Cargo.toml")


def test_builds_json_reports_each_profile(app, tmp_path):
    builds = builds_json(app)
    assert set(builds) == {"debug", "release"}
    assert builds["debug"] == {
        "path": str(tmp_path / "target" / "debug" / "game"),
        "built": True,
    }
    assert builds["release"]["built"] is False
    assert builds["release"]["path"] == str(app.binary_path("release"))


def test_bevy_apps_strategy(app):
    strategy = BevyAppsStrategy()
    assert strategy.type_name == "Bevy apps"
    assert strategy.data_field_name == "apps"
    assert strategy.unique_key(app) == f"{app.workspace_root}::game"
    data = strategy.serialize_item(app, "ws/game")
    assert data["name"] == "game"
    assert data["relative_path"] == "ws/game"
    assert data["manifest_path"] == str(app.manifest_path)
    assert data["builds"] == builds_json(app)


def test_brp_apps_strategy_has_flag_and_no_relative_path(app):
    strategy = BrpAppsStrategy()
    assert strategy.type_name == "BRP-enabled Bevy apps"
    data = strategy.serialize_item(app, "ignored")
    assert data["brp_enabled"] is True
    assert "relative_path" not in data
    assert data["workspace_root"] == str(app.workspace_root)


def test_examples_strategy(tmp_path):
    example = ExampleInfo("demo", "game", tmp_path / "Cargo.toml")
    strategy = BevyExamplesStrategy()
    assert strategy.data_field_name == "examples"
    assert strategy.unique_key(example) == "game::demo"
    assert strategy.serialize_item(example, "game") == {
        "name": "demo",
        "package_name": "game",
        "manifest_path": str(tmp_path / "Cargo.toml"),
        "relative_path": "game",
    }


def test_collect_items_uses_detector(tmp_path):
    package = {
        "id": "game-id",
        "name": "game",
        "manifest_path": str(tmp_path / "Cargo.toml"),
        "dependencies": [{"name": "bevy", "features": []}],
        "targets": [{"name": "game", "kind": ["bin"]}, {"name": "demo", "kind": ["example"]}],
    }
    detector = CargoDetector(
        {"workspace_root": str(tmp_path), "packages": [package], "workspace_members": ["game-id"]}
    )
    assert [a.name for a in BevyAppsStrategy().collect_items(detector)] == ["game"]
    assert [e.name for e in BevyExamplesStrategy().collect_items(detector)] == ["demo"]
    assert BrpAppsStrategy().collect_items(detector) == []


def test_strategy_base_is_abstract():
    with pytest.raises(TypeError):
        CollectionStrategy()