from datetime import datetime
from pathlib import Path

import pytest

from brpkit.errors import ConfigurationError
from brpkit.launch import (
    LaunchCommand,
    brp_env,
    build_app_command,
    build_cargo_example_command,
    build_launch_response,
    launch_debug_lines,
    validate_manifest_directory,
)


def test_validate_manifest_directory(tmp_path):
    assert validate_manifest_directory(tmp_path / "Cargo.toml") == tmp_path


def test_validate_manifest_directory_root_raises():
    with pytest.raises(ConfigurationError) as info:
        validate_manifest_directory(Path("/"))
    assert info.value.message == "Invalid manifest path"


def test_brp_env():
    assert brp_env(None) == {}
    assert brp_env(15702) == {"BRP_PORT": "15702"}


def test_cargo_example_command_release_with_port():
    command = build_cargo_example_command("demo", "release", 15702)
    assert command.argv == ["cargo", "run", "--example", "demo", "--release"]
    assert command.env == {"BRP_PORT": "15702"}


def test_cargo_example_command_debug_without_port():
    command = build_cargo_example_command("demo", "debug", None)
    assert command == LaunchCommand("cargo", ("run", "--example", "demo"), {})


def test_app_command(tmp_path):
    binary = tmp_path / "target" / "debug" / "game"
    command = build_app_command(binary, None)
    assert command.argv == [str(binary)]
    assert command.env == {}


def test_launch_debug_lines_for_app_and_example():
    app_lines = launch_debug_lines("game", "app", "/w", "/w/target/debug/game", "debug")
    assert app_lines[0] == "Launching app game from /w"
    assert app_lines[-1] == "Binary path: /w/target/debug/game"
    assert "CARGO_MANIFEST_DIR: /w" in app_lines
    example_lines = launch_debug_lines("demo", "example", "/w", "cargo run", "release")
    assert example_lines[-1] == "Command: cargo run"
    assert "Profile: release" in example_lines


def test_build_launch_response(tmp_path):
    response = build_launch_response(
        "game",
        "app_name",
        4242,
        tmp_path,
        "debug",
        tmp_path / "log.log",
        {"binary_path": "bin/game"},
        tmp_path,
        12,
    )
    assert response["message"] == "Successfully launched 'game' (PID: 4242)"
    data = response["data"]
    assert data["app_name"] == "game"
    assert data["pid"] == 4242
    assert data["status"] == "running_in_background"
    assert data["launch_duration_ms"] == 12
    assert data["binary_path"] == "bin/game"
    assert data["log_file"] == str(tmp_path / "log.log")
    assert data["workspace_root"] == str(tmp_path)
    assert datetime.fromisoformat(data["launch_timestamp"]).tzinfo is not None


def test_build_launch_response_without_extras(tmp_path):
    response = build_launch_response(
        "demo", "example_name", 7, tmp_path, "release", "x.log", None, None, 0
    )
    data = response["data"]
    assert data["example_name"] == "demo"
    assert "workspace_root" not in data
    assert data["working_directory"] == str(tmp_path)