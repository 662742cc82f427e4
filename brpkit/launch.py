"""Shared pieces for launching Bevy apps and examples."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from .constants import BRP_PORT_ENV_VAR
from .errors import ConfigurationError


@dataclass(frozen=True)
class LaunchCommand:
    """A program to start, its arguments and extra environment variables."""

    program: str
    args: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


def validate_manifest_directory(manifest_path: str | os.PathLike[str]) -> Path:
    """Return the directory that holds ``manifest_path``."""
    path = Path(manifest_path)
    parent = path.parent
    if parent == path:
        raise ConfigurationError(
            "Invalid manifest path",
            "No parent directory found",
            f"Path: {path}",
        )
    return parent


def brp_env(port: int | None) -> dict[str, str]:
    """Environment variables that tell the app which BRP port to use."""
    return {} if port is None else {BRP_PORT_ENV_VAR: str(port)}


def build_cargo_example_command(
    example_name: str, profile: str, port: int | None
) -> LaunchCommand:
    """``cargo run --example`` for ``example_name``."""
    args = ["run", "--example", example_name]
    if profile == "release":
        args.append("--release")
    return LaunchCommand("cargo", tuple(args), brp_env(port))


def build_app_command(
    binary_path: str | os.PathLike[str], port: int | None
) -> LaunchCommand:
    """A command that runs a built app binary."""
    return LaunchCommand(str(binary_path), (), brp_env(port))


def launch_debug_lines(
    name: str,
    name_type: str,
    manifest_dir: str | os.PathLike[str],
    binary_or_command: str,
    profile: str,
) -> list[str]:
    """Debug lines describing a launch of an ``app`` or ``example``."""
    label = "Binary path" if name_type == "app" else "Command"
    return [
        f"Launching {name_type} {name} from {manifest_dir}",
        f"Working directory: {manifest_dir}",
        f"CARGO_MANIFEST_DIR: {manifest_dir}",
        f"Profile: {profile}",
        f"{label}: {binary_or_command}",
    ]


def build_launch_response(
    name: str,
    name_field: str,
    pid: int,
    manifest_dir: str | os.PathLike[str],
    profile: str,
    log_file_path: str | os.PathLike[str],
    additional_data: Mapping[str, Any] | None,
    workspace_root: str | os.PathLike[str] | None,
    duration_ms: int,
) -> dict[str, Any]:
    """Success response for a background launch."""
    data: dict[str, Any] = {
        name_field: name,
        "pid": pid,
        "working_directory": str(manifest_dir),
        "profile": profile,
        "log_file": str(log_file_path),
        "status": "running_in_background",
        "launch_duration_ms": duration_ms,
        "launch_timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if additional_data:
        data.update(additional_data)
    if workspace_root is not None:
        data["workspace_root"] = str(workspace_root)
    return {
        "status": "success",
        "message": f"Successfully launched '{name}' (PID: {pid})",
        "data": data,
    }