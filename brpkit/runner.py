"""Launch Bevy apps and examples as detached background processes."""

from __future__ import annotations

import os
import subprocess
import time
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Mapping

from .collection_strategy import PROFILE_DEBUG, PROFILE_RELEASE
from .constants import BRP_PORT_ENV_VAR
from .errors import ConfigurationError, ProcessManagementError
from .launch import (
    LaunchCommand,
    build_app_command,
    build_cargo_example_command,
    build_launch_response,
    launch_debug_lines,
    validate_manifest_directory,
)
from .logs import append_to_log_file, create_log_file, open_log_file_for_redirect
from .scanning import workspace_root_from_manifest
from .selection import find_required_app, find_required_example

# Started children are kept so they are not reported as leaked while running.
_children: list[subprocess.Popen] = []

_TIMING_LABELS = (
    ("log_setup", "TIMING - Log setup"),
    ("cmd_setup", "TIMING - Command setup"),
    ("spawn", "TIMING - Spawn process"),
)


def cargo_command_string(example_name: str, profile: str) -> str:
    """The cargo command line shown for running ``example_name``."""
    release = "--release" if profile == PROFILE_RELEASE else ""
    return f"cargo run --example {example_name} {release}".strip()


def complete_launch_debug_lines(
    name: str,
    name_type: str,
    manifest_dir: str | os.PathLike[str],
    binary_or_command: str,
    profile: str,
    duration_ms: int,
    port: int | None = None,
    package_name: str | None = None,
    timings: Mapping[str, int] | None = None,
) -> list[str]:
    """Debug lines for a finished launch, with environment and timings.

    ``timings`` maps ``find``, ``log_setup``, ``cmd_setup`` and ``spawn`` to
    durations in milliseconds; missing keys are left out.
    """
    lines = launch_debug_lines(
        name, name_type, manifest_dir, binary_or_command, profile
    )
    lines.append(f"Launch duration: {duration_ms}ms")
    if port is not None:
        lines.append("Environment variables:")
        lines.append(f"  {BRP_PORT_ENV_VAR}={port}")
    if package_name is not None:
        lines.append(f"Package: {package_name}")
    timings = timings or {}
    if "find" in timings:
        lines.append(f"TIMING - Find {name_type}: {timings['find']}ms")
    lines.extend(
        f"{label}: {timings[key]}ms" for key, label in _TIMING_LABELS if key in timings
    )
    return lines


def _detach() -> None:
    # New process group, same session, so the child outlives this process.
    os.setpgid(0, 0)


def launch_detached_process(
    command: LaunchCommand,
    working_dir: str | os.PathLike[str],
    log_file: BinaryIO,
    process_name: str,
    operation: str,
) -> int:
    """Start ``command`` in its own process group and return its PID.

    Output goes to ``log_file``, which this function takes over and closes.
    """
    env = {**os.environ, "CARGO_MANIFEST_DIR": str(working_dir), **command.env}
    preexec = _detach if hasattr(os, "setpgid") else None
    try:
        with log_file:
            child = subprocess.Popen(
                command.argv,
                cwd=working_dir,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=log_file,
                stderr=log_file,
                preexec_fn=preexec,
            )
    except (OSError, subprocess.SubprocessError) as exc:
        raise ProcessManagementError(
            "Failed to spawn process",
            f"Process: {process_name}",
            f"Operation: {operation}",
            f"Working directory: {working_dir}",
            f"Error: {exc}",
        ) from exc
    _children[:] = [c for c in _children if c.poll() is None]
    _children.append(child)
    return child.pid


def _setup_launch_logging(
    name: str,
    name_type: str,
    profile: str,
    command_or_binary: Path,
    manifest_dir: Path,
    port: int | None,
    extra_log_info: str | None,
) -> tuple[Path, BinaryIO]:
    log_file_path = create_log_file(
        name, name_type, profile, command_or_binary, manifest_dir, port
    )
    if extra_log_info is not None:
        append_to_log_file(log_file_path, f"{extra_log_info}\n")
    return log_file_path, open_log_file_for_redirect(log_file_path)


def _final_response(
    base_response: dict[str, Any], debug_info: list[str], message: str
) -> dict[str, Any]:
    response: dict[str, Any] = {
        "status": "success",
        "message": message,
        "data": base_response,
    }
    if debug_info:
        response["debug_info"] = list(debug_info)
    return response


def _elapsed_ms(start: float, end: float | None = None) -> int:
    if end is None:
        end = time.monotonic()
    return int((end - start) * 1000)


def launch_bevy_app(
    app_name: str,
    profile: str = PROFILE_DEBUG,
    path: str | None = None,
    port: int | None = None,
    search_paths: Iterable[str | os.PathLike[str]] = (),
    debug: bool = False,
) -> dict[str, Any]:
    """Start a built Bevy app binary in the background.

    Raises :class:`ConfigurationError` when the app is not found or not built.
    """
    launch_start = time.monotonic()
    debug_info: list[str] = []

    app = find_required_app(app_name, path, list(search_paths), debug_info)
    binary_path = app.binary_path(profile)
    if not binary_path.exists():
        release = " --release" if profile == PROFILE_RELEASE else ""
        raise ConfigurationError(
            "Missing binary file",
            f"Binary path: {binary_path}",
            f"Please build the app with 'cargo build{release}' first",
        )

    manifest_dir = validate_manifest_directory(app.manifest_path)
    if debug:
        debug_info.extend(
            launch_debug_lines(app_name, "app", manifest_dir, str(binary_path), profile)
        )

    log_file_path, log_file = _setup_launch_logging(
        app_name, "App", profile, binary_path, manifest_dir, port, None
    )
    command = build_app_command(binary_path, port)
    pid = launch_detached_process(command, manifest_dir, log_file, app_name, "launch")
    duration_ms = _elapsed_ms(launch_start)

    if debug:
        debug_info.extend(
            complete_launch_debug_lines(
                app_name, "app", manifest_dir, str(binary_path), profile,
                duration_ms, port,
            )
        )

    base = build_launch_response(
        app_name,
        "app_name",
        pid,
        manifest_dir,
        profile,
        log_file_path,
        {"binary_path": str(binary_path)},
        app.workspace_root,
        duration_ms,
    )
    return _final_response(
        base, debug_info, f"Successfully launched '{app_name}' (PID: {pid})"
    )


def launch_bevy_example(
    example_name: str,
    profile: str = PROFILE_DEBUG,
    path: str | None = None,
    port: int | None = None,
    search_paths: Iterable[str | os.PathLike[str]] = (),
    debug: bool = False,
) -> dict[str, Any]:
    """Start ``cargo run --example`` for a Bevy example in the background.

    Raises :class:`ConfigurationError` when the example is not found.
    """
    launch_start = time.monotonic()
    debug_info: list[str] = []

    find_start = time.monotonic()
    example = find_required_example(example_name, path, list(search_paths), debug_info)
    find_ms = _elapsed_ms(find_start)
    manifest_dir = validate_manifest_directory(example.manifest_path)

    cargo_command = cargo_command_string(example_name, profile)
    if debug:
        debug_info.extend(
            launch_debug_lines(example_name, "example", manifest_dir, cargo_command, profile)
        )

    log_start = time.monotonic()
    log_file_path, log_file = _setup_launch_logging(
        example_name,
        "Example",
        profile,
        Path(cargo_command),
        manifest_dir,
        port,
        f"Package: {example.package_name}",
    )
    log_ms = _elapsed_ms(log_start)

    cmd_start = time.monotonic()
    command = build_cargo_example_command(example_name, profile, port)
    cmd_ms = _elapsed_ms(cmd_start)

    spawn_start = time.monotonic()
    pid = launch_detached_process(
        command, manifest_dir, log_file, example_name, "spawn"
    )
    spawn_ms = _elapsed_ms(spawn_start)
    duration_ms = _elapsed_ms(launch_start)

    if debug:
        debug_info.extend(
            complete_launch_debug_lines(
                example_name,
                "example",
                manifest_dir,
                cargo_command,
                profile,
                duration_ms,
                port,
                example.package_name,
                {
                    "find": find_ms,
                    "log_setup": log_ms,
                    "cmd_setup": cmd_ms,
                    "spawn": spawn_ms,
                },
            )
        )

    base = build_launch_response(
        example_name,
        "example_name",
        pid,
        manifest_dir,
        profile,
        log_file_path,
        {
            "package_name": example.package_name,
            "note": "Cargo will build the example if needed before running",
        },
        workspace_root_from_manifest(example.manifest_path),
        duration_ms,
    )
    return _final_response(
        base, debug_info, f"Successfully launched '{example_name}' (PID: {pid})"
    )