"""Launch log files kept in the system temporary directory."""

from __future__ import annotations

import os
import tempfile
import time
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from .errors import LogOperationError

_HEADER_RULE = "============================================"


def _log_file_path(name: str, port: int | None) -> Path:
    timestamp = time.time_ns() // 1_000_000
    port_part = f"port{port}_" if port is not None else ""
    return Path(tempfile.gettempdir()) / f"bevy_brp_mcp_{name}_{port_part}{timestamp}.log"


def create_log_file(
    name: str,
    launch_type: str,
    profile: str,
    binary_path: str | os.PathLike[str],
    working_dir: str | os.PathLike[str],
    port: int | None = None,
) -> Path:
    """Create a uniquely named launch log with a header and return its path."""
    log_file_path = _log_file_path(name, port)
    header_lines = [
        "=== Bevy BRP MCP Launch Log ===",
        f"Started at: {datetime.now().isoformat()}",
        f"{launch_type}: {name}",
        f"Profile: {profile}",
        f"Binary: {binary_path}",
        f"Working directory: {working_dir}",
        f"{_HEADER_RULE}\n",
    ]
    try:
        with log_file_path.open("w", encoding="utf-8") as log_file:
            log_file.write("".join(f"{line}\n" for line in header_lines))
            log_file.flush()
            os.fsync(log_file.fileno())
    except OSError as exc:
        raise LogOperationError(
            "Failed to create log file",
            f"Path: {log_file_path}",
            f"Error: {exc}",
        ) from exc
    return log_file_path


def _open_existing_for_append(log_file_path: Path) -> BinaryIO:
    fd = os.open(log_file_path, os.O_WRONLY | os.O_APPEND)
    return os.fdopen(fd, "ab")


def open_log_file_for_redirect(log_file_path: str | os.PathLike[str]) -> BinaryIO:
    """Open an existing log file for appending process output."""
    path = Path(log_file_path)
    try:
        return _open_existing_for_append(path)
    except OSError as exc:
        raise LogOperationError(
            "Failed to open log file for redirect",
            f"Path: {path}",
            f"Error: {exc}",
        ) from exc


def append_to_log_file(log_file_path: str | os.PathLike[str], content: str) -> None:
    """Append ``content`` to an existing log file and sync it to disk."""
    path = Path(log_file_path)
    try:
        log_file = _open_existing_for_append(path)
    except OSError as exc:
        raise LogOperationError(
            "Failed to open log file for appending",
            f"Path: {path}",
            f"Error: {exc}",
        ) from exc
    try:
        with log_file:
            log_file.write(content.encode("utf-8"))
            log_file.flush()
            os.fsync(log_file.fileno())
    except OSError as exc:
        raise LogOperationError("Failed to write to log file", f"Error: {exc}") from exc