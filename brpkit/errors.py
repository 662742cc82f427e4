"""Exception hierarchy for brpkit."""

from __future__ import annotations


class BrpKitError(Exception):
    """Base class for every error raised by brpkit.

    ``details`` holds extra lines of context that explain the failure.
    """

    def __init__(self, message: str, *details: str) -> None:
        super().__init__(message)
        self.message = message
        self.details: list[str] = list(details)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return "\n".join([self.message, *(f"  {line}" for line in self.details)])


class ConfigurationError(BrpKitError):
    """A project, manifest or binary is missing or misconfigured."""


class PathDisambiguationError(BrpKitError):
    """Several items share a name and a path is needed to choose one."""

    def __init__(
        self,
        message: str,
        item_type: str,
        item_name: str,
        available_paths: list[str],
    ) -> None:
        super().__init__(message)
        self.item_type = item_type
        self.item_name = item_name
        self.available_paths = list(available_paths)


class LogOperationError(BrpKitError):
    """A launch log file could not be created, opened or written."""


class ProcessManagementError(BrpKitError):
    """A process could not be started or stopped."""


class FormatDiscoveryError(BrpKitError):
    """Type format information could not be interpreted."""