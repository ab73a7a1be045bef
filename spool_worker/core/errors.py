"""Custom exceptions for the spool worker."""

from pathlib import Path


class SpoolWorkerError(Exception):
    """Base exception for all spool worker errors."""

    pass


class StartupError(SpoolWorkerError):
    """Raised when the worker cannot start. Carries the process exit code."""

    exit_code: int = 1


class MissingDirectoryArgumentError(StartupError):
    """Raised when no directory to watch was given."""

    exit_code = 1

    def __init__(self) -> None:
        super().__init__(
            "No folder specified. Folder must be specified for the worker to operate."
        )


class NotADirectoryPathError(StartupError):
    """Raised when the watch path exists but is not a directory."""

    exit_code = 2

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"{self.path} isn't a folder.")


class DirectoryNotFoundError(StartupError):
    """Raised when the watch path does not exist."""

    exit_code = 3

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f'Specified folder doesn\'t exist: "{self.path}".')


class WorkOrderParseError(SpoolWorkerError, ValueError):
    """Raised when a claimed work order does not hold a usable duration."""

    def __init__(self, filename: str, raw: str, reason: str) -> None:
        self.filename = filename
        self.raw = raw
        super().__init__(f"Invalid duration in {filename}: {raw[:40]!r} ({reason})")


class ConfigurationError(StartupError):
    """Raised when configuration is invalid."""

    exit_code = 4
