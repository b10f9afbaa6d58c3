from pathlib import Path
from typing import Union


class FabricInstallerError(Exception):
    """Base exception for fabricinstaller."""


class FetchError(FabricInstallerError):
    """Raised when Fabric metadata cannot be fetched or decoded."""


class ResolutionError(FabricInstallerError):
    """Raised when a version id or base version cannot be resolved."""


class MainClassUnresolvedError(ResolutionError):
    """Raised in strict mode when no main class exists for the requested side."""


class FileSystemError(FabricInstallerError):
    """Raised when the version descriptor cannot be written to disk."""

    def __init__(self, path: Union[str, Path], operation: str, reason: str = "") -> None:
        self.path = Path(path)
        self.operation = operation
        message = f"Failed to {operation} {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
