from .exceptions import FabricInstallerError, FetchError, FileSystemError, ResolutionError
from .fabric_api import ArtifactClient
from .installer import install_fabric
from .location import MinecraftLocation
from .models import (
    ArtifactVersion,
    InstallOptions,
    InstallResult,
    LibrariesFormat,
    LoaderArtifact,
    Side,
    VersionDescriptor,
)

__all__ = [
    "ArtifactClient",
    "ArtifactVersion",
    "FabricInstallerError",
    "FetchError",
    "FileSystemError",
    "InstallOptions",
    "InstallResult",
    "LibrariesFormat",
    "LoaderArtifact",
    "MinecraftLocation",
    "ResolutionError",
    "Side",
    "VersionDescriptor",
    "install_fabric",
]
