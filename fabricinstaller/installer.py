from pathlib import Path
from typing import Callable, List, Optional, Union

from .exceptions import MainClassUnresolvedError
from .libraries import build_libraries
from .location import MinecraftLocation
from .main_class import select_main_class
from .models import InstallOptions, InstallResult, LoaderArtifact, VersionDescriptor
from .resolver import resolve_version
from .utils import warn
from .writer import write_version_json

VersionPathFn = Callable[[str], Path]


def _version_json_path(location: Union[MinecraftLocation, VersionPathFn], version_id: str) -> Path:
    if isinstance(location, MinecraftLocation):
        return location.get_version_json(version_id)
    return Path(location(version_id))


def install_fabric(
    loader: LoaderArtifact,
    location: Union[MinecraftLocation, VersionPathFn],
    options: Optional[InstallOptions] = None,
) -> InstallResult:
    """Generate the Fabric version JSON for ``loader`` and write it to disk."""
    options = options or InstallOptions()
    warnings: List[str] = []

    resolved = resolve_version(loader, options)
    if not resolved.inherits_from:
        message = f"No base Minecraft version for {resolved.version_id}"
        warn(f"{message}; writing an empty inheritsFrom.")
        warnings.append(message)
    libraries = build_libraries(loader, resolved.yarn, options.side)
    main_class = select_main_class(loader.launcher_meta.main_class, options.side)
    if not main_class:
        message = f"No {options.side.value} main class in launcher metadata for {resolved.version_id}"
        if options.strict_main_class:
            raise MainClassUnresolvedError(message)
        warn(f"{message}; writing an empty mainClass.")
        warnings.append(message)

    descriptor = VersionDescriptor(
        id=resolved.version_id,
        inherits_from=resolved.inherits_from,
        main_class=main_class,
        libraries=libraries,
    )
    path = write_version_json(
        _version_json_path(location, resolved.version_id),
        descriptor,
        options.libraries_format,
    )
    return InstallResult(
        version_id=resolved.version_id,
        path=path,
        descriptor=descriptor,
        warnings=warnings,
    )
