from dataclasses import dataclass
from typing import Optional

from .exceptions import ResolutionError
from .models import ArtifactVersion, InstallOptions, LoaderArtifact, YarnVersion


@dataclass(frozen=True)
class ResolvedVersion:
    version_id: str
    inherits_from: str
    minecraft_version: str
    yarn: Optional[str] = None


def yarn_version_string(yarn_version: Optional[YarnVersion]) -> Optional[str]:
    if yarn_version is None:
        return None
    if isinstance(yarn_version, ArtifactVersion):
        return yarn_version.version
    return str(yarn_version)


def resolve_version(loader: LoaderArtifact, options: InstallOptions) -> ResolvedVersion:
    """Work out the version id and the base version it inherits from.

    Without a yarn selector the base Minecraft version comes from the
    intermediary artifact. A yarn ``ArtifactVersion`` supplies its own game
    version; a raw yarn string supplies none, so callers must then pass
    ``version_id`` explicitly, and ``inherits_from`` stays empty unless given.
    """
    yarn = yarn_version_string(options.yarn_version)
    if yarn is None:
        minecraft_version = loader.intermediary.version
    elif isinstance(options.yarn_version, ArtifactVersion):
        minecraft_version = options.yarn_version.game_version or ""
    else:
        minecraft_version = ""

    inherits_from = options.inherits_from or minecraft_version

    version_id = options.version_id
    if not version_id:
        if not minecraft_version:
            raise ResolutionError(
                f"Cannot derive a version id for yarn {yarn}; pass version_id explicitly."
            )
        tag = "loader" if yarn is not None else "fabric"
        version_id = f"{minecraft_version}-{tag}{loader.loader.version}"

    return ResolvedVersion(
        version_id=version_id,
        inherits_from=inherits_from,
        minecraft_version=minecraft_version,
        yarn=yarn,
    )
