from typing import Any, Dict, Optional, Sequence

from packaging import version

from .exceptions import ResolutionError
from .models import ArtifactVersion


def parse_minecraft_version(ver: str) -> version.Version:
    try:
        return version.parse(ver)
    except version.InvalidVersion:
        return version.parse("0.0.0")


def latest_stable_game_version(games: Sequence[Dict[str, Any]]) -> str:
    for game in games:
        if game.get("stable") and game.get("version"):
            return str(game["version"])
    raise ResolutionError("Fabric returned no stable game versions.")


def pick_loader_version(
    loaders: Sequence[ArtifactVersion],
    requested: Optional[str] = None,
    stable_only: bool = True,
) -> ArtifactVersion:
    if requested:
        for loader in loaders:
            if loader.version == requested:
                return loader
        raise ResolutionError(f"Fabric loader version {requested} not found.")

    candidates = [loader for loader in loaders if loader.stable] if stable_only else list(loaders)
    if not candidates:
        candidates = list(loaders)
    if not candidates:
        raise ResolutionError("No Fabric loader versions available.")
    return max(candidates, key=lambda loader: parse_minecraft_version(loader.version))


def pick_yarn_version(
    yarns: Sequence[ArtifactVersion],
    minecraft: Optional[str] = None,
    stable_only: bool = False,
) -> ArtifactVersion:
    candidates = [y for y in yarns if minecraft is None or y.game_version == minecraft]
    if stable_only:
        candidates = [y for y in candidates if y.stable]
    if not candidates:
        target = f" for Minecraft {minecraft}" if minecraft else ""
        raise ResolutionError(f"No yarn versions found{target}.")
    return max(candidates, key=lambda y: y.build if y.build is not None else -1)
