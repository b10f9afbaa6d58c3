import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import FetchError

DESCRIPTOR_TIMESTAMP = "2023-05-13T15:58:54.493Z"


class Side(str, Enum):
    CLIENT = "client"
    SERVER = "server"


class LibrariesFormat(str, Enum):
    ARRAY = "array"  # nested JSON array
    STRING = "string"  # list encoded as an embedded JSON string


def _required(data: Mapping[str, Any], key: str, record: str) -> Any:
    if key not in data or data[key] is None:
        raise FetchError(f"Missing '{key}' in {record} metadata")
    return data[key]


def _int(value: Any, key: str, record: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise FetchError(f"Invalid '{key}' in {record} metadata: {value!r}") from e


def _require_mapping(data: Any, record: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise FetchError(f"Expected an object for {record} metadata, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class ArtifactVersion:
    maven: str
    version: str
    stable: bool = False
    game_version: Optional[str] = None
    separator: Optional[str] = None
    build: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ArtifactVersion":
        data = _require_mapping(data, "artifact")
        build = data.get("build")
        return cls(
            maven=str(_required(data, "maven", "artifact")),
            version=str(_required(data, "version", "artifact")),
            stable=bool(data.get("stable", False)),
            game_version=data.get("gameVersion"),
            separator=data.get("separator"),
            build=_int(build, "build", "artifact") if build is not None else None,
        )


YarnVersion = Union[str, ArtifactVersion]


@dataclass
class FabricArtifacts:
    mappings: List[ArtifactVersion]
    loader: List[ArtifactVersion]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FabricArtifacts":
        data = _require_mapping(data, "build index")
        return cls(
            mappings=[ArtifactVersion.from_dict(item) for item in data.get("mappings", [])],
            loader=[ArtifactVersion.from_dict(item) for item in data.get("loader", [])],
        )


@dataclass(frozen=True)
class LibraryReference:
    name: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LibraryReference":
        data = _require_mapping(data, "library")
        return cls(name=data.get("name"), url=data.get("url"))

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"name": self.name, "url": self.url}


@dataclass
class LauncherMetaLibraries:
    client: List[LibraryReference] = field(default_factory=list)
    common: List[LibraryReference] = field(default_factory=list)
    server: List[LibraryReference] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LauncherMetaLibraries":
        data = _require_mapping(data, "launcherMeta.libraries")
        return cls(
            client=[LibraryReference.from_dict(item) for item in data.get("client") or []],
            common=[LibraryReference.from_dict(item) for item in data.get("common") or []],
            server=[LibraryReference.from_dict(item) for item in data.get("server") or []],
        )

    def for_side(self, side: Side) -> List[LibraryReference]:
        if side == Side.SERVER:
            return self.server
        return self.client


@dataclass(frozen=True)
class ScalarMainClass:
    """A single entry point shared by every side."""

    name: str


@dataclass(frozen=True)
class SidedMainClass:
    """Entry points keyed by side name ("client", "server")."""

    classes: Dict[str, str] = field(default_factory=dict)


MainClassSpec = Union[ScalarMainClass, SidedMainClass]


def decode_main_class(value: Any) -> MainClassSpec:
    if isinstance(value, str):
        return ScalarMainClass(value)
    if value is None:
        return SidedMainClass()
    if isinstance(value, Mapping):
        return SidedMainClass({str(k): v for k, v in value.items() if isinstance(v, str)})
    raise FetchError(f"Unsupported mainClass value in launcherMeta: {value!r}")


@dataclass
class LauncherMeta:
    version: int
    libraries: LauncherMetaLibraries
    main_class: MainClassSpec

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LauncherMeta":
        data = _require_mapping(data, "launcherMeta")
        return cls(
            version=_int(data.get("version", 0), "version", "launcherMeta"),
            libraries=LauncherMetaLibraries.from_dict(data.get("libraries") or {}),
            main_class=decode_main_class(data.get("mainClass")),
        )


@dataclass
class LoaderArtifact:
    loader: ArtifactVersion
    intermediary: ArtifactVersion
    launcher_meta: LauncherMeta

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoaderArtifact":
        data = _require_mapping(data, "loader bundle")
        return cls(
            loader=ArtifactVersion.from_dict(_required(data, "loader", "loader bundle")),
            intermediary=ArtifactVersion.from_dict(_required(data, "intermediary", "loader bundle")),
            launcher_meta=LauncherMeta.from_dict(_required(data, "launcherMeta", "loader bundle")),
        )


@dataclass
class InstallOptions:
    # Base version to inherit from when installing on top of another version.
    inherits_from: Optional[str] = None
    # Overrides the id of the newly installed version.
    version_id: Optional[str] = None
    side: Side = Side.CLIENT
    yarn_version: Optional[YarnVersion] = None
    strict_main_class: bool = False
    libraries_format: LibrariesFormat = LibrariesFormat.ARRAY


@dataclass
class VersionDescriptor:
    id: str
    inherits_from: str
    main_class: str
    libraries: List[LibraryReference]
    game_arguments: List[str] = field(default_factory=list)
    jvm_arguments: List[str] = field(default_factory=list)
    release_time: str = DESCRIPTOR_TIMESTAMP
    time: str = DESCRIPTOR_TIMESTAMP

    def to_dict(self, libraries_format: LibrariesFormat = LibrariesFormat.ARRAY) -> Dict[str, Any]:
        libraries: Any = [library.to_dict() for library in self.libraries]
        if libraries_format == LibrariesFormat.STRING:
            libraries = json.dumps(libraries, separators=(",", ":"))
        return {
            "id": self.id,
            "inheritsFrom": self.inherits_from,
            "mainClass": self.main_class,
            "libraries": libraries,
            "arguments": {
                "game": list(self.game_arguments),
                "jvm": list(self.jvm_arguments),
            },
            "releaseTime": self.release_time,
            "time": self.time,
        }


@dataclass
class InstallResult:
    version_id: str
    path: Path
    descriptor: VersionDescriptor
    warnings: List[str] = field(default_factory=list)
