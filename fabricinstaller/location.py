from pathlib import Path
from typing import Union


class MinecraftLocation:
    """Layout of a launcher's game directory (``.minecraft``)."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)
        self.versions = self.root / "versions"

    def get_version_root(self, version_id: str) -> Path:
        return self.versions / version_id

    def get_version_json(self, version_id: str) -> Path:
        return self.get_version_root(version_id) / f"{version_id}.json"
