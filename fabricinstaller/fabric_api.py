from typing import Any, Dict, List, Optional

import requests

from .exceptions import FetchError
from .models import ArtifactVersion, FabricArtifacts, LoaderArtifact

FABRIC_META_URL = "https://meta.fabricmc.net/v2/versions"
DEFAULT_TIMEOUT = 30  # seconds
USER_AGENT = "fabricinstaller/0.1"


class ArtifactClient:
    """Read-only client for the Fabric meta service."""

    def __init__(
        self,
        base_url: str = FABRIC_META_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)

    def _get_json(self, path: str = "") -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request failed for {url}: {e}") from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {url}") from e

    def _get_list(self, path: str) -> List[Any]:
        data = self._get_json(path)
        if not isinstance(data, list):
            raise FetchError(f"Expected a list from {self.base_url}{path}")
        return data

    def get_fabric_artifacts(self) -> FabricArtifacts:
        return FabricArtifacts.from_dict(self._get_json())

    def get_game_versions(self) -> List[Dict[str, Any]]:
        return [entry for entry in self._get_list("/game") if isinstance(entry, dict)]

    def get_yarn_artifact_list(self, minecraft: Optional[str] = None) -> List[ArtifactVersion]:
        path = f"/yarn/{minecraft}" if minecraft else "/yarn"
        return [ArtifactVersion.from_dict(item) for item in self._get_list(path)]

    def get_intermediary_artifact_list(self) -> List[ArtifactVersion]:
        return [ArtifactVersion.from_dict(item) for item in self._get_list("/intermediary")]

    def get_loader_artifact_list(self) -> List[ArtifactVersion]:
        return [ArtifactVersion.from_dict(item) for item in self._get_list("/loader")]

    def get_loader_artifact_list_for(self, minecraft: str) -> List[LoaderArtifact]:
        return [LoaderArtifact.from_dict(item) for item in self._get_list(f"/loader/{minecraft}")]

    def get_fabric_loader_artifact(self, minecraft: str, loader: str) -> LoaderArtifact:
        return LoaderArtifact.from_dict(self._get_json(f"/loader/{minecraft}/{loader}"))
