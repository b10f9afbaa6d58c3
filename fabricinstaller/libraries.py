from typing import List, Optional

from .models import LibraryReference, LoaderArtifact, Side

FABRIC_MAVEN_URL = "https://maven.fabricmc.net/"
YARN_MAVEN_GROUP = "net.fabricmc:yarn"


def build_libraries(loader: LoaderArtifact, yarn: Optional[str], side: Side) -> List[LibraryReference]:
    # Order is the classpath order: loader, intermediary, yarn, common, side.
    libraries = [
        LibraryReference(name=loader.loader.maven, url=FABRIC_MAVEN_URL),
        LibraryReference(name=loader.intermediary.maven, url=FABRIC_MAVEN_URL),
    ]
    if yarn is not None:
        libraries.append(LibraryReference(name=f"{YARN_MAVEN_GROUP}:{yarn}", url=FABRIC_MAVEN_URL))
    libraries.extend(loader.launcher_meta.libraries.common)
    libraries.extend(loader.launcher_meta.libraries.for_side(side))
    return libraries
