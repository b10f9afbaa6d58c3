import json
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Dict, Union

from .exceptions import FileSystemError
from .models import LibrariesFormat, VersionDescriptor

_locks: Dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(path, threading.Lock())


def serialize_descriptor(
    descriptor: VersionDescriptor, libraries_format: LibrariesFormat = LibrariesFormat.ARRAY
) -> str:
    return json.dumps(descriptor.to_dict(libraries_format), indent=2, ensure_ascii=False)


def _remove_existing(path: Path) -> None:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
    except OSError as e:
        raise FileSystemError(path, "remove existing", str(e)) from e


def write_version_json(
    path: Union[str, Path],
    descriptor: VersionDescriptor,
    libraries_format: LibrariesFormat = LibrariesFormat.ARRAY,
) -> Path:
    """Write ``descriptor`` to ``path``, replacing whatever is there.

    The content goes to a temporary file next to the target first, so the
    target is either missing or complete at any point.
    """
    path = Path(path).absolute()
    content = serialize_descriptor(descriptor, libraries_format)

    with _lock_for(path):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(path.parent, "create directory", str(e)) from e

        tmp_path = None
        try:
            try:
                with tempfile.NamedTemporaryFile(
                    "w", encoding="utf-8", delete=False, dir=str(path.parent), suffix=".tmp"
                ) as tmp:
                    tmp_path = Path(tmp.name)
                    tmp.write(content)
            except OSError as e:
                raise FileSystemError(path, "write", str(e)) from e

            _remove_existing(path)
            try:
                tmp_path.replace(path)
            except OSError as e:
                raise FileSystemError(path, "write", str(e)) from e
        finally:
            if tmp_path is not None and tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
    return path
