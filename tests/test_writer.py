import json
import tempfile
import threading
import unittest
from pathlib import Path
from unittest import mock

from fabricinstaller.exceptions import FileSystemError
from fabricinstaller.models import LibrariesFormat, LibraryReference, VersionDescriptor
from fabricinstaller.writer import _lock_for, serialize_descriptor, write_version_json


def _descriptor(version_id: str = "1.19.4-fabric0.1.0.48") -> VersionDescriptor:
    return VersionDescriptor(
        id=version_id,
        inherits_from="1.19.4",
        main_class="net.fabricmc.loader.launch.knot.KnotClient",
        libraries=[
            LibraryReference("net.fabricmc:fabric-loader:0.1.0.48", "https://maven.fabricmc.net/"),
            LibraryReference("net.fabricmc:intermediary:1.19.4", "https://maven.fabricmc.net/"),
        ],
    )


class TestWriteVersionJson(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_creates_parent_directories(self):
        target = self.root / "versions" / "x" / "x.json"
        write_version_json(target, _descriptor("x"))
        data = json.loads(target.read_text(encoding="utf-8"))
        self.assertEqual(data["id"], "x")
        self.assertEqual(list(data), ["id", "inheritsFrom", "mainClass", "libraries", "arguments", "releaseTime", "time"])
        self.assertEqual(data["arguments"], {"game": [], "jvm": []})
        self.assertEqual(data["releaseTime"], "2023-05-13T15:58:54.493Z")

    def test_replaces_existing_file(self):
        target = self.root / "v.json"
        target.write_text("x" * 10000, encoding="utf-8")
        write_version_json(target, _descriptor())
        self.assertEqual(target.read_text(encoding="utf-8"), serialize_descriptor(_descriptor()))

    def test_replaces_existing_directory(self):
        target = self.root / "v.json"
        (target / "nested").mkdir(parents=True)
        (target / "nested" / "junk.txt").write_text("junk", encoding="utf-8")
        write_version_json(target, _descriptor())
        self.assertTrue(target.is_file())
        self.assertEqual(json.loads(target.read_text(encoding="utf-8"))["inheritsFrom"], "1.19.4")

    def test_libraries_as_embedded_string(self):
        target = self.root / "v.json"
        write_version_json(target, _descriptor(), LibrariesFormat.STRING)
        data = json.loads(target.read_text(encoding="utf-8"))
        self.assertIsInstance(data["libraries"], str)
        self.assertEqual(json.loads(data["libraries"])[0]["name"], "net.fabricmc:fabric-loader:0.1.0.48")

    def test_rewrite_is_byte_identical(self):
        target = self.root / "v.json"
        write_version_json(target, _descriptor())
        first = target.read_bytes()
        write_version_json(target, _descriptor())
        self.assertEqual(first, target.read_bytes())

    def test_no_temporary_files_left_behind(self):
        target = self.root / "v.json"
        write_version_json(target, _descriptor())
        self.assertEqual([p.name for p in self.root.iterdir()], ["v.json"])

    def test_parent_is_a_file(self):
        blocker = self.root / "versions"
        blocker.write_text("not a directory", encoding="utf-8")
        with self.assertRaises(FileSystemError) as ctx:
            write_version_json(blocker / "x" / "x.json", _descriptor("x"))
        self.assertEqual(ctx.exception.operation, "create directory")

    def test_remove_failure_is_reported(self):
        target = self.root / "v.json"
        target.write_text("{}", encoding="utf-8")
        with mock.patch("fabricinstaller.writer.Path.unlink", side_effect=PermissionError("denied")):
            with self.assertRaises(FileSystemError) as ctx:
                write_version_json(target, _descriptor())
        self.assertEqual(ctx.exception.operation, "remove existing")
        self.assertEqual(ctx.exception.path, target.absolute())

    def test_concurrent_writes_to_same_path(self):
        target = self.root / "versions" / "v" / "v.json"
        self.assertIs(_lock_for(target.absolute()), _lock_for(target.absolute()))

        barrier = threading.Barrier(2)
        errors = []

        def _write(version_id):
            barrier.wait()
            try:
                for _ in range(20):
                    write_version_json(target, _descriptor(version_id))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=_write, args=(vid,)) for vid in ("first", "second")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        self.assertIn(json.loads(target.read_text(encoding="utf-8"))["id"], {"first", "second"})
        self.assertEqual([p.name for p in target.parent.iterdir()], ["v.json"])


if __name__ == "__main__":
    unittest.main()
