import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fabric_fixtures import make_bundle

import fabric_install
from fabricinstaller.exceptions import FetchError


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_install_writes_version_json(self):
        with mock.patch.object(fabric_install.ArtifactClient, "get_fabric_loader_artifact",
                               return_value=make_bundle()) as fetch:
            code = fabric_install.main([
                "install", "--minecraft", "1.19.4", "--loader", "0.1.0.48", "--dir", str(self.root),
            ])
        self.assertEqual(code, 0)
        fetch.assert_called_once_with("1.19.4", "0.1.0.48")
        target = self.root / "versions" / "1.19.4-fabric0.1.0.48" / "1.19.4-fabric0.1.0.48.json"
        self.assertEqual(json.loads(target.read_text(encoding="utf-8"))["inheritsFrom"], "1.19.4")

    def test_fetch_error_exits_with_one(self):
        with mock.patch.object(fabric_install.ArtifactClient, "get_fabric_loader_artifact",
                               side_effect=FetchError("offline")):
            code = fabric_install.main([
                "install", "--minecraft", "1.19.4", "--loader", "0.1.0.48", "--dir", str(self.root),
            ])
        self.assertEqual(code, 1)
        self.assertFalse((self.root / "versions").exists())

    def test_strict_server_install_without_main_class_fails(self):
        bundle = make_bundle(main_class={"client": "Client"})
        with mock.patch.object(fabric_install.ArtifactClient, "get_fabric_loader_artifact",
                               return_value=bundle):
            code = fabric_install.main([
                "install", "--minecraft", "1.19.4", "--loader", "0.1.0.48", "--dir", str(self.root),
                "--side", "server", "--strict",
            ])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
