import tempfile
import unittest
from pathlib import Path

from assetpacker.core.resolver import archive_path_for, check_collision, pack_dir_name, resolve_target
from assetpacker.errors import CollisionError
from assetpacker.models import PackRequest


class TestResolver(unittest.TestCase):
    def test_target_name(self):
        self.assertEqual(pack_dir_name("rpg_asset_pack", "1.0"), "rpg_asset_pack_v1.0")

        req = PackRequest("src", "/tmp/out", "rpg_asset_pack", "2.13")
        target = resolve_target(req)
        self.assertEqual(target, Path("/tmp/out") / "rpg_asset_pack_v2.13")
        self.assertEqual(archive_path_for(target), Path("/tmp/out") / "rpg_asset_pack_v2.13.zip")

    def test_collision_on_existing_dir(self):
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "pack_v1.0"
            check_collision(target)  # nothing there yet

            target.mkdir()
            with self.assertRaises(CollisionError) as cm:
                check_collision(target)
            self.assertIn("new version", str(cm.exception))

    def test_collision_on_existing_archive(self):
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "pack_v1.0"
            archive_path_for(target).write_bytes(b"PK")
            with self.assertRaises(CollisionError):
                check_collision(target)


if __name__ == "__main__":
    unittest.main()
