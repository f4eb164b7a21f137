import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from assetpacker.core.editor import Editor, find_editor, require_editor
from assetpacker.errors import EditorNotFoundError


def _which_only(*available):
    return lambda name: f"/usr/bin/{name}" if name in available else None


class TestEditor(unittest.TestCase):
    def test_env_var_order_and_arguments(self):
        env = {"EDITOR": "vi", "VISUAL": "code --wait"}
        with mock.patch("shutil.which", side_effect=_which_only("vi", "code")):
            editor = find_editor(env)
        self.assertEqual(editor, Editor(command=("/usr/bin/code", "--wait")))

        env = {"ASSETPACK_EDITOR": "nano", "EDITOR": "vi"}
        with mock.patch("shutil.which", side_effect=_which_only("vi", "nano")):
            self.assertEqual(find_editor(env).command, ("/usr/bin/nano",))

    def test_missing_env_editor_falls_back(self):
        with mock.patch("shutil.which", side_effect=_which_only("vim")):
            editor = find_editor({"EDITOR": "not-installed"})
        self.assertEqual(editor.command, ("/usr/bin/vim",))

    def test_nothing_available(self):
        with mock.patch("shutil.which", return_value=None):
            self.assertIsNone(find_editor({}))
            with self.assertRaises(EditorNotFoundError):
                require_editor(lambda: find_editor({}))

    def test_edit_runs_command_with_path(self):
        with tempfile.TemporaryDirectory() as td:
            readme = Path(td) / "README.md"
            readme.write_text("x", encoding="utf-8")
            editor = Editor(command=(sys.executable, "-c", "import sys; sys.exit(0)"))
            self.assertEqual(editor.edit(readme), 0)

            failing = Editor(command=(sys.executable, "-c", "import sys; sys.exit(4)"))
            self.assertEqual(failing.edit(readme), 4)


if __name__ == "__main__":
    unittest.main()
