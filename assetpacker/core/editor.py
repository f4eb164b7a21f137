from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional, Tuple

from assetpacker.config import EDITOR_ENV_VARS, FALLBACK_EDITORS
from assetpacker.errors import EditorNotFoundError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Editor:
    command: Tuple[str, ...]   # executable first, then fixed arguments

    def edit(self, path: Path) -> int:
        """Run the editor on path. Blocks until the user closes it; no timeout."""
        log.info("opening %s with %s", path, self.command[0])
        proc = subprocess.run([*self.command, str(path)], check=False)
        return proc.returncode


def _resolve(command: str) -> Optional[Editor]:
    try:
        parts = shlex.split(command)
    except ValueError:
        log.warning("ignoring unparsable editor command: %r", command)
        return None
    if not parts:
        return None

    exe = shutil.which(parts[0])
    if not exe:
        return None
    return Editor(command=(exe, *parts[1:]))


def find_editor(environ: Optional[Mapping[str, str]] = None) -> Optional[Editor]:
    """
    Look up a text editor: $ASSETPACK_EDITOR, $VISUAL, $EDITOR, then a few
    common editors on PATH. Returns None when nothing usable is installed.
    """
    env = os.environ if environ is None else environ

    for var in EDITOR_ENV_VARS:
        value = (env.get(var) or "").strip()
        if not value:
            continue
        editor = _resolve(value)
        if editor:
            return editor
        log.warning("$%s=%r is not an executable on PATH", var, value)

    for name in FALLBACK_EDITORS:
        editor = _resolve(name)
        if editor:
            return editor
    return None


def require_editor(lookup: Callable[[], Optional[Editor]] = find_editor) -> Editor:
    editor = lookup()
    if editor is None:
        names = ", ".join("$" + v for v in EDITOR_ENV_VARS)
        raise EditorNotFoundError(
            f"No text editor found to edit the README. Set one of {names} "
            f"or install one of: {', '.join(FALLBACK_EDITORS)}."
        )
    return editor
