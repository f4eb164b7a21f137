from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from assetpacker.core.resolver import archive_path_for
from assetpacker.errors import PackIOError

log = logging.getLogger(__name__)


def archive_pack(target: Path) -> Path:
    """
    Zip the contents of the pack folder into a sibling <target>.zip.
    Entries are stored relative to target (README.md, sub/b.png, ...).
    The pack folder is left in place whether or not this succeeds.
    """
    archive = archive_path_for(target)
    files = sorted(p for p in target.rglob("*") if p.is_file() and not p.is_symlink())

    try:
        # pre-1980 mtimes (kept by copy2) are clamped rather than rejected
        with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False) as zf:
            for path in files:
                zf.write(path, path.relative_to(target).as_posix())
    except (OSError, ValueError) as e:
        raise PackIOError(f"Failed writing archive: {archive} ({e})", str(archive)) from e

    log.info("archived %d file(s) into %s", len(files), archive)
    return archive
