from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional, Set

from assetpacker.config import IMAGE_SUFFIX
from assetpacker.errors import ValidationError
from assetpacker.models import AssetEntry, ValidationResult

log = logging.getLogger(__name__)


def iter_assets(
    root: str,
    suffix: str = IMAGE_SUFFIX,
    exclude: Optional[Iterable[str]] = None,
) -> Iterator[AssetEntry]:
    """
    Lazily walk root and yield every regular file whose name ends with suffix
    (case-sensitive). Symlinks are never followed or yielded.

    exclude: directories (any form) pruned from the walk, e.g. a pack target
    that lives inside the source tree.
    """
    root_path = Path(root).resolve()
    if not root_path.is_dir():
        raise ValidationError([
            ValidationResult("ERROR", "SOURCE_NOT_DIR", f"Scan root is not a directory: {root}", "--source-dir")
        ])

    excluded: Set[Path] = {Path(p).resolve() for p in (exclude or ())}
    found = 0

    for dirpath, dirnames, filenames in os.walk(root_path, followlinks=False):
        # Filter dirnames in-place so os.walk doesn't descend
        dirnames[:] = [d for d in dirnames if (Path(dirpath) / d) not in excluded]

        for fn in filenames:
            if not fn.endswith(suffix):
                continue

            full = Path(dirpath) / fn
            if full.is_symlink() or not full.is_file():
                continue

            found += 1
            yield AssetEntry(src=str(full), relpath=full.relative_to(root_path).as_posix())

    if not found:
        log.warning("no *%s files found under %s", suffix, root_path)
    else:
        log.info("scanned %d *%s file(s) under %s", found, suffix, root_path)
