from __future__ import annotations

import logging
from pathlib import Path

from assetpacker.config import ARCHIVE_SUFFIX
from assetpacker.errors import CollisionError
from assetpacker.models import PackRequest

log = logging.getLogger(__name__)


def pack_dir_name(pack_name: str, version: str) -> str:
    return f"{pack_name}_v{version}"


def resolve_target(request: PackRequest) -> Path:
    return Path(request.output_root) / pack_dir_name(request.pack_name, request.version)


def archive_path_for(target: Path) -> Path:
    return target.with_name(target.name + ARCHIVE_SUFFIX)


def check_collision(target: Path) -> None:
    """
    Refuse to reuse a version: neither the pack folder nor its archive may exist yet.
    """
    for path in (target, archive_path_for(target)):
        if path.exists():
            log.debug("collision at %s", path)
            raise CollisionError(
                f"{path} already exists; specify a new version with -v/--version."
            )
