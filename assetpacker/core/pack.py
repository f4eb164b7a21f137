from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional

from assetpacker.config import README_NAME, README_TEMPLATE
from assetpacker.core.editor import Editor
from assetpacker.core.resolver import archive_path_for
from assetpacker.errors import CollisionError, PackIOError
from assetpacker.models import AssetEntry, PackPlanItem, PackRequest, PackSummary

log = logging.getLogger(__name__)


def build_plan(target: Path, entries: Iterable[AssetEntry]) -> Iterator[PackPlanItem]:
    for entry in entries:
        yield PackPlanItem(
            src=entry.src,
            relpath=entry.relpath,
            dst=str(target.joinpath(*entry.relpath.split("/"))),
        )


def describe_dry_run(request: PackRequest, target: Path, entries: Iterable[AssetEntry]) -> List[str]:
    """
    Dry-run report: what a real run would do, one line per action.
    Touches nothing on disk.
    """
    lines = [
        f"would create: {target}",
        f"would write: {target / README_NAME}",
    ]
    copies = 0
    for item in build_plan(target, entries):
        lines.append(f"would copy: {item.src} -> {item.dst}")
        copies += 1
    if not copies:
        lines.append(f"no matching files under {request.source_dir}")
    lines.append(f"would archive: {target} -> {archive_path_for(target)}")
    return lines


def create_pack_dir(target: Path) -> None:
    """
    Create the output root (with parents), then the pack folder itself
    exclusively so a folder appearing since the collision check is not reused.
    """
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PackIOError(f"Failed creating output folder: {target.parent} ({e})", str(target.parent)) from e

    try:
        target.mkdir()
    except FileExistsError as e:
        raise CollisionError(f"{target} already exists; specify a new version with -v/--version.") from e
    except OSError as e:
        raise PackIOError(f"Failed creating pack folder: {target} ({e})", str(target)) from e
    log.info("created %s", target)


def write_readme(target: Path, request: PackRequest) -> Path:
    readme = target / README_NAME
    text = README_TEMPLATE.format(pack_name=request.pack_name, version=request.version)
    try:
        readme.write_text(text, encoding="utf-8")
    except OSError as e:
        raise PackIOError(f"Failed writing {readme} ({e})", str(readme)) from e
    return readme


def edit_readme(readme: Path, editor: Editor) -> int:
    # Blocks until the editor exits. A failed edit session keeps the template.
    try:
        code = editor.edit(readme)
    except OSError as e:
        raise PackIOError(f"Failed launching editor for {readme} ({e})", str(readme)) from e
    if code != 0:
        log.warning("editor exited with status %s; keeping README as written", code)
    return code


def execute_pack(
    plan: Iterable[PackPlanItem],
    progress_cb: Optional[Callable[[int, PackPlanItem], None]] = None,
) -> PackSummary:
    """
    Copies files according to plan (safe-copy, never move).

    Fail-fast: the first failure raises PackIOError; files copied before it
    stay on disk.
    """
    copied = 0

    for idx, item in enumerate(plan, start=1):
        if progress_cb:
            progress_cb(idx, item)

        dst = Path(item.dst)
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PackIOError(f"Failed creating destination folder: {dst.parent} ({e})", str(dst.parent)) from e

        try:
            shutil.copy2(item.src, dst)
        except OSError as e:
            raise PackIOError(f"Copy failed: {item.src} -> {dst} ({e})", item.src) from e

        copied += 1
        log.debug("copied %s", item.relpath)

    return PackSummary(copied=copied)
