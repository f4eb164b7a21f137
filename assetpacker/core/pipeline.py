from __future__ import annotations

import logging
from typing import Callable, Optional

from assetpacker.core.archive import archive_pack
from assetpacker.core.editor import Editor, find_editor, require_editor
from assetpacker.core.pack import (
    build_plan,
    create_pack_dir,
    describe_dry_run,
    edit_readme,
    execute_pack,
    write_readme,
)
from assetpacker.core.resolver import check_collision, resolve_target
from assetpacker.core.scanner import iter_assets
from assetpacker.core.validator import check_source_dir
from assetpacker.errors import PackError
from assetpacker.models import PackPlanItem, PackRequest, PackResult

log = logging.getLogger(__name__)

VALIDATING = "Validating"
RESOLVING_PATH = "ResolvingPath"
DRY_REPORT = "DryReport"
ASSEMBLING = "Assembling"
ARCHIVING = "Archiving"
DONE = "Done"


def run_pack(
    request: PackRequest,
    editor_lookup: Optional[Callable[[], Optional[Editor]]] = None,
    progress_cb: Optional[Callable[[int, PackPlanItem], None]] = None,
) -> PackResult:
    """
    Validating -> ResolvingPath -> {DryReport | Assembling -> Archiving} -> Done.

    Any PackError moves the run to Failed and propagates. Nothing written
    before the failure is removed.
    """
    stage = VALIDATING
    log.info("state: %s", stage)
    try:
        check_source_dir(request)

        stage = RESOLVING_PATH
        log.info("state: %s", stage)
        target = resolve_target(request)
        check_collision(target)

        if request.dry_run:
            stage = DRY_REPORT
            log.info("state: %s", stage)
            planned = describe_dry_run(request, target, iter_assets(request.source_dir, exclude=[target]))
            log.info("state: %s", DONE)
            return PackResult(target=target, archive=None, summary=None, planned=planned)

        stage = ASSEMBLING
        log.info("state: %s", stage)
        create_pack_dir(target)
        readme = write_readme(target, request)
        edit_readme(readme, require_editor(editor_lookup or find_editor))

        plan = build_plan(target, iter_assets(request.source_dir, exclude=[target]))
        summary = execute_pack(plan, progress_cb=progress_cb)

        stage = ARCHIVING
        log.info("state: %s", stage)
        archive = archive_pack(target)
    except PackError as e:
        log.info("state: %s -> Failed (%s)", stage, type(e).__name__)
        raise

    log.info("state: %s (%d file(s) copied)", DONE, summary.copied)
    return PackResult(target=target, archive=archive, summary=summary)
