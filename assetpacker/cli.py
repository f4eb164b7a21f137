from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Sequence

from assetpacker.config import LOG_LEVEL_DEFAULT, LOG_LEVEL_ENV
from assetpacker.core.pipeline import run_pack
from assetpacker.core.validator import parse_request
from assetpacker.errors import PackError, UsageError, ValidationError


def _configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, LOG_LEVEL_DEFAULT).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _report_error(e: PackError) -> None:
    if isinstance(e, ValidationError):
        for r in e.results:
            print(f"error: {r.message}", file=sys.stderr)
    else:
        print(f"error: {e}", file=sys.stderr)

    if isinstance(e, UsageError) and e.usage:
        print(e.usage, end="", file=sys.stderr)
    elif isinstance(e, ValidationError):
        print("Run with --help for usage.", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    _configure_logging()
    try:
        request = parse_request(argv)
        result = run_pack(request)
    except PackError as e:
        _report_error(e)
        return e.exit_code

    if request.dry_run:
        print(f"Dry run for {result.target} (nothing written):")
        for line in result.planned:
            print(f"  {line}")
        return 0

    print(f"Pack folder: {result.target} ({result.summary.copied} file(s) copied)")
    print(f"Archive:     {result.archive}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
