from __future__ import annotations

import argparse
import os
import re
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from assetpacker.config import APP_NAME, IMAGE_SUFFIX
from assetpacker.errors import UsageError, ValidationError
from assetpacker.models import PackRequest, ValidationResult

_VERSION_RE = re.compile(r"[0-9]+\.[0-9]+")

HELP_FLAGS = ("-h", "--help")
VALUE_FLAGS = (
    "-s", "--source-dir",
    "-o", "--output-dir",
    "-n", "--asset-pack-name",
    "-v", "--version",
)
SWITCH_FLAGS = ("-d", "-h")


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message, self.format_usage())


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="assetpacker",
        description=f"{APP_NAME}: copy every *{IMAGE_SUFFIX} under a source folder into a "
                    "versioned pack folder, add a README and zip the result.",
        allow_abbrev=False,
    )
    parser.add_argument("-s", "--source-dir", metavar="DIR",
                        help="Directory to scan for image files (required).")
    parser.add_argument("-o", "--output-dir", metavar="DIR",
                        help="Root under which the pack directory is created (required).")
    parser.add_argument("-n", "--asset-pack-name", metavar="NAME",
                        help="Base name of the pack, combined with the version (required).")
    parser.add_argument("-v", "--version", metavar="X.Y",
                        help="Pack version, e.g. 1.0 (required).")
    parser.add_argument("-d", "--dry-run", action="store_true",
                        help="Only print the planned actions; touch nothing on disk.")
    return parser


def strip_trailing_sep(value: str) -> str:
    seps = "/" + os.sep + (os.altsep or "")
    stripped = value.rstrip(seps)
    # a bare root ("/") stays a root
    return stripped or value[:1]


def _bundled_value_flag(tok: str) -> Optional[Tuple[str, str]]:
    """
    For a bundle of short flags like "-ds" or "-dsassets", return the value flag
    it ends in and any value attached to it. None if it holds no value flag.
    """
    for pos, ch in enumerate(tok[1:], start=1):
        flag = "-" + ch
        if flag in VALUE_FLAGS:
            return flag, tok[pos + 1:]
        if flag not in SWITCH_FLAGS:
            return None
    return None


def _check_flag_values(argv: Sequence[str]) -> None:
    """
    Every value-taking flag needs a non-empty value that is not itself a flag.
    argparse would report these as generic parse errors.
    """
    for idx, tok in enumerate(argv):
        if tok == "--":
            break

        following = argv[idx + 1] if idx + 1 < len(argv) else ""
        name, eq, inline = tok.partition("=")
        if eq and name in VALUE_FLAGS:
            value = inline
        elif tok in VALUE_FLAGS:
            name = tok
            value = following
        elif tok.startswith("-") and not tok.startswith("--") and len(tok) > 2:
            bundled = _bundled_value_flag(tok)
            if bundled is None:
                continue
            name, value = bundled
            value = value or following
        else:
            continue

        if not value or value.startswith("-"):
            raise ValidationError([
                ValidationResult("ERROR", "ARG_EMPTY", f"{name} requires a non-empty argument.", name)
            ])


def validate_pack_inputs(
    source_dir: Optional[str],
    output_dir: Optional[str],
    pack_name: Optional[str],
    version: Optional[str],
) -> List[ValidationResult]:
    results: List[ValidationResult] = []

    if not (source_dir or "").strip():
        results.append(ValidationResult(
            "ERROR", "SOURCE_MISSING", "Source directory is required (-s/--source-dir).", "--source-dir"))
    if not (output_dir or "").strip():
        results.append(ValidationResult(
            "ERROR", "OUTPUT_MISSING", "Output directory is required (-o/--output-dir).", "--output-dir"))

    name = strip_trailing_sep(pack_name or "")
    if not name.strip():
        results.append(ValidationResult(
            "ERROR", "NAME_MISSING", "Asset pack name is required (-n/--asset-pack-name).", "--asset-pack-name"))
    elif "/" in name or os.sep in name:
        results.append(ValidationResult(
            "ERROR", "NAME_INVALID", f"Asset pack name must not contain path separators: '{name}'",
            "--asset-pack-name"))

    if not version:
        results.append(ValidationResult(
            "ERROR", "VERSION_MISSING", "Version is required (-v/--version, e.g. 1.0).", "--version"))
    elif not _VERSION_RE.fullmatch(version):
        results.append(ValidationResult(
            "ERROR", "VERSION_INVALID", f"Version must look like 1.0 (digits.digits), got '{version}'.",
            "--version"))

    return results


def parse_request(argv: Optional[Sequence[str]] = None) -> PackRequest:
    """
    Turn command-line tokens into a PackRequest.

    -h/--help anywhere prints usage and exits 0 before anything else is checked.
    Raises UsageError for unknown flags and ValidationError for missing or
    malformed values (all missing fields are reported together).
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    if any(tok in HELP_FLAGS for tok in argv):
        parser.print_help()
        parser.exit(0)

    _check_flag_values(argv)
    args = parser.parse_args(argv)

    issues = validate_pack_inputs(args.source_dir, args.output_dir, args.asset_pack_name, args.version)
    if issues:
        raise ValidationError(issues)

    return PackRequest(
        source_dir=args.source_dir,
        output_root=strip_trailing_sep(args.output_dir),
        pack_name=strip_trailing_sep(args.asset_pack_name),
        version=args.version,
        dry_run=bool(args.dry_run),
    )


def check_source_dir(request: PackRequest) -> None:
    if not Path(request.source_dir).is_dir():
        raise ValidationError([
            ValidationResult(
                "ERROR",
                "SOURCE_NOT_DIR",
                f"Source directory does not exist or is not a directory: {request.source_dir}",
                "--source-dir",
            )
        ])
