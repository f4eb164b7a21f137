from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class ValidationResult:
    level: str  # INFO | WARNING | ERROR
    code: str   # stable short identifier (e.g. VERSION_MISSING)
    message: str
    flag: Optional[str] = None  # CLI flag the result concerns, when applicable


@dataclass(frozen=True)
class PackRequest:
    source_dir: str
    output_root: str    # no trailing separator
    pack_name: str      # no trailing separator
    version: str        # e.g. "1.0"
    dry_run: bool = False


@dataclass(frozen=True)
class AssetEntry:
    src: str            # full path
    relpath: str        # relative to source root, posix separators


@dataclass(frozen=True)
class PackPlanItem:
    src: str
    relpath: str
    dst: str


@dataclass(frozen=True)
class PackSummary:
    copied: int


@dataclass(frozen=True)
class PackResult:
    target: Path
    archive: Optional[Path]     # None for dry runs
    summary: Optional[PackSummary]
    planned: List[str] = field(default_factory=list)
