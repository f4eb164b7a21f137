from __future__ import annotations

import os

APP_NAME = "Asset Pack Builder"
APP_VERSION = "1.0.0"

# Case-sensitive filename suffix of the assets that go into a pack
IMAGE_SUFFIX = os.environ.get("ASSETPACK_IMAGE_SUFFIX", ".png")

README_NAME = "README.md"
ARCHIVE_SUFFIX = ".zip"

# Checked in order; values may carry arguments (e.g. "code --wait")
EDITOR_ENV_VARS = ("ASSETPACK_EDITOR", "VISUAL", "EDITOR")
FALLBACK_EDITORS = ("nano", "vim", "vi", "notepad")

LOG_LEVEL_ENV = "ASSETPACK_LOG_LEVEL"
LOG_LEVEL_DEFAULT = "WARNING"

README_TEMPLATE = """\
# {pack_name} v{version}

## License

This asset pack is released under the Creative Commons Attribution 4.0
International license (CC BY 4.0).

You are free to:
- use the assets in personal and commercial projects
- modify, recolor and adapt the assets
- redistribute the assets as part of a larger work

Under the following terms:
- Attribution: give appropriate credit to the original author.
- Do not resell or redistribute the assets on their own, unmodified.

## Attribution

Please credit: "{pack_name} by the original author, licensed under CC BY 4.0".
"""
