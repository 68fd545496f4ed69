# pagesmith/manifest.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .util.fs import list_files

STYLE_EXT = ".css"
SCRIPT_EXT = ".js"


@dataclass(frozen=True)
class AssetManifest:
    """Asset file names per class, in directory listing order (no sorting, no dedup)."""

    styles: Tuple[str, ...] = ()
    scripts: Tuple[str, ...] = ()


def discover(styles_dir: Path, scripts_dir: Path) -> AssetManifest:
    return AssetManifest(
        styles=tuple(list_files(styles_dir, STYLE_EXT)),
        scripts=tuple(list_files(scripts_dir, SCRIPT_EXT)),
    )
