"""pagesmith.api

Stable *library* entrypoint for pagesmith.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from pagesmith.errors import FatalLoadError
from pagesmith.manifest import AssetManifest, discover
from pagesmith.pipeline import BuildConfig, BuildResult, build
from pagesmith.render.link import BuildMode, link, read_source_asset
from pagesmith.render.resolve import find_unresolved, resolve
from pagesmith.render.scanner import (
    ComponentPlaceholder,
    DataPlaceholder,
    Literal,
    Sentinel,
    scan,
)
from pagesmith.render.template import default_template
from pagesmith.stores import load_data, load_fragments
from pagesmith.util.fs import copy_tree

# --- Public API exports ----------------------------------------------------
_PUBLIC_EXPORTS = (
    "AssetManifest",
    "BuildConfig",
    "BuildMode",
    "BuildResult",
    "ComponentPlaceholder",
    "DataPlaceholder",
    "FatalLoadError",
    "Literal",
    "Sentinel",
    "build",
    "copy_tree",
    "default_template",
    "discover",
    "find_unresolved",
    "link",
    "load_data",
    "load_fragments",
    "read_source_asset",
    "resolve",
    "scan",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
