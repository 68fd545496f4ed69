"""Directory-backed stores: JSON data documents and HTML fragments.

Both loaders read a flat directory (no recursion) and key each file by its
base name. They return read-only mappings so later pipeline stages cannot
mutate what an earlier stage produced.
"""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

from .errors import FatalLoadError
from .util.console import obs
from .util.fs import list_files

JSON_EXT = ".json"
HTML_EXT = ".html"

DirPath = Union[str, Path]


def _read_text(path: Path) -> str:
    # Decode bytes directly: no newline translation, fragments stay verbatim.
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FatalLoadError(f"Failed to read {path}: {e}", path=path) from e


def load_data(directory: DirPath) -> Mapping[str, Any]:
    d = Path(directory)
    out: Dict[str, Any] = {}
    for name in list_files(d, JSON_EXT):
        path = d / name
        text = _read_text(path)
        try:
            out[name[: -len(JSON_EXT)]] = json.loads(text)
        except json.JSONDecodeError as e:
            raise FatalLoadError(
                f"Malformed JSON in {path} (line {e.lineno}, column {e.colno}): {e.msg}",
                path=path,
            ) from e
    obs("stores", "data.loaded", dir=d, keys=len(out))
    return MappingProxyType(out)


def load_fragments(directory: DirPath) -> Mapping[str, str]:
    d = Path(directory)
    out: Dict[str, str] = {}
    for name in list_files(d, HTML_EXT):
        out[name[: -len(HTML_EXT)]] = _read_text(d / name)
    obs("stores", "fragments.loaded", dir=d, names=len(out))
    return MappingProxyType(out)
