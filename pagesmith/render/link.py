# pagesmith/render/link.py
from __future__ import annotations

import enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..errors import FatalLoadError
from .scanner import CSS_SENTINEL, JS_SENTINEL

STYLE = "style"
SCRIPT = "script"

TAG_SEPARATOR = "\n    "

ReadAsset = Callable[[str, str], Optional[str]]


class BuildMode(enum.Enum):
    REFERENCE = "reference"
    INLINE = "inline"

    @classmethod
    def parse(cls, value: str) -> "BuildMode":
        v = (value or "").strip().lower()
        for m in cls:
            if m.value == v:
                return m
        raise ValueError(f"unknown build mode: {value!r} (expected reference|inline)")


def style_tag(name: str) -> str:
    return f'<link rel="stylesheet" href="./styles/{name}">'


def script_tag(name: str) -> str:
    return f'<script src="./scripts/{name}"></script>'


def _concat(kind: str, names: Sequence[str], read_asset: ReadAsset) -> str:
    parts: List[str] = []
    for name in names:
        text = read_asset(kind, name)
        if text is None:
            continue
        parts.append(text + "\n")
    return "".join(parts)


def _substitute(html: str, sentinel: str, replacement: str) -> str:
    # First occurrence only; an absent sentinel is a no-op.
    return html.replace(sentinel, replacement, 1)


def link_reference(html: str, style_files: Sequence[str], script_files: Sequence[str]) -> str:
    css_links = TAG_SEPARATOR.join(style_tag(n) for n in style_files)
    js_scripts = TAG_SEPARATOR.join(script_tag(n) for n in script_files)
    html = _substitute(html, CSS_SENTINEL, css_links)
    return _substitute(html, JS_SENTINEL, js_scripts)


def link_inline(html: str, style_files: Sequence[str], script_files: Sequence[str], read_asset: ReadAsset) -> str:
    css = _concat(STYLE, style_files, read_asset)
    js = _concat(SCRIPT, script_files, read_asset)
    html = _substitute(html, CSS_SENTINEL, f"<style>\n{css}</style>")
    return _substitute(html, JS_SENTINEL, f"<script>\n{js}</script>")


def link(
    html: str,
    mode: BuildMode,
    style_files: Sequence[str],
    script_files: Sequence[str],
    read_asset: ReadAsset,
) -> str:
    if not isinstance(mode, BuildMode):
        raise TypeError(f"mode must be BuildMode, got {type(mode).__name__}")
    if mode is BuildMode.INLINE:
        return link_inline(html, style_files, script_files, read_asset)
    return link_reference(html, style_files, script_files)


def read_source_asset(styles_dir: Path, scripts_dir: Path) -> ReadAsset:
    """read_asset(kind, name) over the source tree; None when the file is gone.

    Any other read or decode failure raises FatalLoadError naming the file.
    """

    def _read(kind: str, name: str) -> Optional[str]:
        base = styles_dir if kind == STYLE else scripts_dir
        path = base / Path(name).name
        try:
            return path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise FatalLoadError(f"Failed to read asset {path}: {e}", path=path) from e

    return _read
