# pagesmith/util/fs.py
from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Iterator, List, Tuple


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def list_files(directory: Path, suffix: str) -> List[str]:
    """File names directly inside `directory` ending with `suffix`, in listing order.

    Missing directory -> []. Sub-directories are ignored even if their name
    happens to end with the suffix.
    """
    if not directory.is_dir():
        return []
    return [
        name
        for name in os.listdir(directory)
        if name.endswith(suffix) and (directory / name).is_file()
    ]


def iter_tree(root: Path) -> Iterator[Path]:
    # Worklist walk; yields files only. Depth is bounded by the heap, not the call stack.
    if not root.is_dir():
        return
    stack: List[Path] = [root]
    while stack:
        cur = stack.pop()
        try:
            names = sorted(os.listdir(cur))
        except FileNotFoundError:
            # Removed after it was queued.
            continue
        for name in names:
            p = cur / name
            if p.is_dir():
                stack.append(p)
            else:
                yield p


def copy_tree(src: Path, dest: Path) -> int:
    """Copy every file under `src` to the same relative path under `dest`.

    Existing files are overwritten unconditionally. Returns the number of files
    copied; a missing `src` is a no-op (0).
    """
    if not src.is_dir():
        return 0
    ensure_dir(dest)
    copied = 0
    stack: List[Tuple[Path, Path]] = [(src, dest)]
    while stack:
        s_dir, d_dir = stack.pop()
        for name in os.listdir(s_dir):
            s = s_dir / name
            d = d_dir / name
            if s.is_dir():
                ensure_dir(d)
                stack.append((s, d))
            else:
                shutil.copyfile(s, d)
                copied += 1
    return copied


def snapshot_tree(root: Path) -> Dict[str, float]:
    """{relative posix path: mtime} for every file under root."""
    snap: Dict[str, float] = {}
    for p in iter_tree(root):
        try:
            snap[p.relative_to(root).as_posix()] = p.stat().st_mtime
        except FileNotFoundError:
            # Deleted between listing and stat.
            continue
    return snap


def atomic_write_text(path: Path, text: str) -> None:
    # Write to a sibling temp file then rename, so concurrent rebuilds never
    # observe (or crash on) a half-written document.
    ensure_dir(path.parent)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise
