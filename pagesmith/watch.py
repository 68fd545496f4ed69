"""Watch mode: poll the source tree and trigger a full rebuild per change batch.

Rebuilds run on their own daemon threads and are not serialized; two
overlapping rebuilds race on the output directory and the last writer wins.
`debounce` collapses a burst of changes into one rebuild but does not stop a
new rebuild from starting while an older one is still running.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from .util.console import error, info, obs
from .util.fs import snapshot_tree

ADDED = "added"
MODIFIED = "modified"
DELETED = "deleted"

POLL_INTERVAL = 0.5


@dataclass(frozen=True)
class Change:
    path: Path
    kind: str


def diff_snapshots(root: Path, old: Dict[str, float], new: Dict[str, float]) -> List[Change]:
    changes: List[Change] = []
    for rel, mtime in new.items():
        if rel not in old:
            changes.append(Change(root / rel, ADDED))
        elif old[rel] != mtime:
            changes.append(Change(root / rel, MODIFIED))
    for rel in old:
        if rel not in new:
            changes.append(Change(root / rel, DELETED))
    return changes


def iter_changes(
    root: Path,
    *,
    poll_interval: float = POLL_INTERVAL,
    debounce: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
    stop: Optional[threading.Event] = None,
) -> Iterator[List[Change]]:
    """Yield a non-empty batch of changes each time the tree under `root` differs.

    Changes present when watching starts are ignored. With `debounce` > 0, a
    batch is only yielded after the tree has been quiet for that long.
    """
    snapshot = snapshot_tree(root)
    pending: List[Change] = []
    quiet_since = 0.0
    while stop is None or not stop.is_set():
        sleep(poll_interval)
        new = snapshot_tree(root)
        changes = diff_snapshots(root, snapshot, new)
        snapshot = new
        if changes:
            pending.extend(changes)
            quiet_since = time.monotonic()
            if debounce > 0:
                continue
        if not pending:
            continue
        if debounce > 0 and time.monotonic() - quiet_since < debounce:
            continue
        batch, pending = pending, []
        yield batch


def spawn_rebuild(rebuild: Callable[[], object], changes: List[Change]) -> threading.Thread:
    def _run() -> None:
        t0 = time.monotonic()
        try:
            rebuild()
        except (SystemExit, Exception) as e:
            # Keep watching: only the initial build is fatal.
            error(f"Rebuild failed: {e}")
        else:
            obs("watch", "rebuild.ok", ms=int((time.monotonic() - t0) * 1000), changes=len(changes))

    t = threading.Thread(target=_run, name="pagesmith-rebuild", daemon=True)
    t.start()
    return t


def watch(
    root: Path,
    rebuild: Callable[[], object],
    *,
    poll_interval: float = POLL_INTERVAL,
    debounce: float = 0.0,
    stop: Optional[threading.Event] = None,
) -> None:
    info(f"Watch mode started on {root} (polling every {poll_interval}s). Press Ctrl+C to stop.")
    try:
        for batch in iter_changes(root, poll_interval=poll_interval, debounce=debounce, stop=stop):
            for ch in batch:
                info(f"File {ch.kind}: {ch.path}")
            spawn_rebuild(rebuild, batch)
    except KeyboardInterrupt:
        info("Watch mode stopped.")
