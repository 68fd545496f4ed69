# pagesmith/util/console.py
from __future__ import annotations
import os
import sys
from typing import Any

PREFIX = "[pagesmith]"


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def info(msg: str) -> None:
    print(f"{PREFIX} {msg}", flush=True)


def warn(msg: str) -> None:
    eprint(f"{PREFIX} WARN: {msg}")


def error(msg: str) -> None:
    eprint(f"{PREFIX} ERROR: {msg}")


def obs_enabled() -> bool:
    v = (os.getenv("PAGESMITH_OBS_LOG", "") or "").strip().lower()
    return v in {"1", "true", "yes", "on"}


def obs(area: str, event: str, **fields: Any) -> None:
    # e.g. [pagesmith.pipeline] build.ok ms=12 mode=inline
    if not obs_enabled():
        return
    kv = " ".join(f"{k}={v}" for k, v in fields.items())
    eprint(f"[pagesmith.{area}] {event}" + (f" {kv}" if kv else ""))
