# pagesmith/render/resolve.py
from __future__ import annotations

import json
from collections.abc import Mapping as MappingABC
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .scanner import ComponentPlaceholder, DataPlaceholder, Literal, Sentinel, scan

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

_MISSING = object()


def lookup(data: Mapping[str, Any], path: Sequence[str]) -> Any:
    """Walk `data` one segment at a time; return _MISSING on any miss."""
    cur: Any = data
    for seg in path:
        if isinstance(cur, MappingABC):
            if seg not in cur:
                return _MISSING
            cur = cur[seg]
        elif isinstance(cur, list) and seg.isascii() and seg.isdigit() and (seg == "0" or seg[0] != "0"):
            i = int(seg)
            if i >= len(cur):
                return _MISSING
            cur = cur[i]
        else:
            return _MISSING
    return cur


def stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)) and orjson is not None:
        try:
            return orjson.dumps(value).decode("utf-8")
        except TypeError:
            # orjson rejects integers beyond 64 bits; json handles them.
            pass
    # JSON text for bool/None/numbers too: true/false/null, not Python's True/None.
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def resolve_data(tok: DataPlaceholder, data: Mapping[str, Any]) -> Optional[str]:
    value = lookup(data, tok.path)
    if value is _MISSING:
        return None
    return stringify(value)


def resolve(template: str, data: Mapping[str, Any], fragments: Mapping[str, str]) -> str:
    return resolve_with_report(template, data, fragments)[0]


def find_unresolved(text: str) -> List[str]:
    """Data/component placeholder tokens still present in `text`, in order."""
    return [
        tok.raw
        for tok in scan(text)
        if isinstance(tok, (DataPlaceholder, ComponentPlaceholder))
    ]


def resolve_with_report(
    template: str, data: Mapping[str, Any], fragments: Mapping[str, str]
) -> Tuple[str, List[str]]:
    """Like resolve(), also returning the template placeholders that missed."""
    missed: List[str] = []
    out: List[str] = []
    for tok in scan(template):
        if isinstance(tok, Literal):
            out.append(tok.text)
            continue
        if isinstance(tok, Sentinel):
            out.append(tok.raw)
            continue
        if isinstance(tok, ComponentPlaceholder):
            text = fragments.get(tok.name)
        else:
            text = resolve_data(tok, data)
        if text is None:
            missed.append(tok.raw)
            out.append(tok.raw)
        else:
            out.append(text)
    return "".join(out), missed
