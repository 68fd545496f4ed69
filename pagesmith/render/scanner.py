# pagesmith/render/scanner.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple, Union

COMPONENT_PREFIX = "component:"
CSS_SENTINEL = "{{CSS_LINKS}}"
JS_SENTINEL = "{{JS_SCRIPTS}}"
SENTINEL_NAMES = ("CSS_LINKS", "JS_SCRIPTS")

# {{<content>}} where content is one or more non-'}' characters.
PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class DataPlaceholder:
    raw: str
    path: Tuple[str, ...]


@dataclass(frozen=True)
class ComponentPlaceholder:
    raw: str
    name: str


@dataclass(frozen=True)
class Sentinel:
    raw: str
    name: str


Token = Union[Literal, DataPlaceholder, ComponentPlaceholder, Sentinel]


def classify(raw: str, content: str) -> Token:
    if content.startswith(COMPONENT_PREFIX):
        return ComponentPlaceholder(raw=raw, name=content[len(COMPONENT_PREFIX):])
    if content in SENTINEL_NAMES:
        return Sentinel(raw=raw, name=content)
    return DataPlaceholder(raw=raw, path=tuple(content.split(".")))


def scan(template: str) -> List[Token]:
    """Split `template` into literal runs and placeholder tokens, left to right.

    Adjacent literal text is merged; concatenating every token's text
    (`Literal.text` or `raw`) gives back the input exactly.
    """
    if not isinstance(template, str):
        raise TypeError(f"template must be str, got {type(template).__name__}")

    tokens: List[Token] = []
    pos = 0
    for m in PLACEHOLDER_RE.finditer(template):
        if m.start() > pos:
            tokens.append(Literal(template[pos:m.start()]))
        tokens.append(classify(m.group(0), m.group(1)))
        pos = m.end()
    if pos < len(template):
        tokens.append(Literal(template[pos:]))
    return tokens


def token_text(tok: Token) -> str:
    return tok.text if isinstance(tok, Literal) else tok.raw
