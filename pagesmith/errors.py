# pagesmith/errors.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class FatalLoadError(RuntimeError):
    """A required input could not be read or parsed; the build is aborted."""

    message: str
    path: Optional[Path] = None

    def __str__(self) -> str:
        return self.message
