"""pagesmith Python package.

Public API:
  - import from `pagesmith.api` (preferred) or `import pagesmith` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)

from .api import (
    BuildConfig,
    BuildMode,
    build,
    link,
    load_data,
    load_fragments,
    resolve,
)
