from __future__ import annotations

import argparse
import os
from pathlib import Path

from .errors import FatalLoadError
from .pipeline import BuildConfig, build
from .render.link import BuildMode
from .util.console import error
from .watch import POLL_INTERVAL, watch


def _default_mode() -> BuildMode:
    raw = os.getenv("PAGESMITH_MODE", BuildMode.REFERENCE.value)
    try:
        return BuildMode.parse(raw)
    except ValueError as e:
        raise SystemExit(f"Invalid PAGESMITH_MODE value: {e}")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="pagesmith",
        description="Assemble a single HTML page from a template, components, JSON data and CSS/JS assets.",
    )
    ap.add_argument("--src", default=os.getenv("PAGESMITH_SRC", "src"),
                    help="Source directory (default: env PAGESMITH_SRC or ./src)")
    ap.add_argument("--dist", default=os.getenv("PAGESMITH_DIST", "dist"),
                    help="Output directory (default: env PAGESMITH_DIST or ./dist)")
    ap.add_argument("--assets", default=os.getenv("PAGESMITH_ASSETS", "assets"),
                    help="Top-level assets directory copied to <dist>/assets (default: env PAGESMITH_ASSETS or ./assets)")
    ap.add_argument(
        "--optimize",
        "--inline",
        dest="inline",
        action="store_true",
        help="Inline CSS/JS into the page instead of linking to them (env PAGESMITH_MODE=inline)",
    )
    ap.add_argument("--watch", action="store_true", help="Rebuild whenever a file under --src changes")
    ap.add_argument("--poll-interval", type=float, default=POLL_INTERVAL,
                    help=f"Watch polling interval in seconds (default: {POLL_INTERVAL})")
    ap.add_argument("--debounce", type=float, default=0.0,
                    help="Collapse changes within this many seconds into one rebuild (default: 0, off)")

    args = ap.parse_args(argv)

    if args.poll_interval <= 0:
        raise SystemExit("--poll-interval must be > 0")
    if args.debounce < 0:
        raise SystemExit("--debounce must be >= 0")

    mode = BuildMode.INLINE if args.inline else _default_mode()
    config = BuildConfig.from_paths(args.src, args.dist, args.assets, mode=mode)

    try:
        build(config)
    except (FatalLoadError, OSError) as e:
        error(f"Build failed: {e}")
        return 2

    if args.watch:
        watch(
            Path(args.src),
            lambda: build(config),
            poll_interval=args.poll_interval,
            debounce=args.debounce,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
