#!/usr/bin/env python3
"""
pagesmith smoke build

Goals:
  - Lay out a tiny synthetic site (data, components, template, styles,
    scripts, assets) and run the full pipeline on it in both build modes.
  - Run basic invariants so refactors fail fast (avoid blank page surprises).

Usage:
  PYTHONPATH=/path/to/repo python -m pagesmith.tools.smoke_build --out build/smoke
"""

from __future__ import annotations

import sys
sys.dont_write_bytecode = True
import argparse
import json
import tempfile
from pathlib import Path
from typing import Dict

from pagesmith.errors import FatalLoadError
from pagesmith.pipeline import BuildConfig, build
from pagesmith.render.link import BuildMode

SMOKE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{site.name}}</title>
{{CSS_LINKS}}
</head>
<body>
{{component:header}}
<p>{{site.tagline}}</p>
{{component:footer}}
{{JS_SCRIPTS}}
</body>
</html>
"""

SMOKE_FILES: Dict[str, str] = {
    "src/data/site.json": json.dumps({"name": "SMOKE: Acme", "tagline": "Built by pagesmith"}),
    "src/components/header.html": "<header>SMOKE: header</header>",
    "src/components/footer.html": "<footer>{{site.name}}</footer>",
    "src/templates/page.html": SMOKE_TEMPLATE,
    "src/styles/a.css": "body{color:red}",
    "src/styles/nested/deep.css": "h2{margin:0}",
    "src/scripts/main.js": "console.log('smoke');",
    "assets/img/logo.svg": "<svg xmlns=\"http://www.w3.org/2000/svg\"/>",
}


def _die(msg: str, rc: int = 2) -> int:
    print(f"[pagesmith-smoke-build] ERROR: {msg}", file=sys.stderr)
    return rc


def write_smoke_site(root: Path) -> None:
    for rel, text in SMOKE_FILES.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")


def _basic_html_checks(html: str, mode: BuildMode, *, strict: bool = False) -> None:
    for marker in ("{{CSS_LINKS}}", "{{JS_SCRIPTS}}", "{{component:header}}"):
        if marker in html:
            raise RuntimeError(f"Template marker {marker} still present in generated HTML.")
    # Exactly once: inside the footer fragment, which is not re-scanned.
    n = html.count("{{site.name}}")
    if n != 1:
        raise RuntimeError(f"Expected {{{{site.name}}}} once (from the footer fragment), found {n}.")

    if "<title>SMOKE: Acme</title>" not in html:
        raise RuntimeError("Expected data substitution missing from HTML output.")
    if "<header>SMOKE: header</header>" not in html:
        raise RuntimeError("Expected component substitution missing from HTML output.")

    if mode is BuildMode.REFERENCE:
        if '<link rel="stylesheet" href="./styles/a.css">' not in html:
            raise RuntimeError("Reference mode: stylesheet link missing.")
        if '<script src="./scripts/main.js"></script>' not in html:
            raise RuntimeError("Reference mode: script tag missing.")
        if "<style>" in html:
            raise RuntimeError("Reference mode: unexpected <style> block.")
    else:
        if html.count("<style>") != 1 or "body{color:red}" not in html:
            raise RuntimeError("Inline mode: expected exactly one <style> block with the stylesheet.")
        if "console.log('smoke');" not in html:
            raise RuntimeError("Inline mode: script contents missing.")
        if 'rel="stylesheet"' in html:
            raise RuntimeError("Inline mode: unexpected stylesheet link.")

    if not strict:
        return

    if "<!doctype html>" not in html.lower():
        raise RuntimeError("Strict: missing <!DOCTYPE html>.")
    # Nested styles are copied but never listed (manifest is flat).
    if "deep.css" in html or "h2{margin:0}" in html:
        raise RuntimeError("Strict: nested stylesheet leaked into the page.")


def run_smoke(root: Path, mode: BuildMode, *, strict: bool = False) -> Path:
    dist = root / "dist" / mode.value
    config = BuildConfig.from_paths(root / "src", dist, root / "assets", mode=mode)
    result = build(config)
    html = result.out_path.read_text(encoding="utf-8")
    _basic_html_checks(html, mode, strict=strict)
    for rel in ("styles/a.css", "styles/nested/deep.css", "scripts/main.js", "assets/img/logo.svg"):
        if not (dist / rel).is_file():
            raise RuntimeError(f"Copied asset missing from output: {rel}")
    return result.out_path


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="pagesmith-smoke-build")
    p.add_argument("--out", default=None, help="Directory to build the smoke site in (default: a temp dir)")
    p.add_argument(
        "--mode",
        choices=["reference", "inline", "both"],
        default="both",
        help="Build mode(s) to exercise (default: both)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Enable strict smoke gating (stronger HTML invariants).",
    )
    args = p.parse_args(argv)

    modes = [BuildMode.REFERENCE, BuildMode.INLINE] if args.mode == "both" else [BuildMode.parse(args.mode)]

    with tempfile.TemporaryDirectory(prefix="pagesmith-smoke-") as td:
        root = Path(args.out) if args.out else Path(td)
        write_smoke_site(root)
        for mode in modes:
            try:
                out = run_smoke(root, mode, strict=bool(args.strict))
            except (FatalLoadError, RuntimeError, OSError) as e:
                return _die(f"{mode.value}: {e}")
            print(f"[pagesmith] smoke html ({mode.value}): {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
