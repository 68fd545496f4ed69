# pagesmith/pipeline.py
from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union

from .manifest import discover
from .render.link import BuildMode, link, read_source_asset
from .render.resolve import resolve_with_report
from .render.template import read_template
from .stores import load_data, load_fragments
from .util.console import info, obs, warn
from .util.fs import atomic_write_text, copy_tree, ensure_dir

DirPath = Union[str, Path]


@dataclass(frozen=True)
class BuildConfig:
    src_dir: Path = Path("src")
    dist_dir: Path = Path("dist")
    assets_dir: Path = Path("assets")
    mode: BuildMode = BuildMode.REFERENCE

    @classmethod
    def from_paths(
        cls,
        src: DirPath = "src",
        dist: DirPath = "dist",
        assets: DirPath = "assets",
        *,
        mode: BuildMode = BuildMode.REFERENCE,
    ) -> "BuildConfig":
        return cls(src_dir=Path(src), dist_dir=Path(dist), assets_dir=Path(assets), mode=mode)

    @property
    def data_dir(self) -> Path:
        return self.src_dir / "data"

    @property
    def components_dir(self) -> Path:
        return self.src_dir / "components"

    @property
    def template_path(self) -> Path:
        return self.src_dir / "templates" / "page.html"

    @property
    def styles_dir(self) -> Path:
        return self.src_dir / "styles"

    @property
    def scripts_dir(self) -> Path:
        return self.src_dir / "scripts"

    @property
    def out_html(self) -> Path:
        return self.dist_dir / "index.html"


@dataclass(frozen=True)
class BuildResult:
    out_path: Path
    mode: BuildMode
    data_keys: Tuple[str, ...] = ()
    fragment_names: Tuple[str, ...] = ()
    styles: Tuple[str, ...] = ()
    scripts: Tuple[str, ...] = ()
    used_fallback_template: bool = False
    unresolved: Tuple[str, ...] = ()
    copied_files: int = 0
    elapsed_ms: int = field(default=0, compare=False)


def build(config: BuildConfig) -> BuildResult:
    """Run one full build. Raises FatalLoadError on unreadable/malformed inputs."""
    t0 = time.monotonic()
    info(f"Building {config.src_dir} -> {config.dist_dir} (mode={config.mode.value})")

    ensure_dir(config.dist_dir)

    info("Loading data files...")
    data = load_data(config.data_dir)

    info("Loading components...")
    fragments = load_fragments(config.components_dir)

    info("Building HTML...")
    template, used_fallback = read_template(config.template_path)
    if used_fallback:
        info(f"No template at {config.template_path}; using the built-in default")

    html, unresolved = resolve_with_report(template, data, fragments)

    manifest = discover(config.styles_dir, config.scripts_dir)
    html = link(
        html,
        config.mode,
        manifest.styles,
        manifest.scripts,
        read_source_asset(config.styles_dir, config.scripts_dir),
    )
    atomic_write_text(config.out_html, html)

    if unresolved:
        warn(f"{len(unresolved)} unresolved placeholder(s) left in output: " + ", ".join(unresolved))

    info("Processing assets...")
    copied = copy_tree(config.styles_dir, config.dist_dir / "styles")
    copied += copy_tree(config.scripts_dir, config.dist_dir / "scripts")
    copied += copy_tree(config.assets_dir, config.dist_dir / "assets")

    elapsed_ms = int((time.monotonic() - t0) * 1000)
    info(f"Build completed: {os.path.abspath(config.out_html)}")
    obs(
        "pipeline",
        "build.ok",
        ms=elapsed_ms,
        mode=config.mode.value,
        data=len(data),
        fragments=len(fragments),
        styles=len(manifest.styles),
        scripts=len(manifest.scripts),
        copied=copied,
        unresolved=len(unresolved),
    )
    return BuildResult(
        out_path=config.out_html,
        mode=config.mode,
        data_keys=tuple(data),
        fragment_names=tuple(fragments),
        styles=manifest.styles,
        scripts=manifest.scripts,
        used_fallback_template=used_fallback,
        unresolved=tuple(unresolved),
        copied_files=copied,
        elapsed_ms=elapsed_ms,
    )
