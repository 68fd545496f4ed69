"""One-command CI gate: compileall, ruff (when installed), unittest, smoke build.

Steps run in order and the gate stops at the first failing step.
"""

from __future__ import annotations

import argparse
import os
import shutil
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

TAG = "[pagesmith-ci]"


@dataclass(frozen=True)
class Step:
    label: str
    cmd: Sequence[str]


@dataclass(frozen=True)
class StepResult:
    step: Step
    returncode: int
    output: str
    elapsed_ms: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _repo_root() -> Path:
    # <repo>/pagesmith/tools/ci.py
    return Path(__file__).resolve().parents[2]


def _elapsed(ms: int) -> str:
    return f"{ms}ms" if ms < 1000 else f"{ms / 1000.0:.2f}s"


def run_step(step: Step, *, cwd: Path, env: dict[str, str]) -> StepResult:
    t0 = time.monotonic()
    p = subprocess.run(list(step.cmd), cwd=str(cwd), env=env, capture_output=True, text=True)
    output = "\n".join(s for s in ((p.stdout or "").strip(), (p.stderr or "").strip()) if s)
    return StepResult(step, p.returncode, output, int((time.monotonic() - t0) * 1000))


def report(result: StepResult) -> None:
    status = "OK" if result.ok else "FAIL"
    print(f"{TAG} {status}: {result.step.label} ({_elapsed(result.elapsed_ms)})")
    if result.output:
        print(result.output)


def build_steps(ns: argparse.Namespace, repo: Path) -> List[Step]:
    py = sys.executable
    steps: List[Step] = []

    if not ns.skip_compileall:
        steps.append(Step("compileall", [py, "-m", "compileall", "-q", str(repo / "pagesmith")]))

    if not ns.skip_lint:
        if shutil.which("ruff"):
            steps.append(Step("ruff check", ["ruff", "check", "."]))
            if ns.format:
                steps.append(Step("ruff format --check", ["ruff", "format", "--check", "."]))
        else:
            print(f"{TAG} WARN: ruff not found; skipping lint")

    if not ns.skip_tests:
        steps.append(Step("unittest", [py, "-m", "unittest", "discover", "-s", "tests"]))

    if not ns.skip_smoke:
        smoke = [py, "-m", "pagesmith.tools.smoke_build"]
        if ns.strict:
            smoke.append("--strict")
        steps.append(Step("smoke", smoke))

    return steps


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="pagesmith-ci", description="One-command CI gate.")
    ap.add_argument("--strict", action="store_true", help="Run the smoke build with strict invariants.")
    ap.add_argument("--skip-compileall", action="store_true", help="Skip python -m compileall.")
    ap.add_argument("--skip-lint", action="store_true", help="Skip ruff checks (if installed).")
    ap.add_argument("--skip-tests", action="store_true", help="Skip unit/contract tests.")
    ap.add_argument("--skip-smoke", action="store_true", help="Skip the synthetic smoke build.")
    ap.add_argument("--format", action="store_true", help="Also run 'ruff format --check' (only if ruff is installed).")
    ns = ap.parse_args(argv)

    repo = _repo_root()
    env = os.environ.copy()
    env["PYTHONPATH"] = str(repo)
    env.pop("PAGESMITH_OBS_LOG", None)

    t0 = time.monotonic()
    failed: Optional[StepResult] = None
    for step in build_steps(ns, repo):
        result = run_step(step, cwd=repo, env=env)
        report(result)
        if not result.ok:
            failed = result
            break

    total = _elapsed(int((time.monotonic() - t0) * 1000))
    if failed is not None:
        print(f"{TAG} RESULT: FAIL at {failed.step.label} ({total})")
        return 2
    print(f"{TAG} RESULT: OK ({total})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
