from __future__ import annotations

import io
import os
import tempfile
import threading
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest.mock import patch

from pagesmith.util.fs import snapshot_tree
from pagesmith.watch import ADDED, DELETED, MODIFIED, Change, diff_snapshots, iter_changes, spawn_rebuild


def _bump(p: Path, text: str) -> None:
    p.write_text(text, encoding="utf-8")
    st = p.stat()
    # Force a visible mtime change even on coarse-grained filesystems.
    os.utime(p, (st.st_atime, st.st_mtime + 5))


class TestDiffSnapshotsContract(unittest.TestCase):
    def test_added_modified_deleted(self) -> None:
        root = Path("/r")
        old = {"a.html": 1.0, "b.json": 1.0}
        new = {"a.html": 2.0, "c.css": 1.0}
        changes = diff_snapshots(root, old, new)
        self.assertEqual(
            changes,
            [Change(root / "a.html", MODIFIED), Change(root / "c.css", ADDED), Change(root / "b.json", DELETED)],
        )

    def test_no_changes(self) -> None:
        self.assertEqual(diff_snapshots(Path("/r"), {"a": 1.0}, {"a": 1.0}), [])


class TestIterChangesContract(unittest.TestCase):
    def test_yields_batches_for_edits_made_between_polls(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            page = root / "templates" / "page.html"
            page.parent.mkdir()
            page.write_text("v1", encoding="utf-8")

            edits = [
                lambda: _bump(page, "v2"),
                lambda: (root / "components").mkdir() or _bump(root / "components" / "x.html", "x"),
            ]

            def fake_sleep(_: float) -> None:
                if edits:
                    edits.pop(0)()

            it = iter_changes(root, poll_interval=0, sleep=fake_sleep)
            first = next(it)
            second = next(it)

            self.assertEqual(first, [Change(page, MODIFIED)])
            self.assertEqual(second, [Change(root / "components" / "x.html", ADDED)])

    def test_initial_state_is_ignored_and_stop_ends_iteration(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "a.html").write_text("a", encoding="utf-8")
            stop = threading.Event()
            polls = []

            def fake_sleep(_: float) -> None:
                polls.append(1)
                if len(polls) >= 3:
                    stop.set()

            self.assertEqual(list(iter_changes(root, poll_interval=0, sleep=fake_sleep, stop=stop)), [])
            self.assertEqual(len(polls), 3)

    def test_debounce_collapses_burst(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            a = root / "a.html"
            b = root / "b.html"
            a.write_text("a", encoding="utf-8")
            b.write_text("b", encoding="utf-8")
            edits = [lambda: _bump(a, "a2"), lambda: _bump(b, "b2")]

            def fake_sleep(_: float) -> None:
                if edits:
                    edits.pop(0)()

            # debounce is tiny, but both edits land on consecutive polls before the
            # first quiet poll, so they arrive as one batch.
            batch = next(iter_changes(root, poll_interval=0, debounce=1e-9, sleep=fake_sleep))
            self.assertEqual(sorted(c.path.name for c in batch), ["a.html", "b.html"])


class TestTreeWalkRaceContract(unittest.TestCase):
    def test_directory_removed_during_walk_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "keep.html").write_text("k", encoding="utf-8")
            (root / "sub").mkdir()
            (root / "sub" / "tmp.html").write_text("t", encoding="utf-8")
            real_listdir = os.listdir

            def listdir(path):
                if Path(path) == root / "sub":
                    raise FileNotFoundError(2, "No such file or directory", str(path))
                return real_listdir(path)

            with patch("pagesmith.util.fs.os.listdir", side_effect=listdir):
                self.assertEqual(list(snapshot_tree(root)), ["keep.html"])

    def test_watch_survives_directory_deleted_between_polls(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "a.html").write_text("a", encoding="utf-8")
            (root / "editor-tmp").mkdir()
            (root / "editor-tmp" / "swap").write_text("s", encoding="utf-8")
            real_listdir = os.listdir
            state = {"vanish": False}

            def listdir(path):
                # The directory is still reported by its parent but gone when listed.
                if state["vanish"] and Path(path) == root / "editor-tmp":
                    raise FileNotFoundError(2, "No such file or directory", str(path))
                return real_listdir(path)

            def fake_sleep(_: float) -> None:
                state["vanish"] = True

            with patch("pagesmith.util.fs.os.listdir", side_effect=listdir):
                batch = next(iter_changes(root, poll_interval=0, sleep=fake_sleep))
            self.assertEqual(batch, [Change(root / "editor-tmp" / "swap", DELETED)])


class TestSpawnRebuildContract(unittest.TestCase):
    def test_failure_is_logged_not_raised(self) -> None:
        def rebuild() -> None:
            raise RuntimeError("bad data")

        err = io.StringIO()
        with redirect_stderr(err):
            t = spawn_rebuild(rebuild, [])
            t.join(5)
        self.assertFalse(t.is_alive())
        self.assertIn("Rebuild failed: bad data", err.getvalue())

    def test_runs_rebuild_on_daemon_thread(self) -> None:
        ran = threading.Event()
        t = spawn_rebuild(ran.set, [])
        t.join(5)
        self.assertTrue(t.daemon)
        self.assertTrue(ran.is_set())


if __name__ == "__main__":
    unittest.main(verbosity=2)
