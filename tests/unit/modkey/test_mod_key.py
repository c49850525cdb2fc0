"""Modification key equality, change detection, and unusable-key guards."""

from __future__ import annotations

import os
import tempfile
import time
import unittest
from pathlib import Path
from unittest import mock

from lazyfs import ErrorKind, ModKeyUnusableError, RealFileSystem, compute_mod_key, error_kind
from lazyfs.limiter import UnboundedOpenFileLimiter

_NS = 1_000_000_000
_OLD_NS = 1_600_000_000 * _NS


def _age(path: Path, mtime_ns: int = _OLD_NS) -> None:
    os.utime(path, ns=(mtime_ns, mtime_ns))


class ModKeyTests(unittest.TestCase):
    def test_unchanged_file_yields_equal_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a.js"
            target.write_text("let a = 1;\n", encoding="utf-8")
            _age(target)
            fs = RealFileSystem(UnboundedOpenFileLimiter())

            first, first_error = fs.mod_key(target)
            second, second_error = fs.mod_key(target)

            self.assertIsNone(first_error)
            self.assertIsNone(second_error)
            self.assertEqual(first, second)
            self.assertEqual(hash(first), hash(second))

    def test_content_change_yields_different_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a.js"
            target.write_text("let a = 1;\n", encoding="utf-8")
            _age(target)
            fs = RealFileSystem(UnboundedOpenFileLimiter())

            before, _ = fs.mod_key(target)
            target.write_text("let a = 12345;\n", encoding="utf-8")
            _age(target, _OLD_NS + 5 * _NS)
            after, error = fs.mod_key(target)

            self.assertIsNone(error)
            self.assertNotEqual(before, after)

    def test_mtime_change_alone_yields_different_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a.js"
            target.write_text("same\n", encoding="utf-8")
            _age(target)

            before, _ = compute_mod_key(target)
            _age(target, _OLD_NS + 1)
            after, _ = compute_mod_key(target)

            self.assertIsNotNone(before)
            self.assertNotEqual(before, after)
            self.assertEqual(before.size, after.size)

    def test_recently_modified_file_is_unusable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "fresh.js"
            target.write_text("new\n", encoding="utf-8")

            key, error = compute_mod_key(target, now_ns=time.time_ns())

            self.assertIsNone(key)
            self.assertIsInstance(error, ModKeyUnusableError)
            self.assertIs(error_kind(error), ErrorKind.OTHER)

    def test_key_becomes_usable_once_safety_gap_passes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a.js"
            target.write_text("x\n", encoding="utf-8")
            mtime_ns = os.stat(target).st_mtime_ns

            early, early_error = compute_mod_key(target, now_ns=mtime_ns + 2 * _NS)
            late, late_error = compute_mod_key(target, now_ns=mtime_ns + 3 * _NS)

            self.assertIsNone(early)
            self.assertIsInstance(early_error, ModKeyUnusableError)
            self.assertIsNone(late_error)
            self.assertEqual(late.mtime_ns, mtime_ns)

    def test_zero_safety_gap_disables_recency_check(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "fresh.js"
            target.write_text("new\n", encoding="utf-8")
            fs = RealFileSystem(UnboundedOpenFileLimiter(), mod_key_safety_gap_seconds=0)

            key, error = fs.mod_key(target)

            self.assertIsNone(error)
            self.assertEqual(key.size, 4)

    def test_zero_mtime_is_unusable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "epoch.js"
            target.write_text("x", encoding="utf-8")
            os.utime(target, ns=(0, 0))

            key, error = compute_mod_key(target, safety_gap_seconds=0)

            self.assertIsNone(key)
            self.assertIsInstance(error, ModKeyUnusableError)

    def test_missing_file_surfaces_lookup_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            key, error = RealFileSystem(UnboundedOpenFileLimiter()).mod_key(os.path.join(tmp, "missing.js"))

            self.assertIsNone(key)
            self.assertIs(error_kind(error), ErrorKind.NOT_FOUND)

    def test_key_is_recomputed_on_every_call(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a.js"
            target.write_text("x", encoding="utf-8")
            _age(target)
            fs = RealFileSystem(UnboundedOpenFileLimiter())

            with mock.patch("lazyfs.modkey.os.stat", wraps=os.stat) as stat:
                fs.mod_key(target)
                fs.mod_key(target)

            self.assertEqual(stat.call_count, 2)


if __name__ == "__main__":
    unittest.main()
