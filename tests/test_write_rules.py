"""Tests for per-file write rules."""

import tempfile
from pathlib import Path

from wilderworkspace.core.write_rules import ShouldOverwriteWriteRule, atomic_copy


class TestShouldOverwriteWriteRule:
    """Tests for ShouldOverwriteWriteRule."""

    def test_copies_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "src.txt"
            dest = Path(tmpdir) / "dest.txt"
            src.write_text("new")

            assert ShouldOverwriteWriteRule(False).write(src, dest) is None
            assert dest.read_text() == "new"

    def test_skips_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "src.txt"
            dest = Path(tmpdir) / "dest.txt"
            src.write_text("new")
            dest.write_text("old")

            rule = ShouldOverwriteWriteRule(False)

            assert rule.should_write(dest) is False
            assert rule.write(src, dest) is None
            assert dest.read_text() == "old"

    def test_overwrites_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "src.txt"
            dest = Path(tmpdir) / "dest.txt"
            src.write_text("new")
            dest.write_text("old")

            assert ShouldOverwriteWriteRule(True).write(src, dest) is None
            assert dest.read_text() == "new"

    def test_returns_failure_instead_of_raising(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "missing.txt"
            dest = Path(tmpdir) / "dest.txt"

            error = ShouldOverwriteWriteRule(True).write(src, dest)

            assert isinstance(error, FileNotFoundError)
            assert not dest.exists()
            assert list(Path(tmpdir).iterdir()) == []

    def test_pattern_matching(self) -> None:
        rule = ShouldOverwriteWriteRule(True, r".*\.jar")

        assert rule.matches("lib/gdx.jar")
        assert rule.matches(Path("wildermyth.jar"))
        assert not rule.matches("wildermyth.jar.bak")

    def test_default_pattern_matches_everything(self) -> None:
        assert ShouldOverwriteWriteRule(False).matches("any/thing.txt")


class TestAtomicCopy:
    """Tests for atomic_copy."""

    def test_binary_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "src.bin"
            dest = Path(tmpdir) / "dest.bin"
            data = bytes(range(256)) * 64
            src.write_bytes(data)

            atomic_copy(src, dest)

            assert dest.read_bytes() == data
            assert sorted(p.name for p in Path(tmpdir).iterdir()) == ["dest.bin", "src.bin"]
