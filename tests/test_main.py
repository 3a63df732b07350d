"""Tests for the command line interface."""

import logging
import tempfile
from pathlib import Path

import pytest
from rich.console import Console

from wilderworkspace import main as cli
from wilderworkspace.main import main


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep long temporary paths on one line
    monkeypatch.setattr(cli, "console", Console(width=300))


def run(tmpdir: str, *args: str) -> int:
    return main([
        "--project-dir", str(Path(tmpdir) / "project"),
        "--user-config", str(Path(tmpdir) / "user" / "config.properties"),
        *args,
    ])


class TestSyncCommand:
    """Tests for `wilderworkspace sync`."""

    def test_sync_from_path(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            game = Path(tmpdir) / "game"
            (game / "logs").mkdir(parents=True)
            (game / "wildermyth.jar").write_text("jar")
            (game / "logs" / "log.txt").write_text("log")

            code = run(tmpdir, "sync", "--platform", str(game), "--patchline", "test 1")

            dest = Path(tmpdir) / "project" / "bin"
            assert code == 0
            assert (dest / "wildermyth.jar").read_text() == "jar"
            assert not (dest / "logs").exists()
            assert (dest / "patchline.txt").read_text().startswith("test 1 - [WilderWorkspace ")
            assert "Summary" in capsys.readouterr().out

    def test_sync_uses_project_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            game = Path(tmpdir) / "game"
            game.mkdir()
            (game / "a.txt").write_text("new")
            project = Path(tmpdir) / "project"
            project.mkdir()
            (project / "wilderworkspace.yaml").write_text(
                f"project:\n  name: mod\n  version: '3'\nplatform: '{game.as_posix()}'\n"
                "dest_dir: out-dir\noverwrite: true\n"
            )
            (project / "out-dir").mkdir()
            (project / "out-dir" / "a.txt").write_text("old")

            assert run(tmpdir, "sync") == 0

            assert (project / "out-dir" / "a.txt").read_text() == "new"
            assert (project / "out-dir" / "patchline.txt").read_text().startswith("mod 3 - ")

    def test_no_overwrite_beats_project_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            game = Path(tmpdir) / "game"
            game.mkdir()
            (game / "a.txt").write_text("new")
            project = Path(tmpdir) / "project"
            project.mkdir()
            (project / "wilderworkspace.yaml").write_text("overwrite: true\n")
            (project / "bin").mkdir()
            (project / "bin" / "a.txt").write_text("old")

            assert run(tmpdir, "sync", "--platform", str(game), "--no-overwrite") == 0

            assert (project / "bin" / "a.txt").read_text() == "old"

    def test_refresh_pattern(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            game = Path(tmpdir) / "game"
            game.mkdir()
            (game / "wildermyth.jar").write_text("new")
            (game / "a.txt").write_text("new")
            dest = Path(tmpdir) / "project" / "bin"
            dest.mkdir(parents=True)
            (dest / "wildermyth.jar").write_text("old")
            (dest / "a.txt").write_text("old")

            assert run(tmpdir, "sync", "--platform", str(game), "--refresh", r".*\.jar") == 0

            assert (dest / "wildermyth.jar").read_text() == "new"
            assert (dest / "a.txt").read_text() == "old"

    def test_invalid_refresh_pattern(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            game = Path(tmpdir) / "game"
            game.mkdir()

            assert run(tmpdir, "sync", "--platform", str(game), "--refresh", "[jar") == 1
            assert "Invalid --refresh pattern" in capsys.readouterr().out

    def test_non_utf8_project_config_fails(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            project = Path(tmpdir) / "project"
            project.mkdir()
            (project / "wilderworkspace.yaml").write_bytes("patchline: \u00e9t\u00e9\n".encode("latin-1"))

            assert run(tmpdir, "sync", "--platform", tmpdir) == 1
            assert "Configuration error" in capsys.readouterr().out

    def test_latin1_user_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            game = Path(tmpdir) / "Jeux \u00c9lan"
            game.mkdir()
            (game / "a.txt").write_text("a")
            user_config = Path(tmpdir) / "user" / "config.properties"
            user_config.parent.mkdir()
            user_config.write_bytes(f"platform={game}\n".encode("latin-1"))

            assert run(tmpdir, "sync") == 0
            assert (Path(tmpdir) / "project" / "bin" / "a.txt").read_text() == "a"

    def test_sync_missing_source_fails(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            missing = Path(tmpdir) / "no-such-game"

            code = run(tmpdir, "sync", "--platform", str(missing))

            assert code == 1
            assert "Failed to copy game files" in capsys.readouterr().out

    def test_sync_unknown_platform_location_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert run(tmpdir, "sync", "--platform", "itch") == 1
            assert not (Path(tmpdir) / "project" / "bin").exists()

    def test_creates_user_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            run(tmpdir, "config")

            user_config = Path(tmpdir) / "user" / "config.properties"
            assert user_config.read_text().strip() == "platform=steam"


class TestLogging:
    """Tests for log level selection."""

    @pytest.mark.parametrize(
        "verbosity, level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)],
    )
    def test_levels(self, verbosity: int, level: int) -> None:
        try:
            cli.configure_logging(verbosity)

            assert logging.getLogger().level == level
        finally:
            logging.getLogger().handlers.clear()


class TestOtherCommands:
    """Tests for the informational commands."""

    def test_resolve_literal_path(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert run(tmpdir, "resolve", tmpdir) == 0

            out = capsys.readouterr().out
            assert "custom path" in out
            assert "Directory exists" in out

    def test_resolve_unknown_location(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert run(tmpdir, "resolve", "gog") == 1

    def test_deps(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert run(tmpdir, "deps", "--placement", "runtime") == 0

            out = capsys.readouterr().out
            assert "fabricLoader" in out
            assert "guava" not in out

    def test_plugin_deps(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert run(tmpdir, "deps", "--plugin") == 0

            assert "commonsIo" in capsys.readouterr().out

    def test_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert run(tmpdir, "config") == 0

            out = capsys.readouterr().out
            assert "decomp" in out
            assert "project unspecified" in out

    def test_init_writes_templates_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            project = Path(tmpdir) / "project"

            assert run(tmpdir, "init") == 0
            assert (project / "wilderworkspace.yaml").exists()
            assert (project / ".gitignore").exists()

            (project / ".gitignore").write_text("mine")
            assert run(tmpdir, "init") == 0
            assert (project / ".gitignore").read_text() == "mine"

    def test_no_command(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert run(tmpdir) == 1
