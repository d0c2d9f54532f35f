"""
Tests for the compdb CLI: database resolution, filtering, and exit codes.
"""
import json
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest
from compdb.main import _build_parser, run


def _config(**values):
    settings = {"search_dirs": [".", "build"], "flags_driver": "clang++"}
    settings.update(values)
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: settings.get(key, default)
    return config


def _run(argv, config=None):
    display = MagicMock()
    with patch("sys.argv", ["compdb", *argv]):
        with patch("compdb.main.ConfigManager", return_value=config or _config()):
            with patch("compdb.main.display_database", display):
                run()
    return display


@pytest.fixture
def project(tmp_path):
    build = tmp_path / "build"
    build.mkdir()
    (build / "compile_commands.json").write_text(json.dumps([
        {"directory": str(build), "file": "../a.c", "command": "cc -c ../a.c"},
        {"directory": str(build), "file": "../b.c", "arguments": ["cc", "-c", "../b.c"]},
    ]))
    return tmp_path


class TestArgParser:

    def test_defaults(self):
        args = _build_parser().parse_args([])
        assert args.path == "."
        assert args.source is None
        assert not args.raw
        assert not args.watch

    def test_options(self):
        args = _build_parser().parse_args(["build", "--file", "a.c", "--raw", "--driver", "g++"])
        assert args.path == "build"
        assert args.source == "a.c"
        assert args.raw
        assert args.driver == "g++"


class TestRun:

    def test_directory_search(self, project):
        display = _run([str(project)])
        database = display.call_args.args[0]
        assert len(database) == 2
        assert display.call_args.kwargs["driver"] == "clang++"

    def test_explicit_file(self, project):
        display = _run([str(project / "build" / "compile_commands.json"), "--raw"])
        assert display.call_args.kwargs["raw"] is True

    def test_filter_by_source(self, project):
        display = _run([str(project), "--file", str(project / "b.c")])
        database = display.call_args.args[0]
        assert len(database) == 1
        assert str(database[0].file) == "../b.c"

    def test_driver_override(self, project):
        display = _run([str(project), "--driver", "g++"])
        assert display.call_args.kwargs["driver"] == "g++"

    def test_flags_file(self, tmp_path):
        (tmp_path / "compile_flags.txt").write_text("-Wall\n")
        display = _run([str(tmp_path)])
        database = display.call_args.args[0]
        assert list(database[0].arguments) == ["-Wall"]

    def test_no_database(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            _run([str(tmp_path)])
        assert exc_info.value.code == 1

    def test_nonexistent_path(self):
        with pytest.raises(SystemExit) as exc_info:
            _run(["/nonexistent/compile_commands.json"])
        assert exc_info.value.code == 1

    def test_decode_error(self, tmp_path):
        (tmp_path / "compile_commands.json").write_text('[{"directory": "/b", "file": 3}]')
        with pytest.raises(SystemExit) as exc_info:
            _run([str(tmp_path)])
        assert exc_info.value.code == 1

    def test_watch_starts_and_stops_watcher(self, project):
        watcher = MagicMock()
        with patch("compdb.main.DatabaseWatcher", return_value=watcher):
            with patch("compdb.main.time.sleep", side_effect=KeyboardInterrupt):
                _run([str(project), "--watch"])
        watcher.start_watching.assert_called_once()
        watcher.stop_watching.assert_called_once()

    def test_watch_reload_errors_reported_briefly(self, project, capsys):
        """A database that vanishes mid-rename or is half written prints one line, not a traceback."""
        watcher = MagicMock()
        with patch("compdb.main.DatabaseWatcher", return_value=watcher):
            with patch("compdb.main.time.sleep", side_effect=KeyboardInterrupt):
                _run([str(project), "--watch"])
        db_path, on_change = watcher.start_watching.call_args.args

        Path(db_path).unlink()
        on_change(db_path)
        assert f"Error: {db_path}:" in capsys.readouterr().out

        Path(db_path).write_text("")
        on_change(db_path)
        assert f"Error: {db_path}:" in capsys.readouterr().out
