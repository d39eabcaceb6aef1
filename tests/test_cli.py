"""CLI tests — parser, serve, stats, draw, logging setup."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def data_file(tmp_path):
    today = datetime.now().replace(hour=12, minute=0, second=0, microsecond=0)
    snapshot = {
        "journal": [
            {"title": "Entry", "content": "c", "difficulty": "beginner",
             "source": "team", "tags": ["python"], "created_at": today.isoformat()},
        ],
        "bugs": [
            {"title": "Bug", "description": "d", "status": "resolved",
             "priority": "low", "tags": ["python", "sql"]},
        ],
        "snippets": [
            {"title": "Snip", "description": "d", "code": "x",
             "language": "sql", "category": "api", "tags": ["sql"]},
        ],
    }
    path = tmp_path / "data.json"
    path.write_text(json.dumps(snapshot), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class TestParser:
    def test_parser_has_serve(self):
        from cli.main import build_parser
        parser = build_parser()
        args = parser.parse_args(["serve", "--host", "localhost", "--port", "9000"])
        assert args.command == "serve"
        assert args.host == "localhost"
        assert args.port == 9000

    def test_draw_defaults(self):
        from cli.main import build_parser
        args = build_parser().parse_args(["draw", "--output", "x.png"])
        assert args.style == "spiral"
        assert args.complexity == 5
        assert args.seed is None
        assert (args.width, args.height) == (800, 400)

    def test_draw_rejects_bad_complexity(self):
        from cli.main import build_parser
        with pytest.raises(SystemExit):
            build_parser().parse_args(["draw", "--output", "x.png", "--complexity", "11"])

    def test_draw_rejects_unknown_style(self):
        from cli.main import build_parser
        with pytest.raises(SystemExit):
            build_parser().parse_args(["draw", "--output", "x.png", "--style", "zigzag"])

    def test_no_command_prints_help(self, capsys):
        from cli.main import main
        assert main([]) == 0
        assert "devjournal" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class TestServe:
    def test_serve_calls_uvicorn(self):
        from cli.main import cmd_serve

        mock_uvicorn = MagicMock()
        args = argparse.Namespace(host="localhost", port=9999, data="")

        with patch.dict("sys.modules", {"uvicorn": mock_uvicorn}):
            result = cmd_serve(args)
            assert result == 0
            mock_uvicorn.run.assert_called_once()
            _, kwargs = mock_uvicorn.run.call_args
            assert kwargs == {"host": "localhost", "port": 9999}

    def test_serve_seeds_storage(self, data_file):
        from cli.main import cmd_serve

        mock_uvicorn = MagicMock()
        args = argparse.Namespace(host="localhost", port=9999, data=str(data_file))

        with patch.dict("sys.modules", {"uvicorn": mock_uvicorn}):
            assert cmd_serve(args) == 0
            app = mock_uvicorn.run.call_args[0][0]
            assert len(app.state.storage.journal_entries) == 1

    def test_serve_missing_data(self, tmp_path, capsys):
        from cli.main import cmd_serve
        args = argparse.Namespace(host="h", port=1, data=str(tmp_path / "nope.json"))
        with patch.dict("sys.modules", {"uvicorn": MagicMock()}):
            assert cmd_serve(args) == 1
        assert "not found" in capsys.readouterr().err


class TestStats:
    def test_prints_report(self, data_file, capsys):
        from cli.main import main
        assert main(["stats", "--data", str(data_file), "--days", "3"]) == 0
        out = capsys.readouterr().out
        assert "Insights:       1" in out
        assert "Bugs resolved:  1" in out
        assert "Streak:         1 day(s)" in out
        assert "Last 3 Days:" in out
        assert "python: 2 (50%)" in out

    def test_bad_days(self, data_file, capsys):
        from cli.main import main
        assert main(["stats", "--data", str(data_file), "--days", "0"]) == 1
        assert "--days" in capsys.readouterr().err

    def test_invalid_snapshot(self, tmp_path, capsys):
        from cli.main import main
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"bugs": "nope"}), encoding="utf-8")
        assert main(["stats", "--data", str(path)]) == 1
        assert "must be a list" in capsys.readouterr().err


class TestDraw:
    def test_writes_png(self, data_file, tmp_path, capsys):
        from cli.main import main
        output = tmp_path / "journey.png"
        code = main([
            "draw", "--data", str(data_file), "--output", str(output),
            "--seed", "3", "--width", "320", "--height", "240",
        ])
        assert code == 0
        with Image.open(output) as img:
            assert img.size == (320, 240)
        out = capsys.readouterr().out
        assert "Segments:  9" in out
        assert "Peaks:     2" in out

    def test_tree_without_data(self, tmp_path):
        from cli.main import main
        output = tmp_path / "tree.png"
        assert main(["draw", "--style", "tree", "--output", str(output)]) == 0
        assert output.exists()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:
    def test_configure_sets_level_once(self):
        from devjournal.log import configure_logging
        logger = configure_logging("debug")
        handlers = len(logger.handlers)
        configure_logging("warning")
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == handlers

    def test_unknown_level_falls_back_to_info(self):
        from devjournal.log import configure_logging
        assert configure_logging("chatty").level == logging.INFO

    def test_handler_is_the_module_console_handler(self):
        from devjournal import log
        logger = log.configure_logging("info")
        assert log._console_handler in logger.handlers
        assert sum(h is log._console_handler for h in logger.handlers) == 1
