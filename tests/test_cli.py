"""CLI tests using click's test runner."""

import json
from unittest.mock import AsyncMock, patch

import yaml
from click.testing import CliRunner

from sessionbell import __version__
from sessionbell.cli import _parse_events, main
from sessionbell.notifications.events import EventKind


class TestParseEvents:
    def test_single_document(self):
        doc = json.dumps({"type": "session.idle", "properties": {"sessionID": "s1"}}, indent=2)
        assert _parse_events(doc) == [{"type": "session.idle", "properties": {"sessionID": "s1"}}]

    def test_json_lines(self):
        text = '{"type": "session.idle"}\n\n{"type": "session.error"}\n'
        assert [e["type"] for e in _parse_events(text)] == ["session.idle", "session.error"]

    def test_empty(self):
        assert _parse_events("  \n") == []


class TestCommands:
    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_init_and_show(self, temp_dir):
        path = temp_dir / "config.yaml"
        runner = CliRunner()

        result = runner.invoke(main, ["config", "init", "--config", str(path)])
        assert result.exit_code == 0
        assert path.exists()

        again = runner.invoke(main, ["config", "init", "--config", str(path)])
        assert again.exit_code == 1

        shown = runner.invoke(main, ["config", "show", "--config", str(path)])
        assert shown.exit_code == 0
        assert yaml.safe_load(shown.stdout)["title"] == "OpenCode"

    def test_handle_dispatches_each_event(self, temp_dir):
        handled = []

        async def fake_handle(self, raw):
            handled.append(raw["type"])
            return EventKind.ERROR

        events = '{"type": "session.error"}\n{"type": "permission.asked"}\n'
        with patch("sessionbell.notifications.classifier.EventClassifier.handle", new=fake_handle):
            result = CliRunner().invoke(
                main,
                ["handle", "--config", str(temp_dir / "none.yaml"), "--project", "webapp"],
                input=events,
            )

        assert result.exit_code == 0, result.output
        assert handled == ["session.error", "permission.asked"]

    def test_handle_rejects_invalid_json(self, temp_dir):
        result = CliRunner().invoke(
            main,
            ["handle", "--config", str(temp_dir / "none.yaml")],
            input="{not json",
        )
        assert result.exit_code == 1

    def test_test_command_uses_console(self, temp_dir):
        play = AsyncMock()
        with patch("sessionbell.notifications.sound.SoundPlayer.play", new=play):
            result = CliRunner().invoke(
                main,
                ["test", "error", "--console", "--project", "webapp", "--config", str(temp_dir / "none.yaml")],
            )

        assert result.exit_code == 0, result.output
        assert "Session encountered an error" in result.output
        play.assert_awaited_once()
