"""Tests for sound file resolution and the player fallback cascade."""

from unittest.mock import AsyncMock, patch

import pytest

from sessionbell.notifications.events import EventKind
from sessionbell.notifications.sound import SOUNDS_DIR, SoundPlayer, player_commands


class TestResolvePath:
    def test_custom_path_wins(self, temp_dir):
        custom = temp_dir / "mine.wav"
        custom.write_bytes(b"RIFF")
        (temp_dir / "complete.wav").write_bytes(b"RIFF")
        player = SoundPlayer(system="Linux", sounds_dir=temp_dir)
        assert player.resolve_path(EventKind.COMPLETE, str(custom)) == custom

    def test_missing_custom_falls_back_to_bundled(self, temp_dir):
        bundled = temp_dir / "error.wav"
        bundled.write_bytes(b"RIFF")
        player = SoundPlayer(system="Linux", sounds_dir=temp_dir)
        assert player.resolve_path(EventKind.ERROR, str(temp_dir / "gone.wav")) == bundled

    def test_nothing_found(self, temp_dir):
        player = SoundPlayer(system="Linux", sounds_dir=temp_dir)
        assert player.resolve_path(EventKind.QUESTION) is None


class TestPlayerCommands:
    def test_linux_order(self):
        names = [argv[0] for argv in player_commands("Linux", "/s.wav")]
        assert names == ["paplay", "aplay", "mpv", "ffplay"]

    def test_macos(self):
        assert player_commands("Darwin", "/s.wav") == [["afplay", "/s.wav"]]

    def test_windows(self):
        (argv,) = player_commands("Windows", "C:/s.wav")
        assert argv[0] == "powershell"
        assert argv[-1] == "C:/s.wav"

    def test_unknown_platform(self):
        assert player_commands("Plan9", "/s.wav") == []


class TestPlay:
    @pytest.mark.asyncio
    async def test_stops_at_first_success(self, temp_dir):
        (temp_dir / "complete.wav").write_bytes(b"RIFF")
        run = AsyncMock(side_effect=[FileNotFoundError("paplay"), 1, 0, 0])
        with patch("sessionbell.notifications.sound.run_quiet", new=run):
            await SoundPlayer(system="Linux", sounds_dir=temp_dir).play(EventKind.COMPLETE)

        assert [c.args[0] for c in run.await_args_list] == ["paplay", "aplay", "mpv"]

    @pytest.mark.asyncio
    async def test_all_players_fail_silently(self, temp_dir):
        (temp_dir / "complete.wav").write_bytes(b"RIFF")
        run = AsyncMock(side_effect=FileNotFoundError("missing"))
        with patch("sessionbell.notifications.sound.run_quiet", new=run):
            await SoundPlayer(system="Linux", sounds_dir=temp_dir).play(EventKind.COMPLETE)
        assert run.await_count == 4

    @pytest.mark.asyncio
    async def test_no_file_no_player(self, temp_dir):
        run = AsyncMock(return_value=0)
        with patch("sessionbell.notifications.sound.run_quiet", new=run):
            await SoundPlayer(system="Linux", sounds_dir=temp_dir).play(EventKind.COMPLETE)
        run.assert_not_awaited()


class TestBundledSounds:
    def test_every_kind_has_a_bundled_wav(self):
        for kind in EventKind:
            path = SOUNDS_DIR / f"{kind.value}.wav"
            assert path.is_file(), path
            header = path.read_bytes()[:12]
            assert header[:4] == b"RIFF" and header[8:12] == b"WAVE"

    @pytest.mark.asyncio
    async def test_default_config_plays_bundled_sound(self):
        run = AsyncMock(return_value=0)
        with patch("sessionbell.notifications.sound.run_quiet", new=run):
            await SoundPlayer(system="Linux").play(EventKind.COMPLETE)

        run.assert_awaited_once_with("paplay", str(SOUNDS_DIR / "complete.wav"))
