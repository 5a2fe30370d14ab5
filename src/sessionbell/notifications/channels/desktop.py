"""
Desktop sinks — native notification commands per platform.

Each sink shells out to the platform's own notifier and raises
``SinkError`` when it cannot be launched or exits non-zero.
"""

from __future__ import annotations

import subprocess

from sessionbell.notifications.channel import NotificationSink, SinkError
from sessionbell.notifications.process import run_quiet

APP_NAME = "SessionBell"

_WINDOWS_BALLOON = (
    "& { Add-Type -AssemblyName System.Windows.Forms; "
    "$n = New-Object System.Windows.Forms.NotifyIcon; "
    "$n.Icon = [System.Drawing.SystemIcons]::Information; "
    "$n.Visible = $true; "
    "$n.ShowBalloonTip([int]$args[2] * 1000, $args[0], $args[1], 'Info'); "
    "Start-Sleep -Seconds ([int]$args[2]); "
    "$n.Dispose() }"
)


async def _checked(*argv: str) -> None:
    try:
        code = await run_quiet(*argv)
    except OSError as exc:
        raise SinkError(f"{argv[0]} could not be launched: {exc}") from exc
    if code != 0:
        raise SinkError(f"{argv[0]} exited with code {code}")


class NotifySendSink(NotificationSink):
    """freedesktop notifications via notify-send."""

    name: str = "notify-send"

    async def notify(self, title: str, message: str, timeout: float) -> None:
        await _checked(
            "notify-send",
            "--app-name",
            APP_NAME,
            "--expire-time",
            str(int(timeout * 1000)),
            title,
            message,
        )


def _applescript_quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


class OsascriptSink(NotificationSink):
    """macOS Notification Center via AppleScript."""

    name: str = "osascript"

    async def notify(self, title: str, message: str, timeout: float) -> None:
        script = (
            f'display notification "{_applescript_quote(message)}" '
            f'with title "{_applescript_quote(title)}"'
        )
        await _checked("osascript", "-e", script)


class WindowsBalloonSink(NotificationSink):
    """Tray balloon via PowerShell.

    The script keeps the tray icon alive for the whole timeout, so it is
    launched detached and never awaited.
    """

    name: str = "powershell"

    def __init__(self) -> None:
        self._running: list[subprocess.Popen] = []

    async def notify(self, title: str, message: str, timeout: float) -> None:
        self._running = [proc for proc in self._running if proc.poll() is None]
        argv = [
            "powershell",
            "-NoProfile",
            "-Command",
            _WINDOWS_BALLOON,
            title,
            message,
            str(int(timeout)),
        ]
        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise SinkError(f"powershell could not be launched: {exc}") from exc
        self._running.append(proc)
