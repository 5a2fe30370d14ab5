"""
Console sink — Rich terminal output for notifications.

Used on platforms without a native backend and by ``sessionbell test
--console`` to preview what would be shown.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from sessionbell.notifications.channel import NotificationSink


class ConsoleSink(NotificationSink):
    """Rich terminal output sink."""

    name: str = "console"

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    async def notify(self, title: str, message: str, timeout: float) -> None:
        self._console.print(f"\n[bold blue]\U0001f514 {escape(title)}[/bold blue]")
        if message:
            self._console.print(f"  {escape(message)}")
