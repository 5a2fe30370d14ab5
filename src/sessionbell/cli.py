"""
CLI — entry points for SessionBell.

Commands:
    sessionbell handle        — Dispatch host events read from stdin
    sessionbell watch         — Follow the host's event stream
    sessionbell test          — Fire a synthetic event of a given kind
    sessionbell config show   — Print the effective configuration
    sessionbell config init   — Write the default configuration file
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
import httpx
import yaml
from rich.console import Console

from sessionbell import __version__
from sessionbell.notifications.host import DEFAULT_HOST_URL

console = Console(stderr=True)

logger = logging.getLogger(__name__)

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config YAML file (default: ~/.sessionbell/config.yaml)",
)
_url_option = click.option(
    "--url",
    envvar="SESSIONBELL_HOST_URL",
    default=DEFAULT_HOST_URL,
    show_default=True,
    help="Host server base URL",
)
_project_option = click.option(
    "--project",
    envvar="SESSIONBELL_PROJECT",
    default=None,
    help="Project name shown in notification titles (default: current directory name)",
)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """SessionBell — notifications for coding-agent sessions."""
    setup_logging(verbose)


def _parse_events(text: str) -> list[object]:
    """Accept a single JSON document or one JSON document per line."""
    text = text.strip()
    if not text:
        return []
    try:
        return [json.loads(text)]
    except json.JSONDecodeError:
        pass
    return [json.loads(line) for line in text.splitlines() if line.strip()]


# ---------------------------------------------------------------------------
# Event handling
# ---------------------------------------------------------------------------


@main.command()
@_config_option
@_url_option
@_project_option
def handle(config_path, url, project):
    """Dispatch host events read from stdin (JSON, or JSON lines)."""
    from sessionbell.core import load_config
    from sessionbell.notifications.factory import build_classifier
    from sessionbell.notifications.host import HttpHostClient

    try:
        events = _parse_events(sys.stdin.read())
    except json.JSONDecodeError as exc:
        console.print(f"[red]Error: invalid JSON on stdin: {exc}[/red]")
        sys.exit(1)

    config = load_config(config_path)

    async def _run():
        host = HttpHostClient(url)
        await host.connect()
        classifier = build_classifier(config, host, project_name=project or Path.cwd().name)
        try:
            for raw in events:
                await classifier.handle(raw)
            await classifier.router.aclose()
        finally:
            await host.disconnect()

    asyncio.run(_run())


@main.command()
@_config_option
@_url_option
@_project_option
def watch(config_path, url, project):
    """Follow the host's event stream and dispatch each event."""
    from sessionbell.core import load_config
    from sessionbell.notifications.factory import build_classifier
    from sessionbell.notifications.host import HttpHostClient

    config = load_config(config_path)

    async def _run():
        host = HttpHostClient(url)
        await host.connect()
        classifier = build_classifier(config, host, project_name=project or Path.cwd().name)
        try:
            async for raw in host.events():
                await classifier.handle(raw)
        finally:
            await classifier.router.aclose()
            await host.disconnect()

    console.print(f"[green]>[/green] Watching {url}/event (Ctrl+C to stop)")
    try:
        asyncio.run(_run())
    except httpx.HTTPError as exc:
        console.print(f"[red]Error: lost connection to {url}: {exc}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        pass


_TEST_EVENTS = {
    "permission": {"type": "permission.asked", "properties": {}},
    "complete": {"type": "session.idle", "properties": {}},
    "error": {"type": "session.error", "properties": {}},
    "question": {"type": "tool.execute.before", "properties": {"tool": "question"}},
}


@main.command()
@click.argument("kind", type=click.Choice(["permission", "complete", "subagent_complete", "error", "question"]))
@_config_option
@_project_option
@click.option("--console", "use_console", is_flag=True, help="Print instead of showing a desktop notification")
def test(kind, config_path, project, use_console):
    """Fire a synthetic event of KIND through the full pipeline."""
    from sessionbell.core import load_config
    from sessionbell.notifications.events import EventKind
    from sessionbell.notifications.factory import build_classifier

    config = load_config(config_path)

    async def _run():
        classifier = build_classifier(
            config,
            None,
            project_name=project or Path.cwd().name,
            console=console if use_console else None,
        )
        if kind == EventKind.SUBAGENT_COMPLETE.value:
            # No host to ask about parents, so go straight to the router.
            await classifier.router.dispatch(EventKind.SUBAGENT_COMPLETE, classifier.project_name)
        else:
            await classifier.handle(_TEST_EVENTS[kind])
        await classifier.router.aclose()

    asyncio.run(_run())
    console.print(f"[green]>[/green] Sent test {kind} event.")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@main.group()
def config() -> None:
    """Inspect or create the configuration file."""
    pass


@config.command(name="show")
@_config_option
def config_show(config_path):
    """Print the effective configuration as YAML."""
    from sessionbell.core import load_config

    cfg = load_config(config_path)
    click.echo(yaml.safe_dump(cfg.model_dump(mode="json"), default_flow_style=False))


@config.command(name="init")
@_config_option
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def config_init(config_path, force):
    """Write the default configuration file."""
    from sessionbell.core import SESSIONBELL_CONFIG_FILE, save_config
    from sessionbell.notifications.config import NotifierConfig

    target = config_path or SESSIONBELL_CONFIG_FILE
    if target.exists() and not force:
        console.print(f"[red]Error: {target} already exists (use --force to overwrite)[/red]")
        sys.exit(1)
    written = save_config(NotifierConfig(), target)
    console.print(f"[green]>[/green] Config saved to {written}")


if __name__ == "__main__":
    main()
