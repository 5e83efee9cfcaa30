"""CLI: linka-harness watch, linka-harness wait"""

import asyncio
from typing import Optional

import click
from rich.console import Console

from linka_harness.errors import HarnessError, WaitTimeout
from linka_harness.models.envelope import Envelope
from linka_harness.predicates import action_is
from linka_harness.transport.websocket import Connection

console = Console()


def _settings(base_url: Optional[str]):
    from linka_harness.cli.main import _settings
    return _settings(base_url)


def _token(token: Optional[str]) -> str:
    from linka_harness.cli.main import _token
    return _token(token)


def _run(coro):
    from linka_harness.cli.main import _run
    return _run(coro)


def _describe(envelope: Envelope) -> str:
    if envelope.action is None:
        return f"[dim]{envelope.type}[/dim] {envelope.payload}"
    return f"[cyan]{envelope.type}[/cyan] [bold]{envelope.action}[/bold] {envelope.subject_id}"


def _dump(envelope: Envelope) -> str:
    return envelope.model_dump_json(by_alias=True, exclude_none=True)


@click.command("watch")
@click.option("--token", default=None, help="Bearer token (defaults to the saved one)")
@click.option("--base-url", default=None)
@click.option("--type", "event_type", default=None, help="Only show this envelope type")
@click.option("--json-output", "--json", is_flag=True)
def watch_cmd(token: Optional[str], base_url: Optional[str], event_type: Optional[str], json_output: bool):
    """Print notifications as they arrive (Ctrl+C to exit)."""

    async def _watch():
        settings = _settings(base_url)
        conn = Connection(settings.ws_url, _token(token), open_timeout=settings.open_timeout)
        queue: asyncio.Queue[Envelope] = asyncio.Queue()
        remove = conn.log.add_listener(queue.put_nowait)
        try:
            await conn.open()
            console.print(f"[dim]Connected to {settings.ws_url}[/dim]")
            while conn.connected or not queue.empty():
                try:
                    envelope = await asyncio.wait_for(queue.get(), timeout=1.0)
                except asyncio.TimeoutError:
                    continue
                if event_type and envelope.type != event_type:
                    continue
                if json_output:
                    click.echo(_dump(envelope))
                else:
                    console.print(_describe(envelope))
            console.print("[yellow]Connection closed by server.[/yellow]")
        finally:
            remove()
            await conn.close()

    try:
        _run(_watch())
    except KeyboardInterrupt:
        pass
    except HarnessError as e:
        console.print(f"[red]{e.code}: {e}[/red]")
        raise SystemExit(1)


@click.command("wait")
@click.argument("event_type")
@click.option("--action", default=None, help="created | updated | deleted")
@click.option("--timeout", default=10.0, type=float, show_default=True, help="Seconds")
@click.option("--token", default=None, help="Bearer token (defaults to the saved one)")
@click.option("--base-url", default=None)
@click.option("--json-output", "--json", is_flag=True)
def wait_cmd(
    event_type: str, action: Optional[str], timeout: float,
    token: Optional[str], base_url: Optional[str], json_output: bool,
):
    """Wait for one notification of EVENT_TYPE. Exits 1 on timeout."""

    async def _wait() -> Envelope:
        settings = _settings(base_url)
        async with Connection(settings.ws_url, _token(token), open_timeout=settings.open_timeout) as conn:
            return await conn.wait_for(event_type, action_is(action) if action else None, timeout)

    try:
        envelope = _run(_wait())
    except WaitTimeout as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise SystemExit(1)
    except HarnessError as e:
        console.print(f"[red]{e.code}: {e}[/red]")
        raise SystemExit(2)
    if json_output:
        click.echo(_dump(envelope))
    else:
        console.print(_describe(envelope))
