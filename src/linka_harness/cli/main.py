"""
linka-harness CLI.

Commands:
  linka-harness register [EMAIL]     Create a user, save its token
  linka-harness login EMAIL          Log in, save the token
  linka-harness watch                Print notifications as they arrive
  linka-harness wait TYPE            Block until a matching notification arrives
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install linka-harness[cli]")

from linka_harness.config import HarnessSettings

console = Console()
CONFIG_FILE = Path.home() / ".linka" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _settings(base_url: Optional[str]) -> HarnessSettings:
    settings = HarnessSettings.from_env()
    url = base_url or _load_config().get("base_url")
    if url:
        settings = settings.model_copy(update={"base_url": url})
    return settings


def _token(token: Optional[str]) -> str:
    token = token or _load_config().get("token")
    if not token:
        console.print("[red]No token. Pass --token or run `linka-harness register` first.[/red]")
        raise SystemExit(1)
    return token


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(verbose: bool):
    """linka-harness — watch and assert on push notifications."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


from linka_harness.cli.auth import login_cmd, register_cmd
from linka_harness.cli.watch import wait_cmd, watch_cmd

main.add_command(register_cmd)
main.add_command(login_cmd)
main.add_command(watch_cmd)
main.add_command(wait_cmd)


if __name__ == "__main__":
    main()
