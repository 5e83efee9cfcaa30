"""CLI: linka-harness register|login"""

from typing import Optional

import click
from rich.console import Console

from linka_harness.client import HarnessClient

console = Console()


def _load_config() -> dict:
    from linka_harness.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from linka_harness.cli.main import _save_config
    _save_config(cfg)


def _settings(base_url: Optional[str]):
    from linka_harness.cli.main import _settings
    return _settings(base_url)


def _run(coro):
    from linka_harness.cli.main import _run
    return _run(coro)


def _remember(client: HarnessClient) -> None:
    _save_config({**_load_config(), "token": client.token, "user_id": client.user_id,
                  "email": client.email, "base_url": client.settings.base_url})
    console.print("[dim]Token saved to ~/.linka/config.json[/dim]")


@click.command("register")
@click.argument("email", required=False)
@click.option("--password", default=None, help="Defaults to a generated password")
@click.option("--base-url", default=None)
def register_cmd(email: Optional[str], password: Optional[str], base_url: Optional[str]):
    """Register a user (a random test email if none given)."""

    async def _register():
        async with HarnessClient(settings=_settings(base_url)) as client:
            with console.status("Registering..."):
                await client.sign_up(email, password)
            console.print(f"[green]Registered {client.email} (ID: {client.user_id})[/green]")
            _remember(client)

    _run(_register())


@click.command("login")
@click.argument("email")
@click.option("--base-url", default=None)
def login_cmd(email: str, base_url: Optional[str]):
    """Log in with email and password."""

    async def _login():
        password = click.prompt("Password", hide_input=True)
        async with HarnessClient(settings=_settings(base_url)) as client:
            with console.status("Logging in..."):
                await client.login(email, password)
            console.print(f"[green]Logged in as {client.email} (ID: {client.user_id})[/green]")
            _remember(client)

    _run(_login())
