"""CLI — issue, inspect, validate, derive-key."""

from __future__ import annotations

import hashlib
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from tokenkit.auth.errors import ConfigurationError, TokenError
from tokenkit.auth.jwt import TokenService
from tokenkit.config import Config
from tokenkit.models.response import ApiResponse


def _service(ctx: click.Context) -> TokenService:
    config: Config = ctx.obj["config"]
    try:
        return TokenService.from_config(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)


@click.group()
@click.version_option(package_name="tokenkit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a YAML config file",
)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None) -> None:
    """tokenkit — sign and verify HS256 user tokens."""
    try:
        config = Config.load(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)
    logging.basicConfig(level=config.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
@click.argument("user_id", type=int)
@click.argument("username")
@click.pass_context
def issue(ctx: click.Context, user_id: int, username: str) -> None:
    """Issue a token for USER_ID and USERNAME."""
    click.echo(_service(ctx).issue_token(user_id, username))


@main.command()
@click.argument("token")
@click.option("--json", "as_json", is_flag=True, help="Print an API response envelope")
@click.pass_context
def inspect(ctx: click.Context, token: str, as_json: bool) -> None:
    """Show the claims of TOKEN."""
    service = _service(ctx)
    try:
        claims = service.parse_claims(token, verify_exp=False)
        expires = service.get_expiration(token)
    except TokenError as e:
        if as_json:
            click.echo(ApiResponse[dict].error(401, str(e)).model_dump_json())
        else:
            click.echo(f"{type(e).__name__}: {e}", err=True)
        sys.exit(1)

    expired = expires < datetime.now(UTC)
    if as_json:
        data = {**claims, "expired": expired}
        click.echo(ApiResponse[dict].ok(data).model_dump_json())
        return

    table = Table(title="Token Claims")
    table.add_column("Claim", style="cyan")
    table.add_column("Value")
    for name, value in claims.items():
        table.add_row(name, str(value))
    table.add_row("expires", expires.isoformat())
    table.add_row("status", "[red]expired[/red]" if expired else "[green]active[/green]")
    Console().print(table)


@main.command()
@click.argument("token")
@click.pass_context
def validate(ctx: click.Context, token: str) -> None:
    """Exit 0 if TOKEN is valid, 1 otherwise."""
    if _service(ctx).validate(token):
        click.echo("valid")
        return
    click.echo("invalid")
    sys.exit(1)


@main.command("derive-key")
@click.pass_context
def derive_key(ctx: click.Context) -> None:
    """Show the length and fingerprint of the signing key."""
    key = _service(ctx).derive_signing_key()
    fingerprint = hashlib.sha256(key).hexdigest()[:16]
    click.echo(f"length: {len(key)} bytes")
    click.echo(f"fingerprint: {fingerprint}")


if __name__ == "__main__":
    main()
