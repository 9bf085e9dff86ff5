"""Command line interface for signing and inspecting tokens."""

from __future__ import annotations

import json
import logging
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError

from tokenseal.config import TokensealConfig, load_config
from tokenseal.exceptions import TokenError
from tokenseal.security import TokenCodec, get_codec

app = typer.Typer(help="Sign and verify compact header.payload.signature tokens")


def _fail(exc: Exception) -> NoReturn:
    typer.secho(str(exc), fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to a tokenseal YAML config file"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (overrides config)"
    ),
) -> None:
    """Tokenseal CLI entry point."""
    try:
        settings = load_config(config)
    except ValidationError as exc:
        _fail(ValueError(f"Invalid configuration: {exc}"))
    ctx.obj = settings
    logging.basicConfig(level=(log_level or settings.log_level).upper())


def _codec(ctx: typer.Context) -> TokenCodec:
    settings: TokensealConfig = ctx.obj
    try:
        return get_codec(settings)
    except TokenError as exc:
        _fail(exc)


@app.command("encode")
def encode(
    ctx: typer.Context,
    payload: str,
    alg: Optional[str] = typer.Option(None, "--alg", help="Signing algorithm"),
) -> None:
    """
    Sign a JSON payload and print the token.

    Example:
        tokenseal encode '{"sub": "alice"}' --alg HS512
    """
    try:
        claims = json.loads(payload)
    except ValueError as exc:
        _fail(ValueError(f"Payload is not valid JSON: {exc}"))
    codec = _codec(ctx)
    try:
        typer.echo(codec.encode(claims, alg))
    except TokenError as exc:
        _fail(exc)


@app.command("decode")
def decode(
    ctx: typer.Context,
    token: str,
    no_verify: bool = typer.Option(
        False, "--no-verify", help="Skip signature verification (inspection only)"
    ),
) -> None:
    """Verify a token and print its payload."""
    codec = _codec(ctx)
    try:
        payload = codec.decode(token, verify=not no_verify)
    except TokenError as exc:
        _fail(exc)
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))


@app.command("header")
def header(ctx: typer.Context, token: str) -> None:
    """Print the unverified header of a token."""
    codec = _codec(ctx)
    try:
        token_header = codec.decode_header(token)
    except TokenError as exc:
        _fail(exc)
    typer.echo(json.dumps(token_header, indent=2, sort_keys=True))


@app.command("algorithms")
def algorithms(ctx: typer.Context) -> None:
    """List algorithms available with the configured keys."""
    registry = _codec(ctx).registry
    for name in registry.algorithms:
        typer.echo(f"{name}\tavailable")
    for name, reason in sorted(registry.unavailable.items()):
        typer.echo(f"{name}\tunavailable: {reason}")


if __name__ == "__main__":
    app()
