"""`feishu-auth` commands for exercising the login flow against a real app."""

import asyncio
from pathlib import Path
from typing import Any, Callable

import click
import httpx

from feishu_auth.auth import FeishuProviderAdapter, ProviderError
from feishu_auth.cli.utils import configure_logging, output_error, output_result
from feishu_auth.config import load_feishu_config


def _common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--debug", is_flag=True, help="Show detailed debug information")(func)
    func = click.option("--json-output", is_flag=True, help="Output in JSON format")(func)
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Path to the config file (default: $FEISHU_AUTH_CONFIG or ./feishu.yml)",
    )(func)
    return func


def _mode_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--app-ticket", help="app_ticket pushed by Feishu (default mode)")(func)
    func = click.option(
        "--mode",
        type=click.Choice(["internal", "default"]),
        help="Override kind_of_app from the config",
    )(func)
    return func


def _build_adapter(
    config_path: Path | None, mode: str | None = None, app_ticket: str | None = None
) -> FeishuProviderAdapter:
    adapter = FeishuProviderAdapter(load_feishu_config(config_path))
    if mode == "internal":
        adapter.with_internal_app_mode()
    elif mode == "default":
        adapter.with_default_mode()
    if app_ticket:
        adapter.with_app_ticket(app_ticket)
    return adapter


@click.command(name="authorize-url")
@click.option("--redirect-uri", help="Callback URL (default: redirect_uri from the config)")
@click.option("--state", help="Opaque value Feishu echoes back to the callback")
@_common_options
def authorize_url(
    redirect_uri: str | None,
    state: str | None,
    config_path: Path | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Print the URL to send a user to for Feishu login.

    \b
    Examples:
        feishu-auth authorize-url
        feishu-auth authorize-url --state xyz --redirect-uri https://example.com/cb
    """
    configure_logging(debug)
    try:
        adapter = _build_adapter(config_path)
        output_result(
            adapter.build_authorize_url(redirect_uri=redirect_uri, state=state), json_output
        )
    except (ProviderError, httpx.HTTPError, FileNotFoundError, ValueError) as e:
        output_error(e, json_output, debug)


@click.command(name="app-token")
@_mode_options
@_common_options
def app_token(
    mode: str | None,
    app_ticket: str | None,
    config_path: Path | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Request an app_access_token."""
    configure_logging(debug)
    try:
        adapter = _build_adapter(config_path, mode, app_ticket)
        output_result(asyncio.run(adapter.get_app_access_token()), json_output)
    except (ProviderError, httpx.HTTPError, FileNotFoundError, ValueError) as e:
        output_error(e, json_output, debug)


@click.command(name="tenant-token")
@_mode_options
@_common_options
def tenant_token(
    mode: str | None,
    app_ticket: str | None,
    config_path: Path | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Request a tenant_access_token."""
    configure_logging(debug)
    try:
        adapter = _build_adapter(config_path, mode, app_ticket)
        output_result(asyncio.run(adapter.get_tenant_access_token()), json_output)
    except (ProviderError, httpx.HTTPError, FileNotFoundError, ValueError) as e:
        output_error(e, json_output, debug)


@click.command(name="exchange")
@click.argument("code")
@_mode_options
@_common_options
def exchange(
    code: str,
    mode: str | None,
    app_ticket: str | None,
    config_path: Path | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Exchange an authorization CODE and look up the user it belongs to.

    \b
    Examples:
        feishu-auth exchange 7a8b9c
        feishu-auth exchange 7a8b9c --mode default --app-ticket t-123 --json-output
    """
    configure_logging(debug)
    try:
        adapter = _build_adapter(config_path, mode, app_ticket)
        user = asyncio.run(adapter.user_from_code(code))
        token = user.token
        output_result(
            {
                "id": user.id,
                "name": user.name,
                "email": user.email,
                "avatar_url": user.avatar_url,
                "access_token": token.access_token if token else None,
                "refresh_token": token.refresh_token if token else None,
                "expires_in": token.expires_in if token else None,
            },
            json_output,
        )
    except (ProviderError, httpx.HTTPError, FileNotFoundError, ValueError) as e:
        output_error(e, json_output, debug)
