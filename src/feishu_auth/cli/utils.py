import json
import logging
import os
import traceback
from typing import Any

import click


def get_env_flag(env_var: str, default: bool = False) -> bool:
    """Get a boolean flag from an environment variable.

    Returns:
        True if the environment variable is set to "1", "true", or "yes" (case insensitive)
    """
    value = os.environ.get(env_var, "").lower()
    return value in ("1", "true", "yes") if value else default


def configure_logging(debug: bool = False) -> None:
    """Configure the root logger for CLI runs.

    Args:
        debug: Whether to enable debug logging (FEISHU_AUTH_DEBUG=1 also does)
    """
    if not debug:
        debug = get_env_flag("FEISHU_AUTH_DEBUG")

    log_level = logging.DEBUG if debug else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    root_logger.addHandler(handler)


def format_error(error: Exception, debug: bool = False) -> dict[str, Any]:
    """Format an error for output, including the provider payload when there is one."""
    error_info: dict[str, Any] = {"error": str(error)}

    response = getattr(error, "response", None)
    if response:
        error_info["response"] = response

    if debug:
        error_info["traceback"] = traceback.format_exc()
        error_info["type"] = error.__class__.__name__

    return error_info


def output_result(result: Any, json_output: bool = False) -> None:
    """Output a result in either JSON or human-readable format."""
    if json_output:
        click.echo(json.dumps({"status": "ok", "result": result}, indent=2, default=str))
    elif isinstance(result, dict):
        for key, value in result.items():
            click.echo(f"{click.style(str(key), fg='cyan')}: {value}")
    else:
        click.echo(result)


def output_error(error: Exception, json_output: bool = False, debug: bool = False) -> None:
    """Output an error in either JSON or human-readable format, then abort."""
    error_info = format_error(error, debug)

    if json_output:
        click.echo(
            json.dumps({"status": "error", **error_info}, indent=2, ensure_ascii=False)
        )
    else:
        click.echo(f"Error: {error_info['error']}", err=True)
        if debug and "traceback" in error_info:
            click.echo("\nTraceback:", err=True)
            click.echo(error_info["traceback"], err=True)

    if json_output:
        # Keep stdout parseable: no "Aborted!" trailer
        click.get_current_context().exit(1)
    raise click.Abort()
