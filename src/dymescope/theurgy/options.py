"""Shared click options and error reporting for dymescope commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional

import click
from dotenv import load_dotenv

from ..errors import DymescopeError
from ..pneuma.workspace import Workspace

DEFAULT_PROGRAM = "Utils"


def workspace_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--workspace",
        "workspace_dir",
        type=click.Path(file_okay=False, path_type=Path),
        envvar="DYMESCOPE_WORKSPACE",
        default=None,
        help="Directory to start the Anchor.toml search from (default: cwd)",
    )(func)


def program_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--program",
        "program_name",
        default=DEFAULT_PROGRAM,
        show_default=True,
        help="Workspace program name",
    )(func)


def env_file_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--env-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help=".env file to load (default: <workspace>/.env)",
    )(func)


def is_verbose(ctx: click.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("verbose"))


def note(ctx: click.Context, message: str) -> None:
    """Write a diagnostic line to stderr when ``--verbose`` is on."""
    if is_verbose(ctx):
        click.secho(f"  · {message}", dim=True, err=True)


def abort(exc: DymescopeError, prefix: Optional[str] = None) -> NoReturn:
    message = f"{prefix}: {exc}" if prefix else str(exc)
    click.secho(f"ERROR: {message}", fg="red", err=True)
    sys.exit(exc.exit_code)


def load_workspace_env(workspace_dir: Optional[Path], env_file: Optional[Path] = None) -> Optional[Workspace]:
    """
    Load ``env_file`` (or ``<workspace>/.env``) without overriding the process environment.

    Returns the discovered workspace, or None when there is no Anchor.toml.
    """
    try:
        workspace: Optional[Workspace] = Workspace.discover(workspace_dir)
    except DymescopeError:
        workspace = None

    if env_file is None and workspace is not None:
        env_file = workspace.root / ".env"
    if env_file is not None and env_file.is_file():
        load_dotenv(env_file, override=False)
    return workspace
