"""
Theurgy Program - Inspect the workspace program's IDL.

Offline helpers for the dyme staking program: list its instructions and
account types, print the custom error table, and decode the error codes
that show up in transaction logs as ``custom program error: 0x1770``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..errors import DymescopeError
from ..pneuma.workspace import Program, Workspace
from ..utils import parse_error_code
from .options import abort, note, program_option, workspace_option


def _resolve(ctx: click.Context, program_name: str, workspace_dir: Optional[Path]) -> Program:
    try:
        workspace = Workspace.discover(workspace_dir)
        note(ctx, f"workspace {workspace.root} (cluster {workspace.cluster})")
        return workspace.program(program_name)
    except DymescopeError as exc:
        abort(exc)


@click.group()
def program() -> None:
    """Inspect the workspace program IDL."""
    pass


@program.command("show")
@program_option
@workspace_option
@click.pass_context
def show(ctx: click.Context, program_name: str, workspace_dir: Optional[Path]) -> None:
    """Show program id, instructions and account types."""
    prog = _resolve(ctx, program_name, workspace_dir)
    idl = prog.idl

    click.echo(f"Program:    {idl.name}" + (f" v{idl.version}" if idl.version else ""))
    click.echo(f"Program ID: {prog.program_id}")
    click.echo("")

    click.echo(f"Instructions ({len(idl.instructions)}):")
    for ix in idl.instructions:
        n_accounts = len(ix.get("accounts", []))
        n_args = len(ix.get("args", []))
        click.echo(f"  {ix['name']:<24} accounts={n_accounts} args={n_args}")

    if idl.accounts:
        click.echo("")
        click.echo(f"Accounts ({len(idl.accounts)}):")
        for name in idl.account_names:
            click.echo(f"  {name}")

    click.echo("")
    click.echo(f"Errors: {len(idl.errors)}")


@program.command("errors")
@program_option
@workspace_option
@click.pass_context
def errors(ctx: click.Context, program_name: str, workspace_dir: Optional[Path]) -> None:
    """List the program's custom error codes."""
    prog = _resolve(ctx, program_name, workspace_dir)

    if not prog.idl.errors:
        click.echo("No custom errors declared.")
        return

    for error in prog.idl.errors:
        line = f"{error.code} {hex(error.code)} {error.name}"
        if error.msg:
            line += f": {error.msg}"
        click.echo(line)


@program.command("explain")
@click.argument("code")
@program_option
@workspace_option
@click.pass_context
def explain(
    ctx: click.Context,
    code: str,
    program_name: str,
    workspace_dir: Optional[Path],
) -> None:
    """
    Decode a custom error CODE (decimal, or hex with 0x).
    """
    try:
        value = parse_error_code(code)
    except ValueError:
        raise click.BadParameter(f"{code!r} is not a decimal or 0x-hex error code", param_hint="CODE")

    prog = _resolve(ctx, program_name, workspace_dir)
    error = prog.error_for_code(value)
    if error is None:
        click.secho(f"Unknown error code {value} ({hex(value)}) for {prog.name}.", fg="yellow")
        ctx.exit(1)

    click.echo(f"{error.name} ({error.code}, {hex(error.code)})")
    if error.msg:
        click.echo(f"  {error.msg}")
