"""
Theurgy Balance - Report the provider wallet's SOL balance.

Bootstraps the provider from the environment, resolves the program
handle from the workspace IDL, then issues a single ``getBalance`` read
and prints two lines: the wallet address and its balance in SOL.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import click

from ..errors import DymescopeError
from ..pneuma.rpc import COMMITMENTS, DEFAULT_COMMITMENT
from ..pneuma.workspace import Program, Workspace
from ..provider import Provider
from ..utils import format_sol
from .options import abort, env_file_option, note, program_option, workspace_option


def report_balance(program: Program, echo: Callable[[str], None] = click.echo) -> int:
    """
    Print the provider address and its balance.

    Exactly one RPC request is made. If it fails the address line has
    already been written and the error propagates.

    Returns:
        Balance in lamports
    """
    provider = program.provider
    if provider is None:
        raise ValueError(f"Program '{program.name}' is not bound to a provider")

    echo(f"My address: {provider.public_key}")
    lamports = provider.connection.get_balance(provider.public_key)
    echo(f"My balance: {format_sol(lamports)} SOL")
    return lamports


@click.command()
@program_option
@workspace_option
@click.option(
    "--commitment",
    type=click.Choice(COMMITMENTS),
    default=DEFAULT_COMMITMENT,
    show_default=True,
    help="Commitment level for the balance read",
)
@env_file_option
@click.pass_context
def balance(
    ctx: click.Context,
    program_name: str,
    workspace_dir: Optional[Path],
    commitment: str,
    env_file: Optional[Path],
) -> None:
    """
    Show the wallet address and its SOL balance.

    Reads ANCHOR_PROVIDER_URL and ANCHOR_WALLET, resolves the program
    from the workspace IDL and performs one getBalance call.
    """
    try:
        workspace = Workspace.discover(workspace_dir)
        provider = Provider.env(
            env_file=env_file or workspace.root / ".env",
            commitment=commitment,
        )
        note(ctx, f"cluster {provider.connection.endpoint} ({commitment})")

        program = workspace.program(program_name, provider=provider)
        note(ctx, f"program {program.name} at {program.program_id}")

        report_balance(program)
    except DymescopeError as exc:
        abort(exc)
