"""
dymescope CLI

Command-line client for the dyme staking Anchor workspace.

Identity = Solana keypair file named by ANCHOR_WALLET.  The cluster is
ANCHOR_PROVIDER_URL.  Program ids and interfaces come from the
workspace's Anchor.toml and target/idl.

Commands:
  balance   - Show wallet address and SOL balance
  program   - Inspect the program IDL (show / errors / explain)
  whoami    - Show current wallet address
  info      - Show system information
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import click

from .errors import DymescopeError
from .provider import PROVIDER_URL_ENV
from .sigil.keypair import get_address, load_keypair, wallet_path_from_env
from .theurgy.options import env_file_option, load_workspace_env, workspace_option


# ============ Constants ============

VERSION = "0.1.0"


# ============ Banner ============


def _print_banner() -> None:
    """Print the dymescope banner."""
    border = click.style("  ◆ ═══════════════════════════════════════ ◆", fg="magenta")
    click.echo()
    click.echo(border)
    click.echo()
    click.echo(
        click.style("        D Y M E S C O P E", fg="bright_white", bold=True)
        + click.style(f"      v{VERSION}", dim=True)
    )
    click.secho("        ─── Anchor workspace client ───", fg="magenta")
    click.echo()
    click.echo(border)
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="dymescope")
@click.option("--verbose", "-v", is_flag=True, help="Write diagnostics to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """dymescope: Anchor workspace client."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.balance import balance
from .theurgy.program import program

cli.add_command(balance)
cli.add_command(program)


# ============ Identity ============


@cli.command()
@workspace_option
@env_file_option
def whoami(workspace_dir: Optional[Path], env_file: Optional[Path]) -> None:
    """Show current wallet identity."""
    load_workspace_env(workspace_dir, env_file)
    try:
        keypair = load_keypair(wallet_path_from_env())
        click.echo(f"Address: {get_address(keypair)}")
    except DymescopeError:
        click.echo("No wallet found.")
        click.echo("Set ANCHOR_WALLET to a Solana keypair file.")
        sys.exit(1)


# ============ Info ============


@cli.command()
@workspace_option
@env_file_option
def info(workspace_dir: Optional[Path], env_file: Optional[Path]) -> None:
    """Show system information."""
    workspace = load_workspace_env(workspace_dir, env_file)
    _print_banner()

    # ── Status ──
    click.secho("  Status ─────────────────────────────────", fg="magenta")
    click.echo()

    try:
        address = get_address(load_keypair(wallet_path_from_env()))
        wallet_text = click.style(address, fg="bright_white")
    except DymescopeError:
        wallet_text = click.style("not configured", fg="yellow") + click.style(
            "  (set ANCHOR_WALLET)", dim=True
        )
    click.echo(click.style("  Wallet:      ", dim=True) + wallet_text)

    url = os.environ.get(PROVIDER_URL_ENV)
    if url:
        cluster_text = click.style(url, fg="bright_white")
    else:
        cluster_text = click.style("not configured", fg="yellow") + click.style(
            f"  (set {PROVIDER_URL_ENV})", dim=True
        )
    click.echo(click.style("  Cluster:     ", dim=True) + cluster_text)

    if workspace is None:
        workspace_text = click.style("not found", fg="yellow") + click.style(
            "  (no Anchor.toml)", dim=True
        )
        programs_text = click.style("-", dim=True)
    else:
        workspace_text = click.style(str(workspace.root), fg="bright_white")
        try:
            names = workspace.program_names()
            programs_text = click.style(", ".join(names) or "none built", fg="bright_white")
        except DymescopeError as exc:
            programs_text = click.style(f"unreadable ({exc})", fg="yellow")
    click.echo(click.style("  Workspace:   ", dim=True) + workspace_text)
    click.echo(click.style("  Programs:    ", dim=True) + programs_text)

    click.echo()

    # ── Commands ──
    click.secho("  Commands ───────────────────────────────", fg="magenta")
    click.echo()

    commands = [
        ("balance ", "Show wallet address and SOL balance"),
        ("program ", "Inspect the program IDL"),
        ("whoami  ", "Show current wallet address"),
    ]
    for cmd, desc in commands:
        click.echo(
            click.style("  ", dim=True)
            + click.style(cmd, fg="bright_white", bold=True)
            + click.style("  ◇  ", fg="magenta")
            + click.style(desc, dim=True)
        )

    click.echo()


# ============ Entry Points ============


def main() -> None:
    """dymescope CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
