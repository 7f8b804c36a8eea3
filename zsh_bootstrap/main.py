"""
zsh-bootstrap — CLI entrypoint.

Usage:
    zsh-bootstrap
    zsh-bootstrap --dry-run
    zsh-bootstrap --restore-zshrc
    zsh-bootstrap --skip-install -c ~/zsh-bootstrap.yml
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from zsh_bootstrap import __version__
from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode
from zsh_bootstrap.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


class InstallerCommand(click.Command):
    """Command whose usage errors exit 1 instead of click's 2."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _print_receipt(receipt: Receipt) -> None:
    if receipt.planned:
        click.secho(f"   [dry-run] would {receipt.output}", fg="cyan")
    elif receipt.ok:
        click.secho(f"   ✓ {receipt.output or receipt.step}", fg="green")
    elif receipt.status == "skipped":
        click.secho(f"   ⊘ {receipt.output or receipt.step}", fg="yellow")
    else:
        click.secho(f"   ⚠️  {receipt.step}: {receipt.error}", fg="yellow")


@click.command(
    cls=InstallerCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="zsh-bootstrap")
@click.option("--dry-run", is_flag=True, help="Report every change without making it.")
@click.option(
    "--restore-zshrc",
    is_flag=True,
    help="Restore a broken or missing ~/.zshrc before installing.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Settings YAML (default: $ZSH_BOOTSTRAP_CONFIG or ~/.config/zsh-bootstrap/config.yml).",
)
@click.option("--skip-install", is_flag=True, help="Only rewrite ~/.zshrc, install nothing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the run report as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    dry_run: bool,
    restore_zshrc: bool,
    config_path: str | None,
    skip_install: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Install Oh My Zsh, its plugins and CLI tools, then manage ~/.zshrc."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )

    from zsh_bootstrap.core.config.loader import ConfigError, load_settings
    from zsh_bootstrap.core.services.provision import ProvisionError, run_install
    from zsh_bootstrap.core.services.zshrc import ZshrcError

    try:
        settings = load_settings(Path(config_path).expanduser() if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    run_mode = RunMode.DRY_RUN if dry_run else RunMode.APPLY
    show = not (as_json or quiet)

    if show:
        title = "🐚 zsh-bootstrap"
        if run_mode.is_dry_run:
            title += " (dry run)"
        click.secho(f"\n{title}", fg="cyan", bold=True)

    try:
        report = run_install(
            settings,
            run_mode,
            restore=restore_zshrc,
            skip_install=skip_install,
            on_receipt=_print_receipt if show else None,
        )
    except ProvisionError as e:
        click.secho(f"❌ {e}", fg="red", bold=True, err=True)
        sys.exit(e.exit_code)
    except ZshrcError as e:
        click.secho(f"❌ {e}", fg="red", bold=True, err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2, default=str))
        return

    if report.warnings and not quiet:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for receipt in report.warnings:
            click.echo(f"   • {receipt.step}: {receipt.error}")

    click.echo()
    if run_mode.is_dry_run:
        click.secho("✅ Dry run complete, nothing was changed.", fg="green", bold=True)
        return

    click.secho("✅ Installation complete!", fg="green", bold=True)
    click.echo("➡️  Restart your terminal or run: exec zsh")


def cli_main() -> None:
    """Console-script entrypoint."""
    cli()


if __name__ == "__main__":
    cli_main()
