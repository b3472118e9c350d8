import logging

import click

from browser_switcher.cli.commands.current import current_cmd
from browser_switcher.cli.commands.list_cmd import list_cmd
from browser_switcher.cli.commands.set_cmd import set_cmd
from browser_switcher.cli.commands.watch import watch_cmd
from browser_switcher.cli.output import user_output
from browser_switcher.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; debug level with --verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s %(name)s] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="browser-switcher")
@click.option("--dry-run", is_flag=True, help="Print what would change instead of changing it.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, dry_run: bool, verbose: bool) -> None:
    """See and change the default web browser."""
    configure_logging(verbose)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(dry_run=dry_run)
        except ValueError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from e


cli.add_command(current_cmd)
cli.add_command(list_cmd)
cli.add_command(set_cmd)
cli.add_command(watch_cmd)


def main() -> None:
    """CLI entry point used by the `browser-switcher` console script."""
    cli()
