from __future__ import annotations

import logging
import sys

import click

from kernelpurge import __version__

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {'help_option_names': ['-h', '--help']}


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option('--yes', '-y', 'assume_yes', is_flag=True, help='Skip confirmations for non-interactive use')
@click.option('--dry-run', '--dryrun', '-n', 'dry_run', is_flag=True, help='Show packages that would be removed without deleting anything')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress most logging')
@click.version_option(__version__, '--version', prog_name='kernelpurge')
@click.pass_context
def cli(ctx, assume_yes: bool, dry_run: bool, verbose: bool, quiet: bool):
    """Purge old kernel packages and orphaned kernel directories.

    The running kernel and the newest installed kernel are always kept.
    """
    from kernelpurge import config
    from kernelpurge.cleanup import CleanupOrchestrator
    from kernelpurge.sweeper import DEFAULT_SWEEP_ROOTS, DirectorySweeper
    from kernelpurge.system import KernelSystem, MissingToolError, PurgeError
    from kernelpurge.utils.logging_config import setup_cli_logging

    setup_cli_logging(verbose=verbose, quiet=quiet, log_file=config.get_log_file())

    system = KernelSystem()
    try:
        system.check_required_tools()
    except MissingToolError as e:
        click.echo(str(e), err=True)
        ctx.exit(1)

    roots = config.get_sweep_roots() or list(DEFAULT_SWEEP_ROOTS)
    orchestrator = CleanupOrchestrator(
        system=system,
        sweeper=DirectorySweeper(roots=roots),
        usage_path=config.get_usage_path(),
    )

    try:
        outcome = orchestrator.run(dry_run=dry_run, assume_yes=assume_yes)
    except PurgeError as e:
        logger.debug("Purge failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    else:
        logger.debug("Run finished: %s", outcome.value)


def main():
    cli()


if __name__ == '__main__':
    sys.exit(main())
