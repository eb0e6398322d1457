"""Orchestration of a single cleanup run.

The run inspects installed kernel packages, prints the removal plan, asks for
confirmation, purges the old packages with one apt-get call, sweeps orphaned
kernel directories and reports the space reclaimed.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path

import click

from .classifier import PackageClassifier, RemovalPlan
from .packages import KernelPackageCategory
from .protection import ProtectedVersionSet, find_newest_image
from .sweeper import DirectorySweeper, OrphanedDirectory
from .system import KernelSystem
from .utils.formatting import human_kilobytes

logger = logging.getLogger(__name__)

CONFIRM_PROMPT = 'Proceed with actual removal? [y/N]'


class CleanupState(Enum):
    START = 'start'
    INSPECTING = 'inspecting'
    PLAN_READY = 'plan_ready'
    DRY_RUN_REPORTED = 'dry_run_reported'
    CONFIRMING = 'confirming'
    ABORTED = 'aborted'
    PURGING = 'purging'
    SWEEPING = 'sweeping'
    REPORTING = 'reporting'
    DONE = 'done'


class CleanupOutcome(Enum):
    NOTHING_TO_DO = 'nothing_to_do'
    DRY_RUN = 'dry_run'
    ABORTED = 'aborted'
    COMPLETED = 'completed'


def confirm_removal(prompt: str = CONFIRM_PROMPT) -> bool:
    """Ask on stdin; only an answer starting with y or Y confirms.

    End of input counts as no.
    """
    try:
        answer = click.prompt(prompt, default='', show_default=False, prompt_suffix=' ')
    except click.Abort:
        click.echo()
        return False
    return answer.strip().lower().startswith('y')


class CleanupOrchestrator:
    """Drives inspection, purge, sweep and reporting for one run."""

    def __init__(
        self,
        system: KernelSystem | None = None,
        sweeper: DirectorySweeper | None = None,
        echo: Callable[..., None] = click.echo,
        confirm: Callable[[str], bool] = confirm_removal,
        usage_path: Path | str = '/',
    ):
        self.system = system or KernelSystem()
        self.sweeper = sweeper or DirectorySweeper(echo=echo)
        self.echo = echo
        self.confirm = confirm
        self.usage_path = usage_path
        self.state = CleanupState.START
        self.protection: ProtectedVersionSet | None = None
        self.plan: RemovalPlan | None = None
        self.removed_dirs: list[OrphanedDirectory] = []

    def run(self, dry_run: bool = False, assume_yes: bool = False) -> CleanupOutcome:
        """Run the cleanup.

        Raises PurgeError if apt-get fails; nothing is swept in that case.
        """
        self.state = CleanupState.START
        start_kb = None if dry_run else self.system.used_kilobytes(self.usage_path)

        self.state = CleanupState.INSPECTING
        current = self.system.running_kernel_release()
        packages = self.system.list_kernel_packages()
        if not packages:
            self.echo("No kernel packages found. Nothing to do.")
            self.state = CleanupState.DONE
            return CleanupOutcome.NOTHING_TO_DO

        newest = find_newest_image(packages)
        self.echo(f"Current running kernel: {current}")
        self.echo(f"Newest installed kernel: {newest or 'none'}")

        self.protection = ProtectedVersionSet.build(current, newest)
        logger.info("Protected kernel versions: %s", ', '.join(v.text for v in self.protection) or 'none')
        self.plan = PackageClassifier(self.protection).classify(packages)
        self.state = CleanupState.PLAN_READY
        self._show_plan(self.plan)

        if dry_run:
            self.echo()
            self.echo("(Dry run: nothing was removed)")
            self.state = CleanupState.DRY_RUN_REPORTED
            return CleanupOutcome.DRY_RUN

        if not self.plan.is_empty:
            if not assume_yes:
                self.state = CleanupState.CONFIRMING
                self.echo()
                if not self.confirm(CONFIRM_PROMPT):
                    self.echo("Aborted.")
                    self.state = CleanupState.ABORTED
                    return CleanupOutcome.ABORTED

            self.state = CleanupState.PURGING
            self.echo()
            self.echo("Running apt-get purge...")
            self.system.purge(self.plan.packages(), assume_yes=assume_yes)

        self.state = CleanupState.SWEEPING
        self.echo()
        self.echo("Checking for orphaned kernel directories...")
        self.removed_dirs = self.sweeper.sweep(self.protection)

        self.state = CleanupState.REPORTING
        end_kb = self.system.used_kilobytes(self.usage_path)
        self._report(start_kb, end_kb)

        self.state = CleanupState.DONE
        return CleanupOutcome.COMPLETED

    def _show_plan(self, plan: RemovalPlan) -> None:
        if plan.is_empty:
            self.echo("No old kernel packages to remove.")
            return
        self.echo()
        self.echo("The following old kernel packages will be removed:")
        for category in KernelPackageCategory:
            names = plan.for_category(category)
            logger.debug("%d old %s package(s)", len(names), category.name.lower())
            for pkg in names:
                self.echo(f"  {pkg}")

    def _report(self, start_kb: int | None, end_kb: int | None) -> None:
        self.echo()
        if start_kb is not None and end_kb is not None and start_kb - end_kb > 0:
            self.echo(f"Disk space reclaimed: {human_kilobytes(start_kb - end_kb)}")
        else:
            self.echo("No significant disk space reclaimed.")

        if self.removed_dirs:
            self.echo()
            self.echo("You may want to run 'update-grub' to update the bootloader menu.")

        self.echo()
        self.echo("Cleanup complete.")
