"""Removal of orphaned kernel directories.

Package purges can leave ``linux-*`` directories behind (for example header
trees under /usr/src). The sweeper deletes any such directory whose kernel
version is not protected. Only names starting with ``linux-`` are ever
considered.
"""
from __future__ import annotations

import glob
import logging
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

import click

from .protection import ProtectedVersionSet
from .versions import KernelVersion, extract_base_version

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_ROOTS = (
    "/usr/src",
    "/usr/lib/linux-tools",
    "/usr/lib/modules",
    "/lib/modules",
    "/usr/lib/linux-tools-*",
)

KERNEL_DIR_PREFIX = "linux-"


@dataclass(frozen=True)
class OrphanedDirectory:
    path: Path
    version: KernelVersion


def expand_roots(patterns: Iterable[str | Path]) -> list[Path]:
    """Expand glob patterns into concrete roots; plain paths pass through unchanged."""
    roots: list[Path] = []
    for pattern in patterns:
        text = str(pattern)
        if glob.has_magic(text):
            roots.extend(Path(p) for p in sorted(glob.glob(text)))
        else:
            roots.append(Path(text))
    return roots


class DirectorySweeper:
    """Deletes unprotected ``linux-*`` directories directly under each root."""

    def __init__(self, roots: Iterable[str | Path] = DEFAULT_SWEEP_ROOTS, echo: Callable[[str], None] = click.echo):
        self.patterns = list(roots)
        self.echo = echo

    def sweep(self, protection: ProtectedVersionSet, dry_run: bool = False) -> list[OrphanedDirectory]:
        """Sweep every root and return the directories removed.

        In dry-run mode nothing is deleted and the directories that would be
        removed are returned. A failed deletion is logged and left out of the
        result.
        """
        removed: list[OrphanedDirectory] = []
        for root in expand_roots(self.patterns):
            for candidate in self.find_orphans(root, protection):
                self.echo(f"  Removing orphaned: {candidate.path}")
                if dry_run or self._delete(candidate.path):
                    removed.append(candidate)
        return removed

    def find_orphans(self, root: Path, protection: ProtectedVersionSet) -> list[OrphanedDirectory]:
        if not root.is_dir():
            return []
        try:
            children = sorted(root.iterdir())
        except OSError as e:
            logger.warning("Cannot read %s, skipping: %s", root, e)
            return []

        orphans = []
        for child in children:
            try:
                if not child.is_dir():
                    continue
            except OSError:
                continue
            name = child.name
            if not name.startswith(KERNEL_DIR_PREFIX):
                continue
            version = extract_base_version(name)
            if version is None:
                logger.debug("Skipping %s: no kernel version in name", child)
                continue
            if protection.is_protected(name):
                logger.debug("Keeping %s: version %s is protected", child, version)
                continue
            orphans.append(OrphanedDirectory(path=child, version=version))
        return orphans

    def _delete(self, path: Path) -> bool:
        try:
            if path.is_symlink():
                path.unlink()
            else:
                shutil.rmtree(path)
        except OSError as e:
            logger.warning("Failed to remove %s: %s", path, e)
            return False
        logger.debug("Removed %s", path)
        return True
