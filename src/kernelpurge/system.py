"""Host collaborators: dpkg, apt-get, uname and df.

Every call goes through `privilege.run_command` (looked up at call time so
tests can replace it).
"""
from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .utils import privilege

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ('dpkg', 'apt-get')

# dpkg-query glob for versioned kernel packages
KERNEL_PACKAGE_GLOB = 'linux-*-*-*'
KERNEL_PACKAGE_RE = re.compile(r'linux-(image|headers|modules|tools)')


class MissingToolError(RuntimeError):
    """A required host tool is not installed."""

    def __init__(self, tool: str):
        super().__init__(f"{tool} required")
        self.tool = tool


class PurgeError(RuntimeError):
    """apt-get purge failed; package state is uncertain."""


class KernelSystem:
    """Debian host operations used by a cleanup run."""

    def check_required_tools(self) -> None:
        """Raise MissingToolError for the first required tool not on PATH."""
        for tool in REQUIRED_TOOLS:
            if not self.has_tool(tool):
                raise MissingToolError(tool)

    def has_tool(self, tool: str) -> bool:
        try:
            privilege.run_command(['which', tool], sudo=False)
            return True
        except (OSError, subprocess.CalledProcessError):
            return False

    def running_kernel_release(self) -> str:
        """Return ``uname -r`` output, or '' (which protects nothing) if it fails."""
        try:
            cp: Any = privilege.run_command(['uname', '-r'], sudo=False)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning("Could not determine the running kernel: %s", e)
            return ''
        return str(cp.stdout).strip()

    def list_kernel_packages(self) -> list[str]:
        """Return versioned kernel package names known to dpkg, in dpkg order."""
        # dpkg-query exits non-zero when nothing matches the pattern
        cp: Any = privilege.run_command(
            ['dpkg-query', '-W', '-f=${Package}\n', KERNEL_PACKAGE_GLOB], sudo=False, check=False
        )
        packages = []
        for line in str(cp.stdout or '').splitlines():
            name = line.strip()
            if name and KERNEL_PACKAGE_RE.search(name):
                packages.append(name)
        logger.debug("dpkg-query reported %d kernel packages", len(packages))
        return packages

    def purge(self, packages: Sequence[str], assume_yes: bool = False) -> None:
        """Purge all packages with a single apt-get call.

        apt-get runs attached to the terminal so its own prompt and progress
        are visible. Raises PurgeError on any failure.
        """
        if not packages:
            return
        cmd = ['apt-get', '--auto-remove']
        if assume_yes:
            cmd.append('-y')
        cmd.append('purge')
        cmd.extend(packages)

        sudo = not privilege.is_root()
        logger.debug("Running %s", privilege.render_command(cmd, sudo=sudo))
        try:
            privilege.run_command(cmd, sudo=sudo, check=True, capture_output=False)
        except subprocess.CalledProcessError as e:
            raise PurgeError(f"apt-get purge failed with exit status {e.returncode}") from e
        except OSError as e:
            raise PurgeError(f"apt-get purge could not run: {e}") from e

    def used_kilobytes(self, path: Path | str = '/') -> int | None:
        """Return used kilobytes on the filesystem holding path, or None if unknown."""
        try:
            cp: Any = privilege.run_command(['df', '-kP', str(path)], sudo=False)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning("Could not measure disk usage of %s: %s", path, e)
            return None
        lines = str(cp.stdout).splitlines()
        if len(lines) < 2:
            return None
        fields = lines[1].split()
        try:
            return int(fields[2])
        except (IndexError, ValueError):
            return None
