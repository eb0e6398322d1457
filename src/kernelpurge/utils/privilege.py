"""Privilege helper utilities.

All external commands go through `run_command(...)` so elevation is decided in
one place and tests can replace a single function.

Escalation through sudo only happens when the environment variable
KERNELPURGE_ALLOW_SUDO is set to a truthy value. Running kernelpurge as root
needs no escalation at all.
"""
from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Sequence


def allow_sudo_from_env() -> bool:
    return os.environ.get('KERNELPURGE_ALLOW_SUDO', '') not in ('', '0', 'false', 'False')


def is_root() -> bool:
    return os.geteuid() == 0


def run_command(cmd: Sequence[str], sudo: bool = False, check: bool = True, capture_output: bool = True, text: bool = True, env: dict | None = None) -> subprocess.CompletedProcess:
    """Run a command, optionally via sudo.

    `sudo` is only honoured when KERNELPURGE_ALLOW_SUDO is set; otherwise a
    PermissionError is raised before anything runs.

    Returns the CompletedProcess.
    Raises subprocess.CalledProcessError if check=True and the process fails.
    """
    cmd_list = list(cmd)
    if sudo:
        if not allow_sudo_from_env():
            raise PermissionError("Sudo not allowed: run as root or set KERNELPURGE_ALLOW_SUDO=1 to permit elevation")
        cmd_list = ['sudo', '-n'] + cmd_list

    return subprocess.run(cmd_list, check=check, capture_output=capture_output, text=text, env=env)


def render_command(cmd: Sequence[str], sudo: bool = False) -> str:
    """Return a shell-safe string representation of the command for logging."""
    prefix = ['sudo', '-n'] if sudo else []
    return ' '.join(shlex.quote(p) for p in (prefix + list(cmd)))
