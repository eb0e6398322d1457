"""Versions that must survive a cleanup run.

Two versions are protected: the running kernel and the newest installed
kernel image. Callers pass raw package or directory names to
``is_protected``; the base version is extracted from them on every call.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from .packages import InstalledPackage, KernelPackageCategory
from .versions import KernelVersion, extract_base_version, version_key

logger = logging.getLogger(__name__)


def find_newest_image(package_names: Iterable[str]) -> str | None:
    """Return the installed image package with the highest base version.

    Meta packages without a version and ``unsigned`` companion packages are
    not considered. On equal versions the last package enumerated wins.
    Returns None when no candidate remains.
    """
    candidates = []
    for name in package_names:
        pkg = InstalledPackage.from_name(name)
        if pkg.category is not KernelPackageCategory.IMAGE or pkg.version is None:
            continue
        if pkg.is_unsigned:
            continue
        candidates.append(name)

    if not candidates:
        return None
    # sorted() is stable, so ties keep enumeration order and the last one wins
    return sorted(candidates, key=version_key)[-1]


class ProtectedVersionSet:
    """Immutable set of protected kernel base versions."""

    def __init__(self, versions: Iterable[KernelVersion] = ()):
        self._versions = frozenset(versions)

    @classmethod
    def build(cls, current_release: str | None, newest_image: str | None) -> "ProtectedVersionSet":
        """Build the set from ``uname -r`` output and the newest image package name.

        An input without a recognisable version contributes nothing, so the
        result holds zero, one or two versions.
        """
        versions = []
        for source in (current_release, newest_image):
            version = extract_base_version(source)
            if version is None:
                logger.debug("No kernel version found in %r; it protects nothing", source)
                continue
            versions.append(version)
        return cls(versions)

    @property
    def versions(self) -> frozenset[KernelVersion]:
        return self._versions

    def is_protected(self, name: str) -> bool:
        """Return True if the base version found in name is protected."""
        version = extract_base_version(name)
        return version is not None and version in self._versions

    def __contains__(self, version: object) -> bool:
        return version in self._versions

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self):
        return iter(sorted(self._versions, key=lambda v: v.sort_key))

    def __repr__(self) -> str:
        return f"ProtectedVersionSet({', '.join(v.text for v in self)})"
