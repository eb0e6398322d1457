from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .packages import InstalledPackage, KernelPackageCategory
from .protection import ProtectedVersionSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemovalPlan:
    """Package names to purge, one ordered tuple per category."""

    images: tuple[str, ...] = ()
    headers: tuple[str, ...] = ()
    modules: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()

    def packages(self) -> list[str]:
        """All package names, images first, then headers, modules and tools."""
        return [*self.images, *self.headers, *self.modules, *self.tools]

    def for_category(self, category: KernelPackageCategory) -> tuple[str, ...]:
        return {
            KernelPackageCategory.IMAGE: self.images,
            KernelPackageCategory.HEADERS: self.headers,
            KernelPackageCategory.MODULES: self.modules,
            KernelPackageCategory.TOOLS: self.tools,
        }[category]

    @property
    def is_empty(self) -> bool:
        return not (self.images or self.headers or self.modules or self.tools)


class PackageClassifier:
    """Splits kernel package names into protected and removable."""

    def __init__(self, protection: ProtectedVersionSet):
        self.protection = protection

    def classify(self, package_names: Iterable[str]) -> RemovalPlan:
        """Build the removal plan for package_names.

        Names without a base version are never removed. Names matching none of
        the four kernel prefixes are ignored. Enumeration order is kept within
        each category.
        """
        buckets: dict[KernelPackageCategory, list[str]] = {c: [] for c in KernelPackageCategory}

        for name in package_names:
            pkg = InstalledPackage.from_name(name)
            if pkg.version is None:
                logger.debug("Skipping %s: no kernel version in name", name)
                continue
            if self.protection.is_protected(name):
                logger.debug("Keeping %s: version %s is protected", name, pkg.version)
                continue
            if pkg.category is None:
                logger.debug("Skipping %s: not a kernel image/headers/modules/tools package", name)
                continue
            buckets[pkg.category].append(name)

        return RemovalPlan(
            images=tuple(buckets[KernelPackageCategory.IMAGE]),
            headers=tuple(buckets[KernelPackageCategory.HEADERS]),
            modules=tuple(buckets[KernelPackageCategory.MODULES]),
            tools=tuple(buckets[KernelPackageCategory.TOOLS]),
        )
