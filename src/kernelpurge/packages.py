"""Kernel package data model."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .versions import KernelVersion, extract_base_version


class KernelPackageCategory(Enum):
    IMAGE = "linux-image-"
    HEADERS = "linux-headers-"
    MODULES = "linux-modules-"
    TOOLS = "linux-tools-"

    @property
    def prefix(self) -> str:
        return self.value

    @classmethod
    def for_name(cls, name: str) -> "KernelPackageCategory | None":
        """Return the first category whose prefix matches name."""
        for category in cls:
            if name.startswith(category.prefix):
                return category
        return None


@dataclass(frozen=True)
class InstalledPackage:
    name: str
    category: KernelPackageCategory | None
    version: KernelVersion | None

    @classmethod
    def from_name(cls, name: str) -> "InstalledPackage":
        return cls(
            name=name,
            category=KernelPackageCategory.for_name(name),
            version=extract_base_version(name),
        )

    @property
    def is_unsigned(self) -> bool:
        return "unsigned" in self.name
