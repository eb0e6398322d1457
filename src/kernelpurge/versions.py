import re
from dataclasses import dataclass

BASE_VERSION_RE = re.compile(r"\d+\.\d+\.\d+-\d+")


@dataclass(frozen=True)
class KernelVersion:
    """A kernel base version such as ``6.1.0-18``.

    Equality is by text; ``sort_key`` gives the numeric ordering.
    """

    text: str

    @property
    def sort_key(self) -> tuple[int, ...]:
        return tuple(int(x) for x in re.findall(r"\d+", self.text))

    def __str__(self) -> str:
        return self.text


def extract_base_version(value: str | None) -> KernelVersion | None:
    """Return the leftmost ``MAJOR.MINOR.PATCH-ABI`` token in value, or None.

    Works on package names (``linux-headers-6.1.0-18-generic``), directory
    names and ``uname -r`` output alike.
    """
    if not value:
        return None
    m = BASE_VERSION_RE.search(value)
    if m is None:
        return None
    return KernelVersion(m.group(0))


def version_key(value: str) -> tuple[int, ...]:
    """
    Create a sortable key for a package or release string from its base version.
    Strings without a base version sort before everything else.
    """
    version = extract_base_version(value)
    return version.sort_key if version is not None else ()
