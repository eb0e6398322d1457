import sys
from pathlib import Path

import pytest

# Ensure `src` is on sys.path for tests run from the repository root
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeSystem:
    """In-memory stand-in for KernelSystem."""

    def __init__(self, release='6.1.0-18-generic', packages=None, usage=(1000, 1000), purge_error=None):
        self.release = release
        self.packages = list(packages or [])
        self.usage = list(usage)
        self.purge_error = purge_error
        self.purged = []
        self.purge_calls = 0
        self.assume_yes = None

    def check_required_tools(self):
        pass

    def running_kernel_release(self):
        return self.release

    def list_kernel_packages(self):
        return list(self.packages)

    def purge(self, packages, assume_yes=False):
        self.purge_calls += 1
        self.assume_yes = assume_yes
        if self.purge_error is not None:
            raise self.purge_error
        self.purged.extend(packages)
        self.packages = [p for p in self.packages if p not in packages]

    def used_kilobytes(self, path='/'):
        if len(self.usage) > 1:
            return self.usage.pop(0)
        return self.usage[0]


@pytest.fixture
def fake_system():
    return FakeSystem


def make_kernel_tree(root: Path, *names: str) -> list[Path]:
    """Create directories with a file in each under root."""
    dirs = []
    for name in names:
        d = root / name
        d.mkdir(parents=True, exist_ok=True)
        (d / "Makefile").write_text("obj-y := x.o\n")
        dirs.append(d)
    return dirs


@pytest.fixture
def kernel_tree():
    return make_kernel_tree
