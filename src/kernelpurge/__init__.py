"""kernelpurge: purge old Debian kernel packages and their leftover directories."""

__version__ = "0.1.0"
