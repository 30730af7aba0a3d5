"""Single-instance application launchpad for Linux desktops."""

__version__ = "0.1.0"
