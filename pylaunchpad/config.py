import os
from dataclasses import dataclass
from pathlib import Path

APP_NAME = "pylaunchpad"

DEFAULT_TERMINAL = "foot"
DEFAULT_DATA_DIRS = "/usr/local/share/:/usr/share/"
SYSTEM_FLATPAK_APPS = Path("/var/lib/flatpak/exports/share/applications")
USER_FLATPAK_APPS = Path(".local/share/flatpak/exports/share/applications")
USER_APPS = Path(".local/share/applications")

DEFAULT_ICON_SIZE = 64
DEFAULT_COLUMNS = 6
DEFAULT_SPACING = 20


def default_string_if_blank(value, fallback):
    value = (value or "").strip()
    # TERM is "linux" when started from a compositor key binding
    if value == "" or value == "linux":
        return fallback
    return value


def default_terminal(environ=None):
    environ = os.environ if environ is None else environ
    return default_string_if_blank(environ.get("TERM"), DEFAULT_TERMINAL)


@dataclass(frozen=True)
class Options:
    """Runtime options, normally built from the command line."""
    daemon: bool = False
    no_show: bool = False
    debug: bool = False
    icon_size: int = DEFAULT_ICON_SIZE
    columns: int = DEFAULT_COLUMNS
    spacing: int = DEFAULT_SPACING
    style: str = ""
    output: str = ""
    terminal: str = DEFAULT_TERMINAL

    @classmethod
    def from_args(cls, args):
        return cls(
            daemon=args.daemon,
            no_show=args.no_show,
            debug=args.debug,
            icon_size=args.icon_size,
            columns=args.columns,
            spacing=args.spacing,
            style=args.style,
            output=args.output,
            terminal=args.terminal,
        )

    @property
    def start_visible(self):
        return not self.daemon or not self.no_show
