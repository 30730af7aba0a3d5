import logging
import os
from pathlib import Path

from .config import DEFAULT_DATA_DIRS, SYSTEM_FLATPAK_APPS, USER_APPS, USER_FLATPAK_APPS
from .entries import ParseError, parse_desktop_entry_file

logger = logging.getLogger(__name__)


def app_dirs(environ=None):
    """Application directories in priority order, highest first"""
    environ = os.environ if environ is None else environ
    dirs = []

    home = environ.get("HOME", "")
    data_home = environ.get("XDG_DATA_HOME", "")
    data_dirs = environ.get("XDG_DATA_DIRS", "") or DEFAULT_DATA_DIRS

    if data_home:
        dirs.append(Path(data_home) / "applications")
    elif home:
        dirs.append(Path(home) / USER_APPS)

    for d in data_dirs.split(":"):
        if d:
            dirs.append(Path(d) / "applications")

    flatpak_dirs = [SYSTEM_FLATPAK_APPS]
    if home:
        flatpak_dirs.insert(0, Path(home) / USER_FLATPAK_APPS)
    for d in flatpak_dirs:
        if d not in dirs:
            dirs.append(d)

    return dirs


def is_desktop_file(filename):
    return filename.split(".")[-1] == "desktop"


def list_desktop_files(dirs):
    paths = []
    for d in dirs:
        try:
            found = sorted(Path(d).iterdir())
        except OSError:
            continue
        paths.extend(path for path in found if is_desktop_file(path.name))
    return paths


class EntryView:
    """Matches of one query; iterating again runs the filter again."""

    def __init__(self, entries, phrase):
        self._entries = entries
        self.phrase = phrase.lower()

    def matches(self, entry):
        if entry.no_display:
            return False
        if not self.phrase:
            return True
        return any(
            self.phrase in field.lower()
            for field in (entry.name_loc, entry.comment_loc, entry.comment, entry.exec)
        )

    def __iter__(self):
        return (entry for entry in self._entries if self.matches(entry))


class EntryIndex:

    def __init__(self, dirs=None, lang=None):
        self.dirs = dirs
        self.lang = lang
        self.entries = ()
        self.skipped = 0
        self.hidden = 0
        self.summary = ""

    def __len__(self):
        return len(self.entries)

    def refresh(self):
        """Rescan all application directories and rebuild the index"""
        dirs = app_dirs() if self.dirs is None else self.dirs
        desktop_files = list_desktop_files(dirs)

        by_id = {}
        skipped = 0
        hidden = 0
        for path in desktop_files:
            desktop_id = path.name
            if desktop_id in by_id:
                skipped += 1
                continue

            try:
                entry = parse_desktop_entry_file(desktop_id, path, self.lang)
            except ParseError as e:
                logger.debug("Skipping %s", e)
                continue

            # hidden entries stay in the index, they only never show up in results
            if entry.no_display:
                hidden += 1

            by_id[desktop_id] = entry

        self.entries = tuple(sorted(by_id.values(), key=lambda e: e.name_loc))
        self.skipped = skipped
        self.hidden = hidden
        self.summary = f"{len(self.entries) - hidden} entries (+{hidden} hidden)"

        logger.debug("Found %d desktop files", len(self.entries))
        logger.debug('Skipped %d duplicates; %d .desktop entries hidden by "NoDisplay=true"',
                     skipped, hidden)
        return self.summary

    def query(self, phrase=""):
        return EntryView(self.entries, phrase)
