"""Parsing of freedesktop ``.desktop`` files.

Only the ``[Desktop Entry]`` group is read, and only the keys the launcher
actually uses. Action groups and everything after them are ignored.
"""
import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAIN_SECTION = "[Desktop Entry]"

TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


class ParseError(Exception):
    """A desktop file could not be opened, read or decoded."""


@dataclass(frozen=True)
class DesktopEntry:
    desktop_id: str     # file basename, unique in the index
    name: str = ""
    name_loc: str = ""
    comment: str = ""
    comment_loc: str = ""
    icon: str = ""
    exec: str = ""      # quotes already stripped
    category: str = ""
    terminal: bool = False
    no_display: bool = False


def locale_subtag(lang):
    """'pl_PL.UTF-8' -> 'pl'"""
    return lang.split(".")[0].split("_")[0]


def parse_keypair(line):
    idx = line.find("=")
    if idx > 0:
        return line[:idx].strip(), line[idx + 1:].strip()
    return line, ""


def parse_bool(value):
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def clean_exec(value):
    return value.replace('"', "").replace("'", "")


def parse_desktop_entry(desktop_id, stream, lang=None):
    if lang is None:
        lang = os.environ.get("LANG", "")
    subtag = locale_subtag(lang)
    localized_name = f"Name[{subtag}]"
    localized_comment = f"Comment[{subtag}]"

    fields = {"desktop_id": desktop_id}

    for line in stream:
        line = line.rstrip("\n").rstrip("\r")
        if line.startswith("[") and line != MAIN_SECTION:
            break

        key, value = parse_keypair(line)
        if value == "":
            continue

        if key == "Name":
            fields["name"] = value
        elif key == localized_name:
            fields["name_loc"] = value
        elif key == "Comment":
            fields["comment"] = value
        elif key == localized_comment:
            fields["comment_loc"] = value
        elif key == "Icon":
            fields["icon"] = value
        elif key == "Categories":
            fields["category"] = value
        elif key in ("Terminal", "NoDisplay"):
            try:
                flag = parse_bool(value)
            except ValueError:
                logger.debug("%s: ignoring %s=%s", desktop_id, key, value)
                continue
            fields["terminal" if key == "Terminal" else "no_display"] = flag
        elif key == "Exec":
            fields["exec"] = clean_exec(value)

    # no Name[xx] for this locale, fall back to the plain values
    if not fields.get("name_loc"):
        fields["name_loc"] = fields.get("name", "")
    if not fields.get("comment_loc"):
        fields["comment_loc"] = fields.get("comment", "")

    return DesktopEntry(**fields)


def parse_desktop_entry_file(desktop_id, path, lang=None):
    try:
        with open(path, encoding="utf-8") as f:
            return parse_desktop_entry(desktop_id, f, lang)
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"{path}: {e}") from e
