import io

import pytest

from pylaunchpad.entries import (
    DesktopEntry, ParseError, locale_subtag, parse_bool, parse_desktop_entry,
    parse_desktop_entry_file, parse_keypair,
)

FIREFOX = """\
[Desktop Entry]
Name=Firefox
Name[pl]=Przeglądarka Firefox
Comment=Browse the Web
Comment[pl]=Przeglądanie stron
Icon=firefox
Categories=Network;WebBrowser;
Terminal=false
Exec=firefox %u

[Desktop Action new-window]
Name=New Window
Exec=firefox --new-window %u
"""


def parse(text, lang="en_US.UTF-8", desktop_id="test.desktop"):
    return parse_desktop_entry(desktop_id, io.StringIO(text), lang)


def test_quotes_are_stripped_from_exec():
    entry = parse('Name=Foo\nExec="cmd" --flag\n')
    assert entry.name == "Foo"
    assert entry.exec == "cmd --flag"


def test_single_quotes_are_stripped_too():
    assert parse("Exec=sh -c 'echo hi'\n").exec == "sh -c echo hi"


def test_localized_fields_for_lang():
    entry = parse(FIREFOX, lang="pl_PL.UTF-8")
    assert entry.name == "Firefox"
    assert entry.name_loc == "Przeglądarka Firefox"
    assert entry.comment_loc == "Przeglądanie stron"


def test_localized_fields_fall_back_to_plain():
    entry = parse(FIREFOX, lang="de_DE.UTF-8")
    assert entry.name_loc == "Firefox"
    assert entry.comment_loc == "Browse the Web"


def test_only_main_section_is_read():
    entry = parse(FIREFOX)
    assert entry.name == "Firefox"
    assert entry.exec == "firefox %u"


def test_other_section_first_stops_parsing():
    entry = parse("[Something Else]\nName=Nope\n[Desktop Entry]\nName=Yes\n")
    assert entry.name == ""


def test_all_fields():
    entry = parse(FIREFOX, desktop_id="firefox.desktop")
    assert entry == DesktopEntry(
        desktop_id="firefox.desktop",
        name="Firefox",
        name_loc="Firefox",
        comment="Browse the Web",
        comment_loc="Browse the Web",
        icon="firefox",
        exec="firefox %u",
        category="Network;WebBrowser;",
        terminal=False,
        no_display=False,
    )


def test_whitespace_around_key_and_value():
    entry = parse("Name = Spaced Out \nTerminal =  true\n")
    assert entry.name == "Spaced Out"
    assert entry.terminal is True


def test_value_may_contain_equals():
    assert parse("Exec=env FOO=bar app\n").exec == "env FOO=bar app"


def test_lines_without_value_are_skipped():
    entry = parse("Name\n=orphan\nName=\nComment=kept\n")
    assert entry.name == ""
    assert entry.comment == "kept"


def test_bad_booleans_default_to_false():
    entry = parse("Name=X\nTerminal=yes\nNoDisplay=maybe\n")
    assert entry.terminal is False
    assert entry.no_display is False
    assert entry.name == "X"


def test_booleans():
    entry = parse("Terminal=1\nNoDisplay=True\n")
    assert entry.terminal is True
    assert entry.no_display is True


def test_crlf_line_endings():
    entry = parse("[Desktop Entry]\r\nName=Win\r\nExec=app\r\n")
    assert entry.name == "Win"
    assert entry.exec == "app"


def test_unknown_keys_ignored():
    entry = parse("Name=A\nKeywords=a;b;\nX-Foo=bar\n")
    assert entry.name == "A"


@pytest.mark.parametrize("lang, expected", [
    ("pl_PL.UTF-8", "pl"),
    ("en_US", "en"),
    ("C.UTF-8", "C"),
    ("de", "de"),
    ("", ""),
])
def test_locale_subtag(lang, expected):
    assert locale_subtag(lang) == expected


def test_lang_from_environment(monkeypatch):
    monkeypatch.setenv("LANG", "pl_PL.UTF-8")
    entry = parse_desktop_entry("x.desktop", io.StringIO(FIREFOX))
    assert entry.name_loc == "Przeglądarka Firefox"


def test_parse_keypair():
    assert parse_keypair("Name = Foo") == ("Name", "Foo")
    assert parse_keypair("=Foo") == ("=Foo", "")
    assert parse_keypair("Name") == ("Name", "")


def test_parse_bool_rejects_words():
    assert parse_bool("T") is True
    assert parse_bool("FALSE") is False
    with pytest.raises(ValueError):
        parse_bool("yes")


def test_parse_file(tmp_path):
    path = tmp_path / "firefox.desktop"
    path.write_text(FIREFOX, encoding="utf-8")
    entry = parse_desktop_entry_file("firefox.desktop", str(path), "en_US")
    assert entry.desktop_id == "firefox.desktop"
    assert entry.icon == "firefox"


def test_missing_file_raises_parse_error(tmp_path):
    with pytest.raises(ParseError):
        parse_desktop_entry_file("gone.desktop", str(tmp_path / "gone.desktop"))


def test_undecodable_file_raises_parse_error(tmp_path):
    path = tmp_path / "bad.desktop"
    path.write_bytes(b"Name=\xff\xfe\n")
    with pytest.raises(ParseError):
        parse_desktop_entry_file("bad.desktop", str(path))
