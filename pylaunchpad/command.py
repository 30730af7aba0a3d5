"""Turning an ``Exec`` value into something ``subprocess`` can start.

Field codes (``%f``, ``%U`` ...) are not expanded: the command is cut at the
first one. Tokens are split on single spaces; quotes were already removed by
the parser.
"""
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Invocation:
    executable: str
    arguments: List[str] = field(default_factory=list)
    env: List[str] = field(default_factory=list)    # "KEY=value" overrides


def strip_field_codes(template):
    cut = template.find("%")
    if cut == -1:
        return template
    return template[:cut].rstrip(" ")


def find_executable(tokens):
    """Index of the first token that is neither an assignment nor an option"""
    for idx, token in enumerate(tokens):
        if "=" not in token and not token.startswith("-"):
            return idx
    return 0


def parse_command(template):
    command = strip_field_codes(template)
    tokens = command.split(" ")

    env = [token for token in tokens if "=" in token]
    cmd_idx = find_executable(tokens)

    # Arguments always start after the first raw token, not after the
    # executable; "FOO=bar cmd arg" therefore passes "cmd" to itself.
    return Invocation(tokens[cmd_idx], tokens[1:], env)


def for_terminal(invocation, terminal):
    return Invocation(terminal, [invocation.executable], list(invocation.env))


def build_invocation(entry, terminal):
    invocation = parse_command(entry.exec)
    if entry.terminal:
        invocation = for_terminal(invocation, terminal)
    return invocation
