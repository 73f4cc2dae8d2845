"""IRC line parsing utilities."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParsedLine:
    prefix: str | None
    command: str
    params: tuple[str, ...] = ()
    trailing: str | None = None

    @property
    def is_numeric(self) -> bool:
        return len(self.command) == 3 and self.command.isdigit()

    @property
    def last_param(self) -> str | None:
        """Free-text argument: the trailing section, else the last middle param."""
        if self.trailing is not None:
            return self.trailing
        return self.params[-1] if self.params else None


def _tokens(text: str) -> Iterator[tuple[int, str]]:
    # Yields (offset, token) for every run of non-space characters
    pos = 0
    length = len(text)
    while pos < length:
        if text[pos] == " ":
            pos += 1
            continue
        end = text.find(" ", pos)
        if end == -1:
            end = length
        yield pos, text[pos:end]
        pos = end


def parse_line(raw: str) -> ParsedLine:
    """Split one protocol line into prefix, command, middle params and trailing.

    Never raises: anything that was received parses to some ParsedLine, an
    empty or prefix-only line yielding an empty command. Runs of spaces
    between middle params are collapsed, while the trailing section is kept
    verbatim (including inner spacing and an empty value after a bare ``:``).
    """
    line = raw.rstrip("\r\n")
    prefix: str | None = None
    rest = line

    if rest.startswith(":"):
        # Malformed lines may omit the space after the prefix
        prefix, _, rest = rest[1:].partition(" ")

    command = ""
    params: list[str] = []
    trailing: str | None = None

    for offset, token in _tokens(rest):
        if not command:
            command = token.upper()
            continue
        if token.startswith(":"):
            trailing = rest[offset + 1 :]
            break
        params.append(token)

    return ParsedLine(
        prefix=prefix, command=command, params=tuple(params), trailing=trailing
    )


def nick_from_prefix(prefix: str | None) -> str:
    """Sender nickname: the part of ``nick!user@host`` before the first ``!``."""
    if not prefix:
        return ""
    return prefix.split("!", 1)[0]
