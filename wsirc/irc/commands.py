"""Outbound IRC line builders.

Each builder maps one caller intent to one protocol line (the handshake to
two). Text arguments have CR/LF removed first: the bridge is line-delimited,
so an embedded newline would start a second, unintended command.
"""

from __future__ import annotations

_LINE_BREAKS = str.maketrans("", "", "\r\n")


def clean(text: object) -> str:
    return str(text).translate(_LINE_BREAKS)


def handshake(username: str, nick: str) -> list[str]:
    user = clean(username)
    return [f"USER {user} * * :{user}", build_nick(nick)]


def build_privmsg(target: str, message: str) -> str:
    return f"PRIVMSG {clean(target)} :{clean(message)}"


def build_nick(new_nick: str) -> str:
    return f"NICK {clean(new_nick)}"


def build_join(channel: str) -> str:
    return f"JOIN {clean(channel)}"


def build_part(channel: str) -> str:
    return f"PART {clean(channel)}"


def build_quit(message: str) -> str:
    return f"QUIT :{clean(message)}"


def build_mode(channel: str, mode: str) -> str:
    return f"MODE {clean(channel)} {clean(mode)}"


def build_kick(channel: str, nick: str, message: str) -> str:
    return f"KICK {clean(channel)} {clean(nick)} :{clean(message)}"


def build_topic(channel: str, topic: str) -> str:
    return f"TOPIC {clean(channel)} :{clean(topic)}"


def build_names(channel: str) -> str:
    return f"NAMES {clean(channel)}"


def build_pong(ping_line: str) -> str:
    """Echo a PING back as PONG, keeping everything after the command verbatim."""
    return "PONG" + ping_line[len("PING") :]
