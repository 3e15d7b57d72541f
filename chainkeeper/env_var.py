"""Helpers that derive a command's environment from the current one."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from typing import Any

from chainkeeper.command import Command

RECURSION_COUNT_MAX = 5

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1


def _split_paths(value: str) -> list[str]:
    return value.split(os.pathsep)


def _join_paths(parts: Iterable[Any]) -> str | None:
    texts = [os.fspath(p) for p in parts]
    forbidden = (os.pathsep, '"') if os.name == "nt" else (os.pathsep,)
    if any(ch in text for text in texts for ch in forbidden):
        return None
    return os.pathsep.join(texts)


def append_path(name: str, value: Iterable[Any], cmd: Command) -> None:
    """Set ``name`` on ``cmd`` to the current value followed by ``value``."""
    old = os.environ.get(name)
    parts = [*(_split_paths(old) if old is not None else []), *value]
    joined = _join_paths(parts)
    if joined is not None:
        cmd.env[name] = joined


def prepend_path(name: str, value: Iterable[Any], cmd: Command) -> None:
    """Set ``name`` on ``cmd`` to ``value`` followed by the current value."""
    old = os.environ.get(name)
    parts = [*value, *(_split_paths(old) if old is not None else [])]
    joined = _join_paths(parts)
    if joined is not None:
        cmd.env[name] = joined


def inc(name: str, cmd: Command) -> None:
    """Set ``name`` on ``cmd`` to one more than its current integer value."""
    raw = os.environ.get(name, "")
    old = 0
    if _INTEGER.fullmatch(raw):
        parsed = int(raw)
        if _I32_MIN <= parsed <= _I32_MAX:
            old = parsed
    cmd.env[name] = str(old + 1)