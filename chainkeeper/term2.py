"""Terminal output that degrades quietly when not attached to a capable terminal.

Control sequences are dropped on streams that are not a TTY, and features the
terminal lacks (colours, attributes) are ignored instead of raising.
"""

from __future__ import annotations

import functools
import os
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Any, TextIO


class Color(IntEnum):
    """The sixteen basic terminal colours."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    BRIGHT_BLACK = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15


class Attr(Enum):
    """Text attributes a terminal may support."""

    BOLD = auto()
    DIM = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    BLINK = auto()
    STANDOUT = auto()
    REVERSE = auto()
    SECURE = auto()


_ATTR_CAPS = {
    Attr.BOLD: "bold",
    Attr.DIM: "dim",
    Attr.ITALIC: "sitm",
    Attr.UNDERLINE: "smul",
    Attr.BLINK: "blink",
    Attr.STANDOUT: "smso",
    Attr.REVERSE: "rev",
    Attr.SECURE: "invis",
}

_ANSI_STRINGS = {
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "sitm": "\x1b[3m",
    "smul": "\x1b[4m",
    "blink": "\x1b[5m",
    "smso": "\x1b[7m",
    "rev": "\x1b[7m",
    "invis": "\x1b[8m",
    "sgr0": "\x1b[0m",
    "cuu1": "\x1b[A",
    "el": "\x1b[K",
    "cr": "\r",
}


class _Unsupported(Exception):
    """A feature the terminal does not provide."""


class _NotSupported(_Unsupported):
    pass


class _ColorOutOfRange(_Unsupported):
    pass


@dataclass(frozen=True)
class _Terminfo:
    strings: Mapping[str, str] = field(default_factory=dict)
    colors: int = 0


_EMPTY_TERMINFO = _Terminfo()


@functools.lru_cache(maxsize=None)
def _terminfo_for(term_name: str | None) -> _Terminfo:
    if not term_name:
        return _EMPTY_TERMINFO
    if term_name == "dumb":
        return _Terminfo({"cr": "\r"}, 0)
    if "256color" in term_name:
        colors = 256
    elif "16color" in term_name:
        colors = 16
    else:
        colors = 8
    return _Terminfo(dict(_ANSI_STRINGS), colors)


@functools.cache
def _env_term_name() -> str | None:
    return os.environ.get("TERM")


class _TerminfoTerminal:
    def __init__(self, stream: TextIO, info: _Terminfo) -> None:
        self.stream = stream
        self.info = info

    def _emit(self, cap: str) -> None:
        seq = self.info.strings.get(cap)
        if seq is None:
            raise _NotSupported(cap)
        self.stream.write(seq)

    def _checked_color(self, color: int) -> int:
        colors = self.info.colors
        if color >= colors and 8 <= color < 16:
            color -= 8
        if color < 0 or color >= colors:
            raise _ColorOutOfRange(color)
        return color

    def _set_color(self, color: int, base: int, bright_base: int, extended: int) -> None:
        color = self._checked_color(color)
        if color < 8:
            code = str(base + color)
        elif color < 16 and self.info.colors >= 16:
            code = str(bright_base + color - 8)
        else:
            code = f"{extended};5;{color}"
        self.stream.write(f"\x1b[{code}m")

    def fg(self, color: int) -> None:
        self._set_color(color, 30, 90, 38)

    def bg(self, color: int) -> None:
        self._set_color(color, 40, 100, 48)

    def attr(self, attr: Attr) -> None:
        self._emit(_ATTR_CAPS[attr])

    def supports_attr(self, attr: Attr) -> bool:
        return _ATTR_CAPS[attr] in self.info.strings

    def reset(self) -> None:
        for cap in ("sgr0", "op"):
            if cap in self.info.strings:
                self._emit(cap)
                return
        raise _NotSupported("reset")

    def supports_reset(self) -> bool:
        return any(cap in self.info.strings for cap in ("sgr0", "sgr", "op"))

    def supports_color(self) -> bool:
        return self.info.colors > 0

    def cursor_up(self) -> None:
        self._emit("cuu1")

    def delete_line(self) -> None:
        self._emit("el")

    def carriage_return(self) -> None:
        self._emit("cr")


def _attempt(action: Callable[..., Any], *args: Any) -> bool:
    """Run ``action``; report whether the terminal supported it."""
    try:
        action(*args)
    except _Unsupported:
        return False
    return True


class AutomationFriendlyTerminal:
    """A terminal that emits no controls on non-TTYs and ignores missing features.

    ``term_name`` is the terminal type (as in ``TERM``); ``None`` or an empty
    name means no capabilities are known.
    """

    def __init__(self, stream: TextIO, term_name: str | None = None) -> None:
        self._inner = _TerminfoTerminal(stream, _terminfo_for(term_name))

    @property
    def stream(self) -> TextIO:
        """The wrapped output stream."""
        return self._inner.stream

    def _isatty(self) -> bool:
        try:
            return bool(self._inner.stream.isatty())
        except (AttributeError, ValueError):
            return False

    def fg(self, color: int) -> None:
        if not self._isatty():
            return
        _attempt(self._inner.fg, color)

    def bg(self, color: int) -> None:
        if not self._isatty():
            return
        _attempt(self._inner.bg, color)

    def attr(self, attr: Attr) -> None:
        if not self._isatty():
            return
        try:
            self._inner.attr(attr)
        except (_Unsupported, OSError) as exc:
            if attr is Attr.BOLD:
                # Emulate bold with a bright foreground.
                _attempt(self._inner.fg, Color.BRIGHT_WHITE)
            elif not isinstance(exc, _Unsupported):
                raise

    def supports_attr(self, attr: Attr) -> bool:
        return self._inner.supports_attr(attr)

    def reset(self) -> None:
        if not self._isatty():
            return
        _attempt(self._inner.reset)

    def supports_reset(self) -> bool:
        return self._inner.supports_reset()

    def supports_color(self) -> bool:
        return self._inner.supports_color()

    def cursor_up(self) -> None:
        if not self._isatty():
            return
        _attempt(self._inner.cursor_up)

    def delete_line(self) -> None:
        _attempt(self._inner.delete_line)

    def carriage_return(self) -> None:
        _attempt(self._inner.carriage_return)

    def write(self, data: str) -> int:
        """Write ``data`` to the stream and return the count written."""
        return self._inner.stream.write(data)

    def flush(self) -> None:
        self._inner.stream.flush()


def stdout() -> AutomationFriendlyTerminal:
    """Return a terminal writing to standard output."""
    return AutomationFriendlyTerminal(sys.stdout, _env_term_name())


def stderr() -> AutomationFriendlyTerminal:
    """Return a terminal writing to standard error."""
    return AutomationFriendlyTerminal(sys.stderr, _env_term_name())