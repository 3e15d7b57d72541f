"""Notifications emitted while managing toolchains."""

from __future__ import annotations

import os
from enum import Enum, auto
from typing import Any


class NotificationLevel(Enum):
    """How important a notification is."""

    VERBOSE = "verbose"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class NotificationKind(Enum):
    """Every kind of notification; wrapper kinds carry another notification."""

    INSTALL = auto()
    UTILS = auto()
    TEMP = auto()
    SET_DEFAULT_TOOLCHAIN = auto()
    SET_OVERRIDE_TOOLCHAIN = auto()
    LOOKING_FOR_TOOLCHAIN = auto()
    TOOLCHAIN_DIRECTORY = auto()
    UPDATING_TOOLCHAIN = auto()
    INSTALLING_TOOLCHAIN = auto()
    INSTALLED_TOOLCHAIN = auto()
    USING_EXISTING_TOOLCHAIN = auto()
    UNINSTALLING_TOOLCHAIN = auto()
    UNINSTALLED_TOOLCHAIN = auto()
    TOOLCHAIN_NOT_INSTALLED = auto()
    UPDATE_HASH_MATCHES = auto()
    UPGRADING_METADATA = auto()
    METADATA_UPGRADE_NOT_NEEDED = auto()
    WRITING_METADATA_VERSION = auto()
    READ_METADATA_VERSION = auto()
    NON_FATAL_ERROR = auto()
    UPGRADE_REMOVES_TOOLCHAINS = auto()
    MISSING_FILE_DURING_SELF_UNINSTALL = auto()


_K = NotificationKind
_L = NotificationLevel

_WRAPPERS = frozenset({_K.INSTALL, _K.UTILS, _K.TEMP})

# kind -> (number of arguments, level, message template)
_SPECS: dict[NotificationKind, tuple[int, NotificationLevel, str]] = {
    _K.SET_DEFAULT_TOOLCHAIN: (1, _L.INFO, "default toolchain set to '{0}'"),
    _K.SET_OVERRIDE_TOOLCHAIN: (
        2, _L.INFO, "override toolchain for '{0}' set to '{1}'"),
    _K.LOOKING_FOR_TOOLCHAIN: (
        1, _L.VERBOSE, "looking for installed toolchain '{0}'"),
    _K.TOOLCHAIN_DIRECTORY: (2, _L.VERBOSE, "toolchain directory: '{0}'"),
    _K.UPDATING_TOOLCHAIN: (
        1, _L.VERBOSE, "updating existing install for '{0}'"),
    _K.INSTALLING_TOOLCHAIN: (1, _L.VERBOSE, "installing toolchain '{0}'"),
    _K.INSTALLED_TOOLCHAIN: (1, _L.VERBOSE, "toolchain '{0}' installed"),
    _K.USING_EXISTING_TOOLCHAIN: (
        1, _L.INFO, "using existing install for '{0}'"),
    _K.UNINSTALLING_TOOLCHAIN: (1, _L.INFO, "uninstalling toolchain '{0}'"),
    _K.UNINSTALLED_TOOLCHAIN: (1, _L.INFO, "toolchain '{0}' uninstalled"),
    _K.TOOLCHAIN_NOT_INSTALLED: (
        1, _L.INFO, "no toolchain installed for '{0}'"),
    _K.UPDATE_HASH_MATCHES: (0, _L.VERBOSE, "toolchain is already up to date"),
    _K.UPGRADING_METADATA: (
        2, _L.INFO, "upgrading metadata version from '{0}' to '{1}'"),
    _K.METADATA_UPGRADE_NOT_NEEDED: (
        1, _L.INFO, "nothing to upgrade: metadata version is already '{0}'"),
    _K.WRITING_METADATA_VERSION: (
        1, _L.VERBOSE, "writing metadata version: '{0}'"),
    _K.READ_METADATA_VERSION: (1, _L.VERBOSE, "read metadata version: '{0}'"),
    _K.NON_FATAL_ERROR: (1, _L.ERROR, "{0}"),
    _K.UPGRADE_REMOVES_TOOLCHAINS: (
        0,
        _L.WARN,
        "this upgrade will remove all existing toolchains. "
        "you will need to reinstall them",
    ),
    _K.MISSING_FILE_DURING_SELF_UNINSTALL: (
        1, _L.WARN, "expected file does not exist to uninstall: {0}"),
}


def _show(value: Any) -> str:
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)


class Notification:
    """A notification of a given kind with its arguments.

    Wrapper kinds (``INSTALL``, ``UTILS``, ``TEMP``) take one argument, another
    notification object with ``level()`` and ``__str__``, and delegate to it.
    """

    __slots__ = ("kind", "args")

    def __init__(self, kind: NotificationKind, *args: Any) -> None:
        expected = 1 if kind in _WRAPPERS else _SPECS[kind][0]
        if len(args) != expected:
            raise TypeError(
                f"{kind.name} takes {expected} argument(s), got {len(args)}"
            )
        self.kind = kind
        self.args = args

    def level(self) -> NotificationLevel:
        """Return the importance of this notification."""
        if self.kind in _WRAPPERS:
            return self.args[0].level()
        return _SPECS[self.kind][1]

    def __str__(self) -> str:
        if self.kind in _WRAPPERS:
            return str(self.args[0])
        return _SPECS[self.kind][2].format(*(_show(a) for a in self.args))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Notification):
            return NotImplemented
        return self.kind == other.kind and self.args == other.args

    def __hash__(self) -> int:
        return hash((self.kind, self.args))

    def __repr__(self) -> str:
        inner = ", ".join(repr(a) for a in self.args)
        return f"Notification({self.kind.name}{', ' if inner else ''}{inner})"