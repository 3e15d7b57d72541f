"""Persistent user settings: metadata version, defaults and directory overrides."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from chainkeeper.errors import (
    ChainkeeperError,
    ExpectedTypeError,
    ParsingSettingsError,
    ReadingFileError,
    UnknownMetadataVersionError,
    WritingFileError,
)
from chainkeeper.notifications import Notification, NotificationKind

SUPPORTED_METADATA_VERSIONS: tuple[str, ...] = ("2", "12")
DEFAULT_METADATA_VERSION = "12"

NotifyHandler = Callable[[Notification], None]


def _path_to_key(path: str | os.PathLike[str]) -> str:
    if Path(path).exists():
        try:
            return os.path.realpath(path, strict=True)
        except OSError:
            return os.fspath(path)
    return os.fspath(path)


def _take_string(table: dict[str, Any], key: str, path: str) -> str:
    if key not in table:
        raise ChainkeeperError(f"missing key: '{path}{key}'")
    value = table.pop(key)
    if not isinstance(value, str):
        raise ExpectedTypeError("string", path + key)
    return value


def _take_opt_string(table: dict[str, Any], key: str, path: str) -> str | None:
    if key not in table:
        return None
    value = table.pop(key)
    if not isinstance(value, str):
        raise ExpectedTypeError("string", path + key)
    return value


def _take_table(table: dict[str, Any], key: str, path: str) -> dict[str, Any]:
    if key not in table:
        return {}
    value = table.pop(key)
    if not isinstance(value, dict):
        raise ExpectedTypeError("table", path + key)
    return value


@dataclass
class Settings:
    """The contents of the settings file."""

    version: str = DEFAULT_METADATA_VERSION
    default_host_triple: str | None = None
    default_toolchain: str | None = None
    overrides: dict[str, str] = field(default_factory=dict)

    def remove_override(
        self, path: str | os.PathLike[str], notify_handler: NotifyHandler | None = None
    ) -> bool:
        """Drop the override for ``path``; return whether one was present."""
        return self.overrides.pop(_path_to_key(path), None) is not None

    def add_override(
        self,
        path: str | os.PathLike[str],
        toolchain: str,
        notify_handler: NotifyHandler | None = None,
    ) -> None:
        """Make ``toolchain`` the override for the directory ``path``."""
        key = _path_to_key(path)
        if notify_handler is not None:
            notify_handler(
                Notification(NotificationKind.SET_OVERRIDE_TOOLCHAIN, path, toolchain)
            )
        self.overrides[key] = toolchain

    def dir_override(
        self, dir: str | os.PathLike[str], notify_handler: NotifyHandler | None = None
    ) -> str | None:
        """Return the toolchain overriding ``dir``, if any."""
        return self.overrides.get(_path_to_key(dir))

    @classmethod
    def parse(cls, data: str) -> Settings:
        """Parse settings from TOML text."""
        try:
            table = tomllib.loads(data)
        except tomllib.TOMLDecodeError as exc:
            raise ParsingSettingsError(exc) from exc
        return cls.from_toml(table, "")

    def stringify(self) -> str:
        """Render the settings as TOML text."""
        return tomli_w.dumps(self.into_toml())

    @classmethod
    def from_toml(cls, table: dict[str, Any], path: str = "") -> Settings:
        """Build settings from a decoded TOML table; ``path`` prefixes key names in errors."""
        table = dict(table)
        version = _take_string(table, "version", path)
        if version not in SUPPORTED_METADATA_VERSIONS:
            raise UnknownMetadataVersionError(version)
        default_host_triple = _take_opt_string(table, "default_host_triple", path)
        default_toolchain = _take_opt_string(table, "default_toolchain", path)
        overrides = {
            key: value
            for key, value in _take_table(table, "overrides", path).items()
            if isinstance(value, str)
        }
        return cls(
            version=version,
            default_host_triple=default_host_triple,
            default_toolchain=default_toolchain,
            overrides=overrides,
        )

    def into_toml(self) -> dict[str, Any]:
        """Return the settings as a TOML-ready table."""
        result: dict[str, Any] = {"version": self.version}
        if self.default_host_triple is not None:
            result["default_host_triple"] = self.default_host_triple
        if self.default_toolchain is not None:
            result["default_toolchain"] = self.default_toolchain
        result["overrides"] = dict(sorted(self.overrides.items()))
        return result


class SettingsFile:
    """A settings file on disk, read once and cached."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._cache: Settings | None = None

    def _write(self, settings: Settings) -> None:
        try:
            self.path.write_text(settings.stringify(), encoding="utf-8")
        except OSError as exc:
            raise WritingFileError("settings", self.path) from exc

    def _load(self) -> Settings:
        if self._cache is None:
            if self.path.is_file():
                try:
                    content = self.path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as exc:
                    raise ReadingFileError("settings", self.path) from exc
                self._cache = Settings.parse(content)
            else:
                self._cache = Settings()
                self._write(self._cache)
        return self._cache

    def read(self) -> Settings:
        """Return the settings, creating a default file if none exists."""
        return self._load()

    @contextmanager
    def edit(self) -> Iterator[Settings]:
        """Yield the settings for changing and save them when the block succeeds."""
        settings = self._load()
        yield settings
        self._write(settings)