"""Exceptions raised by the toolchain manager."""

from __future__ import annotations

import os
from typing import Any

from chainkeeper.tools import component_for_bin

COMMAND_NAME = "chainkeeper"


def _show(value: Any) -> str:
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)


class ChainkeeperError(Exception):
    """Base class of every error raised by the package."""

    description = "toolchain manager error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.description if message is None else message)


class LocatingWorkingDirError(ChainkeeperError):
    description = "could not locate working directory"


class ReadingFileError(ChainkeeperError):
    description = "could not read file"

    def __init__(self, name: str, path: Any) -> None:
        self.name, self.path = name, path
        super().__init__(f"could not read {name} file: '{_show(path)}'")


class ReadingDirectoryError(ChainkeeperError):
    description = "could not read directory"

    def __init__(self, name: str, path: Any) -> None:
        self.name, self.path = name, path
        super().__init__(f"could not read {name} directory: '{_show(path)}'")


class WritingFileError(ChainkeeperError):
    description = "could not write file"

    def __init__(self, name: str, path: Any) -> None:
        self.name, self.path = name, path
        super().__init__(f"could not write {name} file: '{_show(path)}'")


class CreatingDirectoryError(ChainkeeperError):
    description = "could not create directory"

    def __init__(self, name: str, path: Any) -> None:
        self.name, self.path = name, path
        super().__init__(f"could not create {name} directory: '{_show(path)}'")


class ExpectedTypeError(ChainkeeperError):
    description = "expected type"

    def __init__(self, type_name: str, field: str) -> None:
        self.type_name, self.field = type_name, field
        super().__init__(f"expected type: '{type_name}' for '{field}'")


class FilteringFileError(ChainkeeperError):
    description = "could not copy file"

    def __init__(self, name: str, src: Any, dest: Any) -> None:
        self.name, self.src, self.dest = name, src, dest
        super().__init__(
            f"could not copy {name} file from '{_show(src)}' to '{_show(dest)}'"
        )


class RenamingFileError(ChainkeeperError):
    description = "could not rename file"

    def __init__(self, name: str, src: Any, dest: Any) -> None:
        self.name, self.src, self.dest = name, src, dest
        super().__init__(
            f"could not rename {name} file from '{_show(src)}' to '{_show(dest)}'"
        )


class RenamingDirectoryError(ChainkeeperError):
    description = "could not rename directory"

    def __init__(self, name: str, src: Any, dest: Any) -> None:
        self.name, self.src, self.dest = name, src, dest
        super().__init__(
            f"could not rename {name} directory from '{_show(src)}' to '{_show(dest)}'"
        )


class InvalidUrlError(ChainkeeperError):
    description = "invalid url"

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"invalid url: {url}")


class RunningCommandError(ChainkeeperError):
    description = "command failed"

    def __init__(self, name: Any) -> None:
        self.name = name
        super().__init__(f"command failed: '{_show(name)}'")


class NotAFileError(ChainkeeperError):
    description = "not a file"

    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"not a file: '{_show(path)}'")


class NotADirectoryPathError(ChainkeeperError):
    description = "not a directory"

    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"not a directory: '{_show(path)}'")


class LinkingFileError(ChainkeeperError):
    description = "could not link file"

    def __init__(self, src: Any, dest: Any) -> None:
        self.src, self.dest = src, dest
        super().__init__(f"could not create link from '{_show(src)}' to '{_show(dest)}'")


class LinkingDirectoryError(ChainkeeperError):
    description = "could not symlink directory"

    def __init__(self, src: Any, dest: Any) -> None:
        self.src, self.dest = src, dest
        super().__init__(f"could not create link from '{_show(src)}' to '{_show(dest)}'")


class CopyingDirectoryError(ChainkeeperError):
    description = "could not copy directory"

    def __init__(self, src: Any, dest: Any) -> None:
        self.src, self.dest = src, dest
        super().__init__(
            f"could not copy directory from '{_show(src)}' to '{_show(dest)}'"
        )


class CopyingFileError(ChainkeeperError):
    description = "could not copy file"

    def __init__(self, src: Any, dest: Any) -> None:
        self.src, self.dest = src, dest
        super().__init__(f"could not copy file from '{_show(src)}' to '{_show(dest)}'")


class RemovingFileError(ChainkeeperError):
    description = "could not remove file"

    def __init__(self, name: str, path: Any) -> None:
        self.name, self.path = name, path
        super().__init__(f"could not remove '{name}' file: '{_show(path)}'")


class RemovingDirectoryError(ChainkeeperError):
    description = "could not remove directory"

    def __init__(self, name: str, path: Any) -> None:
        self.name, self.path = name, path
        super().__init__(f"could not remove '{name}' directory: '{_show(path)}'")


class SettingPermissionsError(ChainkeeperError):
    description = "failed to set permissions"

    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"failed to set permissions for '{_show(path)}'")


class InvalidToolchainNameError(ChainkeeperError):
    description = "invalid toolchain name"

    def __init__(self, toolchain: str) -> None:
        self.toolchain = toolchain
        super().__init__(f"invalid toolchain name: '{toolchain}'")


class InvalidCustomToolchainNameError(ChainkeeperError):
    description = "invalid custom toolchain name"

    def __init__(self, toolchain: str) -> None:
        self.toolchain = toolchain
        super().__init__(f"invalid custom toolchain name: '{toolchain}'")


class ChecksumFailedError(ChainkeeperError):
    description = "checksum failed"

    def __init__(self, url: str, expected: str, calculated: str) -> None:
        self.url, self.expected, self.calculated = url, expected, calculated
        super().__init__(
            f"checksum failed, expected: '{expected}', calculated: '{calculated}'"
        )


class CorruptComponentError(ChainkeeperError):
    description = "corrupt component manifest"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"component manifest for '{name}' is corrupt")


class BadInstallerVersionError(ChainkeeperError):
    description = "unsupported installer version"

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"unsupported installer version: {version}")


class BadInstalledMetadataVersionError(ChainkeeperError):
    description = "unsupported metadata version in existing installation"

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(
            f"unsupported metadata version in existing installation: {version}"
        )


class UnsupportedVersionError(ChainkeeperError):
    description = "unsupported manifest version"

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"manifest version '{version}' is not supported")


class UnknownMetadataVersionError(ChainkeeperError):
    description = "unknown metadata version"

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"unknown metadata version: '{version}'")


class ToolchainNotInstalledError(ChainkeeperError):
    description = "toolchain is not installed"

    def __init__(self, toolchain: str) -> None:
        self.toolchain = toolchain
        super().__init__(f"toolchain '{toolchain}' is not installed")


class OverrideToolchainNotInstalledError(ChainkeeperError):
    description = "override toolchain is not installed"

    def __init__(self, toolchain: str) -> None:
        self.toolchain = toolchain
        super().__init__(f"override toolchain '{toolchain}' is not installed")


def install_msg(binary: str, toolchain: str, is_default: bool) -> str:
    """Return the hint telling how to install the component providing ``binary``."""
    component = component_for_bin(binary)
    if component is None:
        return ""
    target = "" if is_default else f" --toolchain {toolchain}"
    return f"\nTo install, run `{COMMAND_NAME} component add {component}{target}`"


class BinaryNotFoundError(ChainkeeperError):
    description = "toolchain does not contain binary"

    def __init__(self, binary: str, toolchain: str, is_default: bool) -> None:
        self.binary, self.toolchain, self.is_default = binary, toolchain, is_default
        super().__init__(
            f"'{binary}' is not installed for the toolchain '{toolchain}'"
            f"{install_msg(binary, toolchain, is_default)}"
        )


class NeedMetadataUpgradeError(ChainkeeperError):
    description = (
        f"{COMMAND_NAME}'s metadata is out of date. run `{COMMAND_NAME} self upgrade-data`"
    )


class UpgradeIoError(ChainkeeperError):
    description = "I/O error during upgrade"


class BadInstallerTypeError(ChainkeeperError):
    description = "invalid extension for installer"

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"invalid extension for installer: '{extension}'")


class ComponentsUnsupportedError(ChainkeeperError):
    description = "toolchain does not support components"

    def __init__(self, toolchain: str) -> None:
        self.toolchain = toolchain
        super().__init__(f"toolchain '{toolchain}' does not support components")


class UnknownComponentError(ChainkeeperError):
    description = "toolchain does not contain component"

    def __init__(
        self, toolchain: str, component: str, suggestion: str | None = None
    ) -> None:
        self.toolchain, self.component, self.suggestion = toolchain, component, suggestion
        hint = f"; did you mean '{suggestion}'?" if suggestion is not None else ""
        super().__init__(
            f"toolchain '{toolchain}' does not contain component {component}{hint}"
        )


class AddingRequiredComponentError(ChainkeeperError):
    description = "required component cannot be added"

    def __init__(self, toolchain: str, component: str) -> None:
        self.toolchain, self.component = toolchain, component
        super().__init__(
            f"component {component} was automatically added because it is "
            f"required for toolchain '{toolchain}'"
        )


class RemovingRequiredComponentError(ChainkeeperError):
    description = "required component cannot be removed"

    def __init__(self, toolchain: str, component: str) -> None:
        self.toolchain, self.component = toolchain, component
        super().__init__(
            f"component {component} is required for toolchain '{toolchain}' "
            "and cannot be removed"
        )


class ParsingSettingsError(ChainkeeperError):
    description = "error parsing settings"

    def __init__(self, error: Any = None) -> None:
        self.error = error
        if error is None:
            super().__init__()
        else:
            super().__init__(f"{self.description}: {error}")


class UnsupportedKindError(ChainkeeperError):
    description = "unsupported tar entry"

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"tar entry kind '{kind}' is not supported")


class BadPathError(ChainkeeperError):
    description = "bad path in tar"

    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"tar path '{_show(path)}' is not supported")