"""Proxied tool names and the components that provide them."""

from __future__ import annotations

import os

EXE_SUFFIX = ".exe" if os.name == "nt" else ""

# Every binary that is proxied through the installed toolchain.
TOOLS: tuple[str, ...] = (
    "rustc",
    "rustdoc",
    "cargo",
    "rust-lldb",
    "rust-gdb",
    "rls",
    "cargo-clippy",
    "clippy-driver",
    "cargo-miri",
)

# Tools that are often installed by other means as well; these are handled
# with care so that an existing installation is not overwritten.
DUP_TOOLS: tuple[str, ...] = ("rustfmt", "cargo-fmt")

_COMPONENT_FOR_BIN = {
    "rustc": "rustc",
    "rustdoc": "rustc",
    "cargo": "cargo",
    "rust-lldb": "lldb-preview",
    "rust-gdb": "gdb-preview",
    "rls": "rls",
    "cargo-clippy": "clippy",
    "clippy-driver": "clippy",
    "cargo-miri": "miri",
    "rustfmt": "rustfmt",
    "cargo-fmt": "rustfmt",
}


def component_for_bin(binary: str) -> str | None:
    """Return the name of the component that ships ``binary``, if known."""
    prefix = binary
    if EXE_SUFFIX:
        index = binary.find(EXE_SUFFIX)
        if index >= 0:
            prefix = binary[:index]
    return _COMPONENT_FOR_BIN.get(prefix)