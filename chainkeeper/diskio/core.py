"""Disk IO operations and the executor interface that carries them out."""

from __future__ import annotations

import os
import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from types import TracebackType


class Kind(Enum):
    """The kind of operation an item performs."""

    DIRECTORY = auto()
    FILE = auto()


@dataclass
class Item:
    """One disk operation, its timing and its outcome."""

    full_path: Path
    kind: Kind
    mode: int
    content: bytes | None = None
    start: float = 0.0
    finish: float = 0.0
    size: int | None = None
    error: OSError | None = None

    @classmethod
    def make_dir(cls, full_path: str | os.PathLike[str], mode: int) -> Item:
        """An operation creating the directory ``full_path``."""
        return cls(Path(full_path), Kind.DIRECTORY, mode)

    @classmethod
    def write_file(
        cls, full_path: str | os.PathLike[str], content: bytes, mode: int
    ) -> Item:
        """An operation writing ``content`` to the file ``full_path``."""
        data = bytes(content)
        return cls(Path(full_path), Kind.FILE, mode, content=data, size=len(data))

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded (or has not failed yet)."""
        return self.error is None


class Executor(ABC):
    """Carries out disk operations, possibly deferring them."""

    def execute(self, item: Item) -> Iterator[Item]:
        """Start ``item``; consume the returned iterator to get it accepted.

        Under load, previously queued items may have to complete before the
        new one is accepted; those are yielded.
        """
        item.start = time.perf_counter()
        return self.dispatch(item)

    @abstractmethod
    def dispatch(self, item: Item) -> Iterator[Item]:
        """Hand ``item`` over for execution; called by :meth:`execute`."""

    @abstractmethod
    def join(self) -> Iterator[Item]:
        """Finish every pending operation and iterate over those not yet returned."""

    @abstractmethod
    def completed(self) -> Iterator[Item]:
        """Iterate over operations that have finished so far."""

    def close(self) -> None:
        """Release any resources held by the executor."""

    def __enter__(self) -> Executor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def perform(item: Item) -> None:
    """Carry out ``item`` in the calling thread, recording its outcome."""
    try:
        if item.kind is Kind.DIRECTORY:
            create_dir(item.full_path)
        else:
            write_file(item.full_path, item.content or b"", item.mode)
    except OSError as exc:
        item.error = exc
    else:
        item.error = None
    item.finish = time.perf_counter()


def write_file(path: str | os.PathLike[str], contents: bytes, mode: int) -> None:
    """Create or truncate ``path`` and write ``contents``; ``mode`` applies on POSIX."""
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
    fd = os.open(path, flags, mode if os.name != "nt" else 0o666)
    with os.fdopen(fd, "wb") as handle:
        handle.write(contents)


def create_dir(path: str | os.PathLike[str]) -> None:
    """Create the directory ``path``; its parent must exist."""
    os.mkdir(path)