"""Executor that performs each operation at once in the calling thread."""

from __future__ import annotations

from collections.abc import Iterator

from chainkeeper.diskio.core import Executor, Item, perform


class ImmediateUnpacker(Executor):
    """Performs IO synchronously; useful for diagnosing threaded IO problems."""

    def dispatch(self, item: Item) -> Iterator[Item]:
        perform(item)
        return iter([item])

    def join(self) -> Iterator[Item]:
        return iter(())

    def completed(self) -> Iterator[Item]:
        return iter(())