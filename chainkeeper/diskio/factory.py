"""Choice of the disk IO executor."""

from __future__ import annotations

import os
import re

from chainkeeper.diskio.core import Executor
from chainkeeper.diskio.immediate import ImmediateUnpacker
from chainkeeper.diskio.threaded import ProgressHandler, Threaded

IO_THREADS_VAR = "CHAINKEEPER_IO_THREADS"

_COUNT = re.compile(r"\+?[0-9]+")


def get_executor(notify_handler: ProgressHandler | None = None) -> Executor:
    """Return the executor selected by the IO threads environment variable.

    ``disabled`` selects the immediate executor, a number sets the thread
    count, and anything else (or nothing) uses the default thread count.
    """
    setting = os.environ.get(IO_THREADS_VAR)
    if setting == "disabled":
        return ImmediateUnpacker()
    if setting is not None and _COUNT.fullmatch(setting):
        return Threaded(notify_handler, int(setting))
    return Threaded(notify_handler)