"""Executor that spreads disk operations over a pool of threads.

Per-file syscall latency (network file systems, virus scanners) adds up over
tens of thousands of files; a thread pool hides most of it.
"""

from __future__ import annotations

import os
import queue
import threading
import time
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor, wait
from enum import Enum, auto
from typing import Any

from chainkeeper.diskio.core import Executor, Item, perform

# Above this many queued operations, new work waits for old work to finish.
_QUEUE_THRESHOLD = 5
_MAX_DEFERRED = 32767
_SENTINEL = object()


class TrackerEvent(Enum):
    """Progress events reported while waiting for deferred operations."""

    DOWNLOAD_FINISHED = auto()
    DOWNLOAD_PUSH_UNITS = auto()
    DOWNLOAD_CONTENT_LENGTH_RECEIVED = auto()
    DOWNLOAD_DATA_RECEIVED = auto()
    DOWNLOAD_POP_UNITS = auto()


ProgressHandler = Callable[[TrackerEvent, Any], None]


class Threaded(Executor):
    """Runs operations on worker threads and hands them back as they finish."""

    def __init__(
        self,
        notify_handler: ProgressHandler | None = None,
        thread_count: int | None = None,
    ) -> None:
        if thread_count is None:
            thread_count = os.cpu_count() or 1
        self._pool = ThreadPoolExecutor(
            max_workers=thread_count, thread_name_prefix="CloseHandle"
        )
        self._thread_count = thread_count
        self._notify_handler = notify_handler
        self._lock = threading.Lock()
        self._n_files = 0
        self._queued = 0
        self._pending: set[Future[None]] = set()
        self._results: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._closed = False

    @property
    def thread_count(self) -> int:
        """Number of worker threads."""
        return self._thread_count

    def _notify(self, event: TrackerEvent, value: Any = None) -> None:
        if self._notify_handler is not None:
            self._notify_handler(event, value)

    def _queued_count(self) -> int:
        with self._lock:
            return self._queued

    def _files_in_flight(self) -> int:
        with self._lock:
            return self._n_files

    def _forget(self, future: Future[None]) -> None:
        with self._lock:
            self._pending.discard(future)

    def _run(self, item: Item) -> None:
        with self._lock:
            self._queued -= 1
        try:
            perform(item)
        finally:
            with self._lock:
                self._n_files -= 1
            self._results.put(item)

    def _submit(self, item: Item) -> None:
        if self._closed:
            raise RuntimeError("cannot dispatch to a closed executor")
        with self._lock:
            self._n_files += 1
            self._queued += 1
        future = self._pool.submit(self._run, item)
        with self._lock:
            if not future.done():
                self._pending.add(future)
        future.add_done_callback(self._forget)

    def _submit_when_ready(self, item: Item) -> Iterator[Item]:
        # Hand back finished work before accepting more, to bound memory use.
        while self._queued_count() >= _QUEUE_THRESHOLD:
            task = self._results.get()
            if task is not _SENTINEL:
                yield task
        self._submit(item)

    def dispatch(self, item: Item) -> Iterator[Item]:
        return self._submit_when_ready(item)

    def _until_sentinel(self) -> Iterator[Item]:
        while True:
            task = self._results.get()
            if task is _SENTINEL:
                return
            yield task

    def join(self) -> Iterator[Item]:
        prev_files = self._files_in_flight()
        self._notify(TrackerEvent.DOWNLOAD_FINISHED)
        self._notify(TrackerEvent.DOWNLOAD_PUSH_UNITS, "iops")
        self._notify(TrackerEvent.DOWNLOAD_CONTENT_LENGTH_RECEIVED, prev_files)
        if prev_files > 50:
            print(f"{prev_files} deferred IO operations")
        if not 0 <= prev_files < _MAX_DEFERRED:
            raise RuntimeError(f"deferred IO operation count out of range: {prev_files}")
        current_files = prev_files
        while current_files != 0:
            time.sleep(0.1)
            prev_files, current_files = current_files, self._files_in_flight()
            self._notify(
                TrackerEvent.DOWNLOAD_DATA_RECEIVED, bytes(prev_files - current_files)
            )
        with self._lock:
            outstanding = list(self._pending)
        wait(outstanding)
        self._notify(TrackerEvent.DOWNLOAD_FINISHED)
        self._notify(TrackerEvent.DOWNLOAD_POP_UNITS)
        self._results.put(_SENTINEL)
        return self._until_sentinel()

    def completed(self) -> Iterator[Item]:
        while True:
            try:
                task = self._results.get_nowait()
            except queue.Empty:
                return
            if task is not _SENTINEL:
                yield task

    def close(self) -> None:
        """Finish and discard pending work, then stop the worker threads."""
        if self._closed:
            return
        for _ in self.join():
            pass
        self._closed = True
        self._pool.shutdown(wait=True)