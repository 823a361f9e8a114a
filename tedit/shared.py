"""State shared between the input and render threads."""

import threading
from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class ReadWriteLock:
    """Many readers or one writer.

    Waiting writers block new readers so a steady stream of reads cannot
    starve the input thread.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class Shared(Generic[T]):
    """A value guarded by its own ReadWriteLock.

    Usage::

        with shared.write() as buffer:
            buffer.redraw = True
    """

    def __init__(self, value: T):
        self._value = value
        self._lock = ReadWriteLock()

    @contextmanager
    def read(self) -> Iterator[T]:
        with self._lock.read_locked():
            yield self._value

    @contextmanager
    def write(self) -> Iterator[T]:
        with self._lock.write_locked():
            yield self._value
