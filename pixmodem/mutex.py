"""A lock that owns the value it protects."""

from __future__ import annotations

import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Mutex(Generic[T]):
    """Guards a value; the holding thread may lock it again.

    Releasing any guard frees the lock, whatever the nesting.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._cond = threading.Condition()
        self._locked = False
        self._owner: Optional[int] = None

    def _available_to(self, ident: int) -> bool:
        return not self._locked or self._owner == ident

    def try_lock(self) -> Optional[MutexGuard[T]]:
        """Acquire the lock if it is free or already ours; otherwise return None."""
        ident = threading.get_ident()
        with self._cond:
            if not self._available_to(ident):
                return None
            self._locked = True
            self._owner = ident
        return MutexGuard(self)

    def lock(self) -> MutexGuard[T]:
        """Block until the lock can be acquired and return its guard."""
        ident = threading.get_ident()
        with self._cond:
            self._cond.wait_for(lambda: self._available_to(ident))
            self._locked = True
            self._owner = ident
        return MutexGuard(self)

    def _unlock(self) -> None:
        with self._cond:
            self._locked = False
            self._cond.notify_all()

    def __repr__(self) -> str:
        with self._cond:
            visible = self._available_to(threading.get_ident())
        data = repr(self._value) if visible else "<locked>"
        return f"Mutex(data={data})"


class MutexGuard(Generic[T]):
    """Access to a locked mutex's value, returned by ``Mutex.lock``."""

    def __init__(self, mutex: Mutex[T]) -> None:
        self._mutex = mutex
        self._held = True

    def _check(self) -> None:
        if not self._held:
            raise RuntimeError("guard has been released")

    @property
    def value(self) -> T:
        """The protected value."""
        self._check()
        return self._mutex._value

    @value.setter
    def value(self, new: T) -> None:
        self._check()
        self._mutex._value = new

    def release(self) -> None:
        """Unlock the mutex; releasing twice does nothing."""
        if self._held:
            self._held = False
            self._mutex._unlock()

    def __enter__(self) -> MutexGuard[T]:
        return self

    def __exit__(self, *args) -> None:
        self.release()