"""A vector with a fixed capacity that lives inside caller-supplied storage."""

from __future__ import annotations

import operator
from itertools import islice
from typing import Generic, Iterator, MutableSequence, Optional, TypeVar, Union, overload

T = TypeVar("T")


class CapacityError(Exception):
    """Raised when a value is pushed onto a full vector."""


class StackVec(Generic[T]):
    """A growable view over the first ``len`` slots of a fixed-size storage.

    The storage is never resized; ``push`` fails once every slot is in use.
    """

    def __init__(self, storage: MutableSequence[T], length: int = 0) -> None:
        if not 0 <= length <= len(storage):
            raise ValueError("Length exceeds storage capacity")
        self._storage = storage
        self._len = length

    def capacity(self) -> int:
        """Return the number of elements the vector can hold."""
        return len(self._storage)

    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` elements; longer lengths change nothing."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length < self._len:
            self._len = length

    def as_list(self) -> list[T]:
        """Return the elements currently in the vector as a new list."""
        return list(islice(self._storage, self._len))

    def is_full(self) -> bool:
        """Return True if the vector is at capacity."""
        return self._len == self.capacity()

    def push(self, value: T) -> None:
        """Append ``value``; raise ``CapacityError`` if the vector is full."""
        if self.is_full():
            raise CapacityError("vector is full")
        self._storage[self._len] = value
        self._len += 1

    def pop(self) -> Optional[T]:
        """Remove and return the last element, or None if the vector is empty."""
        if not self._len:
            return None
        self._len -= 1
        return self._storage[self._len]

    def __len__(self) -> int:
        return self._len

    def _position(self, index: int) -> int:
        position = operator.index(index)
        if position < 0:
            position += self._len
        if not 0 <= position < self._len:
            raise IndexError(f"index {index} out of range for length {self._len}")
        return position

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[T, list[T]]:
        if isinstance(index, slice):
            return self.as_list()[index]
        return self._storage[self._position(index)]

    def __setitem__(self, index: int, value: T) -> None:
        self._storage[self._position(index)] = value

    def __iter__(self) -> Iterator[T]:
        return islice(self._storage, self._len)

    def __repr__(self) -> str:
        return f"StackVec({self.as_list()!r}, capacity={self.capacity()})"