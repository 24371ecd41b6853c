"""Generational handle registry.

Maps opaque integer handles to live records. A handle packs a slot index and
the slot's generation: ``handle = generation << INDEX_BITS | index``. Releasing
a record bumps the slot's generation, so every handle issued before the release
becomes invalid even after the slot is reused.

The registry is not thread-safe; callers serialize access.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterator, TypeVar

from .errors import AllocationFailure, InvalidHandle

logger = logging.getLogger(__name__)

INDEX_BITS = 24
INDEX_MASK = (1 << INDEX_BITS) - 1

_T = TypeVar("_T")


def pack_handle(index: int, generation: int) -> int:
    return (generation << INDEX_BITS) | index


def unpack_handle(handle: int) -> tuple[int, int]:
    """Split a handle into (index, generation)."""
    return handle & INDEX_MASK, handle >> INDEX_BITS


class HandleRegistry(Generic[_T]):
    """Arena of records addressed by generation-checked handles.

    Args:
        kind: Record kind, used in error messages and logs ("graph", "vector space")
        capacity: Maximum number of simultaneously live records
    """

    def __init__(self, kind: str, capacity: int):
        if not 0 < capacity <= INDEX_MASK + 1:
            raise ValueError(f"capacity must be in [1, {INDEX_MASK + 1}], got {capacity}")
        self.kind = kind
        self.capacity = capacity
        self._records: list[_T | None] = []
        self._generations: list[int] = []
        self._free: list[int] = []
        self._live = 0

    def __len__(self) -> int:
        return self._live

    def __iter__(self) -> Iterator[tuple[int, _T]]:
        for index, record in enumerate(self._records):
            if record is not None:
                yield pack_handle(index, self._generations[index]), record

    def allocate(self, record: _T) -> int:
        """Register ``record`` and return its handle."""
        if self._live >= self.capacity:
            raise AllocationFailure(
                f"{self.kind} registry is full ({self.capacity} live records)"
            )
        if self._free:
            index = self._free.pop()
            self._records[index] = record
        else:
            index = len(self._records)
            self._records.append(record)
            self._generations.append(0)
        self._live += 1
        handle = pack_handle(index, self._generations[index])
        logger.debug("allocated %s handle %d (slot %d)", self.kind, handle, index)
        return handle

    def _slot(self, handle) -> int:
        if isinstance(handle, bool) or not isinstance(handle, int) or handle < 0:
            raise InvalidHandle(f"{handle!r} is not a {self.kind} handle")
        index, generation = unpack_handle(handle)
        if (
            index >= len(self._records)
            or self._generations[index] != generation
            or self._records[index] is None
        ):
            raise InvalidHandle(f"{self.kind} handle {handle} is not live")
        return index

    def get(self, handle: int) -> _T:
        return self._records[self._slot(handle)]

    def is_live(self, handle) -> bool:
        try:
            self._slot(handle)
        except InvalidHandle:
            return False
        return True

    def release(self, handle: int) -> _T:
        """Remove the record behind ``handle`` and return it."""
        index = self._slot(handle)
        record = self._records[index]
        self._records[index] = None
        self._generations[index] += 1
        self._free.append(index)
        self._live -= 1
        logger.debug("released %s handle %d (slot %d)", self.kind, handle, index)
        return record

    def clear(self) -> None:
        for handle, _ in list(self):
            self.release(handle)
