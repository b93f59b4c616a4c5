"""Region-based bump allocator that hands out word-aligned byte views."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

WORD_SIZE = struct.calcsize("P")
DEFAULT_REGION_CAPACITY = 8 * 1024

BytesLike = Union[bytes, bytearray, memoryview]


def _words_for(size_bytes: int) -> int:
    return (size_bytes + WORD_SIZE - 1) // WORD_SIZE


@dataclass(eq=False)
class Region:
    """A fixed block of memory measured in machine words."""

    capacity: int
    count: int = 0
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError("region capacity must not be negative")
        self.data = bytearray(self.capacity * WORD_SIZE)
        self._view = memoryview(self.data)

    @property
    def free_words(self) -> int:
        return self.capacity - self.count

    def fits(self, words: int) -> bool:
        return self.count + words <= self.capacity

    def _take(self, words: int, size_bytes: int) -> memoryview:
        start = self.count * WORD_SIZE
        self.count += words
        return self._view[start:start + size_bytes]


@dataclass(frozen=True)
class Mark:
    """A saved allocation position that an arena can rewind to."""

    region: Optional[Region]
    count: int


class Arena:
    """A chain of regions from which memory is bump-allocated."""

    def __init__(self, region_capacity: int = DEFAULT_REGION_CAPACITY) -> None:
        if region_capacity < 0:
            raise ValueError("region capacity must not be negative")
        self.region_capacity = region_capacity
        self._regions: list[Region] = []
        self._end = 0

    def __enter__(self) -> "Arena":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.free()

    @property
    def end(self) -> Optional[Region]:
        """The region allocations currently come from, or None if empty."""
        return self._regions[self._end] if self._regions else None

    def _new_region(self, words: int) -> Region:
        return Region(max(self.region_capacity, words))

    def alloc(self, size_bytes: int) -> memoryview:
        """Reserve ``size_bytes`` bytes, rounded up to whole words."""
        if size_bytes < 0:
            raise ValueError("allocation size must not be negative")
        words = _words_for(size_bytes)

        if not self._regions:
            self._regions.append(self._new_region(words))
            self._end = 0

        last = len(self._regions) - 1
        while not self._regions[self._end].fits(words) and self._end < last:
            self._end += 1

        if not self._regions[self._end].fits(words):
            self._regions.append(self._new_region(words))
            self._end = len(self._regions) - 1

        return self._regions[self._end]._take(words, size_bytes)

    def realloc(self, old: Optional[BytesLike], new_size: int) -> memoryview:
        """Return storage of ``new_size`` bytes holding the contents of ``old``."""
        old_view = memoryview(old) if old is not None else memoryview(b"")
        if new_size <= len(old_view):
            if old is None:
                return self.alloc(new_size)
            return old if isinstance(old, memoryview) else old_view
        new = self.alloc(new_size)
        new[:len(old_view)] = old_view.cast("B") if old_view.ndim else old_view
        return new

    def strdup(self, text: Union[str, BytesLike]) -> memoryview:
        """Copy a string up to its first NUL, adding a NUL terminator."""
        raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        raw = raw.split(b"\0", 1)[0]
        dup = self.alloc(len(raw) + 1)
        dup[:len(raw)] = raw
        dup[len(raw)] = 0
        return dup

    def memdup(self, data: BytesLike) -> memoryview:
        """Copy a block of bytes into the arena."""
        raw = bytes(data)
        dup = self.alloc(len(raw))
        dup[:] = raw
        return dup

    def sprintf(self, fmt: str, *args: object) -> memoryview:
        """Format with ``%`` and store the NUL-terminated result."""
        return self.strdup(fmt % args)

    def snapshot(self) -> Mark:
        """Record the current allocation position."""
        end = self.end
        if end is None:
            return Mark(None, 0)
        return Mark(end, end.count)

    def reset(self) -> None:
        """Forget every allocation while keeping the regions."""
        for region in self._regions:
            region.count = 0
        self._end = 0

    def rewind(self, mark: Mark) -> None:
        """Drop every allocation made after ``mark`` was taken."""
        if mark.region is None:
            self.reset()
            return
        index = next(
            (i for i, region in enumerate(self._regions) if region is mark.region),
            None,
        )
        if index is None:
            raise ValueError("mark does not belong to this arena")
        mark.region.count = mark.count
        for region in self._regions[index + 1:]:
            region.count = 0
        self._end = index

    def free(self) -> None:
        """Release every region."""
        self._regions.clear()
        self._end = 0

    def trim(self) -> int:
        """Release the regions that follow the current one; return how many."""
        if not self._regions:
            raise ValueError("cannot trim an arena that has no regions")
        released = self._regions[self._end + 1:]
        self._regions = self._regions[:self._end + 1]
        return len(released)

    def regions(self) -> Iterator[Region]:
        """Iterate over the regions in chain order."""
        yield from self._regions