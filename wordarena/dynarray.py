"""Growable arrays and string builders whose storage lives in an arena."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Union

from wordarena.arena import Arena, BytesLike

INIT_CAPACITY = 256


class DynamicArray:
    """A growable array of fixed-width unsigned integers kept in an arena."""

    def __init__(self, arena: Arena, item_size: int = 1) -> None:
        if item_size < 1:
            raise ValueError("item size must be at least one byte")
        self.arena = arena
        self.item_size = item_size
        self.count = 0
        self.capacity = 0
        self.items: Optional[memoryview] = None

    def _reserve(self, extra: int) -> None:
        needed = self.count + extra
        if needed <= self.capacity:
            return
        new_capacity = self.capacity or INIT_CAPACITY
        while needed > new_capacity:
            new_capacity *= 2
        self.items = self.arena.realloc(self.items, new_capacity * self.item_size)
        self.capacity = new_capacity

    def _encode(self, item: int) -> bytes:
        if not isinstance(item, int):
            raise TypeError(f"items must be integers, not {type(item).__name__}")
        try:
            return item.to_bytes(self.item_size, "little")
        except OverflowError:
            raise ValueError(
                f"{item} does not fit in {self.item_size} unsigned byte(s)"
            ) from None

    def _write(self, blob: bytes) -> None:
        self._reserve(len(blob) // self.item_size)
        if not blob:
            return
        start = self.count * self.item_size
        self.items[start:start + len(blob)] = blob
        self.count += len(blob) // self.item_size

    def append(self, item: int) -> None:
        """Add one item, growing the storage if needed."""
        self._write(self._encode(item))

    def extend(self, items: Iterable[int]) -> None:
        """Add several items with at most one reallocation."""
        self._write(b"".join(self._encode(item) for item in items))

    def __len__(self) -> int:
        return self.count

    def _item_at(self, index: int) -> int:
        start = index * self.item_size
        return int.from_bytes(self.items[start:start + self.item_size], "little")

    def __getitem__(self, index: Union[int, slice]) -> Union[int, List[int]]:
        if isinstance(index, slice):
            return [self._item_at(i) for i in range(*index.indices(self.count))]
        if index < 0:
            index += self.count
        if not 0 <= index < self.count:
            raise IndexError("dynamic array index out of range")
        return self._item_at(index)

    def __iter__(self) -> Iterator[int]:
        return (self._item_at(i) for i in range(self.count))


class StringBuilder(DynamicArray):
    """A dynamic array of bytes used to assemble text."""

    def __init__(self, arena: Arena) -> None:
        super().__init__(arena, 1)

    def append_buf(self, data: BytesLike) -> None:
        """Append raw bytes."""
        self._write(bytes(data))

    def append_str(self, text: Union[str, BytesLike]) -> None:
        """Append a string up to its first NUL."""
        raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        self.append_buf(raw.split(b"\0", 1)[0])

    def append_null(self) -> None:
        """Append a NUL byte."""
        self.append(0)

    def value(self) -> str:
        """The built text up to the first NUL byte."""
        raw = bytes(self.items[:self.count]) if self.items is not None else b""
        return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def main(argv: Optional[List[str]] = None) -> int:
    """Build and print a greeting."""
    arena = Arena()
    builder = StringBuilder(arena)
    builder.append_str("Hello, ")
    builder.append_buf(b"World")
    builder.append_null()
    print(builder.value())
    return 0