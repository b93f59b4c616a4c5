# wordarena

`wordarena` is a region-based arena allocator. Memory is handed out in whole
machine words from a chain of regions. You can take a snapshot and rewind to it
later, or reset the whole arena so its regions are used again. Dynamic arrays
and string builders keep their storage inside an arena. A small expression
parser shows the arena in use.

Regions are ordinary Python `bytearray`s. Allocations are `memoryview` slices of
them. The package does not obtain memory from the operating system directly.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## The arena (`wordarena.arena`)

```python
from wordarena.arena import Arena

with Arena(region_capacity=8 * 1024) as arena:   # capacity in words; freed on exit
    block = arena.alloc(100)          # memoryview of 100 bytes, rounded up to whole words
    mark = arena.snapshot()
    name = arena.strdup("hello")      # NUL-terminated copy
    line = arena.sprintf("%s has %d items", "cart", 3)

    arena.rewind(mark)   # drop everything allocated after the snapshot
    arena.reset()        # keep the regions, drop every allocation
    released = arena.trim()   # release the regions after the current one; returns how many

    for region in arena.regions():
        print(region.count, region.capacity, region.free_words)
```

- `alloc(size_bytes)` uses the current region or a later one that has room. If
  none has room, it appends a new region of `max(region_capacity, needed words)`
  words. A negative size raises `ValueError`.
- `realloc(old, new_size)` returns the old block as a memoryview when
  `new_size` is no larger than it. Otherwise it allocates a new block and
  copies the old contents into it. `old` may be `None`.
- `strdup(text)` copies a `str` (encoded as UTF-8) or a bytes-like object up
  to its first NUL and adds a terminating NUL. `memdup(data)` copies a
  bytes-like object as it is.
- `sprintf(fmt, *args)` formats with Python's `%` operator and stores the
  result as `strdup` does.
- `snapshot()` returns a `Mark`. `rewind(mark)` raises `ValueError` if the
  mark's region does not belong to the arena. A mark taken from an empty arena
  resets it.
- `trim()` raises `ValueError` on an arena that has no regions. `free()`
  releases every region.
- The `end` property gives the region that allocations currently come from, or
  `None` for an empty arena.

`WORD_SIZE` is the size of a pointer on the running platform.
`DEFAULT_REGION_CAPACITY` is 8192 words.

## Dynamic arrays and string builders (`wordarena.dynarray`)

```python
from wordarena.arena import Arena
from wordarena.dynarray import DynamicArray, StringBuilder

arena = Arena()

numbers = DynamicArray(arena, item_size=8)   # unsigned, little-endian, 8 bytes each
numbers.append(1)
numbers.extend([2, 3, 4])
print(len(numbers), numbers[2], numbers[1:3], list(numbers))

sb = StringBuilder(arena)
sb.append_str("Hello, ")
sb.append_buf(b"World")
sb.append_null()
print(sb.value())   # "Hello, World"
```

Items are unsigned integers of `item_size` bytes. A value that does not fit
raises `ValueError`, and a non-integer raises `TypeError`. Capacity starts at
256 items and doubles until the new items fit. The storage is then moved with
the arena's `realloc`. `extend` reallocates at most once. `value()` decodes the
built bytes as UTF-8 up to the first NUL.

## Expression parser (`wordarena.expr`)

`parse_expr(source, arena)` parses non-negative integers, `+`, `*` and
parentheses into a tree of `Node` objects, each with a `NodeKind` of `NUMB`,
`PLUS` or `MULT`. It reserves three words of the arena for each node. `+` and
`*` have equal precedence and group to the right, so `2*3+4` is `2*(3+4)`.
Numbers wrap to signed 32-bit values. On bad input it raises `ParseError`. The
error has `position`, `expected` and `found` attributes, and its message shows
the source with a caret under the offending position.

`format_tree(node, level)` renders the tree as an indented outline.
`count_regions(arena)` counts the arena's regions. `arena_summary(arena)`
describes the default region size and each region's capacity and usage.

## Commands

```
wordarena-sb-demo
wordarena-expr ["EXPRESSION"]
```

`wordarena-sb-demo` builds "Hello, World" with a string builder and prints it.

`wordarena-expr` parses the given expression, or
`((2*17)+(10*3))+(5*(1+1))` if none is given. It uses an arena with 10-word
regions. It prints the tree, makes four 64 KiB allocations, and prints the
arena summary. On a parse error it prints the error and exits with status 1.