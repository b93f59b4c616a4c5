import pytest

from wordarena.arena import DEFAULT_REGION_CAPACITY, WORD_SIZE, Arena, Mark


def counts(arena):
    return [r.count for r in arena.regions()]


def test_first_region_uses_default_capacity():
    arena = Arena()
    arena.alloc(1)
    assert [r.capacity for r in arena.regions()] == [DEFAULT_REGION_CAPACITY]
    assert DEFAULT_REGION_CAPACITY == 8 * 1024


def test_alloc_rounds_up_to_words():
    arena = Arena()
    view = arena.alloc(1)
    assert len(view) == 1
    arena.alloc(WORD_SIZE + 1)
    assert counts(arena) == [3]


def test_zero_alloc_takes_no_words():
    arena = Arena(region_capacity=4)
    view = arena.alloc(0)
    assert len(view) == 0
    assert counts(arena) == [0]


def test_large_alloc_gets_own_sized_region():
    arena = Arena(region_capacity=4)
    arena.alloc(10 * WORD_SIZE)
    assert [r.capacity for r in arena.regions()] == [10]


def test_overflow_opens_new_region():
    arena = Arena(region_capacity=4)
    arena.alloc(3 * WORD_SIZE)
    arena.alloc(2 * WORD_SIZE)
    assert counts(arena) == [3, 2]
    assert arena.end is list(arena.regions())[1]


def test_written_bytes_persist():
    arena = Arena()
    view = arena.alloc(5)
    view[:] = b"hello"
    assert bytes(view) == b"hello"


def test_allocations_do_not_overlap():
    arena = Arena(region_capacity=8)
    first = arena.alloc(WORD_SIZE)
    second = arena.alloc(WORD_SIZE)
    first[:] = b"a" * WORD_SIZE
    second[:] = b"b" * WORD_SIZE
    assert bytes(first) == b"a" * WORD_SIZE
    assert bytes(second) == b"b" * WORD_SIZE


def test_negative_alloc_rejected():
    with pytest.raises(ValueError):
        Arena().alloc(-1)


def test_negative_region_capacity_rejected():
    with pytest.raises(ValueError):
        Arena(region_capacity=-1)


def test_realloc_shrinking_returns_same_view():
    arena = Arena()
    view = arena.alloc(16)
    assert arena.realloc(view, 8) is view


def test_realloc_grows_and_copies():
    arena = Arena()
    view = arena.alloc(3)
    view[:] = b"abc"
    grown = arena.realloc(view, 10)
    assert len(grown) == 10
    assert bytes(grown[:3]) == b"abc"


def test_realloc_from_nothing():
    arena = Arena()
    view = arena.realloc(None, 6)
    assert len(view) == 6


def test_strdup_appends_terminator():
    arena = Arena()
    assert bytes(arena.strdup("hello")) == b"hello\0"


def test_strdup_stops_at_nul():
    arena = Arena()
    assert bytes(arena.strdup(b"ab\0cd")) == b"ab\0"


def test_memdup_copies():
    arena = Arena()
    source = bytearray(b"\x01\x02\x03")
    dup = arena.memdup(source)
    source[0] = 9
    assert bytes(dup) == b"\x01\x02\x03"


def test_sprintf_formats():
    arena = Arena()
    assert bytes(arena.sprintf("%s=%d", "x", 5)) == b"x=5\0"


def test_snapshot_of_empty_arena():
    arena = Arena()
    assert arena.snapshot() == Mark(None, 0)


def test_rewind_to_empty_mark_resets():
    arena = Arena(region_capacity=4)
    mark = arena.snapshot()
    arena.alloc(3 * WORD_SIZE)
    arena.alloc(3 * WORD_SIZE)
    arena.rewind(mark)
    assert counts(arena) == [0, 0]


def test_rewind_restores_position_across_regions():
    arena = Arena(region_capacity=4)
    arena.alloc(2 * WORD_SIZE)
    mark = arena.snapshot()
    arena.alloc(2 * WORD_SIZE)
    arena.alloc(4 * WORD_SIZE)
    arena.rewind(mark)
    assert counts(arena) == [2, 0]
    assert arena.end is mark.region


def test_rewind_rejects_foreign_mark():
    one = Arena()
    other = Arena()
    one.alloc(8)
    other.alloc(8)
    with pytest.raises(ValueError):
        other.rewind(one.snapshot())


def test_reset_keeps_regions_and_reuses_memory():
    arena = Arena(region_capacity=4)
    first = arena.alloc(WORD_SIZE)
    arena.alloc(4 * WORD_SIZE)
    arena.reset()
    assert counts(arena) == [0, 0]
    again = arena.alloc(WORD_SIZE)
    again[:] = b"z" * WORD_SIZE
    assert bytes(first) == b"z" * WORD_SIZE


def test_free_drops_all_regions():
    arena = Arena()
    arena.alloc(8)
    arena.free()
    assert list(arena.regions()) == []
    assert arena.end is None


def test_context_manager_frees():
    with Arena() as arena:
        arena.alloc(8)
    assert list(arena.regions()) == []


def test_trim_drops_regions_after_end():
    arena = Arena(region_capacity=4)
    arena.alloc(4 * WORD_SIZE)
    arena.alloc(4 * WORD_SIZE)
    arena.alloc(4 * WORD_SIZE)
    arena.reset()
    arena.alloc(WORD_SIZE)
    arena.trim()
    assert counts(arena) == [1]