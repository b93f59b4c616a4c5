"""A tiny arithmetic expression parser whose tree nodes are counted in an arena."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from wordarena.arena import WORD_SIZE, Arena

# A node holds a kind tag and either an int or two child pointers,
# which takes three machine words.
NODE_WORDS = 3
NODE_SIZE = NODE_WORDS * WORD_SIZE
REGION_CAPACITY = 10
DEFAULT_SOURCE = "((2*17)+(10*3))+(5*(1+1))"

_U64_MASK = (1 << 64) - 1
_U32_MASK = (1 << 32) - 1


class NodeKind(Enum):
    NUMB = "number"
    PLUS = "plus"
    MULT = "mult"


@dataclass
class Node:
    """A number leaf or a binary operation over two subtrees."""

    kind: NodeKind
    number: int = 0
    lhs: Optional["Node"] = None
    rhs: Optional["Node"] = None


def _describe(source: bytes, position: int) -> str:
    if position >= len(source):
        return "end of source"
    ch = source[position]
    if 0x20 <= ch < 0x7F:
        return f"character '{chr(ch)}'"
    return f"byte {ch:02x}"


class ParseError(Exception):
    """Raised when the source does not match the expression grammar."""

    def __init__(self, source: bytes, position: int, expected: str) -> None:
        self.source = source.decode("utf-8", errors="replace")
        self.position = position
        self.expected = expected
        self.found = _describe(source, position)
        super().__init__(
            f"{self.source}\n"
            f"{' ' * position}^\n"
            f"ERROR: Unexpected {self.found}. Expected {expected}."
        )


def _to_int32(value: int) -> int:
    value &= _U32_MASK
    return value - (1 << 32) if value >= (1 << 31) else value


class _Parser:
    def __init__(self, source: bytes, arena: Arena) -> None:
        self.source = source
        self.pos = 0
        self.arena = arena

    def peek(self) -> int:
        return self.source[self.pos] if self.pos < len(self.source) else 0

    def error(self, expected: str) -> ParseError:
        return ParseError(self.source, self.pos, expected)

    def new_node(self, kind: NodeKind, **fields: object) -> Node:
        self.arena.alloc(NODE_SIZE)
        return Node(kind, **fields)

    def primary(self) -> Node:
        ch = self.peek()
        if ch == ord("("):
            self.pos += 1
            expr = self.expr()
            if self.peek() != ord(")"):
                raise self.error("')'")
            self.pos += 1
            return expr
        if ord("0") <= ch <= ord("9"):
            value = 0
            while ord("0") <= self.peek() <= ord("9"):
                value = (value * 10 + self.peek() - ord("0")) & _U64_MASK
                self.pos += 1
            return self.new_node(NodeKind.NUMB, number=_to_int32(value))
        raise self.error("'(' or a number")

    def expr(self) -> Node:
        lhs = self.primary()
        ch = self.peek()
        if ch == ord("+"):
            kind = NodeKind.PLUS
        elif ch == ord("*"):
            kind = NodeKind.MULT
        else:
            return lhs
        node = self.new_node(kind, lhs=lhs)
        self.pos += 1
        node.rhs = self.expr()
        return node


def parse_expr(source: str, arena: Arena) -> Node:
    """Parse a whole expression, allocating a node's worth of arena per node.

    Operators are right-associative with equal precedence.
    """
    raw = source.encode("utf-8").split(b"\0", 1)[0]
    parser = _Parser(raw, arena)
    root = parser.expr()
    if parser.pos < len(raw):
        raise parser.error("end of source")
    return root


def _tree_lines(node: Node, level: int) -> Iterator[str]:
    indent = " " * (2 * level)
    if node.kind is NodeKind.NUMB:
        yield f"{indent}- number: {node.number}"
        return
    yield f"{indent}- {node.kind.value}:"
    yield from _tree_lines(node.lhs, level + 1)
    yield from _tree_lines(node.rhs, level + 1)


def format_tree(node: Node, level: int = 0) -> str:
    """Render the tree as an indented outline, one line per node."""
    return "".join(line + "\n" for line in _tree_lines(node, level))


def count_regions(arena: Arena) -> int:
    """Number of regions in the arena's chain."""
    return sum(1 for _ in arena.regions())


def arena_summary(arena: Arena) -> str:
    """Describe the arena's default capacity and each region's usage."""
    lines = [
        "Arena Summary:",
        f"  Default region size: {arena.region_capacity} words "
        f"({arena.region_capacity * WORD_SIZE} bytes)",
        f"  Regions ({count_regions(arena)}):",
    ]
    for n, region in enumerate(arena.regions()):
        lines.append(
            f"    Region {n}: address = {id(region):#x}, "
            f"capacity = {region.capacity} words ({region.capacity * WORD_SIZE} bytes), "
            f"count = {region.count} words ({region.count * WORD_SIZE} bytes)"
        )
    return "".join(line + "\n" for line in lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse an expression, print its tree and a summary of the node arena."""
    args = sys.argv[1:] if argv is None else argv
    source = args[0] if args else DEFAULT_SOURCE
    nodes = Arena(REGION_CAPACITY)

    print(f"Source: {source}")
    try:
        expr = parse_expr(source, nodes)
    except ParseError as error:
        print(error)
        return 1
    print("Parsed AST:")
    print(format_tree(expr, 1), end="")
    print()

    for _ in range(4):
        nodes.alloc(64 * 1024)

    print(arena_summary(nodes), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())