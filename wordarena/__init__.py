"""Region-based arena allocator, arena-backed dynamic arrays and string builders, and a small expression parser."""

__version__ = "0.1.0"
__all__ = ["arena", "dynarray", "expr"]