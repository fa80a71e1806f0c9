"""Scroll offset clamping."""

from __future__ import annotations


def max_offset(total_lines: int, viewport_height: int) -> int:
    return max(total_lines - max(viewport_height, 0), 0)


def clamp(offset: int, total_lines: int, viewport_height: int) -> int:
    """Clamp `offset` into ``[0, max(total_lines - viewport_height, 0)]``."""
    return min(max(offset, 0), max_offset(total_lines, viewport_height))


def visible_slice(lines: list, offset: int, viewport_height: int) -> tuple[list, int]:
    """Return the visible lines and the clamped offset actually used."""
    start = clamp(offset, len(lines), viewport_height)
    return lines[start : start + max(viewport_height, 0)], start
