"""Named, hit-testable screen rectangles recorded at render time."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass(frozen=True)
class ZoneMap:
    """Zone id -> rectangle of the last rendered frame (0-based screen cells)."""

    rects: dict[str, Rect] = field(default_factory=dict)

    def resolve(self, x: int, y: int) -> str | None:
        for zone_id, rect in self.rects.items():
            if rect.contains(x, y):
                return zone_id
        return None


CAMPUS_ZONE_PREFIX = "campus:"


def campus_zone(campus: str) -> str:
    return f"{CAMPUS_ZONE_PREFIX}{campus}"


def campus_from_zone(zone_id: str | None) -> str | None:
    if zone_id is None or not zone_id.startswith(CAMPUS_ZONE_PREFIX):
        return None
    return zone_id[len(CAMPUS_ZONE_PREFIX) :]
