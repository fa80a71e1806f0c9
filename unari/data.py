"""Campus/date menu index built from fetched restaurant data."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Mapping

from unari.constant import CAMPUS_RESTAURANTS, CATEGORY_ALIASES, CATEGORY_RANK, UNKNOWN_CATEGORY_RANK
from unari.models import Menu, MenuItem, Restaurant


def _normalize_title(title: str) -> str:
    return " ".join(title.split()).casefold()


def category_for_label(label: str) -> str:
    """Map an upstream price label to a canonical category, keeping unknown labels verbatim."""
    cleaned = label.strip()
    if cleaned.lower() in CATEGORY_RANK:
        return cleaned.lower()
    return CATEGORY_ALIASES.get(cleaned.lower(), cleaned)


def category_rank(category: str) -> int:
    return CATEGORY_RANK.get(category.strip().lower(), UNKNOWN_CATEGORY_RANK)


def sort_items(items: Iterable[MenuItem]) -> list[MenuItem]:
    """Order items by category rank, then by trimmed lowercased name."""
    return sorted(items, key=lambda item: (category_rank(item.category), item.name.strip().lower()))


def campus_for_restaurant(title: str, campus_table: Mapping[str, list[str]] = CAMPUS_RESTAURANTS) -> str | None:
    """Resolve the fixed campus a restaurant title belongs to."""
    wanted = _normalize_title(title)
    for campus, names in campus_table.items():
        if any(_normalize_title(name) == wanted for name in names):
            return campus
    return None


@dataclass(frozen=True)
class MenuSection:
    """One restaurant's items for the looked-up date."""

    restaurant_title: str
    items: tuple[MenuItem, ...]


@dataclass(frozen=True)
class Found:
    sections: tuple[MenuSection, ...]


@dataclass(frozen=True)
class NotFound:
    pass


MenuResult = Found | NotFound


@dataclass(frozen=True)
class MenuIndex:
    """Campus name -> (restaurant, menu) pairs; every known campus has an entry."""

    entries: Mapping[str, tuple[tuple[Restaurant, Menu], ...]]

    @classmethod
    def build(cls, campus_table: Mapping[str, list[str]], restaurants: Iterable[Restaurant]) -> MenuIndex:
        grouped: dict[str, list[tuple[Restaurant, Menu]]] = {campus: [] for campus in campus_table}
        for restaurant in restaurants:
            campus = campus_for_restaurant(restaurant.title, campus_table)
            if campus is None:
                continue
            for menu in restaurant.menus:
                grouped[campus].append((restaurant, menu))
        return cls(entries={campus: tuple(pairs) for campus, pairs in grouped.items()})

    @classmethod
    def empty(cls, campus_table: Mapping[str, list[str]] = CAMPUS_RESTAURANTS) -> MenuIndex:
        return cls.build(campus_table, [])

    def campuses(self) -> list[str]:
        return list(self.entries)

    def lookup(self, campus: str, date: dt.date) -> MenuResult:
        """Find the menus of `campus` for the given calendar day.

        Dates are matched on day and month only, because that is all the
        upstream date string carries.
        """
        wanted = (date.day, date.month)
        sections: list[MenuSection] = []
        seen: set[str] = set()
        for restaurant, menu in self.entries.get(campus, ()):
            if menu.day_month != wanted or restaurant.title in seen:
                continue
            seen.add(restaurant.title)
            sections.append(MenuSection(restaurant.title, tuple(sort_items(menu.items))))
        if not sections:
            return NotFound()
        return Found(tuple(sections))
