"""Domain models for unicafe menus."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_DAY_MONTH_RE = re.compile(r"(\d{1,2})\.(\d{1,2})\.?$")


@dataclass(frozen=True)
class TextValue:
    text: str

    def describe(self) -> str:
        return self.text


@dataclass(frozen=True)
class NumberValue:
    number: float

    def describe(self) -> str:
        if self.number == int(self.number):
            return str(int(self.number))
        return f"{self.number:.2f}"


@dataclass(frozen=True)
class StructuredValue:
    """A JSON object or array, kept as ordered (key, value) pairs."""

    fields: tuple[tuple[str, LooseValue], ...]

    def get(self, key: str) -> LooseValue:
        for name, value in self.fields:
            if name == key:
                return value
        return Absent()

    def describe(self) -> str:
        parts = [f"{name}: {value.describe()}" for name, value in self.fields if not isinstance(value, Absent)]
        return ", ".join(parts)


@dataclass(frozen=True)
class Absent:
    def describe(self) -> str:
        return ""


@dataclass(frozen=True)
class Unrepresentable:
    """Fallback for upstream values with no sensible display form."""

    type_name: str

    def describe(self) -> str:
        return "?"


LooseValue = TextValue | NumberValue | StructuredValue | Absent | Unrepresentable


def loose_value(raw: object) -> LooseValue:
    """Classify a decoded JSON value into the loose-value variant."""
    if raw is None:
        return Absent()
    if isinstance(raw, bool):
        return Unrepresentable("bool")
    if isinstance(raw, str):
        return TextValue(raw) if raw.strip() else Absent()
    if isinstance(raw, (int, float)):
        return NumberValue(float(raw))
    if isinstance(raw, dict):
        return StructuredValue(tuple((str(key), loose_value(value)) for key, value in raw.items()))
    if isinstance(raw, list):
        return StructuredValue(tuple((str(idx), loose_value(value)) for idx, value in enumerate(raw)))
    return Unrepresentable(type(raw).__name__)


@dataclass(frozen=True)
class Price:
    name: str = ""
    value: LooseValue = field(default_factory=Absent)


@dataclass(frozen=True)
class MenuItem:
    """One dish line of a daily menu."""

    name: str
    category: str
    price: Price = field(default_factory=Price)
    ingredients: str = ""
    nutrition: str = ""


@dataclass(frozen=True)
class Menu:
    """A single day's menu as published upstream."""

    date: str
    items: tuple[MenuItem, ...] = ()
    message: str = ""

    @property
    def day_month(self) -> tuple[int, int] | None:
        """Parse the trailing ``D.M.`` token, e.g. ``"Ma 13.10."`` -> ``(13, 10)``."""
        tokens = self.date.split()
        if not tokens:
            return None
        match = _DAY_MONTH_RE.search(tokens[-1])
        if match is None:
            return None
        day, month = int(match.group(1)), int(match.group(2))
        if not (1 <= day <= 31 and 1 <= month <= 12):
            return None
        return (day, month)


@dataclass(frozen=True)
class VisitingHours:
    business: LooseValue = field(default_factory=Absent)
    breakfast: LooseValue = field(default_factory=Absent)
    bistro: LooseValue = field(default_factory=Absent)
    lunch: LooseValue = field(default_factory=Absent)


@dataclass(frozen=True)
class Location:
    id: int
    name: str


@dataclass(frozen=True)
class MenuData:
    menus: tuple[Menu, ...] = ()
    id: int = 0
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    feedback_address: str = ""
    description: str = ""
    visiting_hours: VisitingHours = field(default_factory=VisitingHours)
    areacode: int = 0


@dataclass(frozen=True)
class Restaurant:
    """A restaurant and its published menus."""

    title: str
    menu_data: MenuData = field(default_factory=MenuData)
    id: int = 0
    slug: str = ""
    address: str = ""
    locations: tuple[Location, ...] = ()

    @property
    def menus(self) -> tuple[Menu, ...]:
        return self.menu_data.menus
