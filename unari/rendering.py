"""Pure composition of session state and menu data into a screen frame."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.text import Text

from unari.clock import format_date
from unari.config import MIN_HEIGHT, MIN_WIDTH, SIDEBAR_WIDTH
from unari.constant import (
    CATEGORY_MARKERS,
    CATEGORY_UNCLASSIFIED,
    FETCH_FAILED_STATUS,
    LOADING_MESSAGE,
    NO_DATA_MESSAGE,
    STUDENT_PRICE_KEY,
    TOO_SMALL_MESSAGE,
)
from unari.data import Found, MenuResult
from unari.models import Absent, MenuItem, Price, StructuredValue
from unari.scroll import visible_slice
from unari.state import KEY_HELP, SessionState
from unari.zones import Rect, ZoneMap, campus_zone

TITLE_STYLE = "bold #FAFAFA on #7D56F4"
SIDEBAR_STYLE = "#04B575"
SIDEBAR_CURRENT_STYLE = "bold #FAFAFA on #04B575"
RESTAURANT_STYLE = "bold #7D56F4"
DATE_STYLE = "bold underline"
SEPARATOR_STYLE = "#585858"
KEY_STYLE = "bold #5f87ff"
HELP_STYLE = "#808080"
PRICE_STYLE = "#808080"

# Campus rows start below the sidebar title and a blank line.
SIDEBAR_FIRST_CAMPUS_ROW = 2


@dataclass(frozen=True)
class Frame:
    """One rendered screen.

    `centered` asks the host to center `body` in the viewport (guard and
    loading messages). `scroll_offset` is the clamped offset actually used.
    """

    body: Text
    zones: ZoneMap = field(default_factory=ZoneMap)
    centered: bool = False
    scroll_offset: int = 0


def category_marker(category: str) -> tuple[str, str]:
    return CATEGORY_MARKERS.get(category.strip().lower(), CATEGORY_MARKERS[CATEGORY_UNCLASSIFIED])


def price_text(price: Price) -> str:
    value = price.value
    if isinstance(value, StructuredValue):
        student = value.get(STUDENT_PRICE_KEY)
        if not isinstance(student, Absent):
            return student.describe()
    return value.describe()


def format_item(item: MenuItem) -> Text:
    marker, style = category_marker(item.category)
    text = Text("  ")
    text.append(marker, style=style)
    text.append(f" {item.name}")
    price = price_text(item.price)
    if price:
        text.append(f"  {price}", style=PRICE_STYLE)
    return text


def _fit(text: Text, width: int) -> Text:
    fitted = text.copy()
    fitted.truncate(width, overflow="ellipsis", pad=True)
    return fitted


def content_lines(state: SessionState, result: MenuResult) -> list[Text]:
    """Unclipped content pane lines: date header, then one block per restaurant."""
    lines = [Text(f"{state.campus} · {format_date(state.selected_date)}", style=DATE_STYLE), Text()]
    if not isinstance(result, Found):
        lines.append(Text(NO_DATA_MESSAGE, style="italic"))
        return lines

    for idx, section in enumerate(result.sections):
        if idx > 0:
            lines.append(Text())
        lines.append(Text(section.restaurant_title, style=RESTAURANT_STYLE))
        lines.extend(format_item(item) for item in section.items)
    return lines


def sidebar_lines(state: SessionState, height: int) -> tuple[list[Text], dict[str, Rect]]:
    lines = [Text(" Unicafe", style=TITLE_STYLE), Text()]
    zones: dict[str, Rect] = {}
    for idx, campus in enumerate(state.campuses):
        row = SIDEBAR_FIRST_CAMPUS_ROW + idx
        if idx == state.campus_index:
            lines.append(Text(f"▸ {campus}", style=SIDEBAR_CURRENT_STYLE))
        else:
            lines.append(Text(f"  {campus}", style=SIDEBAR_STYLE))
        if row < height:
            zones[campus_zone(campus)] = Rect(0, row, SIDEBAR_WIDTH, 1)
    lines = lines[:height]
    lines.extend(Text() for _ in range(height - len(lines)))
    return [_fit(line, SIDEBAR_WIDTH) for line in lines], zones


def footer_line(state: SessionState, width: int) -> Text:
    text = Text()
    for idx, (key, label) in enumerate(KEY_HELP):
        if idx > 0:
            text.append("  ")
        text.append(key, style=KEY_STYLE)
        text.append(f" {label}", style=HELP_STYLE)
    if state.fetch_error is not None:
        text.append("  │ ", style=SEPARATOR_STYLE)
        text.append(FETCH_FAILED_STATUS, style="bold red")
    return _fit(text, width)


def render(state: SessionState, result: MenuResult, width: int, height: int) -> Frame:
    """Compose the frame for a `width` x `height` viewport."""
    if width < MIN_WIDTH or height < MIN_HEIGHT:
        return Frame(Text(TOO_SMALL_MESSAGE, style="bold red"), centered=True, scroll_offset=state.scroll_offset)

    if state.loading:
        return Frame(Text(LOADING_MESSAGE, style="bold"), centered=True, scroll_offset=state.scroll_offset)

    body_height = height - 1
    content_width = width - SIDEBAR_WIDTH - 1

    sidebar, zones = sidebar_lines(state, body_height)
    visible, offset = visible_slice(content_lines(state, result), state.scroll_offset, body_height)

    rows: list[Text] = []
    for row in range(body_height):
        line = Text()
        line.append_text(sidebar[row])
        line.append("│", style=SEPARATOR_STYLE)
        line.append_text(_fit(visible[row] if row < len(visible) else Text(), content_width))
        rows.append(line)
    rows.append(footer_line(state, width))

    body = Text("\n").join(rows)
    body.no_wrap = True
    body.overflow = "crop"
    return Frame(body, zones=ZoneMap(zones), scroll_offset=offset)
