"""Per-session navigation state and the pure event transition function."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence

from unari.clock import DEFAULT_CLOCK, Clock, shift_date
from unari.config import MIN_HEIGHT, MIN_WIDTH, SCROLL_STEP
from unari.constant import CAMPUS_RESTAURANTS
from unari.data import MenuIndex
from unari.models import Restaurant


@dataclass(frozen=True)
class SessionState:
    """Everything one connection's dashboard needs to render."""

    campus_index: int
    selected_date: dt.date
    scroll_offset: int = 0
    loading: bool = True
    viewport_width: int = 0
    viewport_height: int = 0
    index: MenuIndex = field(default_factory=MenuIndex.empty)
    fetch_error: str | None = None

    @property
    def campuses(self) -> list[str]:
        return self.index.campuses()

    @property
    def campus(self) -> str:
        return self.campuses[self.campus_index]

    @property
    def too_small(self) -> bool:
        return self.viewport_width < MIN_WIDTH or self.viewport_height < MIN_HEIGHT


# Events


@dataclass(frozen=True)
class DataLoaded:
    restaurants: Sequence[Restaurant]


@dataclass(frozen=True)
class DataFailed:
    message: str


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class NavigateCampus:
    delta: int


@dataclass(frozen=True)
class NavigateDate:
    delta: int


@dataclass(frozen=True)
class JumpToToday:
    pass


@dataclass(frozen=True)
class ScrollDown:
    pass


@dataclass(frozen=True)
class ScrollUp:
    pass


@dataclass(frozen=True)
class ClickZone:
    campus: str


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Event = (
    DataLoaded
    | DataFailed
    | Resize
    | NavigateCampus
    | NavigateDate
    | JumpToToday
    | ScrollDown
    | ScrollUp
    | ClickZone
    | Refresh
    | Quit
)


class Effect(Enum):
    """Side effects requested from the session host."""

    FETCH = "fetch"
    QUIT = "quit"


class Command(Enum):
    NEXT_CAMPUS = "next_campus"
    PREV_CAMPUS = "prev_campus"
    NEXT_DAY = "next_day"
    PREV_DAY = "prev_day"
    TODAY = "today"
    SCROLL_DOWN = "scroll_down"
    SCROLL_UP = "scroll_up"
    REFRESH = "refresh"
    QUIT = "quit"


# Raw key name -> command. Key names follow Textual's naming.
KEYMAP: dict[str, Command] = {
    "tab": Command.NEXT_CAMPUS,
    "n": Command.NEXT_CAMPUS,
    "shift+tab": Command.PREV_CAMPUS,
    "p": Command.PREV_CAMPUS,
    "right": Command.NEXT_DAY,
    "l": Command.NEXT_DAY,
    "left": Command.PREV_DAY,
    "h": Command.PREV_DAY,
    "t": Command.TODAY,
    "down": Command.SCROLL_DOWN,
    "j": Command.SCROLL_DOWN,
    "up": Command.SCROLL_UP,
    "k": Command.SCROLL_UP,
    "r": Command.REFRESH,
    "q": Command.QUIT,
    "ctrl+c": Command.QUIT,
    "escape": Command.QUIT,
}

COMMAND_EVENTS: dict[Command, Event] = {
    Command.NEXT_CAMPUS: NavigateCampus(1),
    Command.PREV_CAMPUS: NavigateCampus(-1),
    Command.NEXT_DAY: NavigateDate(1),
    Command.PREV_DAY: NavigateDate(-1),
    Command.TODAY: JumpToToday(),
    Command.SCROLL_DOWN: ScrollDown(),
    Command.SCROLL_UP: ScrollUp(),
    Command.REFRESH: Refresh(),
    Command.QUIT: Quit(),
}

# Footer help, in display order.
KEY_HELP: tuple[tuple[str, str], ...] = (
    ("tab", "campus"),
    ("←/→", "day"),
    ("t", "today"),
    ("↑/↓", "scroll"),
    ("r", "refresh"),
    ("q", "quit"),
)


def command_for_key(key: str) -> Command | None:
    return KEYMAP.get(key)


def event_for_key(key: str) -> Event | None:
    command = command_for_key(key)
    if command is None:
        return None
    return COMMAND_EVENTS[command]


def initial_state(width: int, height: int, clock: Clock = DEFAULT_CLOCK) -> tuple[SessionState, Effect]:
    """New session in the loading state, plus the one-shot fetch request."""
    state = SessionState(
        campus_index=0,
        selected_date=clock.today(),
        viewport_width=max(width, 0),
        viewport_height=max(height, 0),
    )
    return state, Effect.FETCH


def transition(state: SessionState, event: Event, clock: Clock = DEFAULT_CLOCK) -> tuple[SessionState, Effect | None]:
    """Apply one event; returns the next state and an optional effect."""
    if isinstance(event, DataLoaded):
        index = MenuIndex.build(CAMPUS_RESTAURANTS, event.restaurants)
        return replace(state, loading=False, index=index, fetch_error=None), None

    if isinstance(event, DataFailed):
        return replace(state, loading=False, index=MenuIndex.empty(), fetch_error=event.message), None

    if isinstance(event, Resize):
        return replace(state, viewport_width=max(event.width, 0), viewport_height=max(event.height, 0)), None

    if isinstance(event, NavigateCampus):
        total = len(state.campuses)
        return replace(state, campus_index=(state.campus_index + event.delta) % total, scroll_offset=0), None

    if isinstance(event, NavigateDate):
        return replace(state, selected_date=shift_date(state.selected_date, event.delta), scroll_offset=0), None

    if isinstance(event, JumpToToday):
        return replace(state, selected_date=clock.today(), scroll_offset=0), None

    if isinstance(event, (ScrollDown, ScrollUp)) and (state.loading or state.too_small):
        # No content pane is on screen to scroll.
        return state, None

    if isinstance(event, ScrollDown):
        return replace(state, scroll_offset=state.scroll_offset + SCROLL_STEP), None

    if isinstance(event, ScrollUp):
        return replace(state, scroll_offset=max(0, state.scroll_offset - SCROLL_STEP)), None

    if isinstance(event, ClickZone):
        if event.campus not in state.campuses:
            return state, None
        target = state.campuses.index(event.campus)
        if target == state.campus_index:
            return state, None
        return replace(state, campus_index=target, scroll_offset=0), None

    if isinstance(event, Refresh):
        if state.loading:
            return state, None
        return replace(state, loading=True), Effect.FETCH

    if isinstance(event, Quit):
        return state, Effect.QUIT

    raise TypeError(f"unknown event: {event!r}")
