"""Local Textual frontend hosting one menu session."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Header, Static

from unari.clock import DEFAULT_CLOCK, Clock
from unari.fetch import FetchError, fetch_menus
from unari.models import Restaurant
from unari.session import Session
from unari.state import COMMAND_EVENTS, KEYMAP, Command, DataFailed, DataLoaded, Effect, Resize
from unari.terminal_input import BUTTON_LEFT, BUTTON_MIDDLE, BUTTON_RIGHT, BUTTON_WHEEL_DOWN, BUTTON_WHEEL_UP

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Sequence[Restaurant]]]

_TEXTUAL_BUTTONS = {1: BUTTON_LEFT, 2: BUTTON_MIDDLE, 3: BUTTON_RIGHT}


class MenusFetched(Message):
    """Fetch worker finished successfully."""

    def __init__(self, restaurants: Sequence[Restaurant]) -> None:
        super().__init__()
        self.restaurants = restaurants


class MenusFailed(Message):
    """Fetch worker failed."""

    def __init__(self, error: str) -> None:
        super().__init__()
        self.error = error


class DashboardView(Static):
    """Full-size surface the session frame is drawn on."""

    class Resized(Message):
        def __init__(self, width: int, height: int) -> None:
            super().__init__()
            self.width = width
            self.height = height

    class Clicked(Message):
        def __init__(self, x: int, y: int, button: int) -> None:
            super().__init__()
            self.x = x
            self.y = y
            self.button = button

    def on_resize(self, event: events.Resize) -> None:
        self.post_message(self.Resized(event.size.width, event.size.height))

    def on_click(self, event: events.Click) -> None:
        self.post_message(self.Clicked(event.x, event.y, _TEXTUAL_BUTTONS.get(event.button, 0)))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self.post_message(self.Clicked(event.x, event.y, BUTTON_WHEEL_DOWN))

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self.post_message(self.Clicked(event.x, event.y, BUTTON_WHEEL_UP))


class MenuApp(App):
    """A Textual app for browsing unicafe menus by campus and date."""

    TITLE = "Unicafe"
    SUB_TITLE = "Menus by campus"

    CSS = """
    Screen {
        layout: vertical;
    }

    #dashboard {
        height: 1fr;
        width: 1fr;
    }

    #dashboard.-centered {
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding(key, f"command('{command.value}')", command.value.replace("_", " "), show=False, priority=True)
        for key, command in KEYMAP.items()
    ]

    def __init__(self, fetcher: Fetcher = fetch_menus, clock: Clock = DEFAULT_CLOCK) -> None:
        super().__init__()
        self._fetcher = fetcher
        self.session = Session(0, 0, clock)

    def compose(self) -> ComposeResult:
        yield Header()
        yield DashboardView(id="dashboard")

    def on_mount(self) -> None:
        logger.info("local session started")
        self._perform(self.session.start())
        self._refresh_dashboard()

    def action_command(self, name: str) -> None:
        self._perform(self.session.dispatch(COMMAND_EVENTS[Command(name)]))
        self._refresh_dashboard()

    def on_dashboard_view_resized(self, message: DashboardView.Resized) -> None:
        self.session.dispatch(Resize(message.width, message.height))
        self._refresh_dashboard()

    def on_dashboard_view_clicked(self, message: DashboardView.Clicked) -> None:
        self._perform(self.session.pointer(message.x, message.y, message.button))
        self._refresh_dashboard()

    def on_menus_fetched(self, message: MenusFetched) -> None:
        self.session.dispatch(DataLoaded(message.restaurants))
        self._refresh_dashboard()

    def on_menus_failed(self, message: MenusFailed) -> None:
        self.session.dispatch(DataFailed(message.error))
        self._refresh_dashboard()

    def _perform(self, effect: Effect | None) -> None:
        if effect is Effect.FETCH:
            self.run_worker(self._fetch(), exclusive=True, group="fetch")
        elif effect is Effect.QUIT:
            logger.info("local session ended")
            self.exit()

    async def _fetch(self) -> None:
        try:
            restaurants = await self._fetcher()
        except FetchError as exc:
            logger.warning("menu fetch failed: %s", exc)
            self.post_message(MenusFailed(str(exc)))
            return
        except Exception as exc:
            logger.exception("menu fetch crashed")
            self.post_message(MenusFailed(f"unexpected error: {exc}"))
            return
        self.post_message(MenusFetched(restaurants))

    def _refresh_dashboard(self) -> None:
        try:
            view = self.query_one("#dashboard", DashboardView)
        except NoMatches:
            return
        frame = self.session.render()
        view.set_class(frame.centered, "-centered")
        view.update(frame.body)
