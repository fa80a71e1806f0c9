"""Single-connection session driver shared by the SSH and local frontends."""

from __future__ import annotations

from dataclasses import replace

from unari.clock import DEFAULT_CLOCK, Clock
from unari.rendering import Frame, render
from unari.state import ClickZone, Effect, Event, ScrollDown, ScrollUp, event_for_key, initial_state, transition
from unari.terminal_input import BUTTON_LEFT, BUTTON_WHEEL_DOWN, BUTTON_WHEEL_UP, InputEvent, KeyPress, Pointer
from unari.zones import campus_from_zone


class Session:
    """Owns one SessionState; every mutation goes through `dispatch`.

    The host (SSH channel or Textual app) feeds it events one at a time,
    performs the returned effects and displays `render()` after each change.
    """

    def __init__(self, width: int, height: int, clock: Clock = DEFAULT_CLOCK) -> None:
        self.clock = clock
        self.state, self._initial_effect = initial_state(width, height, clock)
        self.frame: Frame | None = None

    def start(self) -> Effect | None:
        """Return the one-shot effect requested at session start."""
        effect, self._initial_effect = self._initial_effect, None
        return effect

    def dispatch(self, event: Event) -> Effect | None:
        self.state, effect = transition(self.state, event, self.clock)
        return effect

    def press_key(self, key: str) -> Effect | None:
        event = event_for_key(key)
        if event is None:
            return None
        return self.dispatch(event)

    def pointer(self, x: int, y: int, button: int = BUTTON_LEFT, action: str = "press") -> Effect | None:
        """Resolve a pointer event against the last frame's zones."""
        if action != "press":
            return None
        if button == BUTTON_WHEEL_UP:
            return self.dispatch(ScrollUp())
        if button == BUTTON_WHEEL_DOWN:
            return self.dispatch(ScrollDown())
        if button != BUTTON_LEFT or self.frame is None:
            return None
        campus = campus_from_zone(self.frame.zones.resolve(x, y))
        if campus is None:
            return None
        return self.dispatch(ClickZone(campus))

    def feed(self, event: InputEvent) -> Effect | None:
        if isinstance(event, KeyPress):
            return self.press_key(event.key)
        if isinstance(event, Pointer):
            return self.pointer(event.x, event.y, event.button, event.action)
        return None

    def render(self) -> Frame:
        """Render for the current viewport and keep the clamped offset."""
        state = self.state
        result = state.index.lookup(state.campus, state.selected_date)
        frame = render(state, result, state.viewport_width, state.viewport_height)
        if frame.scroll_offset != state.scroll_offset:
            self.state = replace(state, scroll_offset=frame.scroll_offset)
        self.frame = frame
        return frame
