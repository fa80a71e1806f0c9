import datetime as dt
import unittest
from dataclasses import replace

from unari.clock import Clock
from unari.config import MIN_HEIGHT, MIN_WIDTH, SCROLL_STEP
from unari.constant import CAMPUS_RESTAURANTS
from unari.data import Found, NotFound
from unari.models import Menu, MenuData, MenuItem, Restaurant
from unari.state import (
    ClickZone,
    Command,
    DataFailed,
    DataLoaded,
    Effect,
    JumpToToday,
    NavigateCampus,
    NavigateDate,
    Quit,
    Refresh,
    Resize,
    ScrollDown,
    ScrollUp,
    command_for_key,
    event_for_key,
    initial_state,
    transition,
)

TODAY = dt.date(2026, 10, 18)
CLOCK = Clock(now=lambda tz: dt.datetime(2026, 10, 18, 12, 0, tzinfo=tz))
TOTAL_CAMPUSES = len(CAMPUS_RESTAURANTS)


def _loaded_state():
    state, _ = initial_state(80, 24, CLOCK)
    physicum = Restaurant(
        title="Physicum",
        menu_data=MenuData(menus=(Menu(date="Su 18.10.", items=(MenuItem("Lounas", "meal"),)),)),
    )
    state, _ = transition(state, DataLoaded([physicum]), CLOCK)
    return state


class TestInitialState(unittest.TestCase):
    def test_starts_loading_and_requests_fetch(self):
        state, effect = initial_state(80, 24, CLOCK)
        self.assertTrue(state.loading)
        self.assertEqual(effect, Effect.FETCH)
        self.assertEqual(state.campus_index, 0)
        self.assertEqual(state.selected_date, TODAY)
        self.assertEqual(state.scroll_offset, 0)
        self.assertEqual((state.viewport_width, state.viewport_height), (80, 24))

    def test_too_small_is_derived_from_viewport(self):
        state, _ = initial_state(MIN_WIDTH - 1, MIN_HEIGHT, CLOCK)
        self.assertTrue(state.too_small)
        state, _ = transition(state, Resize(MIN_WIDTH, MIN_HEIGHT), CLOCK)
        self.assertFalse(state.too_small)


class TestDataEvents(unittest.TestCase):
    def test_data_loaded_makes_index_queryable(self):
        state = _loaded_state()
        self.assertFalse(state.loading)
        self.assertIsInstance(state.index.lookup("Kumpula", TODAY), Found)

    def test_data_failed_leaves_loading_with_empty_index(self):
        state, _ = initial_state(80, 24, CLOCK)
        state, effect = transition(state, DataFailed("boom"), CLOCK)
        self.assertIsNone(effect)
        self.assertFalse(state.loading)
        self.assertEqual(state.fetch_error, "boom")
        for campus in CAMPUS_RESTAURANTS:
            self.assertIsInstance(state.index.lookup(campus, TODAY), NotFound)

    def test_refresh_requests_fetch_and_success_clears_error(self):
        state, _ = initial_state(80, 24, CLOCK)
        state, _ = transition(state, DataFailed("boom"), CLOCK)
        state, effect = transition(state, Refresh(), CLOCK)
        self.assertEqual(effect, Effect.FETCH)
        self.assertTrue(state.loading)
        state, _ = transition(state, DataLoaded([]), CLOCK)
        self.assertIsNone(state.fetch_error)

    def test_refresh_while_loading_is_ignored(self):
        state, _ = initial_state(80, 24, CLOCK)
        _, effect = transition(state, Refresh(), CLOCK)
        self.assertIsNone(effect)


class TestNavigation(unittest.TestCase):
    def test_campus_wraps_backwards(self):
        state = _loaded_state()
        state, _ = transition(state, NavigateCampus(-1), CLOCK)
        self.assertEqual(state.campus_index, TOTAL_CAMPUSES - 1)

    def test_campus_wraps_forwards(self):
        state = replace(_loaded_state(), campus_index=TOTAL_CAMPUSES - 1)
        state, _ = transition(state, NavigateCampus(1), CLOCK)
        self.assertEqual(state.campus_index, 0)

    def test_date_navigation(self):
        state = replace(_loaded_state(), selected_date=dt.date(2026, 12, 31))
        state, _ = transition(state, NavigateDate(1), CLOCK)
        self.assertEqual(state.selected_date, dt.date(2027, 1, 1))
        state, _ = transition(state, NavigateDate(-1), CLOCK)
        self.assertEqual(state.selected_date, dt.date(2026, 12, 31))

    def test_jump_to_today(self):
        state = replace(_loaded_state(), selected_date=dt.date(2020, 1, 1))
        state, _ = transition(state, JumpToToday(), CLOCK)
        self.assertEqual(state.selected_date, TODAY)

    def test_resize_keeps_scroll(self):
        state = replace(_loaded_state(), scroll_offset=4)
        state, _ = transition(state, Resize(100, 40), CLOCK)
        self.assertEqual(state.scroll_offset, 4)
        self.assertEqual((state.viewport_width, state.viewport_height), (100, 40))

    def test_negative_resize_is_floored(self):
        state, _ = transition(_loaded_state(), Resize(-1, -5), CLOCK)
        self.assertEqual((state.viewport_width, state.viewport_height), (0, 0))

    def test_navigation_resets_scroll(self):
        kumpula = list(CAMPUS_RESTAURANTS).index("Kumpula")
        other = next(name for name in CAMPUS_RESTAURANTS if name != "Kumpula")
        for event in (NavigateCampus(1), NavigateCampus(-1), NavigateDate(1), NavigateDate(-1), JumpToToday(), ClickZone(other)):
            with self.subTest(event=event):
                state = replace(_loaded_state(), campus_index=kumpula, scroll_offset=6)
                state, _ = transition(state, event, CLOCK)
                self.assertEqual(state.scroll_offset, 0)


class TestScrollEvents(unittest.TestCase):
    def test_scroll_down_adds_step(self):
        state, _ = transition(_loaded_state(), ScrollDown(), CLOCK)
        self.assertEqual(state.scroll_offset, SCROLL_STEP)

    def test_scroll_up_floors_at_zero(self):
        state = replace(_loaded_state(), scroll_offset=1)
        state, _ = transition(state, ScrollUp(), CLOCK)
        self.assertEqual(state.scroll_offset, 0)
        state, _ = transition(state, ScrollUp(), CLOCK)
        self.assertEqual(state.scroll_offset, 0)

    def test_scroll_ignored_without_content_pane(self):
        loading, _ = initial_state(80, 24, CLOCK)
        too_small = replace(_loaded_state(), viewport_width=20, scroll_offset=4)
        for state in (loading, too_small):
            for event in (ScrollDown(), ScrollUp()):
                with self.subTest(loading=state.loading, event=event):
                    after, effect = transition(state, event, CLOCK)
                    self.assertIs(after, state)
                    self.assertIsNone(effect)


class TestClickZone(unittest.TestCase):
    def test_click_other_campus_selects_it(self):
        state = replace(_loaded_state(), scroll_offset=3)
        state, _ = transition(state, ClickZone("Viikki"), CLOCK)
        self.assertEqual(state.campus, "Viikki")
        self.assertEqual(state.scroll_offset, 0)

    def test_click_current_campus_is_noop(self):
        state = replace(_loaded_state(), scroll_offset=3)
        new_state, effect = transition(state, ClickZone(state.campus), CLOCK)
        self.assertIs(new_state, state)
        self.assertIsNone(effect)

    def test_click_unknown_campus_is_noop(self):
        state = _loaded_state()
        new_state, _ = transition(state, ClickZone("Otaniemi"), CLOCK)
        self.assertIs(new_state, state)


class TestKeyTable(unittest.TestCase):
    def test_quit(self):
        _, effect = transition(_loaded_state(), Quit(), CLOCK)
        self.assertEqual(effect, Effect.QUIT)
        self.assertEqual(command_for_key("q"), Command.QUIT)
        self.assertEqual(command_for_key("ctrl+c"), Command.QUIT)

    def test_navigation_keys(self):
        self.assertEqual(event_for_key("tab"), NavigateCampus(1))
        self.assertEqual(event_for_key("shift+tab"), NavigateCampus(-1))
        self.assertEqual(event_for_key("right"), NavigateDate(1))
        self.assertEqual(event_for_key("h"), NavigateDate(-1))
        self.assertEqual(event_for_key("t"), JumpToToday())
        self.assertEqual(event_for_key("j"), ScrollDown())
        self.assertEqual(event_for_key("up"), ScrollUp())

    def test_unbound_key(self):
        self.assertIsNone(event_for_key("x"))


if __name__ == "__main__":
    unittest.main()
