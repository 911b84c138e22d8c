import pytest

from rotorctl.screen import Attribute, Screen


class FakeLcd:
    def __init__(self):
        self.began = None
        self.grid = {}
        self.cursor = (0, 0)
        self.prints = []
        self.clears = 0

    def begin(self, cols, rows):
        self.began = (cols, rows)

    def clear(self):
        self.clears += 1
        self.grid.clear()

    def no_cursor(self):
        pass

    def set_cursor(self, col, row):
        self.cursor = (col, row)

    def print(self, text):
        for ch in text:
            self.prints.append(ch)
            self.grid[self.cursor] = ch
            self.cursor = (self.cursor[0] + 1, self.cursor[1])

    def row_text(self, row, width):
        return "".join(self.grid.get((c, row), " ") for c in range(width))


class Clock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


def make(cols=4, rows=2, update=100):
    lcd = FakeLcd()
    clock = Clock()
    screen = Screen(lcd, cols, rows, update, clock=clock)
    return screen, lcd, clock


def test_initialize_begins_and_blanks():
    screen, lcd, _ = make(20, 4)
    screen.initialize()
    assert lcd.began == (20, 4)
    assert lcd.clears == 1
    assert all(screen.pending_row(r) == " " * 20 for r in range(4))


def test_too_large_screen_rejected():
    with pytest.raises(ValueError):
        Screen(FakeLcd(), 40, 4)


def test_print_at_runs_into_next_row():
    screen, _, _ = make()
    screen.print_at("abcdef", 2, 0)
    assert screen.pending_row(0) == "  ab"
    assert screen.pending_row(1) == "cdef"
    assert screen.live_row(0) == "    "


def test_print_at_clips_at_end_of_buffer():
    screen, _, _ = make()
    screen.print_at("xyz", 3, 1)
    assert screen.pending_row(1) == "   x"
    assert screen.pending_row(0) == "    "


def test_update_makes_live_match_pending_and_display():
    screen, lcd, _ = make()
    screen.print_at("hi", 1, 1)
    screen.update()
    assert screen.live_row(1) == screen.pending_row(1)
    assert lcd.row_text(1, 4) == screen.live_row(1)


def test_second_update_without_changes_prints_nothing():
    screen, lcd, _ = make()
    screen.print_at("ab", 0, 0)
    screen.update()
    count = len(lcd.prints)
    screen.update()
    assert len(lcd.prints) == count


def test_stream_print_with_newline():
    screen, _, _ = make()
    screen.print("ab\ncd")
    assert screen.pending_row(0) == "ab  "
    assert screen.pending_row(1) == "cd  "


def test_println_moves_to_next_row():
    screen, _, _ = make()
    screen.println("ab")
    screen.print("c")
    assert screen.pending_row(1) == "c   "


def test_stream_print_scrolls_at_bottom():
    screen, _, _ = make()
    screen.print("abcd")
    screen.print("efgh")
    screen.print("i")
    assert screen.pending_row(0) == "efgh"
    assert screen.pending_row(1) == "i   "


def test_length_stops_at_nul_and_caps():
    screen, _, _ = make()
    assert screen.length("ab\0cd") == 2
    assert screen.length("x" * 100) == screen.columns * screen.rows


def test_clear_row_blanks_only_that_row():
    screen, _, _ = make()
    screen.print_at("abcdefgh", 0, 0)
    screen.clear_row(0)
    assert screen.pending_row(0) == "    "
    assert screen.pending_row(1) == "efgh"


def test_row_scroll():
    screen, _, _ = make()
    screen.print_at("abcdefgh", 0, 0)
    screen.row_scroll()
    assert screen.pending_row(0) == "efgh"
    assert screen.pending_row(1) == "    "


def test_row_index_out_of_range():
    screen, _, _ = make()
    with pytest.raises(IndexError):
        screen.pending_row(2)


def test_service_waits_for_update_time():
    screen, _, clock = make(update=100)
    screen.print_at("ab", 0, 0)
    clock.now = 50
    screen.service()
    assert screen.live_row(0) == "    "
    clock.now = 100
    screen.service()
    assert screen.live_row(0) == "ab  "
    assert screen.pending_dirty is False


def test_service_forced_update():
    screen, _, clock = make(update=100)
    screen.print_at("ab", 0, 0)
    clock.now = 10
    screen.service(1)
    assert screen.live_row(0) == "ab  "


def test_blink_attribute_toggles_on_display():
    screen, lcd, clock = make(update=100)
    screen.print_at("A", 0, 0, Attribute.BLINK)
    screen.update()
    assert screen.live_row(0) == "A   "
    assert lcd.row_text(0, 4) == "    "
    clock.now = 500
    screen.service()
    assert lcd.row_text(0, 4) == "A   "


def test_timed_screen_reverts():
    screen, _, clock = make()
    screen.print_at("ab", 0, 0)
    screen.update()
    screen.prepare_for_timed_screen(1000)
    screen.print_at("XY", 0, 1)
    screen.service()
    assert screen.live_row(0) == "    "
    assert screen.live_row(1) == "XY  "
    clock.now = 1000
    screen.service()
    assert screen.live_row(0) == "ab  "
    assert screen.live_row(1) == "    "
    assert screen.revert_screen_flag is False


def test_force_two_cancels_timed_screen():
    screen, _, clock = make()
    screen.print_at("ab", 0, 0)
    screen.update()
    screen.prepare_for_timed_screen(1000)
    screen.print_at("XY", 0, 0)
    screen.service(2)
    assert screen.revert_screen_flag is False
    clock.now = 2000
    screen.service()
    assert screen.live_row(0) == "XY  "


def test_clear_pending_buffer_keeps_live():
    screen, _, _ = make()
    screen.print_at("ab", 0, 0)
    screen.update()
    screen.clear_pending_buffer()
    assert screen.pending_row(0) == "    "
    assert screen.live_row(0) == "ab  "
    assert screen.pending_dirty is True