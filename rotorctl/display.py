"""Layout helpers for the buffered character screen: centring, alignment, padding."""

from __future__ import annotations

from rotorctl.screen import WORK_STRING_SIZE, Attribute, Screen

_MAX_WORK_LENGTH = WORK_STRING_SIZE - 1


def _pad(current: str, count: int) -> str:
    """Spaces to append to ``current``, limited by the working string size."""
    room = _MAX_WORK_LENGTH - len(current)
    return " " * max(0, min(count, room))


class Display(Screen):
    """A screen with positioned, aligned and timed text output."""

    def _center_x(self, text: str) -> int:
        return self.columns // 2 - self.length(text) // 2

    def print_center(self, text: str, y: int, attribute: int = Attribute.NONE) -> None:
        """Print text centred horizontally on row ``y``."""
        self.print_at(text, self._center_x(text), y, attribute)

    def print_center_padded(self, text: str, y: int, padding: int) -> None:
        """Print text centred with ``padding`` spaces on each side."""
        work = _pad("", padding)
        work += text
        work += _pad(work, padding)
        self.print_center(work, y)

    def print_center_fixed_field_size(self, text: str, y: int, field_size: int) -> None:
        """Print text centred inside a field of ``field_size`` characters."""
        spaces_to_add = field_size - len(text)
        work = ""
        if spaces_to_add > 0:
            work += _pad(work, spaces_to_add // 2)
        work += text[: max(0, field_size)]
        if spaces_to_add > 0:
            work += _pad(work, spaces_to_add // 2)
            if spaces_to_add % 2:
                work += " "
        self.print_center(work, y)

    def print_center_entire_row(
        self, text: str, y: int, attribute: int = Attribute.NONE
    ) -> None:
        """Blank row ``y`` and print text centred on it."""
        self.clear_row(y)
        self.print_at(text, self._center_x(text), y, attribute)

    def print_center_screen(self, *args: str, attribute: int = Attribute.NONE) -> None:
        """Print one to four lines centred on the screen."""
        count = len(args)
        if not 1 <= count <= 4:
            raise TypeError(f"expected one to four lines of text, got {count}")
        half = self.rows // 2
        if count == 1:
            rows = [(self.rows - 1) // 2]
        elif count == 2:
            rows = [0, 1] if self.rows == 2 else [half - 1, half]
        elif count == 3:
            rows = [0, 1, 2] if self.rows == 4 else [half - 1, half, half + 1]
        else:
            rows = [0, 1, 2, 3] if self.rows == 4 else [half - 1, half, half + 1, half + 3]
        for text, y in zip(args, rows):
            self.print_center(text, y, attribute)

    def print_right(self, text: str, y: int) -> None:
        """Print text flush with the right edge of row ``y``."""
        self.print_at(text, self.columns - self.length(text), y)

    def print_right_padded(self, text: str, y: int, padding: int) -> None:
        """Print text right aligned with ``padding`` spaces before it."""
        work = _pad("", padding) + text
        self.print_right(work, y)

    def print_right_fixed_field_size(self, text: str, y: int, field_size: int) -> None:
        """Print text right aligned in a field of ``field_size`` characters."""
        work = text[: max(0, field_size)]
        self.print_right_padded(work, y, field_size - len(text))

    def print_left(self, text: str, y: int) -> None:
        """Print text at the start of row ``y``."""
        self.print_at(text, 0, y)

    def print_left_padded(self, text: str, y: int, padding: int) -> None:
        """Print text left aligned followed by ``padding`` spaces."""
        work = text + _pad(text, padding)
        self.print_left(work, y)

    def print_left_fixed_field_size(self, text: str, y: int, field_size: int) -> None:
        """Print text left aligned in a field of ``field_size`` characters."""
        work = text[: max(0, field_size)]
        self.print_left_padded(work, y, field_size - len(text))

    def print_top_left(self, text: str) -> None:
        self.print_at(text, 0, 0)

    def print_top_right(self, text: str) -> None:
        self.print_at(text, self.columns - self.length(text), 0)

    def print_bottom_left(self, text: str) -> None:
        self.print_at(text, 0, self.rows - 1)

    def print_bottom_right(self, text: str) -> None:
        self.print_at(text, self.columns - self.length(text), self.rows - 1)

    def print_center_timed_message(
        self, *args: str, ms_to_display: int, attribute: int = Attribute.NONE
    ) -> None:
        """Show one to four centred lines for a while, then restore the screen."""
        if not 1 <= len(args) <= 4:
            raise TypeError(f"expected one to four lines of text, got {len(args)}")
        self.prepare_for_timed_screen(ms_to_display)
        self.print_center_screen(*args, attribute=attribute)