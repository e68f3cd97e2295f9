"""Terminal month calendar for picking a journal day.

The view knows nothing about journal files. Days to mark come from a
callback, and opening a day is a key binding registered by
``setup_calendar_bindings`` when the application builds the view.
"""

import calendar
from datetime import date, timedelta
from typing import Callable

from .core.outline import Location

Action = Callable[["CalendarView"], bool | None]

KEY_LEFT = "\x1b[D"
KEY_RIGHT = "\x1b[C"
KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"


def _no_marks(year: int, month: int) -> set[date]:
    return set()


class CalendarView:
    """
    A month grid with one selected day.

    Key handlers receive the view. A handler returning False closes the
    calendar; anything else keeps it open.
    """

    def __init__(
        self,
        selected: date,
        first_weekday: int = 0,
        marked_days: Callable[[int, int], set[date]] = _no_marks,
    ):
        self.selected = selected
        self.first_weekday = first_weekday
        self.marked_days = marked_days
        self.result: Location | None = None
        self._keymap: dict[str, Action] = {}

        self.bind("h", lambda v: v.move(-1))
        self.bind("l", lambda v: v.move(1))
        self.bind("p", lambda v: v.move(-7))
        self.bind("n", lambda v: v.move(7))
        self.bind("<", lambda v: v.move_month(-1))
        self.bind(">", lambda v: v.move_month(1))
        self.bind(KEY_LEFT, lambda v: v.move(-1))
        self.bind(KEY_RIGHT, lambda v: v.move(1))
        self.bind(KEY_UP, lambda v: v.move(-7))
        self.bind(KEY_DOWN, lambda v: v.move(7))
        self.bind("q", lambda v: False)

    @property
    def year(self) -> int:
        return self.selected.year

    @property
    def month(self) -> int:
        return self.selected.month

    def bind(self, key: str, action: Action) -> None:
        """Bind a key, replacing any existing binding."""
        self._keymap[key] = action

    def bindings(self) -> dict[str, Action]:
        return dict(self._keymap)

    def handle(self, key: str) -> bool:
        """Run the action bound to key. Returns False when the view should close."""
        action = self._keymap.get(key)
        if action is None:
            return True
        return action(self) is not False

    def move(self, days: int) -> None:
        self.selected += timedelta(days=days)

    def move_month(self, months: int) -> None:
        """Move by whole months, clamping the day to the target month's length."""
        index = self.year * 12 + (self.month - 1) + months
        year, month = divmod(index, 12)
        month += 1
        _, days_in_month = calendar.monthrange(year, month)
        self.selected = date(year, month, min(self.selected.day, days_in_month))

    def render(self) -> str:
        """
        Render the displayed month.

        The selected day is bracketed and days with a journal heading are
        followed by ``*``.
        """
        marked = self.marked_days(self.year, self.month)
        weeks = calendar.Calendar(self.first_weekday).monthdayscalendar(self.year, self.month)

        width = 5 * 7
        lines = [f"{calendar.month_name[self.month]} {self.year}".center(width).rstrip()]
        weekdays = [calendar.day_abbr[(self.first_weekday + i) % 7][:2] for i in range(7)]
        lines.append("".join(f" {name:>2}  " for name in weekdays).rstrip())

        for week in weeks:
            cells = []
            for day in week:
                if not day:
                    cells.append(" " * 5)
                    continue
                current = date(self.year, self.month, day)
                is_selected = current == self.selected
                cells.append(
                    ("[" if is_selected else " ")
                    + f"{day:>2}"
                    + ("]" if is_selected else " ")
                    + ("*" if current in marked else " ")
                )
            lines.append("".join(cells).rstrip())

        return "\n".join(lines)


def setup_calendar_bindings(
    view: CalendarView,
    open_day: Callable[[date], Location],
    key: str = "j",
) -> None:
    """
    Bind ``key`` to opening the selected day's journal heading.

    Call once when the view is built. The resulting Location is stored on
    ``view.result`` and the calendar closes.
    """

    def _open_selected(v: CalendarView) -> bool:
        v.result = open_day(v.selected)
        return False

    view.bind(key, _open_selected)


def run_calendar(
    view: CalendarView,
    read_key: Callable[[], str],
    show: Callable[[str], None],
) -> Location | None:
    """Show the view and dispatch keys until a handler closes it."""
    while True:
        show(view.render())
        if not view.handle(read_key()):
            return view.result
