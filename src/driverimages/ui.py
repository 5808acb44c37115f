"""Interactive, keyboard-driven browser for driver image results.

The browser is a small single-threaded state machine: render the table,
block on exactly one key press, apply the matching transition, repeat.
Navigation wraps around at both ends of the table.

Terminal setup (alternate screen, hidden cursor) is scoped to
:meth:`ImageBrowser.run` through rich's ``Console.screen()`` context
manager, so the terminal is restored however the loop exits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

import click
from rich.cells import cell_len
from rich.console import Console, Group
from rich.style import Style
from rich.table import Table
from rich.text import Text

from driverimages.driverimage import DriverImage

logger = logging.getLogger(__name__)

# Lines occupied by one table row: blank, content, two blank spacer lines
ROW_HEIGHT = 4

# Lines used by the header row and the footer
CHROME_HEIGHT = 2

KEYS_QUIT = frozenset({"q", "Q", "\x1b"})
KEYS_NEXT = frozenset({"j", "\x1b[B", "\x1bOB", "\xe0P", "\x00P"})
KEYS_PREVIOUS = frozenset({"k", "\x1b[A", "\x1bOA", "\xe0H", "\x00H"})


@dataclass(frozen=True)
class TableColors:
    """Colour scheme for the browser table (tailwind blue on slate)."""

    header_bg: str = "#1e3a8a"
    header_fg: str = "#e2e8f0"
    row_fg: str = "#e2e8f0"
    selected_row_fg: str = "#60a5fa"
    normal_row_bg: str = "#020617"
    alt_row_bg: str = "#0f172a"


class BrowserState:
    """Selection and scroll position over an immutable set of rows.

    ``selected_index`` is None only when there are no rows; otherwise it
    is always a valid row index.
    """

    def __init__(self, rows: Sequence[DriverImage]):
        self.rows: tuple[DriverImage, ...] = tuple(rows)
        self.selected_index: int | None = 0 if self.rows else None
        self.scroll_offset = 0
        self.terminated = False

    def _select(self, index: int):
        self.selected_index = index
        self.scroll_offset = index * ROW_HEIGHT

    def next_row(self):
        if not self.rows:
            return
        self._select((self.selected_index + 1) % len(self.rows))

    def previous_row(self):
        if not self.rows:
            return
        self._select((self.selected_index - 1) % len(self.rows))

    def quit(self):
        self.terminated = True


def column_widths(rows: Sequence[DriverImage]) -> tuple[int, int]:
    """Return the widest (name, creation_date) display widths across *rows*."""
    name_len = max((cell_len(r.name) for r in rows), default=0)
    date_len = max((cell_len(r.creation_date) for r in rows), default=0)
    return name_len, date_len


class ImageBrowser:
    """Scrollable two-column (name, creation date) table of driver images."""

    def __init__(
            self,
            images: Sequence[DriverImage],
            console: Console | None = None,
            colors: TableColors | None = None,
    ):
        self.state = BrowserState(images)
        self.console = console or Console()
        self.colors = colors or TableColors()
        # fixed for the session; not reflowed on terminal resize
        self.longest_item_lens = column_widths(self.state.rows)

    def handle_key(self, key: str) -> bool:
        """Apply the transition bound to *key*.

        Returns:
            False once the browser has terminated, True otherwise.
        """
        if key in KEYS_QUIT:
            self.state.quit()
        elif key in KEYS_NEXT:
            self.state.next_row()
        elif key in KEYS_PREVIOUS:
            self.state.previous_row()
        else:
            logger.debug("Ignoring key %r", key)
        return not self.state.terminated

    def visible_rows(self, height: int) -> range:
        """Row indices that fit in *height* terminal lines at the current scroll offset."""
        total = len(self.state.rows)
        capacity = max(1, (height - CHROME_HEIGHT) // ROW_HEIGHT)
        first = min(self.state.scroll_offset // ROW_HEIGHT, max(0, total - capacity))
        return range(first, min(total, first + capacity))

    def render(self, height: int | None = None) -> Group:
        """Project the current state onto a renderable table."""
        if height is None:
            height = self.console.size.height
        colors = self.colors
        name_width, date_width = self.longest_item_lens

        table = Table(
            box=None,
            padding=(0, 1),
            header_style=Style(color=colors.header_fg, bgcolor=colors.header_bg, bold=True),
            expand=True,
        )
        # + 1 is for padding
        table.add_column("Name", width=name_width + 1, no_wrap=True)
        table.add_column("Creation Date", min_width=date_width, no_wrap=True)

        for i in self.visible_rows(height):
            image = self.state.rows[i]
            if i == self.state.selected_index:
                style = Style(color=colors.selected_row_fg, reverse=True)
            else:
                bg = colors.normal_row_bg if i % 2 == 0 else colors.alt_row_bg
                style = Style(color=colors.row_fg, bgcolor=bg)
            table.add_row(
                Text(f"\n{image.name}\n\n"),
                Text(f"\n{image.creation_date}\n\n"),
                style=style,
            )

        if self.state.selected_index is None:
            position = "no driver images"
        else:
            position = "%d/%d" % (self.state.selected_index + 1, len(self.state.rows))
        footer = Text(" %s  j/k or ↑/↓ to move, q or Esc to quit" % position, style="dim")
        return Group(table, footer)

    def run(self, read_key: Callable[[], str] = click.getchar):
        """Run the render/input loop until the user quits.

        Args:
            read_key: Blocking callable returning the next key press.
        """
        logger.debug("Starting browser with %d rows", len(self.state.rows))
        with self.console.screen(hide_cursor=True) as screen:
            while not self.state.terminated:
                screen.update(self.render())
                self.handle_key(read_key())
        logger.debug("Browser closed")
