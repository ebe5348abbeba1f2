import curses
import locale
import logging
import os
import random
import sys
import time
from typing import Iterator, List, Optional, Union

from .config import Settings
from .render import frame_lines
from .world import Event, PointerDown, PointerDrag, PointerUp, Quit, World

logger = logging.getLogger(__name__)

KEY_ESC = 27
KEY_CTRL_C = 3

# xterm button-event tracking: motion is reported while a button is held
MOUSE_TRACKING_ON = "\x1b[?1002h"
MOUSE_TRACKING_OFF = "\x1b[?1002l"

_CLICKS = (
    getattr(curses, "BUTTON1_CLICKED", 0)
    | getattr(curses, "BUTTON1_DOUBLE_CLICKED", 0)
    | getattr(curses, "BUTTON1_TRIPLE_CLICKED", 0)
)
_MOTION = getattr(curses, "REPORT_MOUSE_POSITION", 0)


def key_event(ch: int) -> Optional[Event]:
    if ch in (KEY_ESC, KEY_CTRL_C, ord("q"), ord("Q")):
        return Quit()
    return None


def mouse_events(bstate: int, x: int, y: int, held: bool) -> List[Event]:
    """Translate one curses mouse report into pointer events.

    Some terminals repeat BUTTON1_PRESSED while dragging instead of sending
    position reports, so a press while the button is already held counts as
    a drag.
    """
    if bstate & curses.BUTTON1_PRESSED:
        return [PointerDrag(x, y)] if held else [PointerDown(x, y)]
    if bstate & curses.BUTTON1_RELEASED:
        return [PointerUp()]
    if bstate & _CLICKS:
        return [PointerDown(x, y), PointerDrag(x, y), PointerUp()]
    if held and bstate & _MOTION:
        return [PointerDrag(x, y)]
    return []


def _read_events(stdscr, world: World) -> Iterator[Union[Event, int]]:
    """Drain all pending input without blocking.

    Yields world events plus the raw keys the loop handles itself. Mouse
    reports are translated one at a time so each sees the held state left by
    the events before it.
    """
    while True:
        ch = stdscr.getch()
        if ch == -1:
            return
        if ch == curses.KEY_MOUSE:
            try:
                _, x, y, _, bstate = curses.getmouse()
            except curses.error:
                continue
            yield from mouse_events(bstate, x, y, world.pointer_down)
            continue
        event = key_event(ch)
        yield event if event is not None else ch


def apply_key(world: World, ch: int, paused: bool) -> bool:
    """Handle a loop-level key and return the new paused flag."""
    if ch == ord(" "):
        return not paused
    if ch in (ord("c"), ord("C")):
        world.reset()
    return paused


def _paint(stdscr, world: World, settings: Settings, paused: bool) -> None:
    stdscr.erase()
    lines = frame_lines(world.canvas, settings.sand_char, settings.empty_char)
    if paused and lines:
        banner = " PAUSED "
        lines[0] = banner + lines[0][len(banner):]
    for y, line in enumerate(lines):
        try:
            stdscr.addstr(y, 0, line)
        except curses.error:
            # writing the bottom-right cell moves the cursor off screen
            pass
    stdscr.refresh()


def run(settings: Settings, rng: Optional[random.Random] = None) -> None:
    locale.setlocale(locale.LC_ALL, "")
    os.environ.setdefault("ESCDELAY", "25")

    stdscr = curses.initscr()
    sys.stdout.write("\x1b[?1049h")
    sys.stdout.flush()
    curses.noecho()
    curses.cbreak()
    stdscr.keypad(True)
    stdscr.nodelay(True)
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    try:
        curses.mousemask(curses.ALL_MOUSE_EVENTS | _MOTION)
        curses.mouseinterval(0)
        sys.stdout.write(MOUSE_TRACKING_ON)
        sys.stdout.flush()

        rows, cols = stdscr.getmaxyx()
        world = World(cols, rows, settings, rng)
        logger.info(
            "starting %dx%d world, spawn_rate=%d tick=%.3fs",
            cols,
            rows,
            settings.spawn_rate,
            settings.tick_interval,
        )
        paused = False
        running = True
        while running:
            for item in _read_events(stdscr, world):
                if isinstance(item, int):
                    paused = apply_key(world, item, paused)
                    continue
                if not world.handle(item):
                    running = False
                    break
            if not running:
                break

            world.step(paused)
            _paint(stdscr, world, settings, paused)
            time.sleep(settings.tick_interval)
    finally:
        sys.stdout.write(MOUSE_TRACKING_OFF)
        sys.stdout.flush()
        curses.nocbreak()
        stdscr.keypad(False)
        curses.echo()
        curses.endwin()
        sys.stdout.write("\x1b[?1049l")
        sys.stdout.flush()
