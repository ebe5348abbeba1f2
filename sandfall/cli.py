import argparse
import logging
import random
import sys
from typing import Dict, Optional

from . import __version__
from .config import Settings, configure_logging, load_config, load_settings, set_spawn_rate, set_tick_ms
from .render import frame_lines
from .world import World

logger = logging.getLogger(__name__)


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a value >= 0, got {value}")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a value > 0, got {value}")
    return value


def _headless_snapshot(settings: Settings, width: int, height: int, ticks: int, rng: random.Random) -> str:
    world = World(width, height, settings, rng)
    for _ in range(ticks):
        world.step()
    lines = frame_lines(world.canvas, settings.sand_char, settings.empty_char)
    border = "+" + "-" * width + "+"
    body = [f"|{line}|" for line in lines]
    footer = f"ticks: {ticks}  grains: {world.canvas.count()}"
    return "\n".join([border, *body, border, footer])


def _apply_overrides(args, config: Dict) -> Settings:
    settings = load_settings(config)
    if args.spawn_rate is not None:
        settings.spawn_rate = args.spawn_rate
    if args.tick_ms is not None:
        settings.tick_interval = args.tick_ms / 1000.0
    if args.save:
        if args.spawn_rate is not None:
            set_spawn_rate(config, args.spawn_rate)
        if args.tick_ms is not None:
            set_tick_ms(config, args.tick_ms)
    return settings


def parse_args(argv=None):
    epilog = "Controls (interactive): drag with the left button to pour sand, space pause/resume, c clear, q or Esc quit."
    parser = argparse.ArgumentParser(
        prog="sandfall",
        description="Full-screen terminal falling-sand toy",
        epilog=epilog,
    )
    parser.add_argument("--spawn-rate", type=_non_negative_int, help="grains dropped at the top per tick (default 3)")
    parser.add_argument("--tick-ms", type=_positive_int, help="milliseconds between ticks (default 50)")
    parser.add_argument("--seed", type=int, help="seed the random source for a reproducible run")
    parser.add_argument("--save", action="store_true", help="store --spawn-rate/--tick-ms in the config file")
    parser.add_argument("--headless", action="store_true", help="simulate without a terminal and print the final frame")
    parser.add_argument("--ticks", type=_non_negative_int, default=100, help="ticks to run in headless mode")
    parser.add_argument("--width", type=_positive_int, default=40, help="headless canvas width")
    parser.add_argument("--height", type=_positive_int, default=12, help="headless canvas height")
    parser.add_argument("--version", action="version", version=f"sandfall {__version__}")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging()
    config = load_config()
    settings = _apply_overrides(args, config)
    rng: Optional[random.Random] = random.Random(args.seed) if args.seed is not None else None
    if args.headless:
        print(_headless_snapshot(settings, args.width, args.height, args.ticks, rng or random.Random()))
        return 0

    try:
        from .ui import run

        run(settings, rng)
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
