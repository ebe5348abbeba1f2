import json
import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

DEFAULT_SPAWN_RATE = 3
DEFAULT_TICK_MS = 50
DEFAULT_SAND_CHAR = "▪"
DEFAULT_EMPTY_CHAR = " "


@dataclass
class Settings:
    spawn_rate: int = DEFAULT_SPAWN_RATE
    tick_interval: float = DEFAULT_TICK_MS / 1000.0
    sand_char: str = DEFAULT_SAND_CHAR
    empty_char: str = DEFAULT_EMPTY_CHAR


def get_config_path() -> Path:
    system = platform.system().lower()
    if system == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata)
        else:
            base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "sandfall" / "config.json"


def load_config() -> Dict[str, Any]:
    path = get_config_path()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot read config %s: %s", path, exc)
        return {}
    logger.warning("ignoring config %s: top level is not an object", path)
    return {}


def save_config(data: Dict[str, Any]) -> None:
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def get_spawn_rate(config: Dict[str, Any]) -> int:
    rate = config.get("spawn_rate")
    if _is_int(rate) and rate >= 0:
        return rate
    return DEFAULT_SPAWN_RATE


def get_tick_interval(config: Dict[str, Any]) -> float:
    tick_ms = config.get("tick_ms")
    if _is_int(tick_ms) and tick_ms > 0:
        return tick_ms / 1000.0
    return DEFAULT_TICK_MS / 1000.0


def get_glyphs(config: Dict[str, Any]) -> Tuple[str, str]:
    raw = config.get("glyphs")
    if not isinstance(raw, dict):
        return DEFAULT_SAND_CHAR, DEFAULT_EMPTY_CHAR
    sand = raw.get("sand")
    empty = raw.get("empty")
    if not isinstance(sand, str) or len(sand) != 1:
        sand = DEFAULT_SAND_CHAR
    if not isinstance(empty, str) or len(empty) != 1:
        empty = DEFAULT_EMPTY_CHAR
    return sand, empty


def load_settings(config: Dict[str, Any]) -> Settings:
    sand, empty = get_glyphs(config)
    return Settings(
        spawn_rate=get_spawn_rate(config),
        tick_interval=get_tick_interval(config),
        sand_char=sand,
        empty_char=empty,
    )


def set_spawn_rate(config: Dict[str, Any], rate: int) -> None:
    config["spawn_rate"] = max(0, int(rate))
    save_config(config)


def set_tick_ms(config: Dict[str, Any], tick_ms: int) -> None:
    config["tick_ms"] = max(1, int(tick_ms))
    save_config(config)


def configure_logging() -> None:
    """Send package logs to ``debug.log`` beside the config when SANDFALL_DEBUG=1.

    The terminal belongs to curses while the simulation runs, so logs go to a
    file rather than a stream.
    """
    root = logging.getLogger("sandfall")
    if os.environ.get("SANDFALL_DEBUG") != "1":
        if not root.handlers:
            root.addHandler(logging.NullHandler())
        return
    if any(isinstance(h, logging.FileHandler) for h in root.handlers):
        return
    path = get_config_path().parent / "debug.log"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
