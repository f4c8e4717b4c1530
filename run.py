"""Terminal entry point: load a world and play it.

Usage (example):
    python run.py
    python run.py --config-path path/to/world
Keys:
    arrows / WASD   move
    Enter           interact with whatever is under you
    E               inventory
    H               title screen
    Esc             quit (asks for confirmation)
"""
from __future__ import annotations
import argparse
import logging
import sys
from game.bootstrap import load_world_and_state
from radiance.core.controller import handle_event
from radiance.core.errors import ConfigurationError, StartupError
from radiance.core.view import build_view
from radiance.ui import Screen
from config import INPUT_TIMEOUT_MS, MIN_SCREEN_COLS, MIN_SCREEN_ROWS, get_log_file, get_log_level

logger = logging.getLogger("radiance.run")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="radiance", description="Grid-based terminal adventure engine")
    parser.add_argument("--config-path", default=None, help="Directory holding the world definition files")
    parser.add_argument("--log-file", default=None, help="Log destination (default: RAD_LOG_FILE)")
    return parser.parse_args(argv)


def render(screen: Screen, registry, state) -> None:
    if state.needs_render:
        screen.draw(build_view(state, registry))
        state.needs_render = False


def game_loop(screen: Screen, registry, state) -> None:
    """One event per cycle: wait (bounded) for input, dispatch, draw.

    The event that sets ``do_exit`` is still rendered before the loop ends.
    """
    render(screen, registry, state)
    while not state.do_exit:
        event = screen.read_event(INPUT_TIMEOUT_MS)
        handle_event(state, registry, event)
        render(screen, registry, state)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        filename=args.log_file or get_log_file(),
        level=getattr(logging, get_log_level(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        registry, state = load_world_and_state(args.config_path)
    except ConfigurationError as e:
        logger.error("World failed to load: %s", e)
        print(f"[CONFIG ERROR] {e}", file=sys.stderr)
        return 1

    info = registry.world.info
    min_cols = info.min_screen_cols or MIN_SCREEN_COLS
    min_rows = info.min_screen_rows or MIN_SCREEN_ROWS
    screen = Screen()
    try:
        screen.initialize(min_cols, min_rows)
    except StartupError as e:
        logger.error("Terminal setup failed: %s", e)
        print(f"[STARTUP ERROR] {e}", file=sys.stderr)
        return 1

    try:
        game_loop(screen, registry, state)
    finally:
        screen.end()
    return 0


if __name__ == "__main__":
    sys.exit(main())
