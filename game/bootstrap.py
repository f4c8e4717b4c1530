"""Bootstrap utilities: load world definitions and create initial GameState + registry."""
from __future__ import annotations
import logging
from pathlib import Path
from radiance.core.world import build_world_from_dict
from radiance.core.loader.content_loader import load_definitions
from radiance.core.registry import ContentRegistry
from radiance.core.state import GameState
from config import get_config_path, get_strict_schema

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).resolve().parent / "assets" / "world"


def load_world_and_state(config_path: str | Path | None = None) -> tuple[ContentRegistry, GameState]:
    """Build the world from ``config_path`` (default: RAD_CONFIG_PATH or the bundled world).

    Raises ``ConfigurationError`` when the definitions are unreadable or not
    referentially sound; nothing is started in that case.
    """
    root = Path(config_path) if config_path is not None else get_config_path()
    data = load_definitions(str(root))
    world = build_world_from_dict(data, check_schema=get_strict_schema())
    registry = ContentRegistry(world)
    info = world.info
    # Start map and position come from game.yaml
    state = GameState(current_map=info.starting_map, player_x=info.starting_x, player_y=info.starting_y)
    logger.info("Loaded '%s' from %s, starting at %s", info.name, root, state.location_key())
    return registry, state
