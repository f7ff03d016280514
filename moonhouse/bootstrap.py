"""Bootstrap utilities: load world JSON and create the GameWorld + player."""
from __future__ import annotations
import json
import logging
import random
from pathlib import Path
from typing import Optional, Tuple

from . import config
from .core.world import GameWorld, build_world_from_dict
from .core.persistence import SaveService
from .core.player import Player

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None):
    """Livello da MH_LOG_LEVEL se non specificato."""
    logging.basicConfig(
        level=getattr(logging, (level or config.get_log_level()).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_world_and_player(path: Optional[Path] = None, seed: Optional[int] = None,
                          saves_dir: Optional[Path] = None) -> Tuple[GameWorld, Player]:
    world_file = Path(path) if path is not None else config.get_world_file()
    with world_file.open("r", encoding="utf-8") as f:
        data = json.load(f)
    rng = random.Random(seed if seed is not None else config.get_random_seed())
    world = build_world_from_dict(data, rng=rng, save_service=SaveService(saves_dir))
    player = Player(world, world.entrance)
    world.set_player(player)
    logger.info("loaded %s, player at %s", world_file.name, world.entrance.tag)
    return world, player


__all__ = ["configure_logging", "load_world_and_player"]
