"""Runtime registry over the loaded world.

Read access by stable id and by grid coordinate, plus the handful of
mutations the engine performs during play. Door counterpart search and
first-empty-slot search are linear scans over the (small) grids.
"""
from __future__ import annotations
import logging
from typing import Dict, Optional, Tuple

from .model.base import Character, Dialog, GameMap, GameObject, Occupant, World

logger = logging.getLogger(__name__)


class ContentRegistry:
    def __init__(self, world: World):
        self.world = world
        self.map_index: Dict[str, GameMap] = world.maps.copy()
        self.dialog_index: Dict[str, Dialog] = world.dialogs.copy()

    # --- Lookups ---
    def get_map(self, map_id: str) -> GameMap:
        try:
            return self.map_index[map_id]
        except KeyError:
            raise KeyError(f"Unknown map '{map_id}'") from None

    def get_dialog(self, dialog_id: str) -> Dialog:
        try:
            return self.dialog_index[dialog_id]
        except KeyError:
            raise KeyError(f"Unknown dialog '{dialog_id}'") from None

    def get_object_def(self, object_id: str) -> Optional[GameObject]:
        return self.world.objects.get(object_id)

    def get_character_def(self, character_id: str) -> Optional[Character]:
        return self.world.characters.get(character_id)

    @property
    def player(self) -> Character:
        return self.world.player

    def get_cell(self, map_id: str, x: int, y: int) -> Optional[Occupant]:
        return self.get_map(map_id).get_cell(x, y)

    # --- Mutations ---
    def set_cell(self, map_id: str, x: int, y: int, occupant: Optional[Occupant]) -> None:
        self.get_map(map_id).set_cell(x, y, occupant)

    def set_state_flag(self, obj: GameObject, flag: str, value: bool) -> None:
        obj.set_state(flag, value)

    def remove_inventory_slot(self, character: Character, x: int, y: int) -> Optional[GameObject]:
        item = character.get_slot(x, y)
        character.set_slot(x, y, None)
        return item

    def insert_first_empty_inventory_slot(self, character: Character, obj: GameObject) -> bool:
        """Place ``obj`` in the first empty slot (row-major). False when full; nothing is placed."""
        for x, y, item in character.iter_slots():
            if item is None:
                character.set_slot(x, y, obj)
                return True
        logger.info("Inventory of '%s' is full, '%s' not placed", character.id, obj.id)
        return False

    def find_first_empty_inventory_slot(self, character: Character) -> Optional[Tuple[int, int]]:
        for x, y, item in character.iter_slots():
            if item is None:
                return x, y
        return None

    def find_door_counterpart(
        self, door_id: str, current_map_id: str, destination: Optional[str] = None
    ) -> Optional[Tuple[str, int, int]]:
        """Locate the other half of a door pair on any map but the current one.

        Doors must connect distinct maps: a pair on the same map is never found.
        ``destination`` narrows the search to one map; both halves share one
        definition, so a destination naming the current map is ignored.
        First match wins.
        """
        if destination == current_map_id:
            destination = None
        for game_map in self.world.all_maps():
            if game_map.id == current_map_id:
                continue
            if destination and game_map.id != destination:
                continue
            for x, y, occ in game_map.iter_cells():
                if isinstance(occ, GameObject) and occ.id == door_id:
                    return game_map.id, x, y
        return None
