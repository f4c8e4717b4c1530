"""Data model definitions for the Radiance world (maps, objects, characters, dialogs).

Definitions loaded from configuration are frozen dataclasses. The three
containers that change during play (object state flags, character inventory
grids, map grids) are plain dataclasses whose dimensions are fixed at load time.
Removal is always modelled as setting a cell or slot to ``None``.
"""
from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..errors import OutOfBoundsError

__all__ = [
    "CATEGORY_COLLECTABLE",
    "CATEGORY_COLLIDABLE",
    "CATEGORY_DOOR",
    "CATEGORY_TRAVEL",
    "NEXT_EXIT",
    "NEXT_INVENTORY",
    "StateChange",
    "ActivateInteraction",
    "ObjectUseInteraction",
    "ObjectInteraction",
    "GameObject",
    "Attribute",
    "Modifier",
    "Attack",
    "CharacterObjectUse",
    "Character",
    "Occupant",
    "occupant_kind",
    "DialogOption",
    "Dialog",
    "GameMap",
    "GameInfo",
    "World",
]

# Object categories are free-form tags; these are the ones the engine reads.
CATEGORY_COLLECTABLE = "collectable"
CATEGORY_COLLIDABLE = "collidable"
CATEGORY_DOOR = "door"
# Activate interaction categories
CATEGORY_TRAVEL = "travel"

# Dialog ``next`` sentinels interpreted by the controller
NEXT_EXIT = "exit"
NEXT_INVENTORY = "inventory"


@dataclass(frozen=True)
class StateChange:
    name: str
    value: bool = True


@dataclass(frozen=True)
class ActivateInteraction:
    category: str
    prereqs: Tuple[StateChange, ...] = ()
    destination: Optional[str] = None


@dataclass(frozen=True)
class ObjectUseInteraction:
    foreign_object_id: str
    self_action: Tuple[StateChange, ...] = ()
    consume_item: bool = False


ObjectInteraction = Union[ActivateInteraction, ObjectUseInteraction]


@dataclass
class GameObject:
    id: str
    name: str
    category: str
    icon: str
    state: Dict[str, bool] = field(default_factory=dict)
    interactions: List[ObjectInteraction] = field(default_factory=list)

    def get_state(self, flag: str) -> bool:
        # Content may reference flags it never declared
        return bool(self.state.get(flag, False))

    def set_state(self, flag: str, value: bool) -> None:
        self.state[flag] = bool(value)

    @property
    def activations(self) -> List[ActivateInteraction]:
        return [i for i in self.interactions if isinstance(i, ActivateInteraction)]

    @property
    def object_uses(self) -> List[ObjectUseInteraction]:
        return [i for i in self.interactions if isinstance(i, ObjectUseInteraction)]

    def snapshot(self) -> "GameObject":
        """Independent copy, used whenever an object is placed in a cell or slot."""
        return copy.deepcopy(self)


@dataclass(frozen=True)
class Attribute:
    id: str
    display_name: str
    min_val: int
    max_val: int
    current_val: int

    def __post_init__(self):
        if self.min_val > self.max_val:
            raise ValueError(f"Attribute '{self.id}': min {self.min_val} > max {self.max_val}")
        clamped = max(self.min_val, min(self.max_val, self.current_val))
        object.__setattr__(self, "current_val", clamped)


@dataclass(frozen=True)
class Modifier:
    attribute_id: str
    sign: str
    value: float


@dataclass(frozen=True)
class Attack:
    """Loaded for completeness; fights are not resolved by this engine."""
    id: str
    display_name: str
    base_damage: int
    affected_by: Tuple[Modifier, ...] = ()


@dataclass(frozen=True)
class CharacterObjectUse:
    object_id: str
    set_dialog: Optional[str] = None
    consume_item: bool = False


@dataclass
class Character:
    id: str
    name: str
    icon: str
    dialog_id: str
    inventory: List[List[Optional[GameObject]]]  # inventory[y][x]
    attributes: List[Attribute] = field(default_factory=list)
    object_use: List[CharacterObjectUse] = field(default_factory=list)
    attacks: List[Attack] = field(default_factory=list)

    @property
    def inventory_height(self) -> int:
        return len(self.inventory)

    @property
    def inventory_width(self) -> int:
        return len(self.inventory[0]) if self.inventory else 0

    def _check_slot(self, x: int, y: int) -> None:
        if not (0 <= x < self.inventory_width and 0 <= y < self.inventory_height):
            raise OutOfBoundsError(
                f"Inventory slot ({x}, {y}) outside {self.inventory_width}x{self.inventory_height} "
                f"for character '{self.id}'"
            )

    def get_slot(self, x: int, y: int) -> Optional[GameObject]:
        self._check_slot(x, y)
        return self.inventory[y][x]

    def set_slot(self, x: int, y: int, item: Optional[GameObject]) -> None:
        self._check_slot(x, y)
        self.inventory[y][x] = item

    def iter_slots(self) -> Iterator[Tuple[int, int, Optional[GameObject]]]:
        """Row-major walk over every slot."""
        for y, row in enumerate(self.inventory):
            for x, item in enumerate(row):
                yield x, y, item

    def snapshot(self) -> "Character":
        return copy.deepcopy(self)


Occupant = Union[Character, GameObject]


def occupant_kind(occupant: Occupant) -> str:
    """Closed discriminator for grid occupants: ``"character"`` or ``"object"``."""
    if isinstance(occupant, Character):
        return "character"
    if isinstance(occupant, GameObject):
        return "object"
    raise TypeError(f"Unsupported occupant type: {type(occupant).__name__}")


@dataclass(frozen=True)
class DialogOption:
    line: str
    next: str


@dataclass(frozen=True)
class Dialog:
    id: str
    npc_line: str
    option_0: DialogOption
    option_1: DialogOption

    @property
    def options(self) -> Tuple[DialogOption, DialogOption]:
        return (self.option_0, self.option_1)


@dataclass
class GameMap:
    id: str
    description: str
    width: int
    height: int
    grid: List[List[Optional[Occupant]]] = field(default_factory=list)  # grid[y][x]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Map '{self.id}' must have positive dimensions")
        if not self.grid:
            self.grid = [[None] * self.width for _ in range(self.height)]
        if len(self.grid) != self.height or any(len(row) != self.width for row in self.grid):
            raise ValueError(f"Map '{self.id}' grid does not match {self.width}x{self.height}")

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_boundary(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(f"Cell ({x}, {y}) outside map '{self.id}' ({self.width}x{self.height})")

    def get_cell(self, x: int, y: int) -> Optional[Occupant]:
        self._check(x, y)
        return self.grid[y][x]

    def set_cell(self, x: int, y: int, occupant: Optional[Occupant]) -> None:
        self._check(x, y)
        if occupant is not None:
            occupant_kind(occupant)
        self.grid[y][x] = occupant

    def iter_cells(self) -> Iterator[Tuple[int, int, Optional[Occupant]]]:
        for y, row in enumerate(self.grid):
            for x, occ in enumerate(row):
                yield x, y, occ


@dataclass(frozen=True)
class GameInfo:
    name: str
    author: str
    description: str
    starting_map: str
    starting_x: int
    starting_y: int
    player_id: str = "player"
    min_screen_cols: Optional[int] = None
    min_screen_rows: Optional[int] = None


@dataclass
class World:
    info: GameInfo
    maps: Dict[str, GameMap]
    objects: Dict[str, GameObject]
    characters: Dict[str, Character]
    dialogs: Dict[str, Dialog]
    # Live player character; not placed on any grid
    player: Character

    def find_map(self, map_id: str) -> GameMap:
        return self.maps[map_id]

    def all_maps(self) -> List[GameMap]:
        return list(self.maps.values())
