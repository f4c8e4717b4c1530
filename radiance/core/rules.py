"""Object rule engine.

Small functions over the world model: prerequisite checks, movement validity,
activation (door travel), item use and collection. They decide *what* happens;
building player-facing messages is left to the controller.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from .errors import ConfigurationError
from .model.base import (
    CATEGORY_COLLIDABLE,
    CATEGORY_DOOR,
    CATEGORY_TRAVEL,
    ActivateInteraction,
    Character,
    CharacterObjectUse,
    GameMap,
    GameObject,
    Occupant,
    ObjectUseInteraction,
    StateChange,
    occupant_kind,
)
from .registry import ContentRegistry

logger = logging.getLogger(__name__)

__all__ = [
    "prereqs_met",
    "check_move_available",
    "ActivationKind",
    "ActivationOutcome",
    "resolve_activate",
    "UseOutcome",
    "resolve_object_use",
    "apply_use_outcome",
    "CollectOutcome",
    "collect",
]


def prereqs_met(obj: GameObject, required: Iterable[StateChange]) -> bool:
    """All required flag values hold. Flags the object never recorded read as False."""
    return all(obj.get_state(req.name) == req.value for req in required)


def check_move_available(game_map: GameMap, x: int, y: int) -> bool:
    """Whether the player may step onto (x, y).

    Interior cells: empty and character cells are walkable, objects unless
    they are collidable. Boundary ring: only a door makes the cell walkable.
    """
    if not game_map.in_bounds(x, y):
        return False
    occ = game_map.get_cell(x, y)
    if game_map.is_boundary(x, y):
        return isinstance(occ, GameObject) and occ.category == CATEGORY_DOOR
    if occ is None:
        return True
    kind = occupant_kind(occ)
    if kind == "character":
        return True
    return occ.category != CATEGORY_COLLIDABLE


# --- Activation ---

class ActivationKind(Enum):
    TRAVEL = "travel"
    ACTIVATED = "activated"
    LOCKED = "locked"
    NONE = "none"


@dataclass(frozen=True)
class ActivationOutcome:
    kind: ActivationKind
    interaction: Optional[ActivateInteraction] = None
    destination: Optional[Tuple[str, int, int]] = None  # (map_id, x, y)
    message: str = ""


def _failure_message(obj: GameObject) -> str:
    if obj.category == CATEGORY_DOOR:
        return f"The {obj.name} is locked."
    return f"The {obj.name} won't budge."


def resolve_activate(registry: ContentRegistry, obj: GameObject, current_map_id: str) -> ActivationOutcome:
    """First activate interaction whose prereqs hold fires; declaration order."""
    failure: Optional[ActivationOutcome] = None
    for interaction in obj.activations:
        if not prereqs_met(obj, interaction.prereqs):
            if failure is None:
                failure = ActivationOutcome(
                    kind=ActivationKind.LOCKED, interaction=interaction, message=_failure_message(obj)
                )
            continue
        if interaction.category == CATEGORY_TRAVEL:
            target = registry.find_door_counterpart(obj.id, current_map_id, interaction.destination)
            if target is None:
                raise ConfigurationError(f"Door '{obj.id}' on map '{current_map_id}' has no counterpart")
            return ActivationOutcome(kind=ActivationKind.TRAVEL, interaction=interaction, destination=target)
        return ActivationOutcome(kind=ActivationKind.ACTIVATED, interaction=interaction)
    if failure is not None:
        logger.info("Activation of '%s' blocked by prereqs", obj.id)
        return failure
    return ActivationOutcome(kind=ActivationKind.NONE, message=f"Nothing happens with the {obj.name}.")


# --- Item use ---

@dataclass(frozen=True)
class UseOutcome:
    matched: bool
    target: Optional[Occupant] = None
    used_item_id: str = ""
    self_action: Tuple[StateChange, ...] = ()
    consume_item: bool = False
    set_dialog: Optional[str] = None
    # Other half of a door pair, mutated together with the target
    counterpart: Optional[GameObject] = None


def resolve_object_use(
    registry: ContentRegistry, target: Occupant, used_item_id: str, current_map_id: str
) -> UseOutcome:
    """Find the first use interaction on ``target`` accepting ``used_item_id``.

    Nothing is mutated here; for doors the counterpart is located up front so
    that ``apply_use_outcome`` can update both halves or neither.
    """
    kind = occupant_kind(target)
    if kind == "character":
        match: Optional[CharacterObjectUse] = next(
            (u for u in target.object_use if u.object_id == used_item_id), None
        )
        if match is None:
            return UseOutcome(matched=False, target=target, used_item_id=used_item_id)
        return UseOutcome(
            matched=True,
            target=target,
            used_item_id=used_item_id,
            consume_item=match.consume_item,
            set_dialog=match.set_dialog,
        )

    use: Optional[ObjectUseInteraction] = next(
        (u for u in target.object_uses if u.foreign_object_id == used_item_id), None
    )
    if use is None:
        return UseOutcome(matched=False, target=target, used_item_id=used_item_id)
    counterpart = None
    if target.category == CATEGORY_DOOR:
        where = registry.find_door_counterpart(target.id, current_map_id)
        if where is None:
            raise ConfigurationError(f"Door '{target.id}' on map '{current_map_id}' has no counterpart")
        map_id, x, y = where
        counterpart = registry.get_cell(map_id, x, y)
    return UseOutcome(
        matched=True,
        target=target,
        used_item_id=used_item_id,
        self_action=use.self_action,
        consume_item=use.consume_item,
        counterpart=counterpart,
    )


def apply_use_outcome(registry: ContentRegistry, outcome: UseOutcome) -> None:
    """Apply a matched outcome. Flags are set, never toggled, so reapplying is idempotent."""
    if not outcome.matched:
        return
    target = outcome.target
    if isinstance(target, Character):
        if outcome.set_dialog:
            target.dialog_id = outcome.set_dialog
        return
    for change in outcome.self_action:
        registry.set_state_flag(target, change.name, change.value)
        if outcome.counterpart is not None:
            registry.set_state_flag(outcome.counterpart, change.name, change.value)


# --- Collection ---

@dataclass(frozen=True)
class CollectOutcome:
    collected: bool
    item: Optional[GameObject] = None
    slot: Optional[Tuple[int, int]] = None


def collect(registry: ContentRegistry, character: Character, map_id: str, x: int, y: int) -> CollectOutcome:
    """Move the object at (x, y) into the first empty slot; on a full inventory nothing changes."""
    occ = registry.get_cell(map_id, x, y)
    if not isinstance(occ, GameObject):
        return CollectOutcome(collected=False)
    slot = registry.find_first_empty_inventory_slot(character)
    if slot is None or not registry.insert_first_empty_inventory_slot(character, occ):
        return CollectOutcome(collected=False, item=occ)
    registry.set_cell(map_id, x, y, None)
    logger.debug("'%s' collected '%s' into slot %s", character.id, occ.id, slot)
    return CollectOutcome(collected=True, item=occ, slot=slot)
