"""Core player actions: move, enter, collect, activate, talk, use items.

Each action takes ``(state, registry, ...)`` and returns an ActionResult dict:
- lines: List[str] messages to show the player (may be empty)
- changes: dict summarizing state changes (``location``, ``collected``,
  ``conversation``, ``used``, ``consumed``...)

Recoverable failures (locked door, item with no effect, full inventory) raise
``ActionError``; the world is left untouched in that case.
"""
from __future__ import annotations
import logging
from typing import Any, Dict

from .errors import ActionError
from .input import DELTAS, Key
from .model.base import CATEGORY_COLLECTABLE, NEXT_EXIT, NEXT_INVENTORY, Character, GameObject, occupant_kind
from .registry import ContentRegistry
from .rules import (
    ActivationKind,
    apply_use_outcome,
    check_move_available,
    collect,
    resolve_activate,
    resolve_object_use,
)
from .state import GameState, InteractionMode

logger = logging.getLogger(__name__)


def _result(lines=None, **changes) -> Dict[str, Any]:
    return {"lines": list(lines or []), "changes": changes}


def move(state: GameState, registry: ContentRegistry, direction: Key) -> Dict[str, Any]:
    dx, dy = DELTAS[direction]
    game_map = registry.get_map(state.current_map)
    tx, ty = state.player_x + dx, state.player_y + dy
    if not check_move_available(game_map, tx, ty):
        return _result()
    state.player_x, state.player_y = tx, ty
    state.cursor_solid = True
    return _result(position=(tx, ty))


def enter(state: GameState, registry: ContentRegistry) -> Dict[str, Any]:
    """Interact with whatever occupies the player's cell."""
    occ = registry.get_cell(state.current_map, state.player_x, state.player_y)
    if occ is None:
        return _result()
    kind = occupant_kind(occ)
    if kind == "character":
        return talk(state, registry)
    if occ.category == CATEGORY_COLLECTABLE:
        return collect_here(state, registry)
    return activate_here(state, registry)


def collect_here(state: GameState, registry: ContentRegistry) -> Dict[str, Any]:
    outcome = collect(registry, registry.player, state.current_map, state.player_x, state.player_y)
    if not outcome.collected:
        if outcome.item is None:
            raise ActionError("There is nothing here to pick up.")
        raise ActionError(f"Your inventory is full. The {outcome.item.name} stays where it is.", offer_inventory=True)
    return _result([f"You found the {outcome.item.name}."], collected=outcome.item.id, slot=outcome.slot)


def activate_here(state: GameState, registry: ContentRegistry) -> Dict[str, Any]:
    obj = registry.get_cell(state.current_map, state.player_x, state.player_y)
    if not isinstance(obj, GameObject):
        return _result()
    outcome = resolve_activate(registry, obj, state.current_map)
    if outcome.kind is ActivationKind.TRAVEL:
        map_id, x, y = outcome.destination
        old = state.location_key()
        state.current_map, state.player_x, state.player_y = map_id, x, y
        state.cursor_solid = True
        logger.debug("Travel through '%s': %s -> %s", obj.id, old, state.location_key())
        return _result(location=state.location_key())
    if outcome.kind is ActivationKind.LOCKED:
        raise ActionError(outcome.message, offer_inventory=True)
    if outcome.kind is ActivationKind.NONE:
        raise ActionError(outcome.message)
    # Categories the engine does not handle fire with no effect
    return _result(activated=outcome.interaction.category)


def talk(state: GameState, registry: ContentRegistry) -> Dict[str, Any]:
    """Start a conversation with the character on the player's cell."""
    character = registry.get_cell(state.current_map, state.player_x, state.player_y)
    if not isinstance(character, Character):
        raise ActionError("There is nobody here to talk to.")
    if not character.dialog_id:
        raise ActionError(f"{character.name} has nothing to say.")
    state.dialog_id = character.dialog_id
    state.interaction_character = character.id
    state.interaction_position = (state.player_x, state.player_y)
    state.interaction_selected = 0
    return _result(conversation=character.dialog_id)


def conversation_partner(state: GameState, registry: ContentRegistry) -> Character | None:
    if state.interaction_position is None:
        return None
    x, y = state.interaction_position
    occ = registry.get_cell(state.current_map, x, y)
    return occ if isinstance(occ, Character) else None


def choose_dialog_option(state: GameState, registry: ContentRegistry) -> Dict[str, Any]:
    """Follow the selected option of the active NPC dialog.

    ``changes["next"]`` is the raw ``next`` value: a dialog id, ``"exit"`` or
    ``"inventory"``. Only a dialog id advances ``state.dialog_id``.
    """
    if state.dialog_id is None:
        raise ActionError("The conversation is over.")
    dialog = registry.get_dialog(state.dialog_id)
    option = dialog.options[state.interaction_selected]
    if option.next not in (NEXT_EXIT, NEXT_INVENTORY):
        state.dialog_id = registry.get_dialog(option.next).id
        state.interaction_selected = 0
    return _result(next=option.next)


def use_item(state: GameState, registry: ContentRegistry) -> Dict[str, Any]:
    """Use the inventory item under the cursor on the occupant of the player's cell."""
    player = registry.player
    item = player.get_slot(state.inventory_x, state.inventory_y)
    if item is None:
        raise ActionError("There is nothing in this slot.")
    target = registry.get_cell(state.current_map, state.player_x, state.player_y)
    if target is None:
        raise ActionError(f"There is nothing here to use the {item.name} on.")
    outcome = resolve_object_use(registry, target, item.id, state.current_map)
    if not outcome.matched:
        logger.info("'%s' has no effect on '%s'", item.id, target.id)
        raise ActionError(f"The {item.name} didn't work on the {target.name}.")
    apply_use_outcome(registry, outcome)
    if outcome.consume_item:
        registry.remove_inventory_slot(player, state.inventory_x, state.inventory_y)
    changes: Dict[str, Any] = {"used": item.id, "consumed": outcome.consume_item, "target": target.id}
    if isinstance(target, Character):
        state.dialog_id = target.dialog_id or None
        state.interaction_character = target.id
        state.interaction_position = (state.player_x, state.player_y)
        state.interaction_selected = 0
        state.interaction_cancel_target = InteractionMode.PLAYING_MAP
        changes["conversation"] = state.dialog_id
        return _result([f"You gave the {item.name} to {target.name}."], **changes)
    return _result([f"You used the {item.name} on the {target.name}."], **changes)
