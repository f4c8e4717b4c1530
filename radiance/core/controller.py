"""Interaction controller: the session state machine.

``handle_event(state, registry, event)`` reads the current interaction mode,
dispatches to that mode's handler and leaves ``state.needs_render`` set.
Handlers call into ``actions``; an ``ActionError`` becomes a dialog whose
return targets point back at the mode that raised it.

Modes and their keys::

    START_SCREEN                   Enter -> map, Esc -> exit confirmation
    PLAYING_MAP                    arrows/WASD move, Enter interact, E inventory,
                                   H start screen, Esc exit confirmation
    PLAYING_DIALOG                 Left/Right select, Enter confirm, Esc cancel
    PLAYING_INVENTORY              arrows (wrapping), Enter use item, Esc/M/E map
    PLAYING_CHARACTER_INTERACTION  Left/Right pick option, Enter follow, M/Esc map
    PLAYING_CHARACTER_FIGHT        reserved, ignores input
"""
from __future__ import annotations
import logging
from typing import Callable, Dict, Tuple

from . import actions
from .errors import ActionError
from .input import DELTAS, InputEvent, Key, KeyEvent, direction_of
from .model.base import NEXT_EXIT, NEXT_INVENTORY
from .registry import ContentRegistry
from .state import DialogPayload, GameState, InteractionMode

logger = logging.getLogger(__name__)

OPEN_INVENTORY_OPTIONS = ("Open inventory", "Close")
CONTINUE_OPTIONS = ("Continue", "Close")
TALK_OPTIONS = ("Talk", "Close")
EXIT_CONFIRM_MESSAGE = "Would you like to exit?"
EXIT_CONFIRM_OPTIONS = ("No", "Yes")


# --- Dialog helpers ---

def raise_dialog(
    state: GameState,
    message: str,
    options: Tuple[str, str] = CONTINUE_OPTIONS,
    option_0_target: InteractionMode | None = None,
    option_1_target: InteractionMode | None = None,
    cancel_target: InteractionMode | None = None,
) -> None:
    """Show a message box. Unset targets default to the mode active right now."""
    prior = state.mode
    state.dialog = DialogPayload(
        message=message,
        options=options,
        option_0_target=option_0_target or prior,
        option_1_target=option_1_target or prior,
        cancel_target=cancel_target or prior,
    )
    state.mode = InteractionMode.PLAYING_DIALOG


def raise_exit_confirmation(state: GameState) -> None:
    state.pre_exit = True
    raise_dialog(state, EXIT_CONFIRM_MESSAGE, EXIT_CONFIRM_OPTIONS)


def _raise_action_error(state: GameState, err: ActionError) -> None:
    if err.offer_inventory:
        raise_dialog(
            state, err.message, OPEN_INVENTORY_OPTIONS, option_0_target=InteractionMode.PLAYING_INVENTORY
        )
    else:
        raise_dialog(state, err.message, CONTINUE_OPTIONS)


# --- Mode handlers ---

def _on_start_screen(state: GameState, registry: ContentRegistry, event: KeyEvent) -> None:
    if event.key is Key.ENTER:
        state.mode = InteractionMode.PLAYING_MAP
    elif event.key is Key.ESC:
        raise_exit_confirmation(state)


def _on_map(state: GameState, registry: ContentRegistry, event: KeyEvent) -> None:
    direction = direction_of(event, allow_wasd=True)
    if direction is not None:
        actions.move(state, registry, direction)
    elif event.key is Key.ENTER:
        try:
            res = actions.enter(state, registry)
        except ActionError as err:
            _raise_action_error(state, err)
            return
        changes = res["changes"]
        if "conversation" in changes:
            state.interaction_cancel_target = InteractionMode.PLAYING_MAP
            state.mode = InteractionMode.PLAYING_CHARACTER_INTERACTION
        elif "collected" in changes:
            raise_dialog(
                state,
                " ".join(res["lines"]),
                OPEN_INVENTORY_OPTIONS,
                option_0_target=InteractionMode.PLAYING_INVENTORY,
            )
    elif event.key is Key.ESC:
        raise_exit_confirmation(state)
    elif event.is_char("e"):
        state.mode = InteractionMode.PLAYING_INVENTORY
    elif event.is_char("h"):
        state.mode = InteractionMode.START_SCREEN


def _on_dialog(state: GameState, registry: ContentRegistry, event: KeyEvent) -> None:
    dialog = state.dialog
    if event.key is Key.LEFT:
        dialog.select(dialog.selected - 1)
    elif event.key is Key.RIGHT:
        dialog.select(dialog.selected + 1)
    elif event.key is Key.ENTER:
        if state.pre_exit:
            if dialog.selected == 1:
                state.do_exit = True
            else:
                state.pre_exit = False
                state.mode = dialog.cancel_target
            return
        dialog.result_ready = True
        dialog.result = dialog.selected
        target = dialog.target_for_selection()
        if target is InteractionMode.PLAYING_CHARACTER_INTERACTION and state.dialog_id is None:
            target = dialog.cancel_target
        state.mode = target
    elif event.key is Key.ESC:
        state.pre_exit = False
        dialog.result_ready = False
        dialog.result = None
        state.mode = dialog.cancel_target


def _on_inventory(state: GameState, registry: ContentRegistry, event: KeyEvent) -> None:
    direction = direction_of(event)
    if direction is not None:
        player = registry.player
        dx, dy = DELTAS[direction]
        state.inventory_x = (state.inventory_x + dx) % player.inventory_width
        state.inventory_y = (state.inventory_y + dy) % player.inventory_height
    elif event.key is Key.ENTER:
        try:
            res = actions.use_item(state, registry)
        except ActionError as err:
            raise_dialog(state, err.message, CONTINUE_OPTIONS)
            return
        message = " ".join(res["lines"])
        if "conversation" in res["changes"] and state.dialog_id:
            raise_dialog(
                state,
                message,
                TALK_OPTIONS,
                option_0_target=InteractionMode.PLAYING_CHARACTER_INTERACTION,
            )
        else:
            raise_dialog(state, message, CONTINUE_OPTIONS)
    elif event.key is Key.ESC or event.is_char("m", "e"):
        state.mode = InteractionMode.PLAYING_MAP


def _end_conversation(state: GameState, next_mode: InteractionMode) -> None:
    state.dialog_id = None
    state.interaction_character = None
    state.interaction_position = None
    state.interaction_selected = 0
    state.mode = next_mode


def _on_character_interaction(state: GameState, registry: ContentRegistry, event: KeyEvent) -> None:
    if event.key is Key.LEFT:
        state.interaction_selected = 0
    elif event.key is Key.RIGHT:
        state.interaction_selected = 1
    elif event.key is Key.ENTER:
        try:
            res = actions.choose_dialog_option(state, registry)
        except ActionError as err:
            _end_conversation(state, state.interaction_cancel_target)
            raise_dialog(state, err.message, CONTINUE_OPTIONS)
            return
        nxt = res["changes"]["next"]
        if nxt == NEXT_EXIT:
            _end_conversation(state, state.interaction_cancel_target)
        elif nxt == NEXT_INVENTORY:
            _end_conversation(state, InteractionMode.PLAYING_INVENTORY)
    elif event.key is Key.ESC or event.is_char("m"):
        _end_conversation(state, InteractionMode.PLAYING_MAP)


def _on_character_fight(state: GameState, registry: ContentRegistry, event: KeyEvent) -> None:
    logger.debug("Fight mode has no input handling, ignoring %r", event)


_HANDLERS: Dict[InteractionMode, Callable[[GameState, ContentRegistry, KeyEvent], None]] = {
    InteractionMode.START_SCREEN: _on_start_screen,
    InteractionMode.PLAYING_MAP: _on_map,
    InteractionMode.PLAYING_DIALOG: _on_dialog,
    InteractionMode.PLAYING_INVENTORY: _on_inventory,
    InteractionMode.PLAYING_CHARACTER_INTERACTION: _on_character_interaction,
    InteractionMode.PLAYING_CHARACTER_FIGHT: _on_character_fight,
}


def handle_event(state: GameState, registry: ContentRegistry, event: InputEvent) -> None:
    """Process one input event (or a timeout, ``None``) and request a render."""
    state.needs_render = True
    if event is None:
        # Timeout: only the occupancy cursor changes
        if state.cursor_solid:
            state.cursor_solid = False
        else:
            state.cursor_blink = not state.cursor_blink
        return
    if not isinstance(event, KeyEvent):
        logger.debug("Ignoring non-key event %r", event)
        return
    before = state.mode
    _HANDLERS[state.mode](state, registry, event)
    if state.mode is not before:
        logger.debug("Mode %s -> %s on %s", before.value, state.mode.value, event.key.value)
