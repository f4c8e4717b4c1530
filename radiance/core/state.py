"""Game state container for runtime mutable data.

Separated from the world definition: position, interaction mode, inventory
cursor, the transient dialog payload and the exit flags. Created once per game
start and mutated in place by the controller.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class InteractionMode(Enum):
    """Which input table is active."""
    START_SCREEN = "start_screen"
    PLAYING_MAP = "playing_map"
    PLAYING_DIALOG = "playing_dialog"
    PLAYING_INVENTORY = "playing_inventory"
    PLAYING_CHARACTER_INTERACTION = "playing_character_interaction"
    # Reserved: no transitions lead in or out yet
    PLAYING_CHARACTER_FIGHT = "playing_character_fight"


@dataclass
class DialogPayload:
    """Message box raised by the controller (found item, locked door, exit...)."""
    message: str = ""
    options: Tuple[str, str] = ("", "")
    selected: int = 0
    option_0_target: InteractionMode = InteractionMode.PLAYING_MAP
    option_1_target: InteractionMode = InteractionMode.PLAYING_MAP
    cancel_target: InteractionMode = InteractionMode.PLAYING_MAP
    result_ready: bool = False
    result: Optional[int] = None

    def select(self, index: int) -> None:
        # Two options only, clamped
        self.selected = max(0, min(1, index))

    def target_for_selection(self) -> InteractionMode:
        return self.option_0_target if self.selected == 0 else self.option_1_target


@dataclass
class GameState:
    current_map: str
    player_x: int
    player_y: int
    mode: InteractionMode = InteractionMode.START_SCREEN
    inventory_x: int = 0
    inventory_y: int = 0
    # Conversation with a character
    dialog_id: Optional[str] = None
    interaction_character: Optional[str] = None
    interaction_position: Optional[Tuple[int, int]] = None
    interaction_selected: int = 0
    interaction_cancel_target: InteractionMode = InteractionMode.PLAYING_MAP
    dialog: DialogPayload = field(default_factory=DialogPayload)
    pre_exit: bool = False
    do_exit: bool = False
    needs_render: bool = True
    # Occupancy cursor: solid right after a move, blinks on input timeouts
    cursor_solid: bool = True
    cursor_blink: bool = False

    def position(self) -> Tuple[int, int]:
        return self.player_x, self.player_y

    def location_key(self) -> str:
        return f"{self.current_map}:{self.player_x},{self.player_y}"
