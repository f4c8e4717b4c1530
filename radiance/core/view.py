"""Per-mode view models handed to the renderer.

``build_view(state, registry)`` is the read-only query surface between the
engine and the presentation layer: it returns plain data describing what to
show (glyph rows, dialog text, inventory grid, portraits) and never draws.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .actions import conversation_partner
from .model.base import Character, GameObject
from .registry import ContentRegistry
from .state import GameState, InteractionMode

EMPTY_GLYPH = " "
WALL_GLYPH = "#"
PLAYER_GLYPH = "@"
EMPTY_SLOT_NAME = "Empty"


@dataclass(frozen=True)
class StartScreenView:
    title: str
    author: str
    description: str
    hint: str = "Press Enter to start, Esc to quit"


@dataclass(frozen=True)
class MapView:
    map_id: str
    description: str
    rows: Tuple[str, ...]
    player: Tuple[int, int]
    # Glyph under the player, drawn when the cursor blinks off
    underlying: str
    cursor_solid: bool
    cursor_blink: bool
    occupant_name: Optional[str] = None

    @property
    def show_player(self) -> bool:
        return self.cursor_solid or not self.cursor_blink


@dataclass(frozen=True)
class DialogView:
    message: str
    options: Tuple[str, str]
    selected: int


@dataclass(frozen=True)
class InventoryView:
    owner: str
    icons: Tuple[Tuple[str, ...], ...]  # icons[y][x]
    names: Tuple[Tuple[str, ...], ...]
    cursor: Tuple[int, int]
    selected_name: str


@dataclass(frozen=True)
class Portrait:
    name: str
    icon: str
    attributes: Tuple[Tuple[str, int, int], ...] = ()  # (display name, current, max)


@dataclass(frozen=True)
class CharacterInteractionView:
    player: Portrait
    npc: Portrait
    npc_line: str
    options: Tuple[str, str]
    selected: int


@dataclass(frozen=True)
class FightView:
    player: Portrait
    npc: Optional[Portrait] = None
    notice: str = "Fights are not available yet."


View = Union[StartScreenView, MapView, DialogView, InventoryView, CharacterInteractionView, FightView]


def _glyph(occ) -> str:
    if occ is None:
        return EMPTY_GLYPH
    return (occ.icon or "?")[:1]


def _portrait(character: Character) -> Portrait:
    return Portrait(
        name=character.name,
        icon=character.icon,
        attributes=tuple((a.display_name, a.current_val, a.max_val) for a in character.attributes),
    )


def map_view(state: GameState, registry: ContentRegistry) -> MapView:
    game_map = registry.get_map(state.current_map)
    rows = tuple(
        "".join(
            WALL_GLYPH if occ is None and game_map.is_boundary(x, y) else _glyph(occ)
            for x, occ in enumerate(row)
        )
        for y, row in enumerate(game_map.grid)
    )
    here = game_map.get_cell(state.player_x, state.player_y)
    return MapView(
        map_id=game_map.id,
        description=game_map.description,
        rows=rows,
        player=state.position(),
        underlying=_glyph(here),
        cursor_solid=state.cursor_solid,
        cursor_blink=state.cursor_blink,
        occupant_name=here.name if here is not None else None,
    )


def inventory_view(state: GameState, registry: ContentRegistry) -> InventoryView:
    player = registry.player
    icons: List[Tuple[str, ...]] = []
    names: List[Tuple[str, ...]] = []
    for row in player.inventory:
        icons.append(tuple(_glyph(item) for item in row))
        names.append(tuple(item.name if item else EMPTY_SLOT_NAME for item in row))
    selected: Optional[GameObject] = player.get_slot(state.inventory_x, state.inventory_y)
    return InventoryView(
        owner=player.name,
        icons=tuple(icons),
        names=tuple(names),
        cursor=(state.inventory_x, state.inventory_y),
        selected_name=selected.name if selected else EMPTY_SLOT_NAME,
    )


def character_interaction_view(state: GameState, registry: ContentRegistry) -> CharacterInteractionView:
    npc = conversation_partner(state, registry)
    dialog = registry.get_dialog(state.dialog_id) if state.dialog_id else None
    return CharacterInteractionView(
        player=_portrait(registry.player),
        npc=_portrait(npc) if npc is not None else Portrait(name="", icon=EMPTY_GLYPH),
        npc_line=dialog.npc_line if dialog else "",
        options=(dialog.option_0.line, dialog.option_1.line) if dialog else ("", ""),
        selected=state.interaction_selected,
    )


def build_view(state: GameState, registry: ContentRegistry) -> View:
    mode = state.mode
    if mode is InteractionMode.START_SCREEN:
        info = registry.world.info
        return StartScreenView(title=info.name, author=info.author, description=info.description)
    if mode is InteractionMode.PLAYING_MAP:
        return map_view(state, registry)
    if mode is InteractionMode.PLAYING_DIALOG:
        d = state.dialog
        return DialogView(message=d.message, options=d.options, selected=d.selected)
    if mode is InteractionMode.PLAYING_INVENTORY:
        return inventory_view(state, registry)
    if mode is InteractionMode.PLAYING_CHARACTER_INTERACTION:
        return character_interaction_view(state, registry)
    return FightView(player=_portrait(registry.player))
