"""World loading and validation utilities.

Separates construction logic from raw definition dicts into model dataclasses.
No I/O performed here; caller is responsible for reading files from disk
(see ``content_loader``).

Expected input shape::

    {"game": {...}, "objects": [...], "characters": [...],
     "dialogs": [...], "maps": [...]}
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ConfigurationError
from ..validator import validate_schema
from ..model.base import (
    CATEGORY_DOOR,
    CATEGORY_TRAVEL,
    NEXT_EXIT,
    NEXT_INVENTORY,
    ActivateInteraction,
    Attack,
    Attribute,
    Character,
    CharacterObjectUse,
    Dialog,
    DialogOption,
    GameInfo,
    GameMap,
    GameObject,
    Modifier,
    ObjectUseInteraction,
    StateChange,
    World,
)

__all__ = ["build_world_from_dict", "validate_world"]

logger = logging.getLogger(__name__)


def _state_changes(raw) -> Tuple[StateChange, ...]:
    changes = []
    for entry in raw or []:
        for name, value in entry.items():
            changes.append(StateChange(name=name, value=bool(value)))
    return tuple(changes)


def _build_object(o: Dict[str, Any]) -> GameObject:
    interactions = []
    raw_inter = o.get("interactions") or {}
    for a in raw_inter.get("activate") or []:
        interactions.append(
            ActivateInteraction(
                category=a["category"],
                prereqs=_state_changes(a.get("prereqs")),
                destination=a.get("destination"),
            )
        )
    for u in raw_inter.get("object_use") or []:
        interactions.append(
            ObjectUseInteraction(
                foreign_object_id=u["foreign_objects_id"],
                self_action=_state_changes(u.get("self_action")),
                consume_item=u.get("consume_item", False),
            )
        )
    return GameObject(
        id=o["id"],
        name=o["name"],
        category=o["type"],
        icon=o["icon"][0],
        state={s["id"]: s.get("default", True) for s in o.get("state") or []},
        interactions=interactions,
    )


def _build_character(c: Dict[str, Any], objects: Dict[str, GameObject], issues: List[str]) -> Character:
    size = c["inventory_size"]
    inventory = [[None] * size["width"] for _ in range(size["height"])]
    raw_inter = c.get("interactions") or {}
    attacks = []
    for a in raw_inter.get("attacks") or []:
        mods = tuple(
            Modifier(
                attribute_id=m["attribute_id"],
                sign=m["effect_per_point"][0],
                value=float(m["effect_per_point"][1:]),
            )
            for m in a.get("affected_by") or []
        )
        attacks.append(Attack(id=a["id"], display_name=a["display_name"], base_damage=a["base_damage"], affected_by=mods))
    character = Character(
        id=c["id"],
        name=c["name"],
        icon=c["icon"][0],
        dialog_id=c.get("dialog_id") or "",
        inventory=inventory,
        attributes=[
            Attribute(
                id=t["id"],
                display_name=t["display_name"],
                min_val=0,
                max_val=t["max_value"],
                current_val=t["starting_value"],
            )
            for t in c.get("traits") or []
        ],
        object_use=[
            CharacterObjectUse(
                object_id=u["object_id"],
                set_dialog=u.get("set_dialog") or None,
                consume_item=u.get("consume_item", False),
            )
            for u in raw_inter.get("object_use") or []
        ],
        attacks=attacks,
    )
    # Starting items fill row by row
    free = [(x, y) for x, y, item in character.iter_slots() if item is None]
    for item_id in c.get("inventory") or []:
        if item_id not in objects:
            issues.append(f"Character '{character.id}' starts with unknown object '{item_id}'")
            continue
        if not free:
            issues.append(f"Character '{character.id}' starting inventory exceeds its capacity")
            break
        x, y = free.pop(0)
        character.set_slot(x, y, objects[item_id].snapshot())
    return character


def _build_map(
    m: Dict[str, Any],
    objects: Dict[str, GameObject],
    characters: Dict[str, Character],
    issues: List[str],
) -> GameMap:
    game_map = GameMap(id=m["id"], description=m.get("description", ""), width=m["width"], height=m["height"])
    for occ in m.get("occupants") or []:
        x, y = occ["x"], occ["y"]
        if not game_map.in_bounds(x, y):
            issues.append(f"Map '{game_map.id}' places an occupant outside the grid at ({x}, {y})")
            continue
        if game_map.get_cell(x, y) is not None:
            issues.append(f"Map '{game_map.id}' places two occupants at ({x}, {y})")
            continue
        if "object" in occ:
            definition = objects.get(occ["object"])
            kind, ref = "object", occ["object"]
        else:
            definition = characters.get(occ["character"])
            kind, ref = "character", occ["character"]
        if definition is None:
            issues.append(f"Map '{game_map.id}' references missing {kind} '{ref}'")
            continue
        # Each cell owns its own copy
        game_map.set_cell(x, y, definition.snapshot())
    return game_map


def _index(items, label: str, issues: List[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for item in items:
        if item.id in out:
            issues.append(f"Duplicate {label} id '{item.id}'")
            continue
        out[item.id] = item
    return out


def _build_parts(data: Dict[str, Any], game: Dict[str, Any], issues: List[str]):
    objects = _index((_build_object(o) for o in data.get("objects", [])), "object", issues)
    characters = _index(
        (_build_character(c, objects, issues) for c in data.get("characters", [])), "character", issues
    )
    dialogs = _index(
        (
            Dialog(
                id=d["id"],
                npc_line=d["npc_dialog"],
                option_0=DialogOption(line=d["option_0"]["dialog"], next=d["option_0"]["next"]),
                option_1=DialogOption(line=d["option_1"]["dialog"], next=d["option_1"]["next"]),
            )
            for d in data.get("dialogs", [])
        ),
        "dialog",
        issues,
    )
    maps = _index((_build_map(m, objects, characters, issues) for m in data.get("maps", [])), "map", issues)

    screen = game.get("min_screen_size") or {}
    info = GameInfo(
        name=game["name"],
        author=game.get("author", ""),
        description=game.get("description", ""),
        starting_map=game["starting_map"],
        starting_x=game["starting_position"]["x"],
        starting_y=game["starting_position"]["y"],
        player_id=game.get("player", "player"),
        min_screen_cols=screen.get("width"),
        min_screen_rows=screen.get("height"),
    )
    return objects, characters, dialogs, maps, info


def build_world_from_dict(data: Dict[str, Any], check_schema: bool = True) -> World:
    """Build the linked World Model; raises ConfigurationError on any problem.

    Structural problems (unknown ids in placements, duplicate ids) and the
    cross-reference checks of ``validate_world`` are both fatal here.
    """
    game = data.get("game")
    if game is None:
        raise ConfigurationError("Missing game definition (game.yaml)")
    if check_schema:
        validate_schema("game", game, "game")
        for kind in ("objects", "characters", "maps"):
            for i, doc in enumerate(data.get(kind, [])):
                validate_schema(kind, doc, f"{kind}[{i}]")
        validate_schema("dialogs", list(data.get("dialogs", [])), "dialogs")

    issues: List[str] = []
    try:
        objects, characters, dialogs, maps, info = _build_parts(data, game, issues)
    except (KeyError, IndexError, TypeError, ValueError) as e:
        # Shape errors the schema normally catches first
        raise ConfigurationError(f"Malformed definitions ({type(e).__name__}: {e})") from e
    player_def = characters.get(info.player_id)
    if player_def is None:
        issues.append(f"Player character '{info.player_id}' is not defined")
    if issues:
        raise ConfigurationError(issues)

    world = World(
        info=info,
        maps=maps,
        objects=objects,
        characters=characters,
        dialogs=dialogs,
        player=player_def.snapshot(),
    )
    issues = validate_world(world)
    if issues:
        raise ConfigurationError(issues)
    logger.info(
        "World '%s' built: %d maps, %d objects, %d characters, %d dialogs",
        info.name, len(maps), len(objects), len(characters), len(dialogs),
    )
    return world


def _check_dialog_ref(dialog_id: Optional[str], world: World, owner: str, issues: List[str]) -> None:
    if dialog_id and dialog_id not in world.dialogs:
        issues.append(f"{owner} points to missing dialog '{dialog_id}'")


def validate_world(world: World) -> List[str]:
    """Cross-reference integrity checks. Returns a list of human readable issues."""
    issues: List[str] = []
    info = world.info
    start = world.maps.get(info.starting_map)
    if start is None:
        issues.append(f"Starting map '{info.starting_map}' does not exist")
    elif not start.in_bounds(info.starting_x, info.starting_y):
        issues.append(
            f"Starting position ({info.starting_x}, {info.starting_y}) outside map '{start.id}'"
        )

    for d in world.dialogs.values():
        for n, opt in enumerate(d.options):
            if opt.next in (NEXT_EXIT, NEXT_INVENTORY):
                continue
            _check_dialog_ref(opt.next, world, f"Dialog '{d.id}' option {n}", issues)

    characters = list(world.characters.values())
    characters += [occ for m in world.all_maps() for _, _, occ in m.iter_cells() if isinstance(occ, Character)]
    seen_chars = set()
    for c in characters:
        if c.id in seen_chars:
            continue
        seen_chars.add(c.id)
        if c.inventory_width < 1 or c.inventory_height < 1:
            issues.append(f"Character '{c.id}' inventory must be at least 1x1")
        if not c.icon:
            issues.append(f"Character '{c.id}' has an empty icon")
        _check_dialog_ref(c.dialog_id, world, f"Character '{c.id}'", issues)
        for use in c.object_use:
            if use.object_id not in world.objects:
                issues.append(f"Character '{c.id}' accepts unknown object '{use.object_id}'")
            _check_dialog_ref(use.set_dialog, world, f"Character '{c.id}' object use '{use.object_id}'", issues)

    for o in world.objects.values():
        if not o.icon:
            issues.append(f"Object '{o.id}' has an empty icon")
        for use in o.object_uses:
            if use.foreign_object_id not in world.objects:
                issues.append(f"Object '{o.id}' accepts unknown object '{use.foreign_object_id}'")
        for act in o.activations:
            if act.destination and act.destination not in world.maps:
                issues.append(f"Object '{o.id}' travels to missing map '{act.destination}'")

    # Door pairs: linear scan over every map
    placements: Dict[str, List[str]] = {}
    paired_objects: Dict[str, GameObject] = {}
    for m in world.all_maps():
        for _, _, occ in m.iter_cells():
            if not isinstance(occ, GameObject):
                continue
            travels = any(a.category == CATEGORY_TRAVEL for a in occ.activations)
            if occ.category == CATEGORY_DOOR or travels:
                placements.setdefault(occ.id, []).append(m.id)
                paired_objects[occ.id] = occ
    for door_id, map_ids in placements.items():
        if len(map_ids) != 2:
            issues.append(
                f"Door '{door_id}' must be placed exactly twice, found {len(map_ids)} ({', '.join(map_ids)})"
            )
            continue
        if map_ids[0] == map_ids[1]:
            issues.append(f"Door '{door_id}' pair must connect two distinct maps, both are on '{map_ids[0]}'")
            continue
        for act in paired_objects[door_id].activations:
            if act.category != CATEGORY_TRAVEL or not act.destination:
                continue
            if act.destination not in map_ids:
                issues.append(f"Door '{door_id}' destination '{act.destination}' does not hold its pair")
    return issues
