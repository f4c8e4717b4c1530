"""Facade for world model & loader.

Re-exports dataclasses and utility build/validate functions from the
internal modules to provide a stable import surface.
"""
from .model.base import (
    World,
    GameInfo,
    GameMap,
    GameObject,
    Character,
    Dialog,
    DialogOption,
    Attribute,
    Attack,
    Modifier,
    StateChange,
    ActivateInteraction,
    ObjectUseInteraction,
    CharacterObjectUse,
    Occupant,
    occupant_kind,
)
from .loader.world_loader import build_world_from_dict, validate_world

__all__ = [
    "World",
    "GameInfo",
    "GameMap",
    "GameObject",
    "Character",
    "Dialog",
    "DialogOption",
    "Attribute",
    "Attack",
    "Modifier",
    "StateChange",
    "ActivateInteraction",
    "ObjectUseInteraction",
    "CharacterObjectUse",
    "Occupant",
    "occupant_kind",
    "build_world_from_dict",
    "validate_world",
]
