import pytest

from radiance.core.world import build_world_from_dict
from radiance.core.registry import ContentRegistry
from radiance.core.state import GameState
from radiance.core.input import KeyEvent
from radiance.core.controller import handle_event


def _door():
    return {
        "id": "door",
        "name": "oak door",
        "type": "door",
        "icon": "D",
        "state": [{"id": "key_taken", "default": False}],
        "interactions": {
            "activate": [{"category": "travel", "prereqs": [{"key_taken": True}]}],
            "object_use": [
                {"foreign_objects_id": "brass_key", "self_action": [{"key_taken": True}], "consume_item": True}
            ],
        },
    }


@pytest.fixture()
def world_dict():
    """Two 5x5 maps joined by a locked door; a fresh dict per test."""
    return {
        "game": {
            "name": "Test World",
            "author": "tests",
            "description": "Mini world",
            "starting_map": "start",
            "starting_position": {"x": 1, "y": 1},
        },
        "objects": [
            _door(),
            {"id": "brass_key", "name": "brass key", "type": "collectable", "icon": "k"},
            {"id": "coin", "name": "coin", "type": "collectable", "icon": "c"},
            {"id": "rock", "name": "rock", "type": "collidable", "icon": "O"},
            {
                "id": "lever",
                "name": "lever",
                "type": "scenery",
                "icon": "L",
                "interactions": {"activate": [{"category": "pull"}]},
            },
        ],
        "characters": [
            {
                "id": "player",
                "name": "Hero",
                "icon": "@",
                "inventory_size": {"width": 2, "height": 2},
                "dialog_id": "",
                "inventory": ["brass_key"],
                "traits": [{"id": "health", "display_name": "Health", "starting_value": 5, "max_value": 10}],
            },
            {
                "id": "guide",
                "name": "Guide",
                "icon": "G",
                "inventory_size": {"width": 1, "height": 1},
                "dialog_id": "greet",
                "interactions": {"object_use": [{"object_id": "coin", "set_dialog": "thanks", "consume_item": True}]},
            },
        ],
        "dialogs": [
            {
                "id": "greet",
                "npc_dialog": "Hello there.",
                "option_0": {"dialog": "Tell me more", "next": "more"},
                "option_1": {"dialog": "Bye", "next": "exit"},
            },
            {
                "id": "more",
                "npc_dialog": "The door needs a key.",
                "option_0": {"dialog": "Check bag", "next": "inventory"},
                "option_1": {"dialog": "Bye", "next": "exit"},
            },
            {
                "id": "thanks",
                "npc_dialog": "Thank you for the coin!",
                "option_0": {"dialog": "Sure", "next": "exit"},
                "option_1": {"dialog": "Bye", "next": "exit"},
            },
        ],
        "maps": [
            {
                "id": "start",
                "description": "Starting room",
                "width": 5,
                "height": 5,
                "occupants": [
                    {"x": 0, "y": 1, "object": "door"},
                    {"x": 2, "y": 2, "object": "rock"},
                    {"x": 3, "y": 3, "object": "coin"},
                    {"x": 3, "y": 1, "object": "lever"},
                    {"x": 1, "y": 3, "character": "guide"},
                ],
            },
            {
                "id": "hall",
                "description": "Hall",
                "width": 5,
                "height": 5,
                "occupants": [{"x": 4, "y": 2, "object": "door"}],
            },
        ],
    }


@pytest.fixture()
def game(world_dict):
    world = build_world_from_dict(world_dict)
    registry = ContentRegistry(world)
    state = GameState(current_map="start", player_x=1, player_y=1)
    return registry, state


@pytest.fixture()
def press():
    """Feed keys to the controller: press(state, registry, Key.ENTER, "e", ...)."""
    def _press(state, registry, *keys):
        for k in keys:
            event = KeyEvent.of_char(k) if isinstance(k, str) else KeyEvent(k)
            handle_event(state, registry, event)
    return _press

