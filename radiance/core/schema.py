"""JSON schema definitions for world definition documents.

One schema per document kind (game, object, character, dialog list, map).
Applied to the raw dicts before they are turned into model dataclasses.
"""

_IDENT = {"type": "string", "minLength": 1}
_ICON = {"type": "string", "minLength": 1}
_SIZE = {
    "type": "object",
    "required": ["width", "height"],
    "properties": {
        "width": {"type": "integer", "minimum": 1},
        "height": {"type": "integer", "minimum": 1},
    },
}
# [{"key_taken": true}, ...]
_STATE_CHANGES = {
    "type": ["array", "null"],
    "items": {
        "type": "object",
        "minProperties": 1,
        "maxProperties": 1,
        "additionalProperties": {"type": "boolean"},
    },
}

GAME_SCHEMA = {
    "type": "object",
    "required": ["name", "starting_map", "starting_position"],
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
        "author": {"type": "string"},
        "player": _IDENT,
        "min_screen_size": _SIZE,
        "starting_map": _IDENT,
        "starting_position": {
            "type": "object",
            "required": ["x", "y"],
            "properties": {
                "x": {"type": "integer", "minimum": 0},
                "y": {"type": "integer", "minimum": 0},
            },
        },
    },
}

OBJECT_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "type", "icon"],
    "properties": {
        "id": _IDENT,
        "name": {"type": "string"},
        "type": _IDENT,
        "icon": _ICON,
        "state": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": _IDENT,
                    "default": {"type": "boolean"},
                },
            },
        },
        "interactions": {
            "type": ["object", "null"],
            "properties": {
                "activate": {
                    "type": ["array", "null"],
                    "items": {
                        "type": "object",
                        "required": ["category"],
                        "properties": {
                            "category": _IDENT,
                            "prereqs": _STATE_CHANGES,
                            "destination": {"type": ["string", "null"]},
                        },
                    },
                },
                "object_use": {
                    "type": ["array", "null"],
                    "items": {
                        "type": "object",
                        "required": ["foreign_objects_id"],
                        "properties": {
                            "foreign_objects_id": _IDENT,
                            "self_action": _STATE_CHANGES,
                            "consume_item": {"type": "boolean"},
                        },
                    },
                },
            },
        },
    },
}

CHARACTER_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "icon", "inventory_size", "dialog_id"],
    "properties": {
        "id": _IDENT,
        "name": {"type": "string"},
        "icon": _ICON,
        "inventory_size": _SIZE,
        "dialog_id": {"type": "string"},
        "inventory": {"type": ["array", "null"], "items": _IDENT},
        "traits": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "required": ["id", "display_name", "starting_value", "max_value"],
                "properties": {
                    "id": _IDENT,
                    "display_name": {"type": "string"},
                    "starting_value": {"type": "integer", "minimum": 0},
                    "max_value": {"type": "integer", "minimum": 0},
                },
            },
        },
        "interactions": {
            "type": ["object", "null"],
            "properties": {
                "attacks": {
                    "type": ["array", "null"],
                    "items": {
                        "type": "object",
                        "required": ["id", "display_name", "base_damage"],
                        "properties": {
                            "id": _IDENT,
                            "display_name": {"type": "string"},
                            "base_damage": {"type": "integer"},
                            "affected_by": {
                                "type": ["array", "null"],
                                "items": {
                                    "type": "object",
                                    "required": ["attribute_id", "effect_per_point"],
                                    "properties": {
                                        "attribute_id": _IDENT,
                                        "effect_per_point": {
                                            "type": "string",
                                            "pattern": r"^[+\-*/][0-9]+(\.[0-9]+)?$",
                                        },
                                    },
                                },
                            },
                        },
                    },
                },
                "object_use": {
                    "type": ["array", "null"],
                    "items": {
                        "type": "object",
                        "required": ["object_id"],
                        "properties": {
                            "object_id": _IDENT,
                            "set_dialog": {"type": ["string", "null"]},
                            "consume_item": {"type": "boolean"},
                        },
                    },
                },
            },
        },
    },
}

_DIALOG_OPTION = {
    "type": "object",
    "required": ["dialog", "next"],
    "properties": {
        "dialog": {"type": "string"},
        "next": _IDENT,
    },
}

DIALOGS_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "npc_dialog", "option_0", "option_1"],
        "properties": {
            "id": _IDENT,
            "npc_dialog": {"type": "string"},
            "option_0": _DIALOG_OPTION,
            "option_1": _DIALOG_OPTION,
        },
    },
}

MAP_SCHEMA = {
    "type": "object",
    "required": ["id", "width", "height"],
    "properties": {
        "id": _IDENT,
        "description": {"type": "string"},
        "width": {"type": "integer", "minimum": 1},
        "height": {"type": "integer", "minimum": 1},
        "occupants": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "required": ["x", "y"],
                "properties": {
                    "x": {"type": "integer", "minimum": 0},
                    "y": {"type": "integer", "minimum": 0},
                    "object": _IDENT,
                    "character": _IDENT,
                },
                "oneOf": [
                    {"required": ["object"], "not": {"required": ["character"]}},
                    {"required": ["character"], "not": {"required": ["object"]}},
                ],
            },
        },
    },
}

SCHEMAS = {
    "game": GAME_SCHEMA,
    "objects": OBJECT_SCHEMA,
    "characters": CHARACTER_SCHEMA,
    "dialogs": DIALOGS_SCHEMA,
    "maps": MAP_SCHEMA,
}
