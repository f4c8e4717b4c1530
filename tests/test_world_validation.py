import pytest

from radiance.core.errors import ConfigurationError
from radiance.core.validator import validate_schema
from radiance.core.world import build_world_from_dict, validate_world


def _issues(world_dict, check_schema=True):
    with pytest.raises(ConfigurationError) as exc:
        build_world_from_dict(world_dict, check_schema=check_schema)
    return exc.value.issues


def _map(world_dict, map_id):
    return next(m for m in world_dict["maps"] if m["id"] == map_id)


def test_valid_world_builds(world_dict):
    world = build_world_from_dict(world_dict)
    assert world.info.player_id == "player"
    assert world.player.name == "Hero"
    assert world.player.attributes[0].current_val == 5
    assert len(world.maps) == 2


def test_missing_starting_map(world_dict):
    world_dict["game"]["starting_map"] = "attic"
    assert any("Starting map 'attic'" in i for i in _issues(world_dict))


def test_starting_position_outside_map(world_dict):
    world_dict["game"]["starting_position"] = {"x": 9, "y": 1}
    assert any("Starting position" in i for i in _issues(world_dict))


def test_dangling_dialog_next(world_dict):
    world_dict["dialogs"][0]["option_0"]["next"] = "nowhere"
    assert any("missing dialog 'nowhere'" in i for i in _issues(world_dict))


def test_character_dialog_must_exist(world_dict):
    world_dict["characters"][1]["dialog_id"] = "ghost"
    assert any("Character 'guide'" in i for i in _issues(world_dict))


def test_character_object_use_refs(world_dict):
    world_dict["characters"][1]["interactions"]["object_use"][0]["set_dialog"] = "ghost"
    world_dict["characters"][1]["interactions"]["object_use"].append({"object_id": "gem"})
    issues = _issues(world_dict)
    assert any("ghost" in i for i in issues)
    assert any("unknown object 'gem'" in i for i in issues)


def test_object_use_of_unknown_item(world_dict):
    world_dict["objects"][0]["interactions"]["object_use"][0]["foreign_objects_id"] = "crowbar"
    assert any("crowbar" in i for i in _issues(world_dict))


def test_map_references_unknown_occupant(world_dict):
    _map(world_dict, "hall")["occupants"].append({"x": 1, "y": 1, "character": "ghost"})
    assert any("missing character 'ghost'" in i for i in _issues(world_dict))


def test_occupant_outside_grid(world_dict):
    _map(world_dict, "hall")["occupants"].append({"x": 7, "y": 1, "object": "rock"})
    assert any("outside the grid" in i for i in _issues(world_dict))


def test_two_occupants_in_one_cell(world_dict):
    _map(world_dict, "start")["occupants"].append({"x": 2, "y": 2, "object": "coin"})
    assert any("two occupants" in i for i in _issues(world_dict))


def test_door_without_pair(world_dict):
    _map(world_dict, "hall")["occupants"] = []
    assert any("Door 'door' must be placed exactly twice" in i for i in _issues(world_dict))


def test_door_placed_three_times(world_dict):
    _map(world_dict, "hall")["occupants"].append({"x": 0, "y": 3, "object": "door"})
    assert any("found 3" in i for i in _issues(world_dict))


def test_door_pair_on_same_map(world_dict):
    _map(world_dict, "hall")["occupants"] = []
    _map(world_dict, "start")["occupants"].append({"x": 4, "y": 3, "object": "door"})
    assert any("two distinct maps" in i for i in _issues(world_dict))


def test_travel_destination_must_hold_pair(world_dict):
    world_dict["maps"].append({"id": "cellar", "width": 3, "height": 3})
    world_dict["objects"][0]["interactions"]["activate"][0]["destination"] = "cellar"
    assert any("does not hold its pair" in i for i in _issues(world_dict))


def test_travel_destination_must_exist(world_dict):
    world_dict["objects"][0]["interactions"]["activate"][0]["destination"] = "moon"
    assert any("missing map 'moon'" in i for i in _issues(world_dict))


def test_duplicate_ids(world_dict):
    world_dict["objects"].append({"id": "rock", "name": "boulder", "type": "collidable", "icon": "B"})
    assert "Duplicate object id 'rock'" in _issues(world_dict)


def test_missing_player(world_dict):
    world_dict["game"]["player"] = "nobody"
    assert "Player character 'nobody' is not defined" in _issues(world_dict)


def test_starting_inventory_overflow(world_dict):
    world_dict["characters"][0]["inventory"] = ["coin"] * 5
    assert any("exceeds its capacity" in i for i in _issues(world_dict))


def test_missing_game_section(world_dict):
    del world_dict["game"]
    with pytest.raises(ConfigurationError, match="Missing game definition"):
        build_world_from_dict(world_dict)


def test_schema_error_reports_path(world_dict):
    world_dict["maps"][0]["occupants"][0] = {"x": 0, "y": 1, "object": "door", "character": "guide"}
    with pytest.raises(ConfigurationError, match=r"maps\[0\]: maps definition invalid at occupants/0"):
        build_world_from_dict(world_dict)


def test_validate_schema_accepts_modifiers():
    doc = {
        "id": "hero",
        "name": "Hero",
        "icon": "@",
        "inventory_size": {"width": 1, "height": 1},
        "dialog_id": "",
        "interactions": {
            "attacks": [
                {
                    "id": "punch",
                    "display_name": "Punch",
                    "base_damage": 2,
                    "affected_by": [{"attribute_id": "str", "effect_per_point": "+0.5"}],
                }
            ]
        },
    }
    assert validate_schema("characters", doc)
    doc["interactions"]["attacks"][0]["affected_by"][0]["effect_per_point"] = "lots"
    with pytest.raises(ConfigurationError):
        validate_schema("characters", doc)


def test_validate_schema_unknown_kind():
    with pytest.raises(ConfigurationError, match="unknown definition kind"):
        validate_schema("spells", {})


def test_zero_width_map_without_schema(world_dict):
    _map(world_dict, "hall")["width"] = 0
    issues = _issues(world_dict, check_schema=False)
    assert any("ValueError" in i for i in issues)


def test_missing_game_name_without_schema(world_dict):
    del world_dict["game"]["name"]
    assert any("KeyError" in i for i in _issues(world_dict, check_schema=False))


def test_empty_object_icon_without_schema(world_dict):
    world_dict["objects"][1]["icon"] = ""
    assert any("IndexError" in i for i in _issues(world_dict, check_schema=False))


@pytest.mark.parametrize("size", [{"width": 0, "height": 0}, {"width": 2, "height": 0}, {"width": 0, "height": 2}])
def test_empty_inventory_without_schema(world_dict, size):
    player = world_dict["characters"][0]
    player["inventory_size"] = size
    player["inventory"] = []
    issues = _issues(world_dict, check_schema=False)
    assert "Character 'player' inventory must be at least 1x1" in issues


def test_validate_world_flags_empty_icons(world_dict):
    world = build_world_from_dict(world_dict)
    world.objects["rock"].icon = ""
    world.characters["guide"].icon = ""
    issues = validate_world(world)
    assert "Object 'rock' has an empty icon" in issues
    assert "Character 'guide' has an empty icon" in issues
