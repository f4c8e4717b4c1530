import pytest

from radiance.core.errors import ConfigurationError
from radiance.core.model.base import StateChange
from radiance.core.rules import (
    ActivationKind,
    apply_use_outcome,
    check_move_available,
    collect,
    prereqs_met,
    resolve_activate,
    resolve_object_use,
)


def _fill_inventory(registry):
    player = registry.player
    coin = registry.world.objects["coin"]
    while registry.find_first_empty_inventory_slot(player) is not None:
        assert registry.insert_first_empty_inventory_slot(player, coin.snapshot())


def test_empty_prereqs_always_pass(game):
    registry, _ = game
    for obj in registry.world.objects.values():
        assert prereqs_met(obj, [])


def test_missing_flag_fails_true_prereq(game):
    registry, _ = game
    rock = registry.get_cell("start", 2, 2)
    assert not prereqs_met(rock, [StateChange("open", True)])
    assert prereqs_met(rock, [StateChange("open", False)])


def test_boundary_only_walkable_through_doors(game):
    registry, _ = game
    m = registry.get_map("start")
    for x, y, occ in m.iter_cells():
        if not m.is_boundary(x, y):
            continue
        expected = (x, y) == (0, 1)
        assert check_move_available(m, x, y) is expected, (x, y)


def test_interior_rules(game):
    registry, _ = game
    m = registry.get_map("start")
    assert not check_move_available(m, 2, 2)  # rock
    assert check_move_available(m, 1, 3)  # character
    assert check_move_available(m, 3, 3)  # coin
    assert check_move_available(m, 3, 1)  # lever
    assert check_move_available(m, 2, 1)  # empty
    assert not check_move_available(m, -1, 1)
    assert not check_move_available(m, 5, 1)


def test_collidable_blocks_even_on_boundary(game):
    registry, _ = game
    m = registry.get_map("start")
    registry.set_cell("start", 2, 0, registry.world.objects["rock"].snapshot())
    assert not check_move_available(m, 2, 0)


def test_locked_door(game):
    registry, _ = game
    door = registry.get_cell("start", 0, 1)
    outcome = resolve_activate(registry, door, "start")
    assert outcome.kind is ActivationKind.LOCKED
    assert outcome.message == "The oak door is locked."


def test_unlocked_door_travels_to_pair(game):
    registry, _ = game
    door = registry.get_cell("start", 0, 1)
    door.set_state("key_taken", True)
    outcome = resolve_activate(registry, door, "start")
    assert outcome.kind is ActivationKind.TRAVEL
    assert outcome.destination == ("hall", 4, 2)


def test_missing_counterpart_is_a_configuration_error(game):
    registry, _ = game
    door = registry.get_cell("start", 0, 1)
    door.set_state("key_taken", True)
    registry.set_cell("hall", 4, 2, None)
    with pytest.raises(ConfigurationError):
        resolve_activate(registry, door, "start")


def test_non_travel_activation_fires(game):
    registry, _ = game
    outcome = resolve_activate(registry, registry.get_cell("start", 3, 1), "start")
    assert outcome.kind is ActivationKind.ACTIVATED
    assert outcome.interaction.category == "pull"


def test_object_without_activations(game):
    registry, _ = game
    outcome = resolve_activate(registry, registry.get_cell("start", 2, 2), "start")
    assert outcome.kind is ActivationKind.NONE
    assert outcome.message == "Nothing happens with the rock."


def test_use_without_match_changes_nothing(game):
    registry, _ = game
    lever = registry.get_cell("start", 3, 1)
    before = dict(lever.state)
    outcome = resolve_object_use(registry, lever, "brass_key", "start")
    assert not outcome.matched
    apply_use_outcome(registry, outcome)
    assert lever.state == before


def test_door_use_updates_both_halves(game):
    registry, _ = game
    door = registry.get_cell("start", 0, 1)
    other = registry.get_cell("hall", 4, 2)
    outcome = resolve_object_use(registry, door, "brass_key", "start")
    assert outcome.matched and outcome.consume_item
    assert outcome.counterpart is other
    # resolving alone mutates nothing
    assert not door.get_state("key_taken") and not other.get_state("key_taken")
    apply_use_outcome(registry, outcome)
    assert door.get_state("key_taken") and other.get_state("key_taken")


def test_door_use_is_idempotent(game):
    registry, _ = game
    door = registry.get_cell("start", 0, 1)
    other = registry.get_cell("hall", 4, 2)
    outcome = resolve_object_use(registry, door, "brass_key", "start")
    apply_use_outcome(registry, outcome)
    once = (dict(door.state), dict(other.state))
    apply_use_outcome(registry, outcome)
    assert (door.state, other.state) == once


def test_use_on_character_rewrites_dialog(game):
    registry, _ = game
    guide = registry.get_cell("start", 1, 3)
    outcome = resolve_object_use(registry, guide, "coin", "start")
    assert outcome.matched and outcome.set_dialog == "thanks"
    apply_use_outcome(registry, outcome)
    assert guide.dialog_id == "thanks"


def test_collect_places_in_first_empty_slot(game):
    registry, _ = game
    outcome = collect(registry, registry.player, "start", 3, 3)
    assert outcome.collected and outcome.slot == (1, 0)
    assert registry.get_cell("start", 3, 3) is None
    assert registry.player.get_slot(1, 0).id == "coin"


def test_collect_with_full_inventory_leaves_world_unchanged(game):
    registry, _ = game
    _fill_inventory(registry)
    before = [item.id for _, _, item in registry.player.iter_slots()]
    outcome = collect(registry, registry.player, "start", 3, 3)
    assert not outcome.collected
    assert outcome.item.id == "coin"
    assert registry.get_cell("start", 3, 3).id == "coin"
    assert [item.id for _, _, item in registry.player.iter_slots()] == before


def test_insert_signals_full_inventory(game):
    registry, _ = game
    _fill_inventory(registry)
    assert registry.insert_first_empty_inventory_slot(registry.player, registry.world.objects["rock"]) is False


def test_counterpart_search_skips_current_map(game):
    registry, _ = game
    assert registry.find_door_counterpart("door", "start") == ("hall", 4, 2)
    assert registry.find_door_counterpart("door", "hall") == ("start", 0, 1)
    # a destination naming the current map does not narrow the search
    assert registry.find_door_counterpart("door", "hall", destination="hall") == ("start", 0, 1)
    assert registry.find_door_counterpart("door", "start", destination="nowhere") is None
