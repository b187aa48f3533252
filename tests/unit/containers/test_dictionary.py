"""Unit tests for ObservableDictionary."""

from collections import defaultdict

import pytest

from statebox import DuplicateKeyError, KeyNotFoundError, ObservableDictionary, PairData, UpdateKind


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_get_and_try_get(inventory):
    """get raises for absent keys, try_get never does"""
    inventory.add("sword", 1)

    assert inventory.get("sword") == 1
    assert inventory["sword"] == 1
    assert inventory.try_get("sword") == (True, 1)
    assert inventory.try_get("shield") == (False, None)
    with pytest.raises(KeyNotFoundError):
        inventory.get("shield")


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_contains_key_does_not_notify(inventory, recorder):
    """contains_key is a pure query"""
    for kind in UpdateKind:
        inventory.observe_any(kind, recorder)

    assert not inventory.contains_key("x")
    assert "x" not in inventory
    assert recorder.calls == []


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_add_duplicate_keeps_first_value(inventory, recorder):
    """add("x", 5) then add("x", 9) raises and get("x") stays 5"""
    # Arrange
    inventory.add("x", 5)
    inventory.observe_any(UpdateKind.ADDED, recorder)

    # Act
    with pytest.raises(DuplicateKeyError):
        inventory.add("x", 9)

    # Assert
    assert inventory.get("x") == 5
    assert recorder.calls == []


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_set_fires_added_for_new_key_and_updated_for_existing(
    inventory, make_recorder
):
    """set upserts; a new key is announced as ADDED, an existing one as UPDATED"""
    added, updated = make_recorder(), make_recorder()
    inventory.observe_any(UpdateKind.ADDED, added)
    inventory.observe_any(UpdateKind.UPDATED, updated)

    inventory.set("gold", 10)
    inventory["gold"] = 15

    assert inventory.get("gold") == 15
    assert added.calls == [("gold", 10)]
    assert updated.calls == [("gold", 15)]


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_remove_present_key(inventory, recorder):
    """remove returns True and dispatches REMOVED with the removed value"""
    inventory.add("gold", 10)
    inventory.observe("gold", UpdateKind.REMOVED, recorder)

    assert inventory.remove("gold") is True
    assert inventory.count == 0
    assert recorder.calls == [("gold", 10)]


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_remove_absent_key_is_silent(inventory, recorder):
    """remove on an absent key returns False and dispatches nothing"""
    inventory.observe("gold", UpdateKind.REMOVED, recorder)
    inventory.observe_any(UpdateKind.REMOVED, recorder)

    assert inventory.remove("gold") is False
    assert recorder.calls == []


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_del_absent_key_raises(inventory):
    """del d[key] mirrors dict and raises for an absent key"""
    with pytest.raises(KeyError):
        del inventory["missing"]


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_observe_and_fire_now(inventory, recorder):
    """observe_and_fire_now reports the current value, then later updates"""
    inventory.add("hp", 100)

    inventory.observe_and_fire_now("hp", UpdateKind.UPDATED, recorder)
    inventory.set("hp", 90)

    assert recorder.calls == [("hp", 100), ("hp", 90)]
    with pytest.raises(KeyNotFoundError):
        inventory.observe_and_fire_now("mp", UpdateKind.UPDATED, recorder)


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_stop_observing_family(inventory, make_recorder):
    """Stopped keyed, broadcast and per-key listeners stay silent"""
    keyed, broadcast, cleared = make_recorder(), make_recorder(), make_recorder()
    inventory.observe("a", UpdateKind.ADDED, keyed)
    inventory.observe_any(UpdateKind.ADDED, broadcast)
    inventory.observe("b", UpdateKind.ADDED, cleared)
    inventory.observe("b", UpdateKind.UPDATED, cleared)

    inventory.stop_observing("a", UpdateKind.ADDED, keyed)
    inventory.stop_observing_any(UpdateKind.ADDED, broadcast)
    inventory.stop_observing_key("b")
    inventory.add("a", 1)
    inventory.set("b", 2)
    inventory.set("b", 3)

    assert keyed.calls == broadcast.calls == cleared.calls == []


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_wraps_mapping_without_copying():
    """The given mapping is the backing store"""
    backing = {"a": 1}
    mapping = ObservableDictionary(backing)

    mapping.add("b", 2)
    mapping.remove("a")

    assert backing == {"b": 2}
    assert list(mapping.keys()) == ["b"]
    assert list(mapping.values()) == [2]
    assert list(mapping.items()) == [("b", 2)]
    assert list(mapping) == ["b"]
    assert len(mapping) == 1


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_from_list_keys_items_by_resolver():
    """from_list builds a dictionary keyed by the resolver"""
    mapping = ObservableDictionary.from_list(
        lambda pair: pair.key, [PairData("a", 1), PairData("b", 2)]
    )

    assert mapping.get("b") == PairData("b", 2)
    with pytest.raises(DuplicateKeyError):
        ObservableDictionary.from_list(lambda pair: pair.key, [PairData("a", 1), PairData("a", 2)])


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_read_only_view_follows_swapped_store():
    """A view over a deferred dictionary reflects store replacement"""
    owner = {"store": {"a": 1}}
    mapping = ObservableDictionary(lambda: owner["store"])
    view = mapping.as_read_only()

    owner["store"] = {"z": 26}

    assert dict(view) == {"z": 26}
    assert view["z"] == 26
    with pytest.raises(TypeError):
        view["z"] = 0


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_get_never_fills_a_defaultdict_store(recorder):
    """Reading an absent key raises instead of inserting a silent default"""
    # Arrange
    backing = defaultdict(int)
    mapping = ObservableDictionary(backing)
    mapping.observe_any(UpdateKind.ADDED, recorder)
    view = mapping.as_read_only()

    # Act & Assert
    with pytest.raises(KeyNotFoundError):
        mapping.get("missing")
    with pytest.raises(KeyNotFoundError):
        mapping["missing"]
    with pytest.raises(KeyError):
        view["missing"]
    assert view.get("missing") is None
    assert "missing" not in view

    assert dict(backing) == {}
    assert recorder.calls == []


@pytest.mark.unit
@pytest.mark.dictionary
def test_dictionary_rejects_a_sequence_store():
    """A list is not a valid dictionary store"""
    with pytest.raises(TypeError):
        ObservableDictionary([1, 2])
