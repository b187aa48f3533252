"""Integration tests exercising containers together the way an application would."""

import random
from dataclasses import dataclass

import pytest

from statebox import (
    ConfigsProvider,
    DuplicateKeyError,
    IdList,
    ObservableDictionary,
    ObservableField,
    ObservableList,
    UpdateKind,
)
from statebox.util import ValueCell
from tests.utils import Recorder, Row


@pytest.mark.integration
def test_id_list_update_scenario():
    """add, observe one key, then set: the keyed listener sees exactly the update"""
    # Arrange
    rows = IdList(lambda row: row.id, [])
    rows.add(Row(1, "a"))
    assert rows.count == 1
    assert rows.get(1) == Row(1, "a")

    listener = Recorder()
    rows.observe(1, UpdateKind.UPDATED, listener)

    # Act
    rows.set(Row(1, "b"))

    # Assert
    assert listener.calls == [(1, Row(1, "b"))]
    assert rows.get(1) == Row(1, "b")
    assert rows.count == 1


@pytest.mark.integration
def test_dictionary_duplicate_add_scenario():
    """A rejected duplicate add leaves the first value in place"""
    mapping = ObservableDictionary()
    mapping.add("x", 5)

    with pytest.raises(DuplicateKeyError):
        mapping.add("x", 9)

    assert mapping.get("x") == 5


@pytest.mark.integration
def test_list_removal_scenario():
    """Removing index 1 of [10, 20, 30] reports (1, 20) and shifts 30 down"""
    items = ObservableList([10, 20, 30])
    listener = Recorder()
    items.observe(UpdateKind.REMOVED, listener)

    items.remove_at(1)

    assert listener.calls == [(1, 20)]
    assert items.get(1) == 30


@pytest.mark.integration
def test_id_list_matches_a_reference_model_over_random_mutations():
    """try_get and count agree with a plain dict after any add/set/remove sequence"""
    # Arrange
    rng = random.Random(1234)
    rows = IdList(lambda row: row.id)
    model = {}
    added, updated, removed = Recorder(), Recorder(), Recorder()
    rows.observe_any(UpdateKind.ADDED, added)
    rows.observe_any(UpdateKind.UPDATED, updated)
    rows.observe_any(UpdateKind.REMOVED, removed)
    expected = {"added": 0, "updated": 0, "removed": 0}

    # Act
    for step in range(500):
        key = rng.randrange(20)
        operation = rng.choice(["add", "set", "remove", "try_remove"])
        row = Row(key, f"v{step}")

        if operation == "add":
            if key in model:
                with pytest.raises(DuplicateKeyError):
                    rows.add(row)
            else:
                rows.add(row)
                model[key] = row
                expected["added"] += 1
        elif operation == "set":
            expected["updated" if key in model else "added"] += 1
            rows.set(row)
            model[key] = row
        elif operation == "remove":
            if key in model:
                assert rows.remove(key) == model.pop(key)
                expected["removed"] += 1
            else:
                with pytest.raises(KeyError):
                    rows.remove(key)
        else:
            was_present = key in model
            assert rows.try_remove(key) is was_present
            if was_present:
                del model[key]
                expected["removed"] += 1

        # Assert
        assert rows.count == len(model)

    for key in range(20):
        found, value = rows.try_get(key)
        assert found is (key in model)
        assert value == model.get(key)
    assert added.count == expected["added"]
    assert updated.count == expected["updated"]
    assert removed.count == expected["removed"]


@pytest.mark.integration
@pytest.mark.configs
def test_containers_seeded_from_config_registry():
    """Config rows seed an IdList and a dictionary without any dispatch"""

    @dataclass(frozen=True)
    class ItemConfig:
        config_id: int
        price: int

    provider = ConfigsProvider()
    provider.add_configs(ItemConfig, [ItemConfig(1, 10), ItemConfig(2, 25)])

    catalogue = IdList(lambda item: item.config_id, provider.get_configs_list(ItemConfig))
    prices = ObservableDictionary(
        {cid: item.price for cid, item in provider.get_configs_dictionary(ItemConfig).items()}
    )
    listener = Recorder()
    prices.observe(2, UpdateKind.UPDATED, listener)

    prices.set(2, 30)

    assert catalogue.get(2) == ItemConfig(2, 25)
    assert prices.get(2) == 30
    assert listener.calls == [(2, 30)]
    # the registry's own rows are untouched
    assert provider.get_config(ItemConfig, 2).price == 25


@pytest.mark.integration
@pytest.mark.storage
def test_game_state_built_before_save_data_is_loaded():
    """Containers wired to a not-yet-loaded save start working once it arrives"""

    class SaveData:
        def __init__(self):
            self.gold = ValueCell(0)
            self.heroes = []
            self.flags = {}

    class GameState:
        def __init__(self):
            self.save = None
            self.gold = ObservableField(store=lambda: self.save and self.save.gold)
            self.heroes = IdList(lambda hero: hero.id, lambda: self.save and self.save.heroes)
            self.flags = ObservableDictionary(lambda: self.save and self.save.flags)

    state = GameState()
    gold_listener = Recorder()
    hero_listener = Recorder()
    state.gold.observe(UpdateKind.UPDATED, gold_listener)
    state.heroes.observe(7, UpdateKind.ADDED, hero_listener)

    with pytest.raises(LookupError):
        state.heroes.add(Row(7, "knight"))

    state.save = SaveData()
    state.gold.value = 50
    state.heroes.add(Row(7, "knight"))
    state.flags.set("tutorial_done", True)

    assert state.save.gold.value == 50
    assert state.save.heroes == [Row(7, "knight")]
    assert state.save.flags == {"tutorial_done": True}
    assert gold_listener.calls == [(50,)]
    assert hero_listener.calls == [(7, Row(7, "knight"))]


@pytest.mark.integration
def test_listener_cascade_across_containers():
    """A listener on one container may mutate another synchronously"""
    roster = IdList(lambda row: row.id)
    names = ObservableList()
    log = Recorder()
    names.observe(UpdateKind.ADDED, log)
    roster.observe_any(UpdateKind.ADDED, lambda key, row: names.add(row.val))

    roster.add(Row(1, "a"))
    roster.add(Row(2, "b"))

    assert names.to_list() == ["a", "b"]
    assert log.calls == [(0, "a"), (1, "b")]
