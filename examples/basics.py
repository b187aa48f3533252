from dataclasses import dataclass

from statebox import IdList, ObservableDictionary, ObservableField, ObservableList, UpdateKind

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Observing a single field")
print("-" * 100)
print()

# A field owns one value and announces every write, even a repeated one.
health = ObservableField(100)

log_health = lambda hp: print(f"Health is now {hp}")

health.observe(UpdateKind.UPDATED, log_health)
health.value = 80  # Health is now 80
health.value = 80  # Health is now 80

health.stop_observing(UpdateKind.UPDATED, log_health)
health.value = 10  # Nothing is printed

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Observing a list by position")
print("-" * 100)
print()

# List listeners receive the index at the time of the change.
scores = ObservableList([10, 20, 30])
scores.observe(UpdateKind.REMOVED, lambda i, v: print(f"Removed {v} from position {i}"))

scores.remove_at(1)  # Removed 20 from position 1
print(f"Position 1 now holds {scores.get(1)}")  # 30 shifted down

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Observing elements by their own id")
print("-" * 100)
print()


@dataclass(frozen=True)
class Hero:
    id: int
    name: str
    level: int


# The key is derived from each element, never stored separately.
heroes = IdList(lambda hero: hero.id)

# Keyed listeners can be registered before the key exists.
heroes.observe(1, UpdateKind.UPDATED, lambda key, hero: print(f"Hero {key} is level {hero.level}"))
heroes.observe_any(UpdateKind.ADDED, lambda key, hero: print(f"{hero.name} joined"))

heroes.add(Hero(1, "Ayla", 1))  # Ayla joined
heroes.set(Hero(1, "Ayla", 2))  # Hero 1 is level 2
heroes.set(Hero(2, "Bram", 1))  # Bram joined (set on a new id behaves like add)

# observe_and_fire_now reports the current element straight away.
heroes.observe_and_fire_now(2, UpdateKind.UPDATED, lambda key, hero: print(f"Watching {hero.name}"))

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Resolving storage that does not exist yet")
print("-" * 100)
print()

# The dictionary is wired up before the save file is loaded.
save = {}
flags = ObservableDictionary(lambda: save.get("flags"))
flags.observe_any(UpdateKind.ADDED, lambda key, value: print(f"Flag {key} set to {value}"))

save["flags"] = {}  # Loaded later by someone else
flags.set("tutorial_done", True)  # Flag tutorial_done set to True
print(f"Stored in the save: {save['flags']}")
