"""
Shared test helpers: a fixed-sequence random source and world builders.
"""

from war.engine.state import Territory, WorldState


class FixedRolls:
    """Random source double that returns queued values in order."""

    def __init__(self, *values: int):
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self.values:
            raise AssertionError("FixedRolls exhausted: an unexpected die was rolled")
        value = self.values.pop(0)
        assert a <= value <= b, f"queued value {value} outside [{a}, {b}]"
        return value


def make_world(*specs: tuple[str, str, int]) -> WorldState:
    """Build a world from (name, owner, troops) triples."""
    return WorldState([Territory(name=n, owner=o, troops=t) for n, o, t in specs])


def reference_world() -> WorldState:
    return make_world(
        ("Alfa", "Red", 3),
        ("Bravo", "Green", 4),
        ("Charlie", "Yellow", 5),
        ("Delta", "Blue", 3),
        ("Eco", "Green", 2),
    )


def world_state(world: WorldState) -> list[tuple[str, str, int]]:
    """Comparable view of every territory."""
    return [(t.name, t.owner, t.troops) for t in world]
