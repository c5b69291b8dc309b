"""In-memory park storage."""

from dataclasses import replace

from .models import Park

SEED_PARKS = (
    Park(1, "Cuyahoga Valley", "Ohio"),
    Park(2, "Acadia", "Maine"),
    Park(3, "Yosemite", "California"),
)


class ParkDao:
    """Keeps parks in a list; ids are assigned on add."""

    def __init__(self, parks: list[Park] | None = None):
        if parks is None:
            parks = [replace(p) for p in SEED_PARKS]
        self._parks = parks

    def get_list(self) -> list[Park]:
        return list(self._parks)

    def get(self, park_id: int) -> Park | None:
        return next((p for p in self._parks if p.park_id == park_id), None)

    def add(self, name: str, state: str) -> Park:
        next_id = max((p.park_id for p in self._parks), default=0) + 1
        park = Park(next_id, name, state)
        self._parks.append(park)
        return park

    def update(self, park: Park) -> bool:
        """Copy name and state onto the stored park. Returns True if it existed."""
        existing = self.get(park.park_id)
        if existing is None:
            return False
        existing.name = park.name
        existing.state = park.state
        return True

    def delete(self, park_id: int) -> bool:
        existing = self.get(park_id)
        if existing is None:
            return False
        self._parks.remove(existing)
        return True
