"""An in-memory store of things, listed in the order they were added."""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class Thing:
    """A thing to be stored."""

    name: str


@dataclass(frozen=True)
class ThingWithId:
    """A stored thing together with its id."""

    id: int
    name: str


class ThingStore:
    """Things kept in memory under increasing ids starting at 0."""

    def __init__(self) -> None:
        self.last_id = 0
        self.things: dict[int, Thing] = {}
        self._lock = threading.Lock()

    def list_things(self) -> list[ThingWithId]:
        """Return every thing with its id, ordered by id."""
        with self._lock:
            return [
                ThingWithId(id=key, name=self.things[key].name)
                for key in sorted(self.things)
            ]

    def add_thing(self, thing: Thing) -> ThingWithId:
        """Store thing under the next id and return it with that id."""
        with self._lock:
            self.things[self.last_id] = thing
            stored = ThingWithId(id=self.last_id, name=thing.name)
            self.last_id += 1
            return stored