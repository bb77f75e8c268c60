"""An in-memory pet store serving the operations of the pet store API."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

FIRST_PET_ID = 1000


class ApiError(Exception):
    """An error reported to API callers, with an HTTP status code."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Return the error in its JSON form."""
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class NewPet:
    """A pet to be added; the store assigns its id."""

    name: str
    tag: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NewPet:
        """Build from the JSON form of a new pet."""
        return cls(name=data["name"], tag=data.get("tag"))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out an unset tag."""
        out: dict[str, Any] = {"name": self.name}
        if self.tag is not None:
            out["tag"] = self.tag
        return out


@dataclass(frozen=True)
class Pet:
    """A pet held by the store."""

    id: int
    name: str
    tag: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Pet:
        """Build from the JSON form of a pet."""
        return cls(id=data["id"], name=data["name"], tag=data.get("tag"))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out an unset tag."""
        out: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.tag is not None:
            out["tag"] = self.tag
        return out


class PetStore:
    """Pets kept in memory, keyed by id; safe to use from several threads."""

    def __init__(self) -> None:
        self.pets: dict[int, Pet] = {}
        self.next_id = FIRST_PET_ID
        self._lock = threading.Lock()

    def find_pets(
        self, tags: Iterable[str] | None = None, limit: int | None = None
    ) -> list[Pet]:
        """Return the pets, filtered by tag when tags is given, stopping at limit."""
        wanted = None if tags is None else list(tags)
        with self._lock:
            result: list[Pet] = []
            for pet in self.pets.values():
                if wanted is not None:
                    for tag in wanted:
                        if pet.tag is not None and pet.tag == tag:
                            result.append(pet)
                else:
                    result.append(pet)
                if limit is not None and len(result) >= limit:
                    break
            return result

    def add_pet(self, new_pet: NewPet) -> Pet:
        """Store a new pet under the next free id and return it."""
        with self._lock:
            pet = Pet(id=self.next_id, name=new_pet.name, tag=new_pet.tag)
            self.next_id += 1
            self.pets[pet.id] = pet
            return pet

    def find_pet_by_id(self, pet_id: int) -> Pet:
        """Return the pet with pet_id; raise ApiError 404 if there is none."""
        with self._lock:
            try:
                return self.pets[pet_id]
            except KeyError:
                raise _not_found(pet_id) from None

    def delete_pet(self, pet_id: int) -> None:
        """Remove the pet with pet_id; raise ApiError 404 if there is none."""
        with self._lock:
            if pet_id not in self.pets:
                raise _not_found(pet_id)
            del self.pets[pet_id]


def _not_found(pet_id: int) -> ApiError:
    return ApiError(404, f"Could not find pet with ID {pet_id}")