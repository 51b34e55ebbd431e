"""Entity-component store."""

from __future__ import annotations

from typing import Any


class Scene:
    """Holds entities as integer ids and their components keyed by type."""

    def __init__(self) -> None:
        self._max_entity_id = 0
        self._free_ids: set[int] = set()
        self._arrays: dict[type, dict[int, Any]] = {}

    def create_entity(self) -> int:
        """Return a new entity id, reusing the smallest freed id first."""
        if self._free_ids:
            entity = min(self._free_ids)
            self._free_ids.remove(entity)
            return entity
        entity = self._max_entity_id
        self._max_entity_id += 1
        return entity

    def remove_entity(self, entity: int) -> None:
        """Remove an entity and all of its components."""
        if entity >= self._max_entity_id or entity < 0 or entity in self._free_ids:
            raise KeyError(f"entity {entity} does not exist")
        for array in self._arrays.values():
            array.pop(entity, None)
        self._free_ids.add(entity)

    def register_component(self, component_type: type) -> None:
        self._arrays[component_type] = {}

    def _array(self, component_type: type) -> dict[int, Any]:
        try:
            return self._arrays[component_type]
        except KeyError:
            raise KeyError(
                f"component type {component_type.__name__} is not registered"
            ) from None

    def assign_component(self, entity: int, component: Any) -> Any:
        array = self._array(type(component))
        if entity in array:
            raise ValueError(
                f"entity {entity} already has a {type(component).__name__}"
            )
        array[entity] = component
        return component

    def get_component(self, entity: int, component_type: type) -> Any:
        array = self._array(component_type)
        try:
            return array[entity]
        except KeyError:
            raise KeyError(
                f"entity {entity} has no {component_type.__name__}"
            ) from None

    def erase_component(self, entity: int, component_type: type) -> None:
        array = self._array(component_type)
        if entity not in array:
            raise KeyError(f"entity {entity} has no {component_type.__name__}")
        del array[entity]

    def has_component(self, entity: int, component_type: type) -> bool:
        return entity in self._array(component_type)

    def view(self, *args: type) -> list[tuple]:
        """Tuples (id, component, ...) for entities holding every given type, by id."""
        arrays = [self._array(component_type) for component_type in args]
        return [
            (entity, *(array[entity] for array in arrays))
            for entity in range(self._max_entity_id)
            if all(entity in array for array in arrays)
        ]

    def find_unique(self, component_type: type) -> int:
        """Id of the single entity holding the given component type."""
        found = self.view(component_type)
        if len(found) != 1:
            raise LookupError(
                f"expected one entity with {component_type.__name__}, found {len(found)}"
            )
        return found[0][0]

    def all_entities(self) -> list[int]:
        return [
            entity
            for entity in range(self._max_entity_id)
            if entity not in self._free_ids
        ]