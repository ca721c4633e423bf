"""Keyed store of reusable sprite parts.

The registry keeps exactly one canonical copy per part id. Parts are copied on
the way in and on the way out, so callers can mutate what they receive
without ever reaching the stored buffer.
"""

import logging
from typing import List

from pyrsistent import PMap, pmap

from pixel_forge.components.part import CharacterPart
from pixel_forge.errors import NotFoundError, ValidationError
from pixel_forge.types import Slot

logger = logging.getLogger(__name__)


class PartRegistry:
    """Id to part store with copy-on-access semantics."""

    def __init__(self) -> None:
        self._parts: PMap[str, CharacterPart] = pmap()

    def __len__(self) -> int:
        return len(self._parts)

    def __contains__(self, part_id: object) -> bool:
        return part_id in self._parts

    def register_part(self, part: CharacterPart) -> None:
        """Store a copy of ``part``.

        Raises:
            ValidationError: If a part with the same id is already registered.
                The stored part is left untouched.
        """
        if part.id in self._parts:
            raise ValidationError(f"Part with id {part.id} already exists")
        self._parts = self._parts.set(part.id, part.copy())
        logger.debug("Registered part %s (slot %s)", part.id, part.slot)

    def get_part(self, part_id: str) -> CharacterPart:
        """Return a copy of the part registered as ``part_id``."""
        part = self._parts.get(part_id)
        if part is None:
            raise NotFoundError(f"Part not found: {part_id}")
        return part.copy()

    def list_parts(self) -> List[CharacterPart]:
        """Copies of every part, sorted by id."""
        return [self._parts[part_id].copy() for part_id in sorted(self._parts.keys())]

    def parts_by_slot(self, slot: Slot) -> List[CharacterPart]:
        return [part for part in self.list_parts() if part.slot == slot]

    def search_parts(self, query: str) -> List[CharacterPart]:
        """Case-insensitive substring match on part ids.

        An empty or whitespace-only query matches nothing.
        """
        needle = query.strip().lower() if query else ""
        if not needle:
            return []
        return [part for part in self.list_parts() if needle in part.id.lower()]


def create_part_registry() -> PartRegistry:
    return PartRegistry()
