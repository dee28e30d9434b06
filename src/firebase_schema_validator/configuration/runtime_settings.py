"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConflictCollection(str, Enum):
    """How many storage conflicts a declaration reports."""

    ALL = "all"
    FIRST = "first"


@dataclass(frozen=True)
class ValidationSettings:
    """Options controlling one validation pass."""

    storage_conflicts: ConflictCollection = ConflictCollection.ALL
    warnings_as_errors: bool = False

    @property
    def collect_all_storage_conflicts(self) -> bool:
        return self.storage_conflicts == ConflictCollection.ALL
