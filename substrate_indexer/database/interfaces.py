"""
Database interfaces for the substrate indexer.

This module defines the entity store the decode pipeline writes through.
"""
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from msgspec import Struct

from ..types import EntityKind


class EntityStore(ABC):
    """Interface for entity persistence."""

    @abstractmethod
    async def get(self, kind: EntityKind, id: str) -> Optional[Struct]:
        """
        Get a record by key.

        Args:
            kind: Entity kind
            id: Record key

        Returns:
            The record, or None when absent
        """
        pass

    @abstractmethod
    async def create(self, kind: EntityKind, record: Struct) -> None:
        """
        Create or replace a single record.

        Args:
            kind: Entity kind
            record: Record to save
        """
        pass

    @abstractmethod
    async def bulk_create(self, batch: Mapping[EntityKind, Sequence[Struct]]) -> int:
        """
        Insert every record of the batch in one transaction.

        Kinds are written in mapping order and records in sequence order. Either
        all records are stored or none are.

        Args:
            batch: Records grouped by entity kind

        Returns:
            Number of records inserted
        """
        pass

    async def exists(self, kind: EntityKind, id: str) -> bool:
        return await self.get(kind, id) is not None
