"""Abstract base class for repositories following the Repository Pattern."""

from abc import ABC, abstractmethod
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Generic repository interface for stored entities keyed by name.

    This abstract base class ensures all repositories follow the same contract.
    """

    @abstractmethod
    def get(self, id: str) -> Optional[T]:
        """Retrieve an entity by ID."""
        pass

    @abstractmethod
    def list(self) -> Dict[str, T]:
        """List all entities keyed by ID."""
        pass

    @abstractmethod
    def save(self, id: str, entity: T) -> T:
        """Store an entity under an ID."""
        pass

    @abstractmethod
    def delete(self, id: str) -> None:
        """Delete an entity by ID."""
        pass
