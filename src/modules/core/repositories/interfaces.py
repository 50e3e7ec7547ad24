"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key, soft-deleted or not."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Validate and persist (create or update) an entity."""

    @abstractmethod
    def find_active_paged(
        self,
        page_request: PageRequest,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Page[T]:
        """Return one page of entities that are not soft-deleted."""
