"""Product service layer (Use Cases).

Orchestrates the Product aggregate, delegating field rules to
``modules.products.rules`` and persistence to the injected
``IProductRepository``.

Every use case runs as one atomic unit of work and returns a ``Result``:
domain errors and store failures are classified here and never cross
the service boundary as exceptions.

Store failure classification:
- Django ``ValidationError`` (field constraints)  -> ``INVALID_ARGUMENT``
- ``IntegrityError`` on a write (duplicate key, check constraint) -> ``CONFLICT``
- any other ``DatabaseError``                      -> ``INTERNAL`` (logged)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, TypeVar

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from modules.core.exceptions import Conflict, DomainError, ErrorKind
from modules.core.results import Result
from modules.products import rules
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

T = TypeVar("T")

INTERNAL_ERROR_MESSAGE = "Unexpected error while accessing product data."
CONFLICT_MESSAGE = "Duplicate keys are not allowed."


def _validation_messages(exc: ValidationError) -> list[str]:
    if hasattr(exc, "error_dict"):
        return [
            f"{field}: {message}"
            for field, messages in exc.message_dict.items()
            for message in messages
        ]
    return list(exc.messages)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    def _execute(
        self,
        operation: str,
        work: Callable[[], T],
        *,
        writes: bool = True,
        **context: Any,
    ) -> Result[T]:
        """Run ``work`` atomically and classify any failure.

        ``IntegrityError`` is a ``CONFLICT`` only for operations that write;
        on a read it is an unexpected store failure.
        """
        log = logger.bind(operation=operation, **context)
        try:
            with transaction.atomic():
                try:
                    value = work()
                except IntegrityError as exc:
                    if not writes:
                        raise
                    log.error("product.integrity_error", error=str(exc))
                    raise Conflict(CONFLICT_MESSAGE) from exc
        except DomainError as exc:
            log.warning("product.rejected", kind=str(exc.kind), reason=str(exc))
            return Result.from_exception(exc)
        except ValidationError as exc:
            messages = _validation_messages(exc)
            log.warning("product.invalid", errors=messages)
            return Result.failure(ErrorKind.INVALID_ARGUMENT, messages)
        except DatabaseError:
            log.exception("product.store_error")
            return Result.failure(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE)
        return Result.success(value)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: Optional[CreateProductDTO]) -> Result[Product]:
        """Validate, normalise and persist a new product."""

        def work() -> Product:
            rules.validate_for_create(dto)
            product = self._repo.save(rules.normalize_for_create(dto))
            logger.info("product.created", product_id=product.id)
            return product

        return self._execute("create", work)

    def update_product(
        self, id: Optional[int], dto: Optional[UpdateProductDTO]
    ) -> Result[Product]:
        """Merge the supplied fields into an existing product.

        Errors:
            INVALID_ARGUMENT: bad id (checked before any store access),
                null patch or invalid field values.
            NOT_FOUND: no product with this id.
        """

        def work() -> Product:
            rules.guard_positive_id(id)
            existing = self._repo.get_for_update(id)
            if existing is None:
                raise ProductNotFound(id)
            product = self._repo.save(rules.validate_and_merge_for_update(existing, dto))
            logger.info("product.updated", product_id=id)
            return product

        return self._execute("update", work, product_id=id)

    def delete_product(self, id: Optional[int]) -> Result[None]:
        """Soft-delete a product; a second delete is rejected.

        Errors:
            INVALID_ARGUMENT: bad id or product already deleted.
            NOT_FOUND: no product with this id.
        """

        def work() -> None:
            rules.guard_positive_id(id)
            product = self._repo.get_for_update(id)
            if product is None:
                raise ProductNotFound(id)
            rules.guard_not_already_deleted(product)
            self._repo.save(rules.mark_deleted(product))
            logger.info("product.soft_deleted", product_id=id)

        return self._execute("delete", work, product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: Optional[int]) -> Result[Product]:
        """Retrieve a product by ID.

        A missing product is a *successful* result whose value is ``None``.
        Soft-deleted products are returned as well; only the listing
        filters them out.
        """

        def work() -> Optional[Product]:
            rules.guard_positive_id(id)
            product = self._repo.get_by_id(id)
            logger.debug("product.retrieved", product_id=id, found=product is not None)
            return product

        return self._execute("get", work, writes=False, product_id=id)

    def list_products(
        self,
        page_request: PageRequest,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Result[Page[Product]]:
        """Return one page of active (not deleted) products."""

        def work() -> Page[Product]:
            page = self._repo.find_active_paged(page_request, filters)
            logger.debug(
                "product.listed",
                page=page.number,
                size=page.size,
                total_elements=page.total_elements,
            )
            return page

        return self._execute("list", work, writes=False)
