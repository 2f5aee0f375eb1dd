"""Domain-level exceptions.

Errors raised before an order is committed are subclasses of
DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.  Errors raised while delivering an already
committed order derive from DeliveryError instead; they never fail order
creation.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class BasketNotFound(EntityNotFoundError):

    def __init__(self, basket_id: int) -> None:
        super().__init__(f"Basket #{basket_id} not found")
        self.basket_id = basket_id


class EmptyBasket(ValidationError):

    def __init__(self, basket_id: int) -> None:
        super().__init__(f"Basket #{basket_id} has no items to check out")
        self.basket_id = basket_id


class CatalogItemMissing(EntityNotFoundError):

    def __init__(self, missing_ids: list[int]) -> None:
        ids = ", ".join(str(i) for i in missing_ids)
        super().__init__(f"Catalog item(s) not found: {ids}")
        self.missing_ids = missing_ids


class PersistenceFailed(DomainException):
    """The order could not be committed to its store."""


# ---------------------------------------------------------------------------
# Post-commit delivery errors
# ---------------------------------------------------------------------------


class DeliveryError(Exception):
    """A committed order could not be propagated downstream."""


class PrimaryNotificationFailed(DeliveryError):
    """The order store endpoint rejected or never received the order."""


class SecondaryNotificationFailed(DeliveryError):
    """The secondary store endpoint rejected or never received the summary."""


class QueuePublishFailed(DeliveryError):

    def __init__(self, order_id: int, attempts: int, cause: str) -> None:
        super().__init__(
            f"Order #{order_id} event not enqueued after {attempts} attempt(s): {cause}"
        )
        self.order_id = order_id
        self.attempts = attempts
