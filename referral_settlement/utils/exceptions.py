"""
Exception types.

Defines the error taxonomy surfaced by settlement and purchase intake.
"""

import uuid

from sqlalchemy.exc import SQLAlchemyError


class SettlementError(Exception):
    """Base class for settlement failures."""


class PurchaseNotFoundError(SettlementError):
    """Raised when the referenced purchase does not exist."""

    def __init__(self, purchase_id: uuid.UUID) -> None:
        super().__init__(f"purchase {purchase_id} not found")
        self.purchase_id = purchase_id


class SettlementStoreError(SettlementError):
    """
    Raised when a data-access error aborts a settlement.

    The transaction is rolled back before this is raised, so the caller
    may retry the whole settlement.
    """

    def __init__(self, purchase_id: uuid.UUID, cause: SQLAlchemyError) -> None:
        super().__init__(
            f"store failure while settling purchase {purchase_id}: "
            f"{type(cause).__name__}"
        )
        self.purchase_id = purchase_id


class PurchaseIntakeError(Exception):
    """Base class for purchase intake failures."""


class InvalidPurchaseError(PurchaseIntakeError):
    """Raised when a purchase has a negative amount or unknown status."""


class PurchaseConflictError(PurchaseIntakeError):
    """Raised when a purchase with the same ID already exists."""

    def __init__(self, purchase_id: uuid.UUID) -> None:
        super().__init__(f"purchase {purchase_id} already exists")
        self.purchase_id = purchase_id

