"""Result values returned by cart operations.

``CartOperationResult`` is a closed union: consumers are expected to ``match``
on it and finish with ``assert_never`` so that a new variant fails type checks
at every consumption site.
"""

from dataclasses import dataclass
from enum import StrEnum

from .constants import (
    MAX_QUANTITY_REACHED_MESSAGE,
    NOT_FOUND_MESSAGE,
    OUT_OF_STOCK_MESSAGE,
)


class CartFailureReason(StrEnum):
    """Why an add-to-cart request was refused. Values are the user messages."""

    NOT_FOUND = NOT_FOUND_MESSAGE
    OUT_OF_STOCK = OUT_OF_STOCK_MESSAGE
    MAX_QUANTITY_REACHED = MAX_QUANTITY_REACHED_MESSAGE


@dataclass(frozen=True)
class CartSuccess:
    """The cart was updated; ``total_items`` is the new sum of all quantities."""

    total_items: int


@dataclass(frozen=True)
class CartFailure:
    """The cart was left untouched."""

    reason: CartFailureReason

    @property
    def message(self) -> str:
        return self.reason.value


CartOperationResult = CartSuccess | CartFailure
