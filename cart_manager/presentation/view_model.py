from typing import assert_never

from ..application.cart_manager import CartManager
from ..domain.results import CartFailure, CartSuccess
from ..logging_config import get_logger
from .ui_state import CartUiState, Error, Idle, ItemAdded, ObservableState

logger = get_logger(__name__)


class CartViewModel:
    """View model for the cart screen.

    Turns user events into cart manager calls and publishes the outcome as a
    ``CartUiState`` on ``ui_state``. Business rules stay in the manager.
    """

    def __init__(self, cart_manager: CartManager):
        self.cart_manager = cart_manager
        self.ui_state: ObservableState[CartUiState] = ObservableState(Idle())

    async def add_item(self, product_id: str, quantity: int) -> CartUiState:
        """Add an item and publish the resulting state.

        Returns:
            The state that was published
        """
        result = await self.cart_manager.add_to_cart(product_id, quantity)

        state: CartUiState
        match result:
            case CartSuccess(total_items=total_items):
                state = ItemAdded(total_items)
            case CartFailure():
                state = Error(result.message, result.reason)
            case _:
                assert_never(result)

        logger.debug("Publishing cart UI state", state=type(state).__name__)
        self.ui_state.value = state
        return state
