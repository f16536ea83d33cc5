"""Domain business rules and constants."""

from typing import Final

# User-facing failure messages for cart operations
NOT_FOUND_MESSAGE: Final = "Not found"
OUT_OF_STOCK_MESSAGE: Final = "Out of stock"
MAX_QUANTITY_REACHED_MESSAGE: Final = "Max quantity reached"

# Quantity reported for products that have no cart line yet
EMPTY_LINE_QUANTITY: Final = 0
