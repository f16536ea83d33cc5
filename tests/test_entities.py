import pytest

from cart_manager.domain.entities import Product
from cart_manager.domain.exceptions import DomainError, ValidationError
from cart_manager.domain.results import CartFailure, CartFailureReason, CartSuccess


def test_product_is_immutable():
    product = Product(id="p1", name="Beans", in_stock=True, max_quantity=5)
    with pytest.raises(AttributeError):
        product.max_quantity = 10  # type: ignore[misc]


@pytest.mark.parametrize("product_id", ["", "   "])
def test_product_rejects_empty_id(product_id: str):
    with pytest.raises(ValidationError, match="cannot be empty"):
        Product(id=product_id, name="Beans", in_stock=True, max_quantity=5)


def test_product_rejects_negative_max_quantity():
    with pytest.raises(ValidationError, match="cannot be negative"):
        Product(id="p1", name="Beans", in_stock=True, max_quantity=-1)


def test_validation_error_is_domain_error():
    assert issubclass(ValidationError, DomainError)


def test_allows_total_is_inclusive():
    product = Product(id="p1", name="Beans", in_stock=True, max_quantity=5)
    assert product.allows_total(4)
    assert product.allows_total(5)
    assert not product.allows_total(6)


def test_failure_messages():
    """Failure messages are the exact text shown to the user."""
    assert CartFailure(CartFailureReason.NOT_FOUND).message == "Not found"
    assert CartFailure(CartFailureReason.OUT_OF_STOCK).message == "Out of stock"
    assert (
        CartFailure(CartFailureReason.MAX_QUANTITY_REACHED).message
        == "Max quantity reached"
    )


def test_results_are_values():
    assert CartSuccess(3) == CartSuccess(total_items=3)
    assert CartFailure(CartFailureReason.NOT_FOUND) != CartFailure(
        CartFailureReason.OUT_OF_STOCK
    )
