import pytest
from protean.exceptions import ValidationError
from storefront.cart.entry import CartEntry


def _make_entry(**overrides):
    defaults = {
        "user_id": "user-asha",
        "product_id": "4",
        "product_name": "Goldfish - Orange",
        "unit_price": 15000,
        "quantity": 3,
        "stock": 20,
        "delivery_days": 1,
    }
    defaults.update(overrides)
    return CartEntry(**defaults)


def test_subtotal_is_exact_integer_product():
    assert _make_entry().subtotal == 45000


def test_quantity_must_be_positive():
    with pytest.raises(ValidationError):
        _make_entry(quantity=0)


def test_row_mapping_preserves_identity():
    entry = _make_entry()
    restored = CartEntry.from_row(entry.to_row())
    assert str(restored.id) == str(entry.id)
    assert restored.subtotal == entry.subtotal
