"""Tests for Order creation, invariants, state machine and row mapping."""

from datetime import UTC, date, datetime
from types import SimpleNamespace

import pytest
from protean.exceptions import ValidationError
from storefront.order.order import (
    CustomerInfo,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    can_transition,
)


def _line(product_id="4", name="Goldfish - Orange", price=15000, quantity=3):
    return SimpleNamespace(product_id=product_id, product_name=name, unit_price=price, quantity=quantity)


def _info(**overrides):
    values = {
        "name": "Asha",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "12 MG Road, Bengaluru",
        "payment_method": PaymentMethod.COD.value,
        "delivery_date": date(2026, 10, 21),
    }
    values.update(overrides)
    return CustomerInfo(**values)


def _place(lines=None, **info_overrides):
    return Order.place("ORD1792411200000ABCD", "user-asha", _info(**info_overrides), lines or [_line()])


class TestPlace:
    def test_total_is_sum_of_exact_subtotals(self):
        order = _place([_line(), _line("6", "Cat Collar - Leather", 45000, 1)])
        assert order.total_amount == 15000 * 3 + 45000
        assert [item.subtotal for item in order.items] == [45000, 45000]

    def test_new_order_is_pending(self):
        assert _place().status == OrderStatus.PENDING.value

    def test_customer_contact_copied(self):
        order = _place()
        assert order.customer.name == "Asha"
        assert order.customer.address == "12 MG Road, Bengaluru"
        assert order.payment_method == "cod"

    def test_created_at_defaults_to_now(self):
        assert _place().created_at is not None

    def test_empty_lines_rejected(self):
        with pytest.raises(ValidationError):
            Order.place("ORD1", "user-asha", _info(), [])

    def test_item_count(self):
        assert _place([_line(quantity=2), _line("6", quantity=1)]).item_count == 3

    def test_payment_label(self):
        assert _place(payment_method="upi").payment_method_label == "UPI Payment"


class TestInvariants:
    def test_total_must_match_items(self):
        order = _place()
        with pytest.raises(ValidationError):
            order.total_amount = 1

    def test_item_subtotal_must_match(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="4", product_name="Goldfish", product_price=15000, quantity=2, subtotal=1)


class TestCustomerInfo:
    def test_invalid_payment_method(self):
        with pytest.raises(ValidationError):
            _info(payment_method="cheque")

    def test_invalid_phone(self):
        with pytest.raises(ValidationError) as exc:
            _info(phone="call me")
        assert "phone" in exc.value.messages

    def test_missing_delivery_date(self):
        values = {
            "name": "Asha",
            "email": "asha@example.com",
            "phone": "9876543210",
            "address": "Bengaluru",
            "payment_method": "cod",
        }
        with pytest.raises(ValidationError):
            CustomerInfo(**values)


class TestStateMachine:
    @pytest.mark.parametrize(
        "current, target",
        [
            (OrderStatus.PENDING, OrderStatus.CONFIRMED),
            (OrderStatus.CONFIRMED, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        "current, target",
        [
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
            (OrderStatus.CANCELLED, OrderStatus.PENDING),
        ],
    )
    def test_forbidden(self, current, target):
        assert not can_transition(current, target)

    def test_transition_to_updates_status(self):
        order = _place()
        order.transition_to("confirmed")
        assert order.status == "confirmed"

    def test_invalid_transition_raises(self):
        order = _place()
        with pytest.raises(ValidationError):
            order.transition_to("delivered")

    def test_unknown_status_raises(self):
        with pytest.raises(ValidationError):
            _place().transition_to("lost")


class TestRowMapping:
    def test_header_row_columns(self):
        row = _place().header_row()
        assert row["customer_name"] == "Asha"
        assert row["delivery_address"] == "12 MG Road, Bengaluru"
        assert row["delivery_date"] == "2026-10-21"
        assert row["total_amount"] == 45000
        assert row["status"] == "pending"

    def test_item_rows_reference_order(self):
        order = _place()
        [row] = order.item_rows()
        assert row["order_id"] == str(order.id)
        assert row["subtotal"] == 45000

    def test_from_rows_rebuilds_order(self):
        created = datetime(2026, 10, 19, 9, 30, tzinfo=UTC)
        order = Order.place("ORD1", "user-asha", _info(), [_line()], created_at=created)
        restored = Order.from_rows(order.header_row(), order.item_rows())
        assert str(restored.id) == str(order.id)
        assert restored.delivery_date == date(2026, 10, 21)
        assert restored.created_at == created
        assert restored.total_amount == 45000
        assert restored.items[0].product_name == "Goldfish - Orange"
