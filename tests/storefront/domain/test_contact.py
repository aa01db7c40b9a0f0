"""Tests for contact validation helpers and the CustomerContact value object."""

import pytest
from protean.exceptions import ValidationError
from storefront.shared.contact import CustomerContact, email_errors, phone_errors, whatsapp_number


class TestEmail:
    @pytest.mark.parametrize("email", ["asha@example.com", "first.last@shop.co.in"])
    def test_valid(self, email):
        assert email_errors(email) == []

    @pytest.mark.parametrize(
        "email",
        ["", "asha", "asha@", "@example.com", "asha@example", "a b@example.com", "asha@@example.com", "a..b@x.com"],
    )
    def test_invalid(self, email):
        assert email_errors(email)


class TestPhone:
    @pytest.mark.parametrize("number", ["9876543210", "+91 98765 43210", "(080) 1234-5678"])
    def test_valid(self, number):
        assert phone_errors(number) == []

    @pytest.mark.parametrize("number", ["", "call me", "98765x43210", "---"])
    def test_invalid(self, number):
        assert phone_errors(number)


class TestWhatsappNumber:
    def test_national_number_gets_country_code(self):
        assert whatsapp_number("98765 43210") == "919876543210"

    def test_international_number_kept(self):
        assert whatsapp_number("+44 7700 900123") == "447700900123"


class TestCustomerContact:
    def test_valid_contact(self):
        contact = CustomerContact(name="Asha", email="asha@example.com", phone="9876543210", address="Bengaluru")
        assert contact.name == "Asha"

    def test_invalid_email_reported_by_field(self):
        with pytest.raises(ValidationError) as exc:
            CustomerContact(name="Asha", email="not-an-email", phone="9876543210", address="Bengaluru")
        assert "email" in exc.value.messages

    def test_address_required(self):
        with pytest.raises(ValidationError):
            CustomerContact(name="Asha", email="asha@example.com", phone="9876543210")
