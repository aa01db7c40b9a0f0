"""Contact details validation, shared by shopper profiles and order contacts.

Email and phone checks are structural only; the shop confirms orders by
phone before dispatch, so a well-formed value is all that is required here.
"""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")
_FORBIDDEN_EMAIL_CHARS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def email_errors(email: str) -> list[str]:
    """Return a list of problems with ``email`` (empty when it looks valid)."""
    if not email or any(ch in email for ch in (" ", "\t", "\n")):
        return [f"Invalid email address: {email!r}"]
    if email.count("@") != 1:
        return [f"Invalid email address: {email!r}"]

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return [f"Invalid email address: {email!r}"]
    if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return [f"Invalid email address: {email!r}"]
    if ".." in email or any(ch in email for ch in _FORBIDDEN_EMAIL_CHARS):
        return [f"Invalid email address: {email!r}"]
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return [f"Invalid email address: {email!r}"]
    return []


def phone_errors(number: str) -> list[str]:
    if not number or not re.search(r"\d", number) or not _PHONE_PATTERN.match(number):
        return [f"Invalid phone number: {number!r}"]
    return []


def whatsapp_number(phone: str, country_code: str = "91") -> str:
    """Digits-only international number for click-to-chat links.

    Numbers already carrying a leading ``+`` keep their own country code;
    anything else is treated as a national number.
    """
    digits = re.sub(r"\D", "", phone)
    if phone.strip().startswith("+"):
        return digits
    return f"{country_code}{digits}"


@storefront.value_object
class CustomerContact:
    """Name, email, phone and address of the person an order is for.

    Copied onto the order at submission time; later profile edits never
    reach it.
    """

    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    phone: String(required=True, max_length=20)
    address: String(required=True, max_length=1000)

    @invariant.post
    def contact_details_must_be_well_formed(self):
        errors = {}
        if self.email is not None and email_errors(self.email):
            errors["email"] = email_errors(self.email)
        if self.phone is not None and phone_errors(self.phone):
            errors["phone"] = phone_errors(self.phone)
        if errors:
            raise ValidationError(errors)
