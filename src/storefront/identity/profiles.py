"""Shopper profiles — name and default contact details, keyed by auth user id.

A profile row is created the first time a signed-in user is looked up. The
checkout form is prefilled from it, but orders copy the values they were
submitted with.
"""

from datetime import UTC, datetime

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.domain import storefront
from storefront.identity.auth_port import ShopperSession
from storefront.shared.contact import phone_errors
from storefront.store.port import PROFILES, StorePort

logger = structlog.get_logger(__name__)

_EDITABLE = ("name", "phone", "address")


@storefront.aggregate
class Profile:
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=255)
    phone: String(max_length=20)
    address: Text()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def phone_must_be_well_formed(self):
        if self.phone and phone_errors(self.phone):
            raise ValidationError({"phone": phone_errors(self.phone)})

    @classmethod
    def from_row(cls, row: dict) -> "Profile":
        return cls(
            id=str(row["id"]),
            email=row["email"],
            name=row["name"],
            phone=row.get("phone") or None,
            address=row.get("address") or None,
        )


def default_name(session: ShopperSession, name: str | None = None) -> str:
    return name or session.email.split("@")[0] or "User"


class ProfileDirectory:
    def __init__(self, store: StorePort) -> None:
        self.store = store

    async def ensure(self, session: ShopperSession, name: str | None = None) -> Profile:
        """Fetch the profile for ``session``, creating it on first access."""
        row = await self.store.get(PROFILES, session.user_id)
        if row is not None:
            return Profile.from_row(row)

        now = datetime.now(UTC)
        profile = Profile(id=session.user_id, email=session.email, name=default_name(session, name))
        [created] = await self.store.insert(
            PROFILES,
            [
                {
                    "id": session.user_id,
                    "email": profile.email,
                    "name": profile.name,
                    "phone": None,
                    "address": None,
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                }
            ],
        )
        logger.info("Profile created", user_id=session.user_id)
        return Profile.from_row(created)

    async def update(self, session: ShopperSession, **changes) -> Profile:
        unknown = set(changes) - set(_EDITABLE)
        if unknown:
            raise ValidationError({field: ["Field cannot be changed"] for field in sorted(unknown)})

        current = await self.ensure(session)
        values = {key: value for key, value in changes.items() if value is not None}
        # Validate the merged result before writing anything
        Profile(
            id=str(current.id),
            email=current.email,
            name=values.get("name", current.name),
            phone=values.get("phone", current.phone),
            address=values.get("address", current.address),
        )
        values["updated_at"] = datetime.now(UTC).isoformat()
        row = await self.store.update(PROFILES, session.user_id, values)
        return Profile.from_row(row)
