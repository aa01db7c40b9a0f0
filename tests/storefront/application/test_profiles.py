import asyncio

import pytest
from protean.exceptions import ValidationError
from storefront.identity.profiles import ProfileDirectory, default_name
from storefront.store.port import PROFILES


@pytest.fixture()
def directory(store):
    return ProfileDirectory(store)


def test_ensure_creates_profile_on_first_access(directory, store, session):
    profile = asyncio.run(directory.ensure(session))
    assert str(profile.id) == session.user_id
    assert profile.name == "asha"
    assert len(store.rows(PROFILES)) == 1


def test_ensure_is_idempotent(directory, store, session):
    asyncio.run(directory.ensure(session, name="Asha"))
    profile = asyncio.run(directory.ensure(session, name="Someone Else"))
    assert profile.name == "Asha"
    assert len(store.rows(PROFILES)) == 1


def test_update_editable_fields(directory, session):
    profile = asyncio.run(directory.update(session, phone="9876543210", address="12 MG Road"))
    assert profile.phone == "9876543210"
    assert profile.address == "12 MG Road"


def test_update_rejects_invalid_phone(directory, store, session):
    asyncio.run(directory.ensure(session))
    with pytest.raises(ValidationError):
        asyncio.run(directory.update(session, phone="not a phone"))
    assert store.rows(PROFILES)[0]["phone"] is None


def test_email_cannot_be_changed(directory, session):
    with pytest.raises(ValidationError) as exc:
        asyncio.run(directory.update(session, email="new@example.com"))
    assert "email" in exc.value.messages


def test_default_name_falls_back_to_email_local_part(session):
    assert default_name(session) == "asha"
    assert default_name(session, "Asha R") == "Asha R"
