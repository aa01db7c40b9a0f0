import asyncio

import pytest
from storefront.identity.auth_port import AuthError
from storefront.identity.fake_auth import FakeAuthProvider


@pytest.fixture()
def auth():
    return FakeAuthProvider()


def test_sign_up_returns_signed_in_session(auth):
    session = asyncio.run(auth.sign_up("asha@example.com", "secret-pass", "Asha"))
    assert session.email == "asha@example.com"
    assert asyncio.run(auth.resolve(session.access_token)) == session


def test_short_password_rejected(auth):
    with pytest.raises(AuthError):
        asyncio.run(auth.sign_up("asha@example.com", "12345", "Asha"))


def test_email_is_case_insensitive(auth):
    asyncio.run(auth.sign_up("asha@example.com", "secret-pass", "Asha"))
    with pytest.raises(AuthError):
        asyncio.run(auth.sign_up("ASHA@example.com", "secret-pass", "Asha"))
    assert asyncio.run(auth.sign_in("Asha@Example.com", "secret-pass")).email == "asha@example.com"


def test_wrong_password(auth):
    asyncio.run(auth.sign_up("asha@example.com", "secret-pass", "Asha"))
    with pytest.raises(AuthError):
        asyncio.run(auth.sign_in("asha@example.com", "wrong-pass"))


def test_sign_out_revokes_token(auth):
    session = asyncio.run(auth.sign_up("asha@example.com", "secret-pass", "Asha"))
    asyncio.run(auth.sign_out(session.access_token))
    assert asyncio.run(auth.resolve(session.access_token)) is None
