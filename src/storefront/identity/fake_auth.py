"""Fake auth provider — in-memory accounts and tokens for demo mode and tests."""

import hashlib
from uuid import uuid4

from storefront.identity.auth_port import AuthError, AuthPort, ShopperSession


def _digest(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class FakeAuthProvider(AuthPort):
    def __init__(self) -> None:
        self.accounts: dict[str, dict] = {}
        self.tokens: dict[str, ShopperSession] = {}

    async def sign_up(self, email: str, password: str, name: str) -> ShopperSession:
        key = email.strip().lower()
        if key in self.accounts:
            raise AuthError("User already registered")
        if len(password) < 6:
            raise AuthError("Password should be at least 6 characters")
        self.accounts[key] = {
            "user_id": str(uuid4()),
            "email": email.strip(),
            "password": _digest(password),
            "name": name,
        }
        return await self.sign_in(email, password)

    async def sign_in(self, email: str, password: str) -> ShopperSession:
        account = self.accounts.get(email.strip().lower())
        if account is None or account["password"] != _digest(password):
            raise AuthError("Invalid login credentials")
        token = f"token-{uuid4().hex}"
        session = ShopperSession(user_id=account["user_id"], email=account["email"], access_token=token)
        self.tokens[token] = session
        return session

    async def sign_out(self, access_token: str) -> None:
        self.tokens.pop(access_token, None)

    async def resolve(self, access_token: str) -> ShopperSession | None:
        return self.tokens.get(access_token)
