"""Authentication port — abstract interface to the hosted auth provider.

The provider owns credentials; this layer only ever sees the resulting
``ShopperSession``, which is passed explicitly to the cart and checkout
services rather than read from ambient state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ShopperSession:
    """The signed-in shopper, as known to this request."""

    user_id: str
    email: str
    access_token: str | None = None


class AuthError(Exception):
    """Sign-up or sign-in rejected by the provider."""


class AuthPort(ABC):
    @abstractmethod
    async def sign_up(self, email: str, password: str, name: str) -> ShopperSession:
        ...

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> ShopperSession:
        ...

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        ...

    @abstractmethod
    async def resolve(self, access_token: str) -> ShopperSession | None:
        """Return the session behind a bearer token, or None if it is unknown or revoked."""
        ...
