"""Chat channel port — abstract interface for chat-app order confirmations."""

from abc import ABC, abstractmethod


class ChatPort(ABC):
    @abstractmethod
    async def send(self, phone: str, message: str) -> dict:
        """Deliver ``message`` to ``phone``.

        Returns:
            dict with keys: status ("sent" or "failed"), url (optional), error (optional)
        """
        ...
