"""Email channel port — abstract interface for transactional email dispatch."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters.

    The email service owns the message template; adapters pass it a flat
    mapping of template parameters (recipient, order number, itemised list,
    total, delivery details).
    """

    @abstractmethod
    async def send(self, params: dict[str, str]) -> dict:
        """Send one templated email.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
