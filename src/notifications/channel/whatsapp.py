"""WhatsApp click-to-chat adapter.

Nothing is sent from the server: the adapter produces a ``wa.me`` link with
the message prefilled, and the client opens it so the shopper's own WhatsApp
sends the confirmation.
"""

from urllib.parse import quote

from notifications.channel.chat_port import ChatPort
from storefront.shared.contact import phone_errors, whatsapp_number

WA_ME_URL = "https://wa.me/{number}?text={text}"


class WhatsAppLinkAdapter(ChatPort):
    def __init__(self, country_code: str = "91") -> None:
        self.country_code = country_code

    def link_for(self, phone: str, message: str) -> str:
        number = whatsapp_number(phone, self.country_code)
        return WA_ME_URL.format(number=number, text=quote(message, safe=""))

    async def send(self, phone: str, message: str) -> dict:
        if phone_errors(phone):
            return {"status": "failed", "error": f"Cannot open WhatsApp chat for {phone!r}"}
        return {"status": "sent", "url": self.link_for(phone, message)}
