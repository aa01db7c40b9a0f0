"""EmailJS adapter — sends templated email through the EmailJS REST API.

The service id, template id and public key identify the shop's EmailJS
account; the template itself is maintained in the EmailJS dashboard and reads
the parameters built by ``notifications.templates``.
"""

import httpx
import structlog

from notifications.channel.email_port import EmailPort

logger = structlog.get_logger(__name__)

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"


class EmailJSAdapter(EmailPort):
    def __init__(
        self,
        service_id: str,
        template_id: str,
        public_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.service_id = service_id
        self.template_id = template_id
        self.public_key = public_key
        self._transport = transport
        self.timeout = timeout

    async def send(self, params: dict[str, str]) -> dict:
        payload = {
            "service_id": self.service_id,
            "template_id": self.template_id,
            "user_id": self.public_key,
            "template_params": params,
        }
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(EMAILJS_SEND_URL, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("EmailJS request failed", error=str(exc), to=params.get("to_email"))
            return {"message_id": None, "status": "failed", "error": str(exc) or exc.__class__.__name__}

        if response.status_code != 200:
            error = response.text or f"HTTP {response.status_code}"
            logger.warning("EmailJS rejected message", status_code=response.status_code, error=error)
            return {"message_id": None, "status": "failed", "error": error}

        return {"message_id": response.headers.get("x-request-id"), "status": "sent"}
