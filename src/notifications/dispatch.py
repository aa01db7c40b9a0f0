"""Order confirmation dispatch — one attempt per channel after checkout.

Sends the confirmation email and prepares the WhatsApp click-to-chat link for
a placed order. Each channel is tried exactly once and independently; a
channel that fails is reported as a ``NotificationFailure`` with a message
the shopper can read. Nothing here touches the order or the store, so a
failed notification never undoes a placed order.
"""

from dataclasses import dataclass, field

import structlog

from notifications.channel import NotificationChannel, get_channel
from notifications.channel.chat_port import ChatPort
from notifications.channel.email_port import EmailPort
from notifications.templates import ORDER_CONFIRMATION, get_template

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NotificationFailure:
    channel: str
    recipient: str
    reason: str

    @property
    def message(self) -> str:
        if self.channel == NotificationChannel.EMAIL.value:
            return (
                f"Email failed to send to {self.recipient}. Error: {self.reason}. "
                "Order still placed successfully - check WhatsApp for confirmation."
            )
        return f"Could not open WhatsApp confirmation for {self.recipient}. Order still placed successfully."


@dataclass(frozen=True)
class ChannelOutcome:
    channel: str
    recipient: str
    sent: bool
    url: str | None = None
    failure: NotificationFailure | None = None


@dataclass
class DispatchReport:
    order_number: str
    outcomes: list[ChannelOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[NotificationFailure]:
        return [outcome.failure for outcome in self.outcomes if outcome.failure is not None]

    @property
    def all_sent(self) -> bool:
        return all(outcome.sent for outcome in self.outcomes)

    def outcome_for(self, channel: NotificationChannel) -> ChannelOutcome | None:
        for outcome in self.outcomes:
            if outcome.channel == channel.value:
                return outcome
        return None


class NotificationDispatcher:
    """Sends order confirmations through the configured channel adapters."""

    def __init__(self, settings, email: EmailPort | None = None, chat: ChatPort | None = None):
        self.settings = settings
        self.email = email or get_channel(NotificationChannel.EMAIL.value)
        self.chat = chat or get_channel(NotificationChannel.WHATSAPP.value)

    async def dispatch(self, order, notification_type: str = ORDER_CONFIRMATION) -> DispatchReport:
        """Try each of the template's default channels once, in order."""
        template = get_template(notification_type)
        senders = {
            NotificationChannel.EMAIL.value: self._send_email,
            NotificationChannel.WHATSAPP.value: self._send_chat,
        }
        report = DispatchReport(order_number=order.order_number)
        for channel in template.default_channels:
            report.outcomes.append(await senders[channel](order, template))

        log = logger.bind(order_number=order.order_number)
        for failure in report.failures:
            log.warning("Order confirmation not delivered", channel=failure.channel, reason=failure.reason)
        if report.all_sent:
            log.info("Order confirmation sent", channels=[o.channel for o in report.outcomes])
        return report

    async def _send_email(self, order, template) -> ChannelOutcome:
        channel = NotificationChannel.EMAIL.value
        recipient = order.customer.email
        params = template.render_email(order, self.settings)
        try:
            result = await self.email.send(params)
        except Exception as exc:
            logger.error("Email adapter raised", order_number=order.order_number, error=str(exc))
            result = {"status": "failed", "error": str(exc) or exc.__class__.__name__}
        return _outcome(channel, recipient, result)

    async def _send_chat(self, order, template) -> ChannelOutcome:
        channel = NotificationChannel.WHATSAPP.value
        recipient = order.customer.phone
        message = template.render_chat(order, self.settings)
        try:
            result = await self.chat.send(recipient, message)
        except Exception as exc:
            logger.error("Chat adapter raised", order_number=order.order_number, error=str(exc))
            result = {"status": "failed", "error": str(exc) or exc.__class__.__name__}
        return _outcome(channel, recipient, result)


def _outcome(channel: str, recipient: str, result: dict) -> ChannelOutcome:
    if result.get("status") == "sent":
        return ChannelOutcome(channel=channel, recipient=recipient, sent=True, url=result.get("url"))
    failure = NotificationFailure(
        channel=channel,
        recipient=recipient,
        reason=result.get("error") or "Unknown dispatch error",
    )
    return ChannelOutcome(channel=channel, recipient=recipient, sent=False, failure=failure)
