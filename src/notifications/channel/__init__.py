"""Channel adapter registry — pluggable order notification channels.

Provides singleton access to channel adapters. Email uses the fake adapter
unless EMAIL_ADAPTER=emailjs; chat always goes through WhatsApp click-to-chat
links.
"""

import os
from enum import Enum


class NotificationChannel(Enum):
    EMAIL = "Email"
    WHATSAPP = "WhatsApp"


_channel_instances: dict[str, object] = {}


def build_email_adapter(adapter: str = "fake", service_id: str = "", template_id: str = "", public_key: str = ""):
    """Build the email adapter named by ``adapter`` ("fake" or "emailjs")."""
    if adapter == "fake":
        from notifications.channel.fake_email import FakeEmailAdapter

        return FakeEmailAdapter()
    if adapter == "emailjs":
        from notifications.channel.emailjs import EmailJSAdapter

        return EmailJSAdapter(service_id=service_id, template_id=template_id, public_key=public_key)
    raise ValueError(f"Unknown email adapter: {adapter}")


def get_channel(channel_type: str):
    """Return the configured channel adapter (singleton per channel type).

    Args:
        channel_type: One of NotificationChannel enum values ("Email", "WhatsApp")
    """
    if channel_type not in _channel_instances:
        if channel_type == NotificationChannel.EMAIL.value:
            _channel_instances[channel_type] = build_email_adapter(
                os.environ.get("EMAIL_ADAPTER", "fake"),
                service_id=os.environ.get("EMAILJS_SERVICE_ID", ""),
                template_id=os.environ.get("EMAILJS_TEMPLATE_ID", ""),
                public_key=os.environ.get("EMAILJS_PUBLIC_KEY", ""),
            )
        elif channel_type == NotificationChannel.WHATSAPP.value:
            from notifications.channel.whatsapp import WhatsAppLinkAdapter

            _channel_instances[channel_type] = WhatsAppLinkAdapter()
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
