"""Runtime settings read from the environment.

Adapters are chosen by name (``STORE_ADAPTER``, ``EMAIL_ADAPTER``) the same
way the factories in ``storefront.store`` and ``notifications.channel`` pick
them; everything has a default that runs the shop in demo mode.
"""

import os
from dataclasses import dataclass, field

DEFAULT_SHOP_PHONE = "8637498818"
DEFAULT_SHOP_EMAIL = "catzowithao@gmail.com"
DEFAULT_ADMIN_EMAILS = ("admin@catzo.com", DEFAULT_SHOP_EMAIL)


@dataclass(frozen=True)
class Settings:
    shop_name: str = "Catzo Pet Shop"
    shop_phone: str = DEFAULT_SHOP_PHONE
    shop_email: str = DEFAULT_SHOP_EMAIL
    admin_emails: tuple[str, ...] = DEFAULT_ADMIN_EMAILS
    stock_policy: str = "guarded"
    store_adapter: str = "memory"
    store_url: str | None = None
    store_key: str | None = None
    email_adapter: str = "fake"
    emailjs: dict = field(default_factory=dict)

    def is_admin(self, email: str | None) -> bool:
        return bool(email) and email.lower() in {e.lower() for e in self.admin_emails}


def _split(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def load_settings() -> Settings:
    """Build Settings from environment variables."""
    return Settings(
        shop_name=os.environ.get("SHOP_NAME", "Catzo Pet Shop"),
        shop_phone=os.environ.get("SHOP_PHONE", DEFAULT_SHOP_PHONE),
        shop_email=os.environ.get("SHOP_EMAIL", DEFAULT_SHOP_EMAIL),
        admin_emails=_split(os.environ.get("ADMIN_EMAILS")) or DEFAULT_ADMIN_EMAILS,
        stock_policy=os.environ.get("STOCK_POLICY", "guarded"),
        store_adapter=os.environ.get("STORE_ADAPTER", "memory"),
        store_url=os.environ.get("STORE_URL"),
        store_key=os.environ.get("STORE_KEY"),
        email_adapter=os.environ.get("EMAIL_ADAPTER", "fake"),
        emailjs={
            "service_id": os.environ.get("EMAILJS_SERVICE_ID", ""),
            "template_id": os.environ.get("EMAILJS_TEMPLATE_ID", ""),
            "public_key": os.environ.get("EMAILJS_PUBLIC_KEY", ""),
        },
    )
