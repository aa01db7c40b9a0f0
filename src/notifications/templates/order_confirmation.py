"""Order confirmation template — sent once an order has been placed.

Email output is the flat parameter mapping the hosted email template reads;
the WhatsApp output is a single prefilled chat message.
"""

from notifications.channel import NotificationChannel
from notifications.templates.formatting import format_date, format_rupees

TAGLINE = "From Treats to Toys — Catzo Delivers Joy"

# The chat message uses the shorter COD label.
_CHAT_PAYMENT_LABELS = {
    "cod": "Cash on Delivery",
    "upi": "UPI Payment",
    "bank_transfer": "Bank Transfer",
}


def item_lines(order) -> str:
    return "\n".join(
        f"• {item.product_name} - Qty: {item.quantity} - ₹{format_rupees(item.subtotal)}" for item in order.items
    )


class OrderConfirmationTemplate:
    default_channels = [NotificationChannel.EMAIL.value, NotificationChannel.WHATSAPP.value]

    @staticmethod
    def render_email(order, settings) -> dict[str, str]:
        delivery = format_date(order.delivery_date)
        return {
            "to_email": order.customer.email,
            "to_name": order.customer.name,
            "customer_name": order.customer.name,
            "customer_email": order.customer.email,
            "order_id": order.order_number,
            "order_number": order.order_number,
            "order_items": item_lines(order),
            "total_amount": format_rupees(order.total_amount),
            "delivery_address": order.customer.address,
            "customer_phone": order.customer.phone,
            "payment_method": order.payment_method_label,
            "order_date": format_date(order.created_at),
            "delivery_date": delivery,
            "expected_delivery": delivery,
            "shop_phone": settings.shop_phone,
            "shop_email": settings.shop_email,
            "shop_contact": settings.shop_phone,
            "message": (
                f"Thank you for your order! Your order #{order.order_number} "
                f"has been confirmed and will be delivered on {delivery}."
            ),
        }

    @staticmethod
    def render_chat(order, settings) -> str:
        return (
            f"🐾 *{settings.shop_name} - Order Confirmation*\n\n"
            f"Dear {order.customer.name},\n\n"
            "Your order has been confirmed! 🎉\n\n"
            "📋 *Order Details:*\n"
            f"Order ID: {order.order_number}\n"
            f"Order Date: {format_date(order.created_at)}\n"
            f"Delivery Date: {format_date(order.delivery_date)}\n\n"
            "🛍️ *Items Ordered:*\n"
            f"{item_lines(order)}\n\n"
            f"💰 *Total Amount:* ₹{format_rupees(order.total_amount)}\n"
            f"💳 *Payment Method:* {_CHAT_PAYMENT_LABELS.get(order.payment_method, order.payment_method)}\n\n"
            f"📍 *Delivery Address:*\n{order.customer.address}\n\n"
            f"📞 *Contact:* {order.customer.phone}\n\n"
            "For any queries, contact us:\n"
            f"📞 Phone: {settings.shop_phone}\n"
            f"📧 Email: {settings.shop_email}\n\n"
            f"Thank you for choosing {settings.shop_name}!\n"
            f"🐾 {TAGLINE}"
        )
