"""Fake chat adapter — records chat messages for testing."""

from notifications.channel.chat_port import ChatPort


class FakeChatAdapter(ChatPort):
    def __init__(self):
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Chat delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Chat delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    async def send(self, phone: str, message: str) -> dict:
        if not self.should_succeed:
            return {"status": "failed", "error": self.failure_reason}
        self.sent_messages.append({"phone": phone, "message": message})
        return {"status": "sent"}

    def reset(self):
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "Chat delivery failed"
