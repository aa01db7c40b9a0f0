"""Order numbers: ``ORD`` + epoch milliseconds + four random hex digits.

Time ordered and readable over the phone. Two submissions in the same
millisecond collide only if they also draw the same suffix (1 in 65536); the
store's unique constraint on ``order_number`` turns such a collision into an
ordinary header write failure.
"""

from datetime import UTC, datetime
from uuid import uuid4

PREFIX = "ORD"


def generate_order_number(now: datetime | None = None) -> str:
    moment = now or datetime.now(UTC)
    millis = int(moment.timestamp() * 1000)
    return f"{PREFIX}{millis}{uuid4().hex[:4].upper()}"
