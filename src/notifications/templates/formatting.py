"""Indian-locale formatting for amounts and dates in customer messages."""

from datetime import date, datetime


def format_rupees(amount_paise: int) -> str:
    """Format an amount in paise with Indian digit grouping.

    >>> format_rupees(12000000)
    '1,20,000'
    >>> format_rupees(45050)
    '450.5'
    """
    rupees, paise = divmod(int(amount_paise), 100)
    digits = str(rupees)
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    if paise == 0:
        return digits
    return f"{digits}.{paise:02d}".rstrip("0")


def format_date(value: date | datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")
