"""Display helpers for rupee amounts and fund dates"""
from datetime import datetime


def format_inr(amount: float, decimals: int = 0) -> str:
    """Format as rupees with Indian digit grouping, e.g. ₹12,34,567"""
    text = f"{abs(amount):.{decimals}f}"
    # No sign when the amount rounds to zero
    sign = "-" if amount < 0 and float(text) != 0 else ""
    whole, _, fraction = text.partition(".")

    # Last three digits, then groups of two
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{sign}₹{whole}" + (f".{fraction}" if fraction else "")


def format_fund_date(value: str) -> str:
    """'2025-08-05' -> '05 Aug 2025'; unparseable values are returned as-is"""
    try:
        return datetime.strptime(value, "%Y-%m-%d").strftime("%d %b %Y")
    except (TypeError, ValueError):
        return value
