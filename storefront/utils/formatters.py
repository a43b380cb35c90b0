# storefront/utils/formatters.py
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def round2(amount: Decimal) -> Decimal:
    """Round half-up to cents"""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    """Format an amount as a 2-decimal string without grouping ("1234.50")"""
    return f"{round2(amount):.2f}"


def format_price(amount: Decimal) -> str:
    """Display format with thousands separators ("1,234.50")"""
    return f"{round2(amount):,.2f}"
