# store_backend/utils/money.py
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def D(x) -> Decimal:
    return x if isinstance(x, Decimal) else Decimal(str(x or "0"))


def round_money(x) -> Decimal:
    return D(x).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(amount, percent) -> Decimal:
    """Kwota rabatu: amount * percent / 100, zaokraglona do groszy."""
    return round_money(D(amount) * D(percent) / Decimal("100"))


def clamp_percent(percent) -> Decimal:
    """Procent rabatu przyciety do [0, 100]."""
    return min(max(D(percent), Decimal("0")), Decimal("100"))
