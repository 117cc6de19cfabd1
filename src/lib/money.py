"""
Money presentation helpers

Formatting of amounts, balance tones and category links for the report,
following pl-PL conventions by default (see config.settings for overrides).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from urllib.parse import urlencode

from ..config import appsettings, AppSettings

CENTS = Decimal("0.01")


def amount_format(value: Union[Decimal, str, int, float], settings: Optional[AppSettings] = None) -> str:
    """
    Format an amount as currency.

    Two decimals, rounded half away from zero. Thousands grouping is only
    applied once the integer part reaches settings.min_grouping_digits
    digits, as pl-PL does ("1234,56 zł" but "12 345,67 zł", separated
    by non-breaking spaces).

    Args:
        value: Amount (strings are parsed as decimals)
        settings: Settings to use instead of the module singleton

    Returns:
        Formatted amount with currency symbol

    Example:
        >>> amount_format(Decimal("-1500.5"))
        '-1500,50\xa0zł'
    """
    settings = settings or appsettings
    raw = Decimal(str(value))
    amount = raw.quantize(CENTS, rounding=ROUND_HALF_UP)

    # sign of the unrounded value: -0.001 prints as "-0,00"
    sign = "-" if raw.is_signed() else ""
    integer_part, fraction_part = f"{abs(amount):f}".split(".")

    if len(integer_part) >= settings.min_grouping_digits:
        groups = []
        while integer_part:
            groups.insert(0, integer_part[-3:])
            integer_part = integer_part[:-3]
        integer_part = settings.group_separator.join(groups)

    return f"{sign}{integer_part}{settings.decimal_separator}{fraction_part}\u00a0{settings.currency_symbol}"


def balance_tone(value: Union[Decimal, str, int, float]) -> str:
    """Return "positive", "negative" or "neutral" for a balance"""
    amount = Decimal(str(value))
    if amount > 0:
        return "positive"
    if amount < 0:
        return "negative"
    return "neutral"


def transactions_label(count: int) -> str:
    """Polish count label: "1 transakcja", otherwise "<n> transakcji" """
    noun = "transakcja" if count == 1 else "transakcji"
    return f"{count} {noun}"


def categoryLink_make(month: str, category_id: str, settings: Optional[AppSettings] = None) -> str:
    """
    Link to the transactions page filtered by month and category.

    Example:
        >>> categoryLink_make("2024-03", "abc")
        '/app/transactions?month=2024-03&category_id=abc'
    """
    settings = settings or appsettings
    query = urlencode({"month": month, "category_id": category_id})
    return f"{settings.transactions_path}?{query}"
