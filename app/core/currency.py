# app/core/currency.py
from decimal import Decimal, ROUND_HALF_UP

# locale -> (group separator, decimal separator, pattern)
LOCALE_FORMATS: dict[str, tuple[str, str, str]] = {
    "pt-BR": (".", ",", "{symbol} {amount}"),
    "en-US": (",", ".", "{symbol}{amount}"),
    "de-DE": (".", ",", "{amount} {symbol}"),
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "BRL": "R$",
    "USD": "$",
    "EUR": "€",
}

_CENT = Decimal("0.01")


def format_currency(amount: float, locale: str = "pt-BR", currency: str = "BRL") -> str:
    """
    Format a major-unit amount for display, e.g. 79.99 -> "R$ 79,99".

    Always two decimals, half-up rounding, locale grouping.
    The result is for display only; never parse it back.

    Raises:
        ValueError: if the locale or currency is not supported.
    """
    try:
        group_sep, decimal_sep, pattern = LOCALE_FORMATS[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale}")
    try:
        symbol = CURRENCY_SYMBOLS[currency]
    except KeyError:
        raise ValueError(f"Unsupported currency: {currency}")

    value = Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""

    # "1,234.56" -> swap separators through a placeholder
    plain = f"{abs(value):,.2f}"
    plain = plain.replace(",", "\0").replace(".", decimal_sep).replace("\0", group_sep)

    return sign + pattern.format(symbol=symbol, amount=plain)
