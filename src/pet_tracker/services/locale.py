"""Locale-aware parsing and formatting of user-entered numbers."""

import math

_COMMA_DECIMAL_LOCALES = {"de"}


def parse_amount(raw: str | float | None, locale: str = "en") -> float | None:
    """Parse a user-entered amount into a float.

    Either separator is accepted as the decimal mark when it appears alone.
    When both appear, the locale decides which one groups thousands: "1.250,5"
    under "de" and "1,250.5" under "en" both give 1250.5. Blank input returns
    None.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(f"Invalid number: {raw!r}")
    if isinstance(raw, int | float):
        return _checked(float(raw), raw)

    text = raw.strip().replace(" ", "")
    if not text:
        return None
    if "," in text and "." in text:
        if locale in _COMMA_DECIMAL_LOCALES:
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif "," in text:
        if text.count(",") > 1:
            raise ValueError(f"Invalid number: {raw!r}")
        text = text.replace(",", ".")

    try:
        value = float(text)
    except ValueError as exc:
        raise ValueError(f"Invalid number: {raw!r}") from exc
    return _checked(value, raw)


def format_number(value: float, decimals: int = 1, locale: str = "en") -> str:
    """Format a number with fixed decimals and the locale's decimal mark."""
    rendered = f"{value:.{decimals}f}"
    if locale in _COMMA_DECIMAL_LOCALES:
        return rendered.replace(".", ",")
    return rendered


def _checked(value: float, raw: object) -> float:
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Invalid number: {raw!r}")
    return value
