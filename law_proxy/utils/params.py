from typing import Any


def first_value(params: Any, key: str) -> str | None:
    """First value for ``key``; repeated keys do not override earlier ones."""
    if hasattr(params, "getlist"):
        values = params.getlist(key)
        return values[0] if values else None
    return params.get(key)


def parse_int(value: Any, default: int) -> int:
    """Parse a leading integer the way a lenient query-string reader would.

    ``"5"`` -> 5, ``" 12abc"`` -> 12, ``"abc"``/``None``/``""`` -> ``default``.
    """
    if value is None:
        return default
    text = str(value).strip()
    digits = ""
    for i, ch in enumerate(text):
        if ch.isdigit() and ch.isascii():
            digits += ch
        elif i == 0 and ch in "+-":
            digits += ch
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return default


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def optional_str(value: str | None) -> str | None:
    """Return ``value`` unchanged, or ``None`` when it is missing or empty."""
    if value is None or value == "":
        return None
    return value
