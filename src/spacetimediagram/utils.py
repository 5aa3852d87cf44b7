import math
from typing import Optional


def format_value(value: float, decimals: int = 6) -> str:
    """Format a coordinate or velocity for a text field, without trailing zeros."""
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    # Avoid showing "-0"
    return "0" if text == "-0" else text


def parse_float(text: str) -> Optional[float]:
    """Parse user input, accepting a comma as decimal separator. None if invalid."""
    try:
        value = float(text.strip().replace(",", "."))
    except ValueError:
        return None
    return value if math.isfinite(value) else None
