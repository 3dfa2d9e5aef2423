import math


def parse_positive_float(text):
    """
    Parse operator input (reference diameter, density) into a positive float.

    Empty, unparseable, non-finite and non-positive input all come back as
    None so the caller sees "absent" rather than a literal bad value.
    """
    if text is None:
        return None
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        text = str(text).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def format_surface_tension(value: float, decimals: int) -> str:
    return f"Surface Tension: {value:.{decimals}f} mN/m"
