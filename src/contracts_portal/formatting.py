"""Display helpers."""

BYTE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]
KILO = 1024


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """
    Render a byte count as e.g. "1.20 MB".

    The unit is the largest one (up to TB) that keeps the value at or above 1.
    """
    if num_bytes == 0:
        return "0 Bytes"
    decimals = max(decimals, 0)

    unit_index = 0
    value = float(num_bytes)
    while value >= KILO and unit_index < len(BYTE_UNITS) - 1:
        value /= KILO
        unit_index += 1
    return f"{value:.{decimals}f} {BYTE_UNITS[unit_index]}"
