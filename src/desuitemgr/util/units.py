from __future__ import annotations

BYTES_PER_MB: int = 1024 * 1024


def format_mb(num_bytes: int | float, *, digits: int = 2) -> str:
    """Render a byte count as megabytes, e.g. ``"42.00 MB"``."""
    return f"{num_bytes / BYTES_PER_MB:.{digits}f} MB"


def format_whole_mb(num_bytes: int) -> str:
    """
    Render a byte count as a whole number of megabytes when it divides evenly.

    Quotas are displayed this way (``"100 MB"``); anything else falls back to
    two decimals.
    """
    if num_bytes % BYTES_PER_MB == 0:
        return f"{num_bytes // BYTES_PER_MB} MB"
    return format_mb(num_bytes)
