from .time import (
    as_utc_bound,
    end_of_day,
    from_epoch_millis,
    from_epoch_nanos,
    normalize_dt,
    start_of_day,
    to_epoch_millis,
    to_epoch_nanos,
)
from .units import BYTES_PER_MB, format_mb, format_whole_mb

__all__ = [
    "normalize_dt",
    "from_epoch_nanos",
    "to_epoch_nanos",
    "from_epoch_millis",
    "to_epoch_millis",
    "start_of_day",
    "end_of_day",
    "as_utc_bound",
    "BYTES_PER_MB",
    "format_mb",
    "format_whole_mb",
]
