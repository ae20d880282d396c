import unittest
from datetime import date, datetime, timedelta, timezone

from desuitemgr.util.time import (
    as_utc_bound,
    end_of_day,
    from_epoch_millis,
    from_epoch_nanos,
    normalize_dt,
    start_of_day,
    to_epoch_millis,
    to_epoch_nanos,
)


class TestUtilTime(unittest.TestCase):
    def test_normalize_dt_rejects_naive(self) -> None:
        naive = datetime(2025, 1, 1, 12, 0, 0)
        with self.assertRaises(ValueError):
            normalize_dt(naive)

    def test_epoch_nanos(self) -> None:
        dt = datetime(2024, 3, 1, 8, 30, 0, 250000, tzinfo=timezone.utc)
        nanos = to_epoch_nanos(dt)
        self.assertEqual(nanos % 1000, 0)
        self.assertEqual(from_epoch_nanos(nanos), dt)
        # sub-microsecond digits are truncated
        self.assertEqual(from_epoch_nanos(nanos + 999), dt)

    def test_epoch_millis(self) -> None:
        self.assertEqual(
            from_epoch_millis(86_400_000), datetime(1970, 1, 2, tzinfo=timezone.utc)
        )
        dt = datetime(2024, 3, 1, tzinfo=timezone.utc)
        self.assertEqual(from_epoch_millis(to_epoch_millis(dt)), dt)

    def test_day_bounds(self) -> None:
        day = date(2024, 5, 17)
        self.assertEqual(start_of_day(day), datetime(2024, 5, 17, tzinfo=timezone.utc))
        self.assertEqual(end_of_day(day) - start_of_day(day), timedelta(days=1, microseconds=-1))

    def test_as_utc_bound_date_covers_whole_day(self) -> None:
        day = date(2024, 5, 17)
        self.assertEqual(as_utc_bound(day, upper=False), start_of_day(day))
        self.assertEqual(as_utc_bound(day, upper=True), end_of_day(day))

    def test_as_utc_bound_datetime_is_converted(self) -> None:
        jst = timezone(timedelta(hours=9))
        dt = datetime(2024, 5, 17, 9, 0, tzinfo=jst)
        self.assertEqual(
            as_utc_bound(dt, upper=True), datetime(2024, 5, 17, 0, 0, tzinfo=timezone.utc)
        )

    def test_as_utc_bound_rejects_other_types(self) -> None:
        with self.assertRaises(TypeError):
            as_utc_bound("2024-05-17", upper=False)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
