import unittest

from desuitemgr.util.units import BYTES_PER_MB, format_mb, format_whole_mb


class TestUtilUnits(unittest.TestCase):
    def test_format_mb_two_decimals(self) -> None:
        self.assertEqual(format_mb(42 * BYTES_PER_MB), "42.00 MB")
        self.assertEqual(format_mb(0), "0.00 MB")

    def test_format_whole_mb(self) -> None:
        self.assertEqual(format_whole_mb(100 * BYTES_PER_MB), "100 MB")
        self.assertEqual(format_whole_mb(BYTES_PER_MB + BYTES_PER_MB // 2), "1.50 MB")


if __name__ == "__main__":
    unittest.main()
