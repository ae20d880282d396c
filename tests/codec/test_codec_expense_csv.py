import unittest
from datetime import datetime, timezone
from decimal import Decimal

from desuitemgr.codec import ExpenseRow, format_expenses, parse_expenses, split_import_lines
from desuitemgr.errors import LocalValidationError
from desuitemgr.models import ExpenseRecord


def _dt(day: int) -> datetime:
    return datetime(2025, 1, day, tzinfo=timezone.utc)


class TestExpenseCsv(unittest.TestCase):
    def test_format(self) -> None:
        expenses = [
            ExpenseRecord(1, Decimal("12.5"), "Food", "Lunch, with team", _dt(3)),
            ExpenseRecord(2, Decimal("-4"), "Refund", "", _dt(9)),
        ]
        text = format_expenses(expenses)
        self.assertEqual(
            text,
            "amount,category,description,date\n"
            '12.5,Food,"Lunch, with team",2025-01-03\n'
            "-4,Refund,,2025-01-09\n",
        )

    def test_parse_what_format_wrote(self) -> None:
        rows = [ExpenseRow(Decimal("3.10"), "Travel", 'Bus "night" line', _dt(2))]
        self.assertEqual(parse_expenses(format_expenses(rows)), rows)

    def test_amount_keeps_every_decimal(self) -> None:
        rows = [ExpenseRow(Decimal("1.005"), "Food", "x", _dt(2))]
        parsed = parse_expenses(format_expenses(rows))
        self.assertEqual(parsed, rows)
        self.assertEqual(str(parsed[0].amount), "1.005")

    def test_multiline_description_survives(self) -> None:
        rows = [
            ExpenseRow(Decimal("2"), "Food", "line1\nline2", _dt(2)),
            ExpenseRow(Decimal("3"), "Rent", "after", _dt(5)),
        ]
        self.assertEqual(parse_expenses(format_expenses(rows)), rows)

    def test_padded_text_fields_are_not_trimmed(self) -> None:
        rows = [ExpenseRow(Decimal("4"), " Misc ", " padded ", _dt(6))]
        parsed = parse_expenses(format_expenses(rows))
        self.assertEqual(parsed[0].description, " padded ")
        self.assertEqual(parsed[0].category, " Misc ")

    def test_line_number_counts_physical_lines(self) -> None:
        text = 'amount,category,description,date\n1,Food,"a\nb",2025-01-01\nx,Food,,2025-01-02\n'
        with self.assertRaises(LocalValidationError) as ctx:
            parse_expenses(text)
        self.assertEqual(ctx.exception.details["line"], 4)

    def test_parse_without_header_and_blank_lines(self) -> None:
        rows = parse_expenses("\n5,Food,Snack,2025-01-04\n\n")
        self.assertEqual(rows, [ExpenseRow(Decimal("5"), "Food", "Snack", _dt(4))])
        self.assertEqual(rows[0].as_fields()["category"], "Food")

    def test_parse_reports_line_number(self) -> None:
        with self.assertRaises(LocalValidationError) as ctx:
            parse_expenses(["amount,category,description,date", "x,Food,,2025-01-01"])
        self.assertTrue(str(ctx.exception).startswith("Line 2:"))
        self.assertEqual(ctx.exception.details["line"], 2)

        with self.assertRaises(LocalValidationError) as ctx:
            parse_expenses(["1,Food"])
        self.assertIn("expected 4 columns", str(ctx.exception))

    def test_split_import_lines(self) -> None:
        self.assertEqual(split_import_lines(" a \n\n b\r\n"), ["a", "b"])

    def test_row_from_record(self) -> None:
        record = ExpenseRecord(7, Decimal("1"), "Misc", "d", _dt(1))
        self.assertEqual(ExpenseRow.from_record(record), ExpenseRow(Decimal("1"), "Misc", "d", _dt(1)))


if __name__ == "__main__":
    unittest.main()
