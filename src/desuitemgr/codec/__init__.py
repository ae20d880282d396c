from .expense_csv import HEADER, ExpenseRow, format_expenses, parse_expenses, split_import_lines

__all__ = ["HEADER", "ExpenseRow", "format_expenses", "parse_expenses", "split_import_lines"]
