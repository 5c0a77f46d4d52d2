from pathlib import Path

from openpyxl import load_workbook

from conftest import open_service
from shopledger.services.reporting_service import ReportingService


def test_export_writes_summary_sales_and_expenses_sheets(tmp_path: Path):
    _store, ledger = open_service(tmp_path)
    ledger.set_exchange_rate(10000)
    ledger.add_sale(name="Bread", quantity="2", buy_price="3000", sell_price="5000")
    ledger.add_sale(name="Cola", quantity="1", sell_price="2", currency="USD")
    ledger.add_expense(note="Rent", amount="4000")

    path = tmp_path / "ledger.xlsx"
    ReportingService().export_ledger_excel(str(path), ledger.ledger)

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Sales", "Expenses"]

    summary = wb["Summary"]
    assert summary["B3"].value == 10000
    assert summary["A6"].value == "Income UZS"
    assert summary["B6"].value == 30000
    assert summary["B7"].value == 6000
    assert summary["B8"].value == 4000
    assert summary["B10"].value == 20000

    sales = wb["Sales"]
    assert sales.max_row == 3
    assert sales["C2"].value == "Cola"
    assert sales["H2"].value == 20000
    assert sales["C3"].value == "Bread"
    assert sales["I3"].value == 6000

    expenses = wb["Expenses"]
    assert expenses.max_row == 2
    assert expenses["C2"].value == "Rent"
    assert expenses["F2"].value == 4000


def test_export_of_empty_ledger_has_header_rows_only(tmp_path: Path):
    _store, ledger = open_service(tmp_path)
    path = tmp_path / "empty.xlsx"

    ReportingService().export_ledger_excel(str(path), ledger.ledger)

    wb = load_workbook(path)
    assert wb["Sales"].max_row == 1
    assert wb["Expenses"].max_row == 1
    assert wb["Summary"]["B10"].value == 0
