from __future__ import annotations

import logging

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from shopledger.domain.models import Ledger
from shopledger.services.summary_service import expense_total, sale_cost, sale_total, summarize

log = logging.getLogger(__name__)


class ReportingService:
    def export_ledger_excel(self, path: str, ledger: Ledger) -> None:
        wb = Workbook()
        rate = ledger.exchange_rate

        def money(cell):
            cell.number_format = "#,##0.00"

        def bold_row(ws, r):
            for c in ws[r]:
                c.font = Font(bold=True)

        def set_widths(ws, widths: dict[str, int]):
            for col, w in widths.items():
                ws.column_dimensions[col].width = w

        def add_table(ws, name: str, start_row: int, start_col: int, end_row: int, end_col: int):
            ref = f"{get_column_letter(start_col)}{start_row}:{get_column_letter(end_col)}{end_row}"
            tab = Table(displayName=name, ref=ref)
            tab.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium9",
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(tab)

        summary = summarize(ledger)

        # -------- 1) Summary --------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = "Summary"
        ws["A1"].font = Font(bold=True, size=14)

        ws["A3"] = "Exchange rate (UZS per USD)"
        ws["B3"] = float(rate)
        money(ws["B3"])
        ws["A4"] = "Display currency"
        ws["B4"] = ledger.display_currency.value

        rows = [
            ("Income UZS", summary.income),
            ("Cost of goods UZS", summary.total_cost),
            ("Expenses UZS", summary.expense_total),
            ("Gross profit UZS", summary.gross_profit),
            ("Profit UZS", summary.profit),
        ]
        start_row = 6
        for i, (label, val) in enumerate(rows):
            r = start_row + i
            ws[f"A{r}"] = label
            ws[f"B{r}"] = float(val)
            money(ws[f"B{r}"])

        set_widths(ws, {"A": 30, "B": 22})

        # -------- 2) Sales --------
        ws2 = wb.create_sheet("Sales")
        ws2.append([
            "ID", "Date", "Product",
            "Qty", "Buy Price", "Sell Price", "Currency",
            "Total UZS", "Cost UZS",
        ])
        bold_row(ws2, 1)

        out_row = 2
        for s in ledger.sales:
            ws2.append([
                s.id, s.created_at.isoformat(sep=" ", timespec="seconds"), s.name,
                int(s.quantity), float(s.buy_price), float(s.sell_price), s.currency.value,
                float(sale_total(s, rate)), float(sale_cost(s, rate)),
            ])
            for col in ("E", "F", "H", "I"):
                money(ws2[f"{col}{out_row}"])
            out_row += 1

        ws2.freeze_panes = "A2"
        set_widths(ws2, {
            "A": 22, "B": 22, "C": 30,
            "D": 6, "E": 14, "F": 14, "G": 10,
            "H": 18, "I": 18,
        })
        if ws2.max_row >= 2:
            add_table(ws2, "SalesDetail", 1, 1, ws2.max_row, 9)

        # -------- 3) Expenses --------
        ws3 = wb.create_sheet("Expenses")
        ws3.append(["ID", "Date", "Note", "Amount", "Currency", "Total UZS"])
        bold_row(ws3, 1)

        out_row = 2
        for e in ledger.expenses:
            ws3.append([
                e.id, e.created_at.isoformat(sep=" ", timespec="seconds"), e.note,
                float(e.amount), e.currency.value, float(expense_total(e, rate)),
            ])
            money(ws3[f"D{out_row}"])
            money(ws3[f"F{out_row}"])
            out_row += 1

        ws3.freeze_panes = "A2"
        set_widths(ws3, {"A": 22, "B": 22, "C": 34, "D": 14, "E": 10, "F": 18})
        if ws3.max_row >= 2:
            add_table(ws3, "ExpensesDetail", 1, 1, ws3.max_row, 6)

        wb.save(path)
        log.info("ledger_exported path=%s sales=%s expenses=%s", path, len(ledger.sales), len(ledger.expenses))
