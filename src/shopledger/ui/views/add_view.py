from __future__ import annotations

import tkinter as tk
from tkinter import ttk
import logging

from shopledger.domain.models import Currency


log = logging.getLogger(__name__)

CURRENCY_CHOICES = [c.label for c in Currency]


class AddView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Add")

        tab = self.frame

        sale_box = ttk.LabelFrame(tab, text="📦 Add sale")
        sale_box.pack(fill="x", padx=8, pady=8)

        self.s_name = self._entry(sale_box, "Product name", 0)
        self.s_qty = self._entry(sale_box, "Quantity", 1)
        self.s_cost = self._entry(sale_box, "Buy price", 2)
        self.s_price = self._entry(sale_box, "Sell price", 3)
        self.s_currency = self._currency(sale_box, 4)

        ttk.Button(sale_box, text="+ Add sale", style="Big.TButton", command=self.on_add_sale)\
            .grid(row=5, column=0, columnspan=2, sticky="ew", padx=8, pady=(6, 8))

        for entry in (self.s_name, self.s_qty, self.s_cost, self.s_price):
            entry.bind("<Return>", self._on_enter_add_sale)

        expense_box = ttk.LabelFrame(tab, text="🧾 Add expense")
        expense_box.pack(fill="x", padx=8, pady=8)

        self.e_note = self._entry(expense_box, "Note (e.g. rent)", 0)
        self.e_amount = self._entry(expense_box, "Amount", 1)
        self.e_currency = self._currency(expense_box, 2)

        ttk.Button(expense_box, text="+ Add expense", style="Big.TButton", command=self.on_add_expense)\
            .grid(row=3, column=0, columnspan=2, sticky="ew", padx=8, pady=(6, 8))

        for entry in (self.e_note, self.e_amount):
            entry.bind("<Return>", self._on_enter_add_expense)

    def _entry(self, parent, label, row):
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w", padx=8, pady=4)
        e = ttk.Entry(parent, width=24)
        e.grid(row=row, column=1, sticky="ew", padx=8, pady=4)
        parent.columnconfigure(1, weight=1)
        return e

    def _currency(self, parent, row):
        ttk.Label(parent, text="Currency").grid(row=row, column=0, sticky="w", padx=8, pady=4)
        var = tk.StringVar(value=Currency.BASE.label)
        box = ttk.Combobox(parent, textvariable=var, values=CURRENCY_CHOICES, state="readonly", width=8)
        box.grid(row=row, column=1, sticky="w", padx=8, pady=4)
        return var

    def _on_enter_add_sale(self, _event=None):
        self.on_add_sale()
        return "break"

    def _on_enter_add_expense(self, _event=None):
        self.on_add_expense()
        return "break"

    def on_add_sale(self):
        try:
            sale = self.app.ledger.add_sale(
                name=self.s_name.get(),
                quantity=self.s_qty.get(),
                buy_price=self.s_cost.get(),
                sell_price=self.s_price.get(),
                currency=self.s_currency.get(),
            )
            self.app.toast(f"Sale added: {sale.name} × {sale.quantity}.", kind="success")
            self.clear_sale_form()
            self.app.refresh_all()
        except Exception as e:
            self.app.handle_error("Add sale", e, "Failed to add sale.")

    def on_add_expense(self):
        try:
            expense = self.app.ledger.add_expense(
                note=self.e_note.get(),
                amount=self.e_amount.get(),
                currency=self.e_currency.get(),
            )
            self.app.toast(f"Expense added: {expense.note}.", kind="success")
            self.clear_expense_form()
            self.app.refresh_all()
        except Exception as e:
            self.app.handle_error("Add expense", e, "Failed to add expense.")

    def clear_sale_form(self):
        for e in (self.s_name, self.s_qty, self.s_cost, self.s_price):
            e.delete(0, tk.END)
        self.s_currency.set(Currency.BASE.label)
        self.s_name.focus_set()

    def clear_expense_form(self):
        for e in (self.e_note, self.e_amount):
            e.delete(0, tk.END)
        self.e_currency.set(Currency.BASE.label)
        self.e_note.focus_set()
