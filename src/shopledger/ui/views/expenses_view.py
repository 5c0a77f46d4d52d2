from __future__ import annotations

from tkinter import ttk, messagebox

from shopledger.services.summary_service import expense_total


class ExpensesView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Expenses")

        tree_wrap = ttk.Frame(self.frame)
        tree_wrap.pack(fill="both", expand=True, padx=6, pady=6)

        cols = ("note", "amount", "date", "total")
        self.tree = ttk.Treeview(tree_wrap, columns=cols, show="headings", height=16)
        heads = {"note": "Note", "amount": "Amount", "date": "Date", "total": "Total"}
        widths = {"note": 220, "amount": 130, "date": 100, "total": 140}
        for c in cols:
            self.tree.heading(c, text=heads[c])
            self.tree.column(c, width=widths[c], anchor="w")

        vsb = ttk.Scrollbar(tree_wrap, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        tree_wrap.columnconfigure(0, weight=1)
        tree_wrap.rowconfigure(0, weight=1)

        self.empty_label = ttk.Label(self.frame, text="No expenses yet")
        self._row_ids: dict[str, str] = {}

        ttk.Button(self.frame, text="🗑 Delete selected", command=self.on_delete_expense)\
            .pack(anchor="e", padx=6, pady=(0, 6))

    def on_delete_expense(self):
        try:
            selected = self.tree.selection()
            if not selected:
                messagebox.showwarning("Validation", "Select an expense.", parent=self.frame)
                return

            expense_id = self._row_ids[selected[0]]
            note = self.tree.item(selected[0], "values")[0]
            if not messagebox.askyesno("Confirm delete", f"Delete expense '{note}'?", parent=self.frame):
                return

            self.app.ledger.remove_expense(expense_id)
            self.app.toast("Expense deleted.", kind="success")
            self.app.refresh_all()
        except Exception as e:
            self.app.handle_error("Delete expense", e, "Failed to delete expense.")

    def refresh(self):
        for item in self.tree.get_children():
            self.tree.delete(item)
        self._row_ids = {}

        rate = self.app.ledger.ledger.exchange_rate
        expenses = self.app.ledger.expenses()
        for e in expenses:
            iid = self.tree.insert(
                "", "end",
                values=(
                    e.note,
                    f"{e.amount:g} {e.currency.label}",
                    e.created_at.strftime("%d.%m.%Y"),
                    self.app.fmt(expense_total(e, rate)),
                ),
            )
            self._row_ids[iid] = e.id

        if expenses:
            self.empty_label.pack_forget()
        else:
            self.empty_label.pack(pady=10)
