from __future__ import annotations

from tkinter import ttk, messagebox

from shopledger.services.summary_service import sale_total


class SalesView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Sales")

        tree_wrap = ttk.Frame(self.frame)
        tree_wrap.pack(fill="both", expand=True, padx=6, pady=6)

        cols = ("name", "detail", "date", "total")
        self.tree = ttk.Treeview(tree_wrap, columns=cols, show="headings", height=16)
        heads = {"name": "Product", "detail": "Qty × Price", "date": "Date", "total": "Total"}
        widths = {"name": 200, "detail": 150, "date": 100, "total": 140}
        for c in cols:
            self.tree.heading(c, text=heads[c])
            self.tree.column(c, width=widths[c], anchor="w")

        vsb = ttk.Scrollbar(tree_wrap, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        tree_wrap.columnconfigure(0, weight=1)
        tree_wrap.rowconfigure(0, weight=1)

        self.empty_label = ttk.Label(self.frame, text="No sales yet")
        self._row_ids: dict[str, str] = {}

        ttk.Button(self.frame, text="🗑 Delete selected", command=self.on_delete_sale)\
            .pack(anchor="e", padx=6, pady=(0, 6))

    def on_delete_sale(self):
        try:
            selected = self.tree.selection()
            if not selected:
                messagebox.showwarning("Validation", "Select a sale.", parent=self.frame)
                return

            sale_id = self._row_ids[selected[0]]
            name = self.tree.item(selected[0], "values")[0]
            confirmed = messagebox.askyesno("Confirm delete", f"Delete sale '{name}'?", parent=self.frame)
            if not confirmed:
                return

            self.app.ledger.remove_sale(sale_id)
            self.app.toast("Sale deleted.", kind="success")
            self.app.refresh_all()
        except Exception as e:
            self.app.handle_error("Delete sale", e, "Failed to delete sale.")

    def refresh(self):
        for item in self.tree.get_children():
            self.tree.delete(item)
        self._row_ids = {}

        rate = self.app.ledger.ledger.exchange_rate
        sales = self.app.ledger.sales()
        for s in sales:
            iid = self.tree.insert(
                "", "end",
                values=(
                    s.name,
                    f"{s.quantity} × {s.sell_price:g} {s.currency.label}",
                    s.created_at.strftime("%d.%m.%Y"),
                    self.app.fmt(sale_total(s, rate)),
                ),
            )
            self._row_ids[iid] = s.id

        if sales:
            self.empty_label.pack_forget()
        else:
            self.empty_label.pack(pady=10)
