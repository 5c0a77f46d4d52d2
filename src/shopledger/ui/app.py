from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox, filedialog
from datetime import date
import logging
from pathlib import Path

from shopledger.domain.errors import FxUnavailableError, PersistenceError, ValidationError
from shopledger.domain.models import Currency
from shopledger.domain.money import format_amount
from shopledger.services.summary_service import summarize
from shopledger.ui.views.add_view import AddView
from shopledger.ui.views.sales_view import SalesView
from shopledger.ui.views.expenses_view import ExpensesView

log = logging.getLogger(__name__)

THEMES = {
    "light": {"bg": "#f9fafb", "fg": "#111827", "field": "#ffffff", "income": "#dcfce7", "expense": "#fee2e2",
              "profit": "#dbeafe", "loss": "#ffedd5"},
    "dark": {"bg": "#111827", "fg": "#f9fafb", "field": "#1f2937", "income": "#14532d", "expense": "#7f1d1d",
             "profit": "#1e3a8a", "loss": "#7c2d12"},
}


class App(tk.Tk):
    def __init__(
        self,
        ledger_service,
        fx_service,
        reporting_service,
        db_path: str,
        logs_dir: str,
    ):
        super().__init__()
        self.title("Do'kon: sales & expenses")
        self.geometry("720x760")
        self.minsize(600, 640)

        self.ledger = ledger_service
        self.fx = fx_service
        self.reporting = reporting_service

        self.db_path = db_path
        self.logs_dir = logs_dir

        # UI state
        self.dark_mode = tk.BooleanVar(value=False)
        self.rate_var = tk.StringVar(value=self._rate_text())
        self.status_var = tk.StringVar(value="")
        self._toast_after_id = None

        self._build_styles()
        self._build_header()
        self._build_summary()
        self._build_currency_bar()

        main = ttk.Frame(self)
        main.pack(fill="both", expand=True, padx=12, pady=(0, 8))

        self.nb = ttk.Notebook(main)
        self.nb.pack(fill="both", expand=True)

        self.add_view = AddView(self.nb, self)
        self.sales_view = SalesView(self.nb, self)
        self.expenses_view = ExpensesView(self.nb, self)

        self._build_status_bar()

        self.apply_theme()
        self.refresh_all()
        self.toast("Ready.", kind="info", ms=1200)

    def _build_styles(self):
        style = ttk.Style(self)
        try:
            style.configure("Big.TButton", padding=(14, 10))
            style.configure("Title.TLabel", font=("Segoe UI", 16, "bold"))
        except tk.TclError as e:
            log.exception("UI style setup failed: %s", e)

    def _build_header(self):
        top = ttk.Frame(self)
        top.pack(fill="x", padx=12, pady=10)

        ttk.Label(top, text="📦 Do'kon", style="Title.TLabel").pack(side="left")
        self.theme_btn = ttk.Button(top, text="🌙", width=4, command=self.toggle_theme)
        self.theme_btn.pack(side="right")

    def _build_summary(self):
        cards = ttk.Frame(self)
        cards.pack(fill="x", padx=12, pady=(0, 10))

        self.cards = {}
        for i, (key, title) in enumerate((("income", "Income"), ("expense", "Costs"), ("profit", "Profit"))):
            card = tk.Frame(cards, padx=10, pady=10)
            card.grid(row=0, column=i, sticky="nsew", padx=4)
            cards.columnconfigure(i, weight=1)
            caption = tk.Label(card, text=title, font=("Segoe UI", 9))
            caption.pack()
            value = tk.Label(card, text="-", font=("Segoe UI", 12, "bold"))
            value.pack()
            self.cards[key] = (card, caption, value)

    def _build_currency_bar(self):
        bar = ttk.Frame(self)
        bar.pack(fill="x", padx=12, pady=(0, 8))

        self.base_btn = ttk.Button(bar, text=Currency.BASE.label, command=lambda: self.set_display(Currency.BASE))
        self.base_btn.pack(side="left", fill="x", expand=True, padx=(0, 4))
        self.foreign_btn = ttk.Button(bar, text=Currency.FOREIGN.label, command=lambda: self.set_display(Currency.FOREIGN))
        self.foreign_btn.pack(side="left", fill="x", expand=True, padx=4)

        ttk.Label(bar, text="Rate").pack(side="left", padx=(8, 4))
        rate_entry = ttk.Entry(bar, textvariable=self.rate_var, width=10)
        rate_entry.pack(side="left")
        rate_entry.bind("<Return>", self.on_rate_changed)
        rate_entry.bind("<FocusOut>", self.on_rate_changed)

        ttk.Button(bar, text="Online rate", command=self.update_fx).pack(side="left", padx=(6, 0))
        ttk.Button(bar, text="Export", command=self.export_excel).pack(side="right")

    def _build_status_bar(self):
        bar = ttk.Frame(self)
        bar.pack(fill="x", padx=12, pady=(0, 10))
        ttk.Label(bar, textvariable=self.status_var).pack(side="left")
        ttk.Label(bar, text=f"DB: {Path(self.db_path).name}").pack(side="right")

    def toast(self, msg: str, kind: str = "info", ms: int = 2500):
        prefix = {"info": "ℹ ", "success": "✅ ", "warn": "⚠ ", "error": "❌ "}.get(kind, "")
        self.status_var.set(prefix + msg)
        if self._toast_after_id is not None:
            self.after_cancel(self._toast_after_id)
        self._toast_after_id = self.after(ms, lambda: self.status_var.set(""))

    def handle_error(self, title: str, err: Exception, toast_text: str):
        if isinstance(err, ValidationError):
            messagebox.showwarning("Validation", str(err), parent=self)
            return
        if isinstance(err, PersistenceError):
            log.exception("Persistence failure: %s", err)
            messagebox.showerror(
                "Storage error",
                f"{err}\n\nData could not be saved. The application will close.\nLogs: {self.logs_dir}",
                parent=self,
            )
            self.destroy()
            return
        log.exception("%s: %s", title, err)
        messagebox.showerror(title, str(err), parent=self)
        self.toast(toast_text, kind="error")

    # ---------- Formatting ----------
    def fmt(self, base_amount: float) -> str:
        state = self.ledger.ledger
        return format_amount(base_amount, state.display_currency, state.exchange_rate)

    def _rate_text(self, rate: float | None = None) -> str:
        rate = self.ledger.ledger.exchange_rate if rate is None else rate
        return f"{rate:.2f}".rstrip("0").rstrip(".")

    # ---------- Currency ----------
    def set_display(self, currency: Currency):
        self.ledger.set_display_currency(currency)
        self.refresh_all()

    def on_rate_changed(self, _evt=None):
        try:
            rate = self.ledger.set_exchange_rate(self.rate_var.get())
            self.rate_var.set(self._rate_text(rate))
            self.refresh_all()
        except Exception as e:
            self.handle_error("Rate", e, "Failed to save rate.")

    def update_fx(self):
        try:
            rate = self.fx.refresh_rate()
            self.rate_var.set(self._rate_text(rate))
            self.refresh_all()
            self.toast(f"Rate updated: {rate:,.2f}", kind="success")
        except FxUnavailableError as e:
            log.warning("FX update failed: %s", e)
            self.toast("Online rate unavailable; manual rate kept.", kind="warn")
        except Exception as e:
            self.handle_error("Rate", e, "FX update failed.")

    def export_excel(self):
        path = filedialog.asksaveasfilename(
            title="Save ledger as",
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx")],
            initialfile=f"ledger_{date.today().isoformat()}.xlsx",
        )
        if not path:
            return
        try:
            self.reporting.export_ledger_excel(path, self.ledger.ledger)
            self.toast("Excel file exported.", kind="success")
        except Exception as e:
            self.handle_error("Export error", e, "Excel export failed.")

    # ---------- Theme ----------
    def toggle_theme(self):
        self.dark_mode.set(not self.dark_mode.get())
        self.apply_theme()
        self.refresh_summary()

    def apply_theme(self):
        colors = THEMES["dark" if self.dark_mode.get() else "light"]
        style = ttk.Style(self)
        style.configure(".", background=colors["bg"], foreground=colors["fg"])
        style.configure("TEntry", fieldbackground=colors["field"])
        style.configure("Treeview", background=colors["field"], fieldbackground=colors["field"], foreground=colors["fg"])
        self.configure(bg=colors["bg"])
        self.theme_btn.config(text="☀" if self.dark_mode.get() else "🌙")

    # ---------- Refresh ----------
    def refresh_all(self):
        self.refresh_summary()
        self.sales_view.refresh()
        self.expenses_view.refresh()

    def refresh_summary(self):
        summary = summarize(self.ledger.ledger)
        colors = THEMES["dark" if self.dark_mode.get() else "light"]
        profit_bg = colors["profit"] if summary.profit >= 0 else colors["loss"]

        values = {
            "income": (summary.income, colors["income"]),
            "expense": (summary.total_cost + summary.expense_total, colors["expense"]),
            "profit": (summary.profit, profit_bg),
        }
        for key, (amount, bg) in values.items():
            card, caption, value = self.cards[key]
            for w in (card, caption, value):
                w.config(bg=bg)
            caption.config(fg=colors["fg"])
            value.config(text=self.fmt(amount), fg=colors["fg"])

        showing_foreign = self.ledger.ledger.display_currency is Currency.FOREIGN
        self.base_btn.state(["!pressed"] if showing_foreign else ["pressed"])
        self.foreign_btn.state(["pressed"] if showing_foreign else ["!pressed"])
