import json
from pathlib import Path

import pytest

pytest.importorskip("tkinter")

from conftest import open_service
from shopledger.ui.views import expenses_view, sales_view
from shopledger.ui.views.expenses_view import ExpensesView
from shopledger.ui.views.sales_view import SalesView


class FakeTree:
    def __init__(self):
        self.rows = {}
        self.selected = ()
        self._n = 0

    def insert(self, _parent, _index, values=()):
        self._n += 1
        iid = f"I{self._n:03d}"
        self.rows[iid] = values
        return iid

    def get_children(self):
        return tuple(self.rows)

    def delete(self, iid):
        del self.rows[iid]

    def selection(self):
        return self.selected

    def item(self, iid, option):
        assert option == "values"
        return self.rows[iid]


class FakeLabel:
    def pack(self, **_kw):
        pass

    def pack_forget(self):
        pass


class FakeApp:
    def __init__(self, ledger):
        self.ledger = ledger
        self.errors = []

    def fmt(self, amount):
        return f"{amount:.0f}"

    def toast(self, *_a, **_kw):
        pass

    def refresh_all(self):
        pass

    def handle_error(self, title, err, toast_text):
        self.errors.append((title, str(err), toast_text))


def _view(cls, ledger):
    view = cls.__new__(cls)
    view.app = FakeApp(ledger)
    view.tree = FakeTree()
    view.empty_label = FakeLabel()
    view.frame = None
    view._row_ids = {}
    return view


def test_sales_view_lists_and_deletes_rows_sharing_an_id(tmp_path: Path, monkeypatch):
    store, _ledger = open_service(tmp_path)
    store.set("products", json.dumps([
        {"id": 1, "name": "Tea", "qty": 1, "sellPrice": 3000, "currency": "UZS"},
        {"id": 1, "name": "Bread", "qty": 2, "sellPrice": 5000, "currency": "UZS"},
    ]))
    _store, ledger = open_service(tmp_path)
    view = _view(SalesView, ledger)

    view.refresh()
    assert len(view.tree.rows) == 2

    monkeypatch.setattr(sales_view.messagebox, "askyesno", lambda *a, **kw: True)
    view.tree.selected = (view.tree.get_children()[1],)
    view.on_delete_sale()

    assert view.app.errors == []
    assert [s.name for s in ledger.sales()] == ["Bread"]

    view.refresh()
    assert [values[0] for values in view.tree.rows.values()] == ["Bread"]


def test_expenses_view_delete_respects_declined_confirmation(tmp_path: Path, monkeypatch):
    store, _ledger = open_service(tmp_path)
    store.set("expenses", json.dumps([
        {"id": "x", "note": "Rent", "amount": 100},
        {"id": "x", "note": "Taxi", "amount": 20},
    ]))
    _store, ledger = open_service(tmp_path)
    view = _view(ExpensesView, ledger)
    view.refresh()

    monkeypatch.setattr(expenses_view.messagebox, "askyesno", lambda *a, **kw: False)
    view.tree.selected = (view.tree.get_children()[0],)
    view.on_delete_expense()
    assert len(ledger.expenses()) == 2

    monkeypatch.setattr(expenses_view.messagebox, "askyesno", lambda *a, **kw: True)
    view.on_delete_expense()
    assert [e.note for e in ledger.expenses()] == ["Taxi"]
