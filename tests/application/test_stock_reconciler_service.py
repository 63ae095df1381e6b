"""Tests for the Stock Reconciler reacting to catalog snapshots."""

from structlog.testing import capture_logs

from storefront.application.cart_store import CartStore
from storefront.application.reconcile_stock import StockReconciler
from tests.fakes import FakeCartRepository, FakeCatalogRepository, product


def _setup(stock: int = 5) -> tuple[StockReconciler, CartStore, FakeCatalogRepository]:
    catalog = FakeCatalogRepository([
        product("bayam", "Bayam", 5000, stock=stock),
        product("wortel", "Wortel", 8000, stock=10),
    ])
    store = CartStore(FakeCartRepository())
    reconciler = StockReconciler(store)
    reconciler.attach(catalog)
    return reconciler, store, catalog


def _add(store: CartStore, catalog: FakeCatalogRepository, product_id: str, times: int) -> None:
    for _ in range(times):
        store.add(catalog.get_by_id(product_id))


class TestSnapshotClamp:

    def test_quantity_lowered_to_new_stock(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "bayam", 3)

        with capture_logs() as logs:
            catalog.update_stock("bayam", 2)

        assert store.find("bayam").quantity == 2
        assert any(e["event"] == "cart_line_clamped" for e in logs)

    def test_zero_stock_removes_line(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "bayam", 1)
        catalog.update_stock("bayam", 0)
        assert store.find("bayam") is None

    def test_deleted_product_removed_from_cart(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "bayam", 1)
        _add(store, catalog, "wortel", 1)
        catalog.delete("bayam")
        assert [line.id for line in store.lines] == ["wortel"]

    def test_lines_within_stock_untouched(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "wortel", 2)
        catalog.update_stock("bayam", 0)
        assert store.find("wortel").quantity == 2

    def test_never_raises_quantity(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "bayam", 1)
        catalog.update_stock("bayam", 50)
        assert store.find("bayam").quantity == 1

    def test_second_pass_is_a_noop(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "bayam", 3)
        catalog.update_stock("bayam", 2)
        assert reconciler.on_snapshot(catalog.list_all()) == []
        assert store.find("bayam").quantity == 2

    def test_later_snapshot_wins(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "bayam", 4)
        catalog.update_stock("bayam", 3)
        catalog.update_stock("bayam", 1)
        assert store.find("bayam").quantity == 1


class TestRefresh:

    def test_pull_reconciles_missed_changes(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "bayam", 3)
        catalog.set_stock_silently("bayam", 1)
        adjustments = reconciler.refresh(catalog)
        assert [(a.product_id, a.new_quantity) for a in adjustments] == [("bayam", 1)]
        assert store.find("bayam").quantity == 1

    def test_offline_catalog_changes_nothing(self):
        reconciler, store, catalog = _setup()
        _add(store, catalog, "bayam", 3)
        catalog.offline = True
        assert reconciler.refresh(catalog) == []
        assert store.find("bayam").quantity == 3


class TestLatestStock:

    def test_unknown_before_first_snapshot(self):
        reconciler, _, catalog = _setup()
        catalog.offline = True
        assert reconciler.latest_stock(catalog) is None

    def test_falls_back_to_last_snapshot(self):
        reconciler, _, catalog = _setup()
        reconciler.refresh(catalog)
        catalog.set_stock_silently("bayam", 1)
        catalog.offline = True
        assert reconciler.latest_stock(catalog) == {"bayam": 5, "wortel": 10}

    def test_fresh_when_reachable(self):
        reconciler, _, catalog = _setup()
        catalog.set_stock_silently("bayam", 1)
        assert reconciler.latest_stock(catalog)["bayam"] == 1
