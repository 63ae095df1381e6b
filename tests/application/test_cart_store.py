"""Tests for the Cart Store: dispatch, write-through and reload."""

from storefront.application.cart_store import CartStore
from storefront.domain.model.cart import SetQuantity
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.local_repositories import LocalCartRepository
from tests.fakes import FakeCartRepository, InMemoryLocalStore, product

BAYAM = product("bayam", "Bayam", 5000, stock=10)
WORTEL = product("wortel", "Wortel", 8000, stock=10)


class TestDispatch:

    def test_every_action_is_written_through(self):
        repo = FakeCartRepository()
        store = CartStore(repo)
        store.add(BAYAM)
        store.add(WORTEL)
        store.toggle_selected("wortel")
        assert repo.save_count == 3
        assert repo.saved == store.lines

    def test_double_add_gives_quantity_two(self):
        store = CartStore(FakeCartRepository())
        store.add(BAYAM)
        store.add(BAYAM)
        assert store.find("bayam").quantity == 2

    def test_dispatch_returns_new_lines(self):
        store = CartStore(FakeCartRepository())
        store.add(BAYAM)
        lines = store.dispatch(SetQuantity("bayam", 3))
        assert lines[0].quantity == 3

    def test_lines_is_a_copy(self):
        store = CartStore(FakeCartRepository())
        store.add(BAYAM)
        store.lines.clear()
        assert len(store.lines) == 1

    def test_selected_and_subtotal(self):
        store = CartStore(FakeCartRepository())
        store.add(BAYAM)
        store.add(WORTEL)
        store.toggle_selected("wortel")
        assert [line.id for line in store.selected()] == ["bayam"]
        assert store.subtotal() == Money(5000)

    def test_clear_selected_keeps_unselected(self):
        store = CartStore(FakeCartRepository())
        store.add(BAYAM)
        store.add(WORTEL)
        store.toggle_selected("wortel")
        store.clear_selected()
        assert [line.id for line in store.lines] == ["wortel"]


class TestReload:

    def test_cart_survives_restart(self):
        local = InMemoryLocalStore()
        store = CartStore(LocalCartRepository(local, "shop-cart"))
        store.add(BAYAM)
        store.add(BAYAM)
        store.add(WORTEL)
        store.toggle_selected("wortel")

        reloaded = CartStore(LocalCartRepository(local, "shop-cart"))
        assert reloaded.lines == store.lines

    def test_stored_cart_matches_after_every_action(self):
        local = InMemoryLocalStore()
        store = CartStore(LocalCartRepository(local, "shop-cart"))
        steps = [
            lambda: store.add(BAYAM),
            lambda: store.add(WORTEL),
            lambda: store.set_quantity("bayam", 4),
            lambda: store.toggle_selected("bayam"),
            lambda: store.set_quantity("wortel", 0),
            lambda: store.remove("bayam"),
            lambda: store.add(WORTEL),
        ]
        for step in steps:
            step()
            assert LocalCartRepository(local, "shop-cart").load() == store.lines
        assert [(line.id, line.quantity) for line in store.lines] == [("wortel", 1)]

    def test_failed_write_keeps_in_memory_cart(self):
        local = InMemoryLocalStore()
        local.fail_writes = True
        store = CartStore(LocalCartRepository(local, "shop-cart"))
        store.add(BAYAM)
        assert store.find("bayam").quantity == 1
        assert "shop-cart" not in local.data
