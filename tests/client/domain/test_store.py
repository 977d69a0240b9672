import pytest
from storefront.client.store import CartLine, CartStorage, Store

WIDGET = {"id": "p-1", "title": "Widget", "price": 10.0, "images": ["/uploads/1-widget.png"]}
GADGET = {"id": "p-2", "title": "Gadget", "price": 2.5, "images": []}


@pytest.fixture()
def storage(tmp_path):
    return CartStorage(tmp_path / "carts.json")


@pytest.fixture()
def store(storage):
    return Store(storage=storage)


class TestObservers:
    def test_notified_in_subscription_order(self, store):
        calls = []
        store.subscribe("cart", lambda topic, s: calls.append(("first", topic)))
        store.subscribe("cart", lambda topic, s: calls.append(("second", topic)))

        store.add_to_cart(WIDGET)

        assert calls == [("first", "cart"), ("second", "cart")]

    def test_only_matching_topic(self, store):
        calls = []
        store.subscribe("products", lambda topic, s: calls.append(topic))

        store.add_to_cart(WIDGET)
        store.set_products([WIDGET, GADGET])

        assert calls == ["products"]
        assert store.products == [WIDGET, GADGET]

    def test_unsubscribe(self, store):
        calls = []
        unsubscribe = store.subscribe("cart", lambda topic, s: calls.append(topic))
        unsubscribe()
        unsubscribe()

        store.add_to_cart(WIDGET)
        assert calls == []

    def test_unknown_topic(self, store):
        with pytest.raises(ValueError):
            store.subscribe("weather", lambda topic, s: None)


class TestCart:
    def test_add_creates_line(self, store):
        store.add_to_cart(WIDGET, quantity=2)
        assert store.cart == [
            CartLine(product_id="p-1", title="Widget", price=10.0, quantity=2, image="/uploads/1-widget.png")
        ]

    def test_add_existing_increments(self, store):
        store.add_to_cart(WIDGET)
        store.add_to_cart(WIDGET)
        assert len(store.cart) == 1
        assert store.cart[0].quantity == 2

    def test_quantity_never_drops_below_one(self, store):
        store.add_to_cart(WIDGET)
        store.decrease_quantity("p-1")
        assert store.cart[0].quantity == 1

        store.increase_quantity("p-1")
        store.increase_quantity("p-1")
        store.decrease_quantity("p-1")
        assert store.cart[0].quantity == 2

    def test_remove(self, store):
        store.add_to_cart(WIDGET)
        store.add_to_cart(GADGET)
        store.remove_from_cart("p-1")
        assert [line.product_id for line in store.cart] == ["p-2"]

    def test_total(self, store):
        store.add_to_cart(WIDGET, quantity=2)
        store.add_to_cart(GADGET, quantity=3)
        assert store.total_price() == 27.5

    def test_record_order_clears_cart(self, store):
        store.add_to_cart(WIDGET)
        store.record_order({"id": "o-1"})
        assert store.cart == []
        assert store.last_order == {"id": "o-1"}


class TestPersistence:
    def test_guest_cart_survives_restart(self, storage):
        Store(storage=storage).add_to_cart(WIDGET)
        assert [line.product_id for line in Store(storage=storage).cart] == ["p-1"]

    def test_carts_are_kept_per_user(self, storage):
        store = Store(storage=storage)
        store.set_session({"id": "u-1", "role": "user"}, "token-1")
        store.add_to_cart(WIDGET)

        store.set_session({"id": "u-2", "role": "user"}, "token-2")
        assert store.cart == []
        store.add_to_cart(GADGET)

        store.set_session({"id": "u-1", "role": "user"}, "token-1")
        assert [line.product_id for line in store.cart] == ["p-1"]

    def test_logout_empties_visible_cart_only(self, storage):
        store = Store(storage=storage)
        store.set_session({"id": "u-1"}, "token")
        store.add_to_cart(WIDGET)
        store.logout()

        assert store.cart == []
        assert store.session is None
        assert storage.load("cart_u-1")[0]["product_id"] == "p-1"

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "carts.json"
        path.write_text("{not json", encoding="utf-8")
        assert Store(storage=CartStorage(path)).cart == []


class TestSession:
    def test_admin_flag(self, store):
        store.set_session({"id": "u-1", "isAdmin": True}, "token")
        assert store.is_admin
        assert store.user == {"id": "u-1", "isAdmin": True}

    def test_session_notifies_user_and_cart(self, store):
        topics = []
        store.subscribe("user", lambda topic, s: topics.append(topic))
        store.subscribe("cart", lambda topic, s: topics.append(topic))

        store.set_session({"id": "u-1"}, "token")
        assert topics == ["user", "cart"]
