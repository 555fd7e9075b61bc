from weddingplanner.storefront.cart import Cart, CartItem
from weddingplanner.storefront.navigation import Navigator
from weddingplanner.storefront.notifications import Notifier
from weddingplanner.storefront.storage import BrowserStorage, KeyValueStore


class TestCart:
    def test_duplicate_id_and_type_is_ignored(self):
        cart = Cart()

        assert cart.add_item(CartItem(id=1, name="Bouquet", price=2500)) is True
        assert cart.add_item(CartItem(id=1, name="Bouquet again", price=1)) is False

        assert len(cart) == 1
        assert cart.items[0].name == "Bouquet"

    def test_same_id_different_type_is_kept(self):
        cart = Cart()
        cart.add_item(CartItem(id=1, name="Bouquet", price=2500, type="service"))
        cart.add_item(CartItem(id=1, name="Venue", price=9000, type="venue"))

        assert len(cart) == 2
        assert cart.total == 11500

    def test_remove_and_clear(self):
        cart = Cart([CartItem(id=1, name="A", price=10), CartItem(id=2, name="B", price=20)])

        assert cart.remove_item(1) is True
        assert cart.remove_item(1) is False
        assert [i.id for i in cart.items] == [2]

        cart.clear()
        assert cart.is_empty
        assert cart.total == 0

    def test_items_is_a_copy(self):
        cart = Cart([CartItem(id=1, name="A", price=10)])

        cart.items.clear()

        assert len(cart) == 1


class TestStorage:
    def test_values_are_stored_as_strings(self):
        store = KeyValueStore()
        store.set_item("payment_id", 42)

        assert store.get_item("payment_id") == "42"

    def test_missing_key_is_none(self):
        assert KeyValueStore().get_item("token") is None

    def test_get_any_prefers_local_then_session(self):
        storage = BrowserStorage()
        storage.session.set_item("token", "session-token")
        assert storage.get_any("token") == "session-token"

        storage.local.set_item("token", "local-token")
        assert storage.get_any("token") == "local-token"

    def test_remove_and_clear(self):
        store = KeyValueStore({"a": "1", "b": "2"})
        store.remove_item("a")
        store.remove_item("missing")
        assert "a" not in store

        store.clear()
        assert store.get_item("b") is None


class TestNotifierAndNavigator:
    def test_notifier_records_levels(self):
        notifier = Notifier()
        notifier.info("hello")
        notifier.error("boom")

        assert notifier.messages() == ["hello", "boom"]
        assert notifier.messages("error") == ["boom"]

    def test_navigator_tracks_history(self):
        navigator = Navigator()
        navigator.navigate("/login")
        navigator.redirect("https://checkout.chapa.co/abc")

        assert navigator.history == ["/", "/login", "https://checkout.chapa.co/abc"]
        assert navigator.location == "https://checkout.chapa.co/abc"
        assert navigator.redirected_to == "https://checkout.chapa.co/abc"
