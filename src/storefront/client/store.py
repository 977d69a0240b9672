"""Client-side session, catalogue and cart state.

A ``Store`` is an ordinary object owned by whoever drives the UI; there is
no module-level instance. Observers subscribe to a topic and are called
synchronously, in subscription order, after every change to it.

Carts are persisted per user to a JSON file: the key is ``cart_<user id>``
for a signed-in user and ``cart`` for a guest.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Protocol

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

TOPICS = ("user", "products", "cart")
GUEST_CART_KEY = "cart"


class Observer(Protocol):
    def __call__(self, topic: str, store: "Store") -> None: ...


@dataclass
class CartLine:
    product_id: str
    title: str
    price: float
    quantity: int = 1
    image: str | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass
class Session:
    user: dict[str, Any]
    token: str

    @property
    def user_id(self) -> str:
        return str(self.user.get("id"))

    @property
    def is_admin(self) -> bool:
        return bool(self.user.get("isAdmin")) or self.user.get("role") == "admin"


class CartStorage:
    """Key/value persistence for carts, backed by a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("cart_storage_corrupt", path=str(self.path))
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, key: str) -> list[dict[str, Any]]:
        lines = self._read_all().get(key, [])
        return lines if isinstance(lines, list) else []

    def save(self, key: str, lines: list[dict[str, Any]]) -> None:
        data = self._read_all()
        data[key] = lines
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@dataclass
class Store:
    storage: CartStorage
    session: Session | None = None
    products: list[dict[str, Any]] = field(default_factory=list)
    cart: list[CartLine] = field(default_factory=list)
    last_order: dict[str, Any] | None = None
    _observers: dict[str, list[Observer]] = field(default_factory=lambda: {topic: [] for topic in TOPICS})

    def __post_init__(self) -> None:
        self.cart = self._load_cart()

    # --- observers ---

    def subscribe(self, topic: str, observer: Observer):
        """Register ``observer`` for ``topic`` and return a callable that unsubscribes it."""
        if topic not in self._observers:
            raise ValueError(f"Unknown topic: {topic}")
        self._observers[topic].append(observer)

        def unsubscribe() -> None:
            if observer in self._observers[topic]:
                self._observers[topic].remove(observer)

        return unsubscribe

    def notify(self, topic: str) -> None:
        for observer in list(self._observers[topic]):
            observer(topic, self)

    # --- session ---

    @property
    def user(self) -> dict[str, Any] | None:
        return self.session.user if self.session else None

    @property
    def is_admin(self) -> bool:
        return bool(self.session and self.session.is_admin)

    def _cart_key(self) -> str:
        return f"cart_{self.session.user_id}" if self.session else GUEST_CART_KEY

    def set_session(self, user: dict[str, Any], token: str) -> None:
        """Sign ``user`` in. Whatever cart was on screen is dropped and the user's own cart is loaded."""
        self.session = Session(user=user, token=token)
        self.cart = self._load_cart()
        self.notify("user")
        self.notify("cart")

    def logout(self) -> None:
        self.session = None
        self.cart = []
        self.last_order = None
        self.notify("user")
        self.notify("cart")

    # --- catalogue ---

    def set_products(self, products: list[dict[str, Any]]) -> None:
        self.products = list(products)
        self.notify("products")

    # --- cart ---

    def _find_line(self, product_id: str) -> CartLine | None:
        return next((line for line in self.cart if line.product_id == str(product_id)), None)

    def _cart_changed(self) -> None:
        self.storage.save(self._cart_key(), [asdict(line) for line in self.cart])
        self.notify("cart")

    def _load_cart(self) -> list[CartLine]:
        lines = []
        for raw in self.storage.load(self._cart_key()):
            try:
                lines.append(CartLine(**raw))
            except TypeError:
                logger.warning("cart_line_discarded", line=raw)
        return lines

    def add_to_cart(self, product: dict[str, Any], quantity: int = 1) -> None:
        """Add ``product`` to the cart, or bump its quantity when it is already there."""
        product_id = str(product["id"])
        line = self._find_line(product_id)
        if line:
            line.quantity += quantity
        else:
            images = product.get("images") or []
            self.cart.append(
                CartLine(
                    product_id=product_id,
                    title=product.get("title", ""),
                    price=float(product.get("price", 0)),
                    quantity=quantity,
                    image=images[0] if images else None,
                )
            )
        self._cart_changed()

    def remove_from_cart(self, product_id: str) -> None:
        self.cart = [line for line in self.cart if line.product_id != str(product_id)]
        self._cart_changed()

    def increase_quantity(self, product_id: str) -> None:
        line = self._find_line(product_id)
        if line:
            line.quantity += 1
            self._cart_changed()

    def decrease_quantity(self, product_id: str) -> None:
        line = self._find_line(product_id)
        if line and line.quantity > 1:
            line.quantity -= 1
            self._cart_changed()

    def total_price(self) -> float:
        return sum(line.line_total for line in self.cart)

    def clear_cart(self) -> None:
        self.cart = []
        self._cart_changed()

    def record_order(self, order: dict[str, Any]) -> None:
        self.last_order = order
        self.clear_cart()
