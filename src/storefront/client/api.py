"""HTTP client for the storefront API."""

from typing import Any

import httpx

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"


class ApiError(Exception):
    """Non-2xx response from the API, carrying the server's ``message``."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class StorefrontClient:
    """Thin wrapper over ``httpx.Client``.

    Pass ``transport`` (for example ``httpx.MockTransport``) or a ready
    ``http`` client to talk to something other than a live server.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        http: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.token = token
        self.http = http or httpx.Client(base_url=base_url, transport=transport, timeout=timeout)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "StorefrontClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self.http.request(method, path, headers=headers, **kwargs)
        try:
            data = response.json()
        except ValueError:
            raise ApiError(response.status_code, f"Server error: {response.text[:100]}") from None

        if response.is_error:
            message = data.get("message") if isinstance(data, dict) else None
            logger.debug("api_error", method=method, path=path, status=response.status_code, message=message)
            raise ApiError(response.status_code, message or "API request failed")
        return data

    # --- auth ---

    def register(self, name: str, email: str, password: str, address: str | None = None) -> dict:
        payload = {"name": name, "email": email, "password": password, "address": address}
        return self._request("POST", "/users/register", json=payload)

    def login(self, email: str, password: str) -> dict:
        return self._request("POST", "/users/login", json={"email": email, "password": password})

    # --- products ---

    def list_products(self) -> list[dict]:
        return self._request("GET", "/products")

    def get_product(self, product_id: str) -> dict:
        return self._request("GET", f"/products/{product_id}")

    def create_product(self, fields: dict, image: tuple[str, bytes] | None = None) -> dict:
        """Create a product; ``image`` is ``(filename, content)`` and switches the request to multipart."""
        if image:
            data = {key: str(value) for key, value in fields.items() if value is not None}
            return self._request("POST", "/products", data=data, files={"image": image})
        return self._request("POST", "/products", json=fields)

    def update_product(self, product_id: str, fields: dict, image: tuple[str, bytes] | None = None) -> dict:
        if image:
            data = {key: str(value) for key, value in fields.items() if value is not None}
            return self._request("PUT", f"/products/{product_id}", data=data, files={"image": image})
        return self._request("PUT", f"/products/{product_id}", json=fields)

    def delete_product(self, product_id: str) -> dict:
        return self._request("DELETE", f"/products/{product_id}")

    # --- brands ---

    def list_brands(self) -> list[dict]:
        return self._request("GET", "/brands")

    def get_brand_by_slug(self, slug: str) -> dict:
        return self._request("GET", f"/brands/slug/{slug}")

    def create_brand(self, fields: dict) -> dict:
        return self._request("POST", "/brands", json=fields)

    # --- orders ---

    def create_order(self, payload: dict) -> dict:
        return self._request("POST", "/orders", json=payload)

    def checkout(self, order_id: str, payment_method: str) -> dict:
        return self._request("POST", "/orders/checkout", json={"orderId": order_id, "paymentMethod": payment_method})

    def list_orders(self, user_id: str | None = None) -> list[dict]:
        params = {"userId": user_id} if user_id else None
        return self._request("GET", "/orders", params=params)

    def get_order(self, order_id: str) -> dict:
        return self._request("GET", f"/orders/{order_id}")

    def update_order_status(self, order_id: str, status: str) -> dict:
        return self._request("PUT", f"/orders/{order_id}/status", json={"status": status})
