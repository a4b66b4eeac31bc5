"""Synchronous HTTP client for desktop callers of the KitchenWise API."""

import logging
from datetime import datetime
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30.0


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class KitchenWiseClient:
    """Thin wrapper around the KitchenWise HTTP API.

    Login and register store the bearer token on the client; every later call
    sends it. Use as a context manager or call ``close()`` when done.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.token = token
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "KitchenWiseClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    # --- Auth ---

    def register(
        self,
        email: str,
        password: str,
        name: str | None = None,
        preferred_cuisines: list[str] | None = None,
    ) -> dict:
        data = self._request(
            "POST",
            "/api/v1/auth/register",
            json={
                "email": email,
                "password": password,
                "name": name,
                "preferred_cuisines": preferred_cuisines or [],
            },
        )
        self.token = data["access_token"]
        return data["user"]

    def login(self, email: str, password: str) -> dict:
        data = self._request(
            "POST", "/api/v1/auth/login", json={"email": email, "password": password}
        )
        self.token = data["access_token"]
        return data["user"]

    def logout(self) -> None:
        if self.token:
            self._request("POST", "/api/v1/auth/logout")
        self.token = None

    def me(self) -> dict:
        return self._request("GET", "/api/v1/auth/me")

    # --- Pantry ---

    def list_pantry(self) -> list[dict]:
        return self._request("GET", "/api/v1/pantry")

    def search_pantry(self, search_term: str | None = None, category: str | None = None) -> list[dict]:
        params = {}
        if search_term:
            params["search_term"] = search_term
        if category:
            params["category"] = category
        return self._request("GET", "/api/v1/pantry/search", params=params)

    def pantry_stats(self) -> dict:
        return self._request("GET", "/api/v1/pantry/stats")

    def get_pantry_item(self, item_id: int) -> dict:
        return self._request("GET", f"/api/v1/pantry/{item_id}")

    def add_pantry_item(
        self,
        name: str,
        quantity: float,
        unit: str | None = None,
        category: str | None = None,
        expires_at: datetime | None = None,
    ) -> dict:
        payload = {"name": name, "quantity": quantity, "unit": unit, "category": category}
        if expires_at is not None:
            payload["expires_at"] = expires_at.isoformat()
        return self._request("POST", "/api/v1/pantry", json=payload)

    def update_pantry_item(self, item_id: int, **fields: Any) -> dict:
        """Patch an item; only the given fields are sent."""
        if isinstance(fields.get("expires_at"), datetime):
            fields["expires_at"] = fields["expires_at"].isoformat()
        return self._request("PUT", f"/api/v1/pantry/{item_id}", json=fields)

    def delete_pantry_item(self, item_id: int) -> dict:
        return self._request("DELETE", f"/api/v1/pantry/{item_id}")

    def consume(self, item_id: int, amount: float) -> dict:
        return self._request("POST", f"/api/v1/pantry/{item_id}/consume", json={"amount": amount})

    def consume_available(self, item_id: int, amount: float) -> dict:
        return self._request(
            "POST", f"/api/v1/pantry/{item_id}/consume-available", json={"amount": amount}
        )

    def consume_ingredients(self, ingredients: list[str]) -> dict:
        return self._request(
            "POST", "/api/v1/pantry/consume-ingredients", json={"ingredients": ingredients}
        )

    # --- Recipes ---

    def generate_recipes(
        self,
        available_ingredients: list[str] | None = None,
        cuisine: str | None = None,
        difficulty: str | None = None,
        max_recipes: int = 5,
    ) -> list[dict]:
        return self._request(
            "POST",
            "/api/v1/recipes/generate",
            json={
                "available_ingredients": available_ingredients,
                "cuisine_filter": cuisine,
                "difficulty_filter": difficulty,
                "max_recipes": max_recipes,
            },
        )

    def cook(
        self,
        recipe_name: str | None = None,
        ingredients: list[str] | None = None,
        recipe_id: int | None = None,
    ) -> dict:
        return self._request(
            "POST",
            "/api/v1/recipes/cook",
            json={"recipe_name": recipe_name, "recipe_id": recipe_id, "ingredients": ingredients},
        )

    # --- Helpers ---

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._http.request(method, path, headers=self._headers(), **kwargs)
        if response.is_success:
            return response.json() if response.content else None

        try:
            payload = response.json()
        except ValueError:
            payload = None
        detail = payload.get("detail", response.text) if isinstance(payload, dict) else response.text
        logger.warning(f"{method} {path} failed with {response.status_code}: {detail}")
        raise ApiError(response.status_code, detail)
