"""Open Food Facts product lookup client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class FoodFactsClient(Protocol):
    """Interface for barcode product lookups."""

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Return the raw product payload, or None when no product matches."""


@dataclass
class HttpxFoodFactsClient(FoodFactsClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Fetch product nutriments by barcode."""
        url = f"{self.base_url}/api/v0/product/{barcode}.json"
        response = await self.http_client.get(url, timeout=15)
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise httpx.DecodingError(
                "Product payload is not JSON", request=response.request
            ) from exc
        product = payload.get("product") if isinstance(payload, dict) else None
        if not isinstance(product, dict) or payload.get("status") == 0:
            return None
        return product

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
