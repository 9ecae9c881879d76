"""ProductsClient abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import (
    Company,
    CreateProductRequest,
    HealthStatus,
    Product,
    ProductPage,
    ProductsQuery,
    UpdateProductRequest,
)


class ProductsClient(ABC):
    """Client for the products service."""

    @abstractmethod
    async def list_products(self, query: ProductsQuery | None = None) -> list[Product]:
        """List products matching ``query``."""
        ...

    @abstractmethod
    async def list_products_page(self, query: ProductsQuery | None = None) -> ProductPage:
        """List products together with the server-side total."""
        ...

    @abstractmethod
    async def get_product(self, product_id: str) -> Product: ...

    @abstractmethod
    async def search_products(self, term: str) -> list[Product]: ...

    @abstractmethod
    async def create_product(self, request: CreateProductRequest) -> Product: ...

    @abstractmethod
    async def update_product(self, product_id: str, request: UpdateProductRequest) -> Product: ...

    @abstractmethod
    async def delete_product(self, product_id: str) -> None: ...

    @abstractmethod
    async def list_companies(self) -> list[Company]: ...

    @abstractmethod
    async def get_company(self, company_id: str) -> Company: ...

    @abstractmethod
    async def health_check(self) -> HealthStatus: ...
