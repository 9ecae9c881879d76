"""Products service HTTP client."""

from __future__ import annotations

import itertools
import os
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
import structlog

from .client import ProductsClient
from .config import ClientConfig
from .dedup import DedupCache, request_key
from .exceptions import ApiError
from .models import (
    Company,
    CreateProductRequest,
    HealthStatus,
    Product,
    ProductPage,
    ProductsQuery,
    UpdateProductRequest,
    unwrap_list,
)
from .normalizer import normalize_error
from .retry import RetryExecutor

T = TypeVar("T")

logger = structlog.stdlib.get_logger(__name__)

PRODUCTS_PATH = "/products"
COMPANIES_PATH = "/companies"
HEALTH_PATH = "/health"


def _path(base: str, resource_id: str) -> str:
    return f"{base}/{quote(resource_id, safe='')}"


def _convert(fn: Callable[[Any], T], data: Any) -> T:
    try:
        return fn(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise normalize_error(e) from e


class HttpProductsClient(ProductsClient):
    """Products client over httpx.

    Reads are deduplicated, then retried. Writes skip deduplication but are
    retried. Every failure surfaces as :class:`ApiError`.
    """

    def __init__(
        self,
        config: ClientConfig,
        retry_executor: RetryExecutor | None = None,
        dedup_cache: DedupCache | None = None,
    ) -> None:
        self._config = config
        self._retry = (
            retry_executor if retry_executor is not None else RetryExecutor(config.retry_policy())
        )
        self._dedup = (
            dedup_cache if dedup_cache is not None else DedupCache(window_ms=config.dedup_window_ms)
        )
        self._auth_token: str | None = None
        self._request_ids = itertools.count(1)
        self._headers: dict[str, str] = {
            "Content-Type": "application/json",
            "X-Client-Version": config.client_version,
            **config.headers,
        }

    # auth

    def set_auth_token(self, token: str) -> None:
        self._auth_token = token

    def clear_auth_token(self) -> None:
        self._auth_token = None

    def _auth_token_value(self) -> str | None:
        if self._auth_token:
            return self._auth_token
        return os.environ.get(self._config.token_env_var) or None

    # transport

    def _make_client(self) -> httpx.AsyncClient:
        headers = dict(self._headers)
        token = self._auth_token_value()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=headers,
            timeout=self._config.timeout_seconds,
        )

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        log = logger.bind(request_id=next(self._request_ids), method=method, path=path)
        log.debug("sending request", params=params)
        try:
            async with self._make_client() as client:

                async def attempt() -> httpx.Response:
                    resp = await client.request(method, path, params=params, json=json)
                    resp.raise_for_status()
                    return resp

                resp = await self._retry.run(attempt, description=f"{method} {path}")
            if not resp.content:
                return None
            return resp.json()
        except ApiError as e:
            log.warning("request failed", code=e.code, status=e.status)
            raise
        except Exception as e:
            error = normalize_error(e)
            log.warning("request failed", code=error.code)
            raise error from e

    async def _read(self, path: str, params: dict[str, Any] | None = None) -> Any:
        key = request_key("GET", path, params)
        return await self._dedup.run(key, lambda: self._send("GET", path, params=params))

    def clear_cache(self) -> None:
        """Drop all pending dedup entries."""
        self._dedup.clear()

    # products

    async def list_products(self, query: ProductsQuery | None = None) -> list[Product]:
        page = await self.list_products_page(query)
        return page.items

    async def list_products_page(self, query: ProductsQuery | None = None) -> ProductPage:
        params = query.to_params() if query is not None else {}
        data = await self._read(PRODUCTS_PATH, params or None)
        items, total = unwrap_list(data, "products")
        return ProductPage(items=[_convert(Product.from_dict, p) for p in items], total=total)

    async def get_product(self, product_id: str) -> Product:
        data = await self._read(_path(PRODUCTS_PATH, product_id))
        return _convert(Product.from_dict, data)

    async def search_products(self, term: str) -> list[Product]:
        data = await self._read(f"{PRODUCTS_PATH}/search", {"q": term})
        items, _ = unwrap_list(data, "products")
        return [_convert(Product.from_dict, p) for p in items]

    async def create_product(self, request: CreateProductRequest) -> Product:
        data = await self._send("POST", PRODUCTS_PATH, json=request.to_dict())
        return _convert(Product.from_dict, data)

    async def update_product(self, product_id: str, request: UpdateProductRequest) -> Product:
        data = await self._send("PATCH", _path(PRODUCTS_PATH, product_id), json=request.to_dict())
        return _convert(Product.from_dict, data)

    async def delete_product(self, product_id: str) -> None:
        await self._send("DELETE", _path(PRODUCTS_PATH, product_id))

    # companies

    async def list_companies(self) -> list[Company]:
        data = await self._read(COMPANIES_PATH)
        items, _ = unwrap_list(data, "companies")
        return [_convert(Company.from_dict, c) for c in items]

    async def get_company(self, company_id: str) -> Company:
        data = await self._read(_path(COMPANIES_PATH, company_id))
        return _convert(Company.from_dict, data)

    async def health_check(self) -> HealthStatus:
        data = await self._send("GET", HEALTH_PATH)
        return _convert(HealthStatus.from_dict, data)
