"""Vende products service client."""

from .client import ProductsClient
from .config import ClientConfig, LogSection
from .dedup import DedupCache, PendingRequestEntry, request_key
from .exceptions import ApiError, ApiErrorCodes, ConfigError, ConfigErrorCodes, ErrorMessages
from .export import export_filename, products_to_csv
from .failures import Failure, HttpFailure, NetworkFailure, UnknownFailure, classify
from .http_client import HttpProductsClient
from .loader import load, load_from_env
from .logger import configure_logging, new_logger
from .models import (
    Company,
    CreateProductRequest,
    HealthStatus,
    Product,
    ProductCategory,
    ProductPage,
    ProductsQuery,
    ProductStatus,
    TaxType,
    UnitType,
    UpdateProductRequest,
)
from .normalizer import normalize_error
from .retry import RetryContext, RetryExecutor, RetryPolicy, is_retryable, with_retry

__all__ = [
    "ApiError",
    "ApiErrorCodes",
    "ClientConfig",
    "Company",
    "ConfigError",
    "ConfigErrorCodes",
    "CreateProductRequest",
    "DedupCache",
    "ErrorMessages",
    "Failure",
    "HealthStatus",
    "HttpFailure",
    "HttpProductsClient",
    "LogSection",
    "NetworkFailure",
    "PendingRequestEntry",
    "Product",
    "ProductCategory",
    "ProductPage",
    "ProductStatus",
    "ProductsClient",
    "ProductsQuery",
    "RetryContext",
    "RetryExecutor",
    "RetryPolicy",
    "TaxType",
    "UnitType",
    "UnknownFailure",
    "UpdateProductRequest",
    "classify",
    "configure_logging",
    "export_filename",
    "is_retryable",
    "load",
    "load_from_env",
    "new_logger",
    "normalize_error",
    "products_to_csv",
    "request_key",
    "with_retry",
]
