"""Products service data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeVar

E = TypeVar("E", bound=StrEnum)


class ProductStatus(StrEnum):
    """Product lifecycle status."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DISCONTINUED = "DISCONTINUED"


class ProductCategory(StrEnum):
    PRODUCT = "PRODUCT"
    SERVICE = "SERVICE"
    DIGITAL_SERVICE = "DIGITAL_SERVICE"
    CONSULTATION = "CONSULTATION"
    RENTAL = "RENTAL"
    OTHER = "OTHER"


class TaxType(StrEnum):
    """Spanish VAT bands."""

    IVA_GENERAL = "IVA_GENERAL"
    IVA_REDUCED = "IVA_REDUCED"
    IVA_SUPER_REDUCED = "IVA_SUPER_REDUCED"
    IVA_EXEMPT = "IVA_EXEMPT"
    SPECIAL_TAX = "SPECIAL_TAX"


class UnitType(StrEnum):
    UNIT = "UNIT"
    HOUR = "HOUR"
    DAY = "DAY"
    MONTH = "MONTH"
    METER = "METER"
    KILOGRAM = "KILOGRAM"
    LITER = "LITER"
    PACKAGE = "PACKAGE"


def _enum(cls: type[E], value: Any, default: E) -> E:
    try:
        return cls(value)
    except ValueError:
        return default


@dataclass
class Product:
    """Product or service offered by a company."""

    id: str
    name: str
    unit_price: float
    company_id: str = ""
    code: str = ""
    description: str | None = None
    currency: str = "USD"
    status: ProductStatus = ProductStatus.DRAFT
    category: ProductCategory = ProductCategory.OTHER
    unit_type: UnitType = UnitType.UNIT
    tax_type: TaxType = TaxType.IVA_GENERAL
    tax_rate: float = 21.0
    barcode: str | None = None
    stock_quantity: int = 0
    minimum_stock: int = 0
    track_stock: bool = False
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Product:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            unit_price=float(data.get("unitPrice", 0)),
            company_id=data.get("companyId", ""),
            code=data.get("code", ""),
            description=data.get("description"),
            currency=data.get("currency") or "USD",
            status=_enum(ProductStatus, data.get("status"), ProductStatus.DRAFT),
            category=_enum(ProductCategory, data.get("category"), ProductCategory.OTHER),
            unit_type=_enum(UnitType, data.get("unitType"), UnitType.UNIT),
            tax_type=_enum(TaxType, data.get("taxType"), TaxType.IVA_GENERAL),
            tax_rate=float(data.get("taxRate", 21)),
            barcode=data.get("barcode"),
            stock_quantity=int(data.get("stockQuantity") or 0),
            minimum_stock=int(data.get("minimumStock") or 0),
            track_stock=bool(data.get("trackStock", False)),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )


@dataclass
class Company:
    """Company owning products."""

    id: str
    name: str
    description: str | None = None
    tax_id: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = ""
    email: str = ""
    phone: str = ""
    is_active: bool = True
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Company:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description"),
            tax_id=data.get("taxId", ""),
            address=data.get("address", ""),
            city=data.get("city", ""),
            postal_code=data.get("postalCode", ""),
            country=data.get("country", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            is_active=bool(data.get("isActive", True)),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class CreateProductRequest:
    """Product creation payload."""

    name: str
    unit_price: float
    company_id: str
    code: str
    category: ProductCategory = ProductCategory.OTHER
    description: str | None = None
    currency: str = "USD"
    unit_type: UnitType = UnitType.UNIT
    tax_type: TaxType = TaxType.IVA_GENERAL
    tax_rate: float = 21.0
    barcode: str | None = None
    track_stock: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "unitPrice": self.unit_price,
            "companyId": self.company_id,
            "code": self.code,
            "category": str(self.category),
            "currency": self.currency,
            "unitType": str(self.unit_type),
            "taxType": str(self.tax_type),
            "taxRate": self.tax_rate,
            "trackStock": self.track_stock,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.barcode is not None:
            data["barcode"] = self.barcode
        return data


_UPDATE_FIELDS = {
    "name": "name",
    "description": "description",
    "unit_price": "unitPrice",
    "company_id": "companyId",
    "code": "code",
    "category": "category",
    "currency": "currency",
    "unit_type": "unitType",
    "tax_type": "taxType",
    "tax_rate": "taxRate",
    "barcode": "barcode",
    "track_stock": "trackStock",
    "status": "status",
}


@dataclass
class UpdateProductRequest:
    """Partial product update. Fields left as None are not sent."""

    name: str | None = None
    description: str | None = None
    unit_price: float | None = None
    company_id: str | None = None
    code: str | None = None
    category: ProductCategory | None = None
    currency: str | None = None
    unit_type: UnitType | None = None
    tax_type: TaxType | None = None
    tax_rate: float | None = None
    barcode: str | None = None
    track_stock: bool | None = None
    status: ProductStatus | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for attr, key in _UPDATE_FIELDS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            data[key] = str(value) if isinstance(value, StrEnum) else value
        return data


@dataclass
class ProductsQuery:
    """Filters for the product listing."""

    company_id: str | None = None
    search: str | None = None
    status: ProductStatus | None = None
    limit: int | None = None
    offset: int | None = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "companyId": self.company_id,
            "search": self.search,
            "status": str(self.status) if self.status is not None else None,
            "limit": self.limit,
            "offset": self.offset,
        }
        return {k: v for k, v in params.items() if v is not None}


@dataclass
class ProductPage:
    """A product listing with the total reported by the server."""

    items: list[Product] = field(default_factory=list)
    total: int = 0


@dataclass
class HealthStatus:
    status: str
    timestamp: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealthStatus:
        return cls(status=data.get("status", ""), timestamp=data.get("timestamp", ""))


def unwrap_list(data: Any, *fields: str) -> tuple[list[Any], int]:
    """Normalize a list response.

    Accepts a bare array or an envelope such as ``{"products": [...], "total": N}``
    and returns the items with the total count.
    """
    if isinstance(data, list):
        return data, len(data)
    if isinstance(data, dict):
        for name in (*fields, "items"):
            items = data.get(name)
            if isinstance(items, list):
                total = data.get("total")
                return items, int(total) if isinstance(total, (int, float)) else len(items)
    return [], 0
