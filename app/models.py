from enum import Enum

from pydantic import BaseModel, Field


class RecordKind(str, Enum):
    SELLER = "seller"
    PRODUCT = "product"
    SALES_HEADER = "sales_header"
    SALE_LINE = "sale_line"


class Seller(BaseModel):
    document_type: str
    document_id: str = Field(min_length=1)
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Product(BaseModel):
    product_id: str = Field(min_length=1)
    name: str
    unit_price: int = Field(ge=0)


class SalesHeader(BaseModel):
    document_type: str
    document_id: str = Field(min_length=1)


class SaleLine(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=0)


class SellerSales(BaseModel):
    """One seller's sales file: the identifying header plus its sale lines."""
    document_type: str
    document_id: str
    lines: list[SaleLine] = []


# ── Report rows ──────────────────────────────────────────────────────────────

class SellerRevenueRow(BaseModel):
    full_name: str
    revenue: int


class ProductQuantityRow(BaseModel):
    product_id: str
    name: str
    unit_price: int
    quantity: int
