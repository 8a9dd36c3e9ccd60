import logging
from typing import Iterable, Optional

from app.models import Product, Seller

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown Product"
UNKNOWN_PRODUCT_PRICE = 0


class ReferenceIndex:
    """In-memory seller and product tables, kept in file order."""

    def __init__(self) -> None:
        self.sellers: dict[str, Seller] = {}
        self.products: dict[str, Product] = {}

    # ── writes ────────────────────────────────────────────────────────────────

    def add_seller(self, seller: Seller) -> None:
        if seller.document_id in self.sellers:
            logger.warning("Duplicate seller id %s, keeping the last record", seller.document_id)
        self.sellers[seller.document_id] = seller

    def add_product(self, product: Product) -> None:
        if product.product_id in self.products:
            logger.warning("Duplicate product id %s, keeping the last record", product.product_id)
        self.products[product.product_id] = product

    # ── reads ─────────────────────────────────────────────────────────────────

    def get_seller(self, document_id: str) -> Optional[Seller]:
        return self.sellers.get(document_id)

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    def list_sellers(self) -> list[Seller]:
        return list(self.sellers.values())

    def list_products(self) -> list[Product]:
        return list(self.products.values())

    # Lookups degrade to a fallback instead of raising, so a sale line with an
    # unknown product still shows up as zero revenue.

    def lookup_price(self, product_id: str) -> int:
        product = self.products.get(product_id)
        if product is None:
            return UNKNOWN_PRODUCT_PRICE
        return product.unit_price

    def lookup_name(self, product_id: str) -> str:
        product = self.products.get(product_id)
        if product is None:
            return UNKNOWN_PRODUCT_NAME
        return product.name


def build_seller_index(sellers: Iterable[Seller], index: Optional[ReferenceIndex] = None) -> ReferenceIndex:
    index = index or ReferenceIndex()
    for s in sellers:
        index.add_seller(s)
    return index


def build_product_index(products: Iterable[Product], index: Optional[ReferenceIndex] = None) -> ReferenceIndex:
    index = index or ReferenceIndex()
    for p in products:
        index.add_product(p)
    return index
