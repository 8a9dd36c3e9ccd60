import logging
from typing import Iterable, Optional, TypeVar

from app.config import ReportSettings
from app.errors import ReportError
from app.files import load_all_sales, load_reference_index
from app.models import ProductQuantityRow, SellerRevenueRow, SellerSales
from app.report import (
    format_product_quantity,
    format_seller_revenue,
    product_quantity_rows,
    seller_revenue_rows,
    write_report,
)
from app.store import ReferenceIndex

logger = logging.getLogger(__name__)

K = TypeVar("K")


# ── Aggregation ──────────────────────────────────────────────────────────────

def aggregate_revenue(index: ReferenceIndex, sales: Iterable[SellerSales]) -> dict[str, int]:
    """Revenue per seller document id: sum of quantity * unit price."""
    revenue: dict[str, int] = {}
    for seller_sales in sales:
        total = 0
        for line in seller_sales.lines:
            if line.product_id not in index.products:
                logger.warning(
                    "Seller %s sold unknown product %s, counted at price 0",
                    seller_sales.document_id, line.product_id,
                )
            total += line.quantity * index.lookup_price(line.product_id)
        revenue[seller_sales.document_id] = revenue.get(seller_sales.document_id, 0) + total
    return revenue


def _seller_quantities(seller_sales: SellerSales) -> dict[str, int]:
    partial: dict[str, int] = {}
    for line in seller_sales.lines:
        partial[line.product_id] = partial.get(line.product_id, 0) + line.quantity
    return partial


def merge_totals(base: dict[K, int], *partials: dict[K, int]) -> dict[K, int]:
    """Sum partial maps into a copy of `base`. Keys absent from `base` are dropped."""
    merged = dict(base)
    for partial in partials:
        for key, value in partial.items():
            if key not in merged:
                logger.warning("No accumulator for %s, %d units not counted", key, value)
                continue
            merged[key] += value
    return merged


def aggregate_quantities(index: ReferenceIndex, sales: Iterable[SellerSales]) -> dict[str, int]:
    """Units sold per product id, with every known product present (possibly 0)."""
    zero = {product_id: 0 for product_id in index.products}
    return merge_totals(zero, *(_seller_quantities(s) for s in sales))


def revenue_by_full_name(index: ReferenceIndex, revenue: dict[str, int]) -> dict[str, int]:
    """Re-key id totals by seller full name; namesakes are summed together."""
    by_name: dict[str, int] = {}
    for document_id, total in revenue.items():
        name = _seller_name(index, document_id)
        by_name[name] = by_name.get(name, 0) + total
    return by_name


def _seller_name(index: ReferenceIndex, document_id: str) -> str:
    seller = index.get_seller(document_id)
    return seller.full_name if seller else document_id


# ── Ranking ──────────────────────────────────────────────────────────────────

def rank(totals: dict[K, int]) -> list[tuple[K, int]]:
    # sorted() is stable, so equal totals keep the table's file order
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


# ── Reports ──────────────────────────────────────────────────────────────────

def build_seller_revenue_report(
    settings: ReportSettings,
    index: Optional[ReferenceIndex] = None,
    sales: Optional[list[SellerSales]] = None,
) -> list[SellerRevenueRow]:
    index = index or load_reference_index(settings)
    sales = sales if sales is not None else load_all_sales(settings, index)
    revenue = aggregate_revenue(index, sales)

    if settings.merge_duplicate_names:
        ranked = rank(revenue_by_full_name(index, revenue))
    else:
        ranked = [(_seller_name(index, doc_id), total) for doc_id, total in rank(revenue)]
    return seller_revenue_rows(ranked)


def build_product_quantity_report(
    settings: ReportSettings,
    index: Optional[ReferenceIndex] = None,
    sales: Optional[list[SellerSales]] = None,
) -> list[ProductQuantityRow]:
    index = index or load_reference_index(settings)
    sales = sales if sales is not None else load_all_sales(settings, index)
    return product_quantity_rows(rank(aggregate_quantities(index, sales)), index)


def _write(path, lines: list[str], label: str) -> bool:
    try:
        write_report(path, lines)
    except OSError as exc:
        logger.error("%s report not written: %s", label, exc)
        return False
    return True


def generate_seller_revenue_report(settings: Optional[ReportSettings] = None) -> bool:
    settings = settings or ReportSettings.from_env()
    try:
        rows = build_seller_revenue_report(settings)
    except ReportError as exc:
        logger.error("Seller revenue report not generated: %s", exc)
        return False
    return _write(settings.seller_report_path, format_seller_revenue(rows), "Seller revenue")


def generate_product_quantity_report(settings: Optional[ReportSettings] = None) -> bool:
    settings = settings or ReportSettings.from_env()
    try:
        rows = build_product_quantity_report(settings)
    except ReportError as exc:
        logger.error("Product quantity report not generated: %s", exc)
        return False
    return _write(settings.product_report_path, format_product_quantity(rows), "Product quantity")


def generate_reports(settings: Optional[ReportSettings] = None) -> dict[str, bool]:
    """Generate both reports, reading the reference tables and sales files once.

    Each report file is replaced atomically; a failed write leaves that report's
    previous file in place and is reported as False.
    """
    settings = settings or ReportSettings.from_env()
    try:
        index = load_reference_index(settings)
        sales = load_all_sales(settings, index)
    except ReportError as exc:
        logger.error("Reports not generated: %s", exc)
        return {"sellers": False, "products": False}

    seller_rows = build_seller_revenue_report(settings, index, sales)
    product_rows = build_product_quantity_report(settings, index, sales)
    return {
        "sellers": _write(settings.seller_report_path, format_seller_revenue(seller_rows), "Seller revenue"),
        "products": _write(settings.product_report_path, format_product_quantity(product_rows), "Product quantity"),
    }
