"""
Reading the reference tables and per-seller sales files from disk.

Malformed lines are logged and skipped; missing or unreadable files are fatal
and raised as ReportError subclasses so the caller can abort the report.
"""

import logging
from pathlib import Path

from app.config import ReportSettings
from app.errors import MissingReferenceFileError, MissingSalesFileError, ParseError
from app.models import Product, Seller, SellerSales
from app.parser import parse_product, parse_sale_line, parse_sales_header, parse_seller
from app.store import ReferenceIndex, build_product_index, build_seller_index

logger = logging.getLogger(__name__)


def read_lines(path: Path) -> list[tuple[int, str]]:
    """Return (line number, text) for the non-blank lines of a file.

    Raises OSError when the file is missing or not a file, UnicodeDecodeError
    when it is not valid UTF-8.
    """
    with open(path, encoding="utf-8") as f:
        return [(n, line.rstrip("\r\n")) for n, line in enumerate(f, start=1) if line.strip()]


def _parse_all(lines: list[tuple[int, str]], parse, source: Path) -> list:
    records = []
    for n, line in lines:
        try:
            records.append(parse(line))
        except ParseError as exc:
            logger.warning("%s:%d skipped: %s", source, n, exc.reason)
    return records


def _read_reference(path: Path) -> list[tuple[int, str]]:
    try:
        return read_lines(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise MissingReferenceFileError(path) from exc


def load_sellers(path: Path) -> list[Seller]:
    return _parse_all(_read_reference(path), parse_seller, path)


def load_products(path: Path) -> list[Product]:
    return _parse_all(_read_reference(path), parse_product, path)


def load_reference_index(settings: ReportSettings) -> ReferenceIndex:
    index = build_seller_index(load_sellers(settings.sellers_path))
    build_product_index(load_products(settings.products_path), index)
    logger.info(
        "Loaded %d sellers and %d products from %s",
        len(index.sellers), len(index.products), settings.data_dir,
    )
    return index


def load_seller_sales(settings: ReportSettings, seller: Seller) -> SellerSales:
    path = settings.sales_file_for(seller.document_id)
    try:
        lines = read_lines(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise MissingSalesFileError(seller.document_id, path) from exc

    sales = SellerSales(document_type=seller.document_type, document_id=seller.document_id)
    if not lines:
        return sales

    # first line identifies the seller, it is never a sale line
    (_, header), body = lines[0], lines[1:]
    try:
        parsed = parse_sales_header(header)
        if parsed.document_id != seller.document_id:
            logger.warning(
                "%s: header names seller %s, expected %s",
                path, parsed.document_id, seller.document_id,
            )
    except ParseError as exc:
        logger.warning("%s: bad header: %s", path, exc.reason)

    sales.lines = _parse_all(body, parse_sale_line, path)
    return sales


def load_all_sales(settings: ReportSettings, index: ReferenceIndex) -> list[SellerSales]:
    return [load_seller_sales(settings, s) for s in index.list_sellers()]
