import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from app.models import ProductQuantityRow, SellerRevenueRow
from app.parser import SEPARATOR
from app.store import ReferenceIndex

logger = logging.getLogger(__name__)


def seller_revenue_rows(ranked: list[tuple[str, int]]) -> list[SellerRevenueRow]:
    return [SellerRevenueRow(full_name=name, revenue=total) for name, total in ranked]


def product_quantity_rows(ranked: list[tuple[str, int]], index: ReferenceIndex) -> list[ProductQuantityRow]:
    return [
        ProductQuantityRow(
            product_id=product_id,
            name=index.lookup_name(product_id),
            unit_price=index.lookup_price(product_id),
            quantity=qty,
        )
        for product_id, qty in ranked
    ]


def format_seller_revenue(rows: Iterable[SellerRevenueRow]) -> list[str]:
    return [f"{r.full_name}{SEPARATOR}{r.revenue}" for r in rows]


def format_product_quantity(rows: Iterable[ProductQuantityRow]) -> list[str]:
    return [f"{r.name}{SEPARATOR}{r.unit_price}{SEPARATOR}{r.quantity}" for r in rows]


def write_report(path: Path, lines: list[str]) -> None:
    """Replace `path` with `lines` in one step; a failed write leaves the old file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line + "\n")
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
    logger.info("Wrote %d rows to %s", len(lines), path)
