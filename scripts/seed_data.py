"""
Deterministic test-data generator.

Produces, in the configured data directory:
  - 1-10 sellers      (CC;<5-digit id>;<first name>;<last name>)
  - 10 products       (<id>;<name>;<price between 2 000 000 and 2 899 999>)
  - one sales file per seller: a CC;<id> header, then one
    <product id>;<quantity 0-9> line per product
Files already in the directory are deleted first.
"""

import logging
import random
from typing import Optional

from app.config import ReportSettings
from app.models import Product, SaleLine, Seller
from app.parser import SEPARATOR

logger = logging.getLogger(__name__)

SEED = 42

FIRST_NAMES = ["Juan", "Maria", "Carlos", "Ana", "Luis", "Isabel"]
LAST_NAMES  = ["Perez", "Gomez", "Rodriguez", "Martinez", "Fernandez", "Lopez"]
PRODUCT_NAMES = [
    "Laptop", "Smartphone", "Tablet", "Headphones", "Monitor",
    "Speaker", "Keyboard", "Camera", "Printer", "Mouse",
]

MAX_SELLERS = 10
PRICE_RANGE = (2_000_000, 2_899_999)
MAX_QUANTITY = 9


def _prepare_directory(settings: ReportSettings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    for path in settings.data_dir.iterdir():
        if path.is_file():
            path.unlink()


def _write(path, rows: list[list[str]]) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for row in rows:
            f.write(SEPARATOR.join(row) + "\n")


def seed(
    settings: ReportSettings,
    rng_seed: Optional[int] = SEED,
    seller_count: Optional[int] = None,
) -> dict[str, int]:
    rng = random.Random(rng_seed)
    _prepare_directory(settings)

    # ── sellers ──────────────────────────────────────────────────────────────
    n_sellers = rng.randint(1, MAX_SELLERS) if seller_count is None else seller_count
    doc_ids = rng.sample(range(10_000, 100_000), n_sellers)   # unique ids
    sellers = [
        Seller(
            document_type="CC",
            document_id=str(doc_id),
            first_name=FIRST_NAMES[i % len(FIRST_NAMES)],
            last_name=rng.choice(LAST_NAMES),
        )
        for i, doc_id in enumerate(doc_ids)
    ]
    _write(settings.sellers_path, [
        [s.document_type, s.document_id, s.first_name, s.last_name] for s in sellers
    ])

    # ── products ─────────────────────────────────────────────────────────────
    products = [
        Product(product_id=str(i + 1), name=name, unit_price=rng.randint(*PRICE_RANGE))
        for i, name in enumerate(PRODUCT_NAMES)
    ]
    _write(settings.products_path, [
        [p.product_id, p.name, str(p.unit_price)] for p in products
    ])

    # ── sales ────────────────────────────────────────────────────────────────
    for s in sellers:
        lines = [
            SaleLine(product_id=p.product_id, quantity=rng.randint(0, MAX_QUANTITY))
            for p in products
        ]
        _write(settings.sales_file_for(s.document_id), [
            [s.document_type, s.document_id],
            *([line.product_id, str(line.quantity)] for line in lines),
        ])

    logger.info("Seeded %d sellers and %d products in %s", len(sellers), len(products), settings.data_dir)
    return {"sellers": len(sellers), "products": len(products)}
