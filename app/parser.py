"""
Positional parsing of ';'-delimited record lines.
"""

import re

from pydantic import BaseModel, ValidationError

from app.errors import ParseError
from app.models import Product, RecordKind, SaleLine, SalesHeader, Seller

SEPARATOR = ";"

# positional field names per record kind
_FIELDS: dict[RecordKind, tuple[str, ...]] = {
    RecordKind.SELLER:       ("document_type", "document_id", "first_name", "last_name"),
    RecordKind.PRODUCT:      ("product_id", "name", "unit_price"),
    RecordKind.SALES_HEADER: ("document_type", "document_id"),
    RecordKind.SALE_LINE:    ("product_id", "quantity"),
}

# fields that must be plain non-negative decimal integers
_INTEGER_FIELDS = {"unit_price", "quantity"}
_INTEGER = re.compile(r"[0-9]+")

_MODELS: dict[RecordKind, type[BaseModel]] = {
    RecordKind.SELLER:       Seller,
    RecordKind.PRODUCT:      Product,
    RecordKind.SALES_HEADER: SalesHeader,
    RecordKind.SALE_LINE:    SaleLine,
}


def parse_line(line: str, kind: RecordKind) -> BaseModel:
    names = _FIELDS[kind]
    parts = [p.strip() for p in line.rstrip("\r\n").split(SEPARATOR)]
    if len(parts) < len(names):
        raise ParseError(
            kind.value, line,
            f"expected {len(names)} fields, got {len(parts)}",
        )

    # extra trailing fields are ignored
    values = dict(zip(names, parts))
    for field in _INTEGER_FIELDS.intersection(values):
        if not _INTEGER.fullmatch(values[field]):
            raise ParseError(kind.value, line, f"{field}: not a non-negative integer: {values[field]!r}")

    try:
        return _MODELS[kind].model_validate(values)
    except ValidationError as exc:
        err = exc.errors()[0]
        field = ".".join(str(x) for x in err["loc"])
        raise ParseError(kind.value, line, f"{field}: {err['msg']}") from exc


def parse_seller(line: str) -> Seller:
    return parse_line(line, RecordKind.SELLER)


def parse_product(line: str) -> Product:
    return parse_line(line, RecordKind.PRODUCT)


def parse_sales_header(line: str) -> SalesHeader:
    return parse_line(line, RecordKind.SALES_HEADER)


def parse_sale_line(line: str) -> SaleLine:
    return parse_line(line, RecordKind.SALE_LINE)
