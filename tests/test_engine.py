"""
Unit tests for the aggregation and ranking engine.
"""

from app.config import ReportSettings
from app.engine import (
    aggregate_quantities,
    aggregate_revenue,
    build_product_quantity_report,
    build_seller_revenue_report,
    merge_totals,
    rank,
    revenue_by_full_name,
)
from app.models import Product, SaleLine, Seller, SellerSales
from app.store import ReferenceIndex, build_product_index, build_seller_index


# ── fixtures ──────────────────────────────────────────────────────────────────

def make_index(sellers=(), products=()) -> ReferenceIndex:
    index = build_seller_index(sellers)
    return build_product_index(products, index)


def seller(doc_id, first="Ana", last="Lopez"):
    return Seller(document_type="CC", document_id=doc_id, first_name=first, last_name=last)


def product(pid, name, price):
    return Product(product_id=pid, name=name, unit_price=price)


def sales(doc_id, *lines):
    return SellerSales(
        document_type="CC",
        document_id=doc_id,
        lines=[SaleLine(product_id=pid, quantity=qty) for pid, qty in lines],
    )


LAPTOP = product("1", "Laptop", 1_000_000)
PHONE  = product("2", "Smartphone", 500_000)
MOUSE  = product("3", "Mouse", 20_000)

SETTINGS = ReportSettings()


# ── tests ─────────────────────────────────────────────────────────────────────

class TestRevenue:
    def test_single_seller_single_line(self):
        index = make_index([seller("1001")], [LAPTOP])
        revenue = aggregate_revenue(index, [sales("1001", ("1", 3))])
        assert revenue == {"1001": 3_000_000}

    def test_revenue_is_sum_of_quantity_times_price(self):
        index = make_index([seller("1001")], [LAPTOP, PHONE, MOUSE])
        revenue = aggregate_revenue(index, [sales("1001", ("1", 2), ("2", 3), ("3", 7))])
        assert revenue["1001"] == 2 * 1_000_000 + 3 * 500_000 + 7 * 20_000

    def test_seller_without_lines_has_zero_revenue(self):
        index = make_index([seller("1001")], [LAPTOP])
        assert aggregate_revenue(index, [sales("1001")]) == {"1001": 0}

    def test_unknown_product_contributes_zero_revenue(self):
        index = make_index([seller("1001")], [LAPTOP])
        revenue = aggregate_revenue(index, [sales("1001", ("99", 5), ("1", 1))])
        assert revenue["1001"] == 1_000_000

    def test_keyed_by_document_id(self):
        index = make_index(
            [seller("1", "Juan", "Perez"), seller("2", "Juan", "Perez")],
            [LAPTOP],
        )
        revenue = aggregate_revenue(index, [sales("1", ("1", 1)), sales("2", ("1", 2))])
        assert revenue == {"1": 1_000_000, "2": 2_000_000}


class TestQuantities:
    def test_every_known_product_is_present(self):
        index = make_index([seller("1001")], [LAPTOP, PHONE, MOUSE])
        totals = aggregate_quantities(index, [sales("1001", ("2", 4))])
        assert totals == {"1": 0, "2": 4, "3": 0}

    def test_quantities_summed_across_sellers(self):
        index = make_index([seller("1"), seller("2")], [LAPTOP, PHONE])
        totals = aggregate_quantities(index, [
            sales("1", ("1", 3), ("2", 1)),
            sales("2", ("1", 4), ("1", 1)),
        ])
        assert totals == {"1": 8, "2": 1}

    def test_unknown_product_not_counted(self):
        index = make_index([seller("1001")], [LAPTOP])
        totals = aggregate_quantities(index, [sales("1001", ("99", 5), ("1", 2))])
        assert totals == {"1": 2}
        assert "99" not in totals

    def test_seller_order_does_not_matter(self):
        index = make_index([seller("1"), seller("2")], [LAPTOP, PHONE])
        a = sales("1", ("1", 3), ("2", 9))
        b = sales("2", ("2", 1))
        assert aggregate_quantities(index, [a, b]) == aggregate_quantities(index, [b, a])


class TestMergeTotals:
    def test_partials_are_summed_into_base(self):
        merged = merge_totals({"a": 0, "b": 1}, {"a": 2}, {"a": 3, "b": 4})
        assert merged == {"a": 5, "b": 5}

    def test_keys_outside_base_are_dropped(self):
        assert merge_totals({"a": 0}, {"x": 7}) == {"a": 0}

    def test_base_is_not_mutated(self):
        base = {"a": 1}
        merge_totals(base, {"a": 1})
        assert base == {"a": 1}


class TestRanking:
    def test_descending_by_value(self):
        ranked = rank({"a": 1, "b": 30, "c": 7})
        assert [v for _, v in ranked] == [30, 7, 1]

    def test_equal_values_are_contiguous(self):
        ranked = rank({"a": 5, "b": 1, "c": 5, "d": 9, "e": 1})
        values = [v for _, v in ranked]
        assert values == sorted(values, reverse=True)
        assert {k for k, v in ranked if v == 5} == {"a", "c"}

    def test_empty(self):
        assert rank({}) == []


class TestNameCollision:
    def test_namesakes_summed_into_one_row(self):
        index = make_index(
            [seller("1", "Juan", "Perez"), seller("2", "Juan", "Perez"), seller("3", "Ana", "Lopez")],
            [LAPTOP],
        )
        data = [sales("1", ("1", 1)), sales("2", ("1", 2)), sales("3", ("1", 1))]
        rows = build_seller_revenue_report(SETTINGS, index, data)
        assert [(r.full_name, r.revenue) for r in rows] == [
            ("Juan Perez", 3_000_000),
            ("Ana Lopez", 1_000_000),
        ]

    def test_namesakes_kept_apart_when_merging_disabled(self):
        index = make_index(
            [seller("1", "Juan", "Perez"), seller("2", "Juan", "Perez")],
            [LAPTOP],
        )
        data = [sales("1", ("1", 1)), sales("2", ("1", 2))]
        settings = ReportSettings(merge_duplicate_names=False)
        rows = build_seller_revenue_report(settings, index, data)
        assert [(r.full_name, r.revenue) for r in rows] == [
            ("Juan Perez", 2_000_000),
            ("Juan Perez", 1_000_000),
        ]

    def test_revenue_by_full_name(self):
        index = make_index([seller("1", "Juan", "Perez"), seller("2", "Juan", "Perez")])
        assert revenue_by_full_name(index, {"1": 10, "2": 5}) == {"Juan Perez": 15}


class TestReportRows:
    def test_single_sale_scenario(self):
        index = make_index([seller("1001", "Ana", "Lopez")], [LAPTOP])
        data = [sales("1001", ("1", 3))]

        seller_rows = build_seller_revenue_report(SETTINGS, index, data)
        product_rows = build_product_quantity_report(SETTINGS, index, data)

        assert [(r.full_name, r.revenue) for r in seller_rows] == [("Ana Lopez", 3_000_000)]
        assert [(r.name, r.unit_price, r.quantity) for r in product_rows] == [("Laptop", 1_000_000, 3)]

    def test_product_rows_include_unsold_products(self):
        index = make_index([seller("1001")], [LAPTOP, PHONE, MOUSE])
        rows = build_product_quantity_report(SETTINGS, index, [sales("1001", ("3", 2))])
        assert len(rows) == 3
        assert rows[0].name == "Mouse"
        assert {r.name for r in rows[1:]} == {"Laptop", "Smartphone"}
        assert all(r.quantity == 0 for r in rows[1:])

    def test_one_seller_row_per_seller(self):
        index = make_index(
            [seller("1", "Ana", "Lopez"), seller("2", "Luis", "Gomez")],
            [LAPTOP],
        )
        rows = build_seller_revenue_report(SETTINGS, index, [sales("1"), sales("2", ("1", 1))])
        assert len(rows) == 2
        assert rows[0].full_name == "Luis Gomez"
        assert rows[1].revenue == 0
