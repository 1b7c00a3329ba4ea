"""Tests for the listing filter builder."""

from sqlalchemy import and_
from sqlalchemy.dialects import sqlite

from productstore.catalog.filters import ProductFilter
from productstore.catalog.validation import validate_listing_query


def _sql(conditions) -> str:
    return str(
        and_(*conditions).compile(
            dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}
        )
    )


class TestProductFilter:
    """Tests for ProductFilter.conditions."""

    def test_no_criteria_means_no_clauses(self) -> None:
        product_filter = ProductFilter()
        assert product_filter.conditions() == []
        assert product_filter.is_empty

    def test_each_criterion_adds_one_clause(self) -> None:
        product_filter = ProductFilter(
            search="mouse",
            category="Electronics",
            in_stock=True,
            created_by="0123456789abcdef01234567",
            min_price=10,
            max_price=50,
        )
        assert len(product_filter.conditions()) == 6
        assert not product_filter.is_empty

    def test_search_matches_name_or_description(self) -> None:
        sql = _sql(ProductFilter(search="mouse").conditions())
        assert "products.product_name" in sql
        assert "products.description" in sql
        assert " OR " in sql
        assert "lower(" in sql.lower()

    def test_search_wildcards_are_escaped(self) -> None:
        sql = _sql(ProductFilter(search="100%").conditions())
        assert "100/%" in sql
        assert "ESCAPE '/'" in sql

    def test_price_bounds_are_inclusive(self) -> None:
        sql = str(and_(*ProductFilter(min_price=10, max_price=50).conditions()))
        assert "products.price >=" in sql
        assert "products.price <=" in sql

    def test_in_stock_false_is_a_criterion(self) -> None:
        assert len(ProductFilter(in_stock=False).conditions()) == 1

    def test_from_query(self) -> None:
        query = validate_listing_query({"category": "Food", "inStock": "false", "page": "3"})
        product_filter = ProductFilter.from_query(query)
        assert product_filter.category == "Food"
        assert product_filter.in_stock is False
        assert product_filter.search is None
        assert len(product_filter.conditions()) == 2
