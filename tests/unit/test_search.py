"""Tests for metadata caching, pagination and the search service."""

import threading

import pytest

from app.errors import QueryError, SchemaError
from app.models.catalog import TableRef
from app.repositories.catalog import CatalogRepository, TableMetadataCache
from app.repositories.domains import DomainRepository, clamp_pagination
from app.services.search import SearchService, parse_criteria

REF = TableRef("main", "expired_domains")


class FakeDB:
    """Answers catalog and search queries from canned rows, recording every call."""

    def __init__(self, columns=None, total=0, rows=None, fail_on=None):
        self.columns = columns if columns is not None else ["domain", "tld"]
        self.total = total
        self.rows = rows or []
        self.fail_on = fail_on
        self.calls = []
        self._lock = threading.Lock()

    def query(self, sql, params=None):
        with self._lock:
            self.calls.append((sql, list(params or [])))
        if self.fail_on and self.fail_on in sql:
            raise QueryError("boom")
        if "information_schema.columns" in sql:
            return [
                {"column_name": c, "data_type": "VARCHAR", "udt_name": None, "ordinal_position": i + 1}
                for i, c in enumerate(self.columns)
            ]
        if "COUNT(*)" in sql:
            return [{"total": self.total}]
        return list(self.rows)

    def catalog_calls(self):
        return [c for c in self.calls if "information_schema.columns" in c[0]]


def make_service(db):
    cache = TableMetadataCache(CatalogRepository(db), REF)
    return SearchService(cache, DomainRepository(db))


class TestClampPagination:
    def test_defaults(self):
        assert clamp_pagination(None, None) == (1, 50)

    def test_page_size_capped(self):
        assert clamp_pagination(1, 10000) == (1, 500)

    def test_page_floor(self):
        assert clamp_pagination(0, 0) == (1, 1)
        assert clamp_pagination(-5, "20") == (1, 20)

    def test_non_numeric(self):
        assert clamp_pagination("abc", "xyz") == (1, 50)
        assert clamp_pagination(float("nan"), float("inf")) == (1, 50)

    def test_truncates(self):
        assert clamp_pagination("2.7", 10.9) == (2, 10)


class TestTableMetadataCache:
    def test_loaded_once(self):
        db = FakeDB(columns=["domain", "status"])
        cache = TableMetadataCache(CatalogRepository(db), REF)

        first = cache.get_table_metadata()
        second = cache.get_table_metadata()

        assert first is second
        assert first.column_names == ["domain", "status"]
        calls = db.catalog_calls()
        assert len(calls) == 1
        assert calls[0][1] == ["main", "expired_domains"]

    def test_concurrent_first_calls_share_one_load(self):
        db = FakeDB()
        cache = TableMetadataCache(CatalogRepository(db), REF)

        threads = [threading.Thread(target=cache.get_table_metadata) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(db.catalog_calls()) == 1

    def test_failure_memoizes_empty_catalog(self):
        db = FakeDB(fail_on="information_schema.columns")
        cache = TableMetadataCache(CatalogRepository(db), REF)

        assert cache.get_table_metadata().columns == ()
        assert cache.get_table_metadata().columns == ()
        assert len(db.catalog_calls()) == 1

    def test_refresh_reloads(self):
        db = FakeDB(columns=["domain"])
        cache = TableMetadataCache(CatalogRepository(db), REF)
        cache.get_table_metadata()

        db.columns = ["domain", "tld"]
        assert cache.refresh().column_names == ["domain", "tld"]
        assert len(db.catalog_calls()) == 2


class TestSearchService:
    def test_page_shape(self):
        rows = [{"domain": "a.com", "tld": "com"}, {"domain": "b.com", "tld": "com"}]
        db = FakeDB(total=101, rows=rows)

        result = make_service(db).search(parse_criteria(None), page=3, page_size=50)

        assert result.page == 3
        assert result.page_size == 50
        assert result.total == 101
        assert result.total_pages == 3
        assert result.items == rows
        assert result.to_dict()["total_pages"] == 3

    def test_no_matches_is_one_page(self):
        result = make_service(FakeDB(total=0)).search(parse_criteria(None))
        assert result.total_pages == 1
        assert result.items == []

    def test_limit_offset_follow_criteria_parameters(self):
        db = FakeDB(total=5)
        criteria = parse_criteria({"domainStartsWith": "shop", "tld": "com"})

        make_service(db).search(criteria, page=2, page_size=10000)

        count_sql, count_params = db.calls[1]
        select_sql, select_params = db.calls[2]
        assert count_sql.startswith('SELECT COUNT(*) AS total FROM "main"."expired_domains" WHERE')
        assert count_params == ["shop%", "com"]
        assert "LIMIT $3" in select_sql
        assert "OFFSET $4" in select_sql
        assert 'ORDER BY "domain" ASC' in select_sql
        assert select_params == ["shop%", "com", 500, 500]

    def test_missing_domain_column(self):
        db = FakeDB(columns=["id", "status"])
        with pytest.raises(SchemaError, match="main.expired_domains"):
            make_service(db).search(parse_criteria(None))

    def test_query_error_propagates(self):
        db = FakeDB(fail_on="COUNT(*)")
        with pytest.raises(QueryError, match="boom"):
            make_service(db).search(parse_criteria(None))
