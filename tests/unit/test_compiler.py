"""Tests for the criteria compiler and its lifecycle sub-compiler."""

import re

from app.models.catalog import ColumnInfo, TableMetadata, TableRef
from app.models.search import SearchCriteria
from app.services.catalog import resolve_roles
from app.services.search import build_select_columns, compile_criteria
from app.services.search.lifecycle import expiring_days

DELETED_STATUS = '("status"::text ILIKE $1 OR "status"::text ILIKE $2 OR "status"::text ILIKE $3)'


def make_metadata(*columns, types=None):
    types = types or {}
    return TableMetadata(
        TableRef("main", "expired_domains"),
        tuple(ColumnInfo(name=c, data_type=types.get(c, "VARCHAR"), position=i + 1) for i, c in enumerate(columns)),
    )


def compile_for(metadata, **criteria):
    return compile_criteria(SearchCriteria.model_validate(criteria), resolve_roles(metadata), metadata)


def ts(column):
    return f"TRY_CAST(NULLIF(\"{column}\"::text, '') AS TIMESTAMP)"


class TestDomainFilters:
    def test_starts_with(self):
        q = compile_for(make_metadata("domain"), domainStartsWith="shop")
        assert q.where_fragments == ['"domain" ILIKE $1']
        assert q.parameters == ["shop%"]

    def test_ends_with(self):
        q = compile_for(make_metadata("domain"), domainEndsWith="ly")
        assert q.where_fragments == ['"domain" ILIKE $1']
        assert q.parameters == ["%ly"]

    def test_empty_criteria(self):
        q = compile_for(make_metadata("domain"))
        assert q.where_fragments == []
        assert q.parameters == []
        assert q.where_sql == ""

    def test_identifier_quoting(self):
        q = compile_for(make_metadata('my"domain'), domainStartsWith="x'; DROP TABLE t; --")
        assert q.where_fragments == ['"my""domain" ILIKE $1']
        assert q.parameters == ["x'; DROP TABLE t; --%"]

    def test_missing_domain_column_drops_filter(self):
        q = compile_for(make_metadata("id"), domainStartsWith="shop")
        assert q.where_fragments == []


class TestTld:
    def test_tld_column(self):
        q = compile_for(make_metadata("domain", "tld"), tld="COM, .net")
        assert q.where_fragments == ['"tld" IN ($1, $2)']
        assert q.parameters == ["com", "net"]

    def test_domain_suffix_fallback(self):
        q = compile_for(make_metadata("domain"), tld=["com", "io"])
        assert q.where_fragments == ['(LOWER("domain") LIKE $1 OR LOWER("domain") LIKE $2)']
        assert q.parameters == ["%.com", "%.io"]

    def test_only_dots(self):
        q = compile_for(make_metadata("domain", "tld"), tld=".")
        assert q.where_fragments == []


class TestCreationAndAge:
    created = "TRY_CAST(NULLIF(\"domain_creation_date\"::text, '') AS DATE)"

    def test_date_range(self):
        q = compile_for(
            make_metadata("domain", "domain_creation_date"),
            creationDateFrom="2010-01-01",
            creationDateTo="2015-12-31",
        )
        assert q.where_fragments == [
            f"{self.created} >= CAST($1 AS DATE)",
            f"{self.created} <= CAST($2 AS DATE)",
        ]
        assert q.parameters == ["2010-01-01", "2015-12-31"]

    def test_inverted_age_range_is_swapped(self):
        q = compile_for(make_metadata("domain", "domain_creation_date"), ageYearsFrom=10, ageYearsTo=2)
        assert q.where_fragments == [
            f"{self.created} <= CURRENT_DATE - CAST($1 AS INTEGER) * INTERVAL '1 year'",
            f"{self.created} >= CURRENT_DATE - CAST($2 AS INTEGER) * INTERVAL '1 year'",
        ]
        assert q.parameters == [2, 10]

    def test_non_numeric_age_ignored(self):
        q = compile_for(make_metadata("domain", "domain_creation_date"), ageYearsFrom="old")
        assert q.where_fragments == []

    def test_no_created_column(self):
        q = compile_for(make_metadata("domain"), ageYearsFrom=3, creationDateFrom="2010-01-01")
        assert q.where_fragments == []


class TestExactColumns:
    def test_country_equality(self):
        q = compile_for(make_metadata("domain", "country_by_ip"), countryByIp="DE")
        assert q.where_fragments == ['"country_by_ip" = $1']
        assert q.parameters == ["DE"]

    def test_contains(self):
        q = compile_for(make_metadata("domain", "registrar", "technologies"), registrarContains="godaddy")
        assert q.where_fragments == ['"registrar" ILIKE $1']
        assert q.parameters == ["%godaddy%"]

    def test_contains_without_column(self):
        q = compile_for(make_metadata("domain"), technologiesContains="wordpress")
        assert q.where_fragments == []

    def test_detected_hosts(self):
        q = compile_for(make_metadata("domain", "detected_hosts"), detectedHostsMin="3", detectedHostsMax=9)
        assert q.where_fragments == [
            "TRY_CAST(NULLIF(\"detected_hosts\"::text, '') AS INTEGER) >= CAST($1 AS INTEGER)",
            "TRY_CAST(NULLIF(\"detected_hosts\"::text, '') AS INTEGER) <= CAST($2 AS INTEGER)",
        ]
        assert q.parameters == ["3", "9"]

    def test_expiration_range(self):
        q = compile_for(make_metadata("domain", "expires_at"), expirationFrom="2024-01-01")
        assert q.where_fragments == [f"{ts('expires_at')} >= CAST($1 AS TIMESTAMP)"]


class TestReputation:
    def test_wayback_min(self):
        q = compile_for(make_metadata("domain", "wayback_snapshots"), waybackMinSnapshots=5)
        assert q.where_fragments == [
            "COALESCE(TRY_CAST(NULLIF(\"wayback_snapshots\"::text, '') AS INTEGER), 0) >= CAST($1 AS INTEGER)"
        ]
        assert q.parameters == ["5"]

    def test_safe_boolean_column(self):
        metadata = make_metadata("domain", "spamhaus_listed", types={"spamhaus_listed": "BOOLEAN"})
        q = compile_for(metadata, safeSpamhausOnly=True)
        assert q.where_fragments == ['"spamhaus_listed" IS NOT TRUE']
        assert q.parameters == []

    def test_safe_counter_column(self):
        metadata = make_metadata("domain", "views_total", types={"views_total": "INTEGER"})
        q = compile_for(metadata, safeViewsTotalOnly=True)
        assert q.where_fragments == [
            "(NULLIF(\"views_total\"::text, '') IS NULL OR TRY_CAST(NULLIF(\"views_total\"::text, '') AS INTEGER) <= 0)"
        ]

    def test_safe_flag_needs_literal_true(self):
        q = compile_for(make_metadata("domain", "spamhaus_listed"), safeSpamhausOnly="yes")
        assert q.where_fragments == []


class TestLifecycle:
    def test_deleted_from_status(self):
        q = compile_for(make_metadata("domain", "status"), lifecycleState="deleted")
        assert q.where_fragments == [DELETED_STATUS]
        assert q.parameters == ["%deleted%", "%dropped%", "%removed%"]

    def test_deleted_from_flag_and_timestamp(self):
        metadata = make_metadata("domain", "status", "is_deleted", "deleted_at", types={"is_deleted": "BOOLEAN"})
        q = compile_for(metadata, lifecycleState="deleted")
        assert q.where_fragments == ["(\"is_deleted\" IS TRUE OR NULLIF(\"deleted_at\"::text, '') IS NOT NULL)"]
        assert q.parameters == []

    def test_deleted_numeric_flag(self):
        q = compile_for(make_metadata("domain", "dropped"), lifecycleState="deleted")
        assert q.where_fragments == ["(COALESCE(TRY_CAST(NULLIF(\"dropped\"::text, '') AS INTEGER), 0) > 0)"]

    def test_expiring_with_status_and_expiration(self):
        metadata = make_metadata("domain", "status", "domain_expiration_date")
        q = compile_for(metadata, lifecycleState="expiring", expiringWithinDays=10)
        expires = ts("domain_expiration_date")
        assert q.where_fragments == [
            f"NOT {DELETED_STATUS}",
            f"({expires} >= NOW() AND {expires} < NOW() + CAST($4 AS INTEGER) * INTERVAL '1 day')",
        ]
        assert q.parameters == ["%deleted%", "%dropped%", "%removed%", 10]

    def test_expiring_prefers_scheduled_delete(self):
        q = compile_for(make_metadata("domain", "drop_date", "expires_at"), lifecycleState="expiring")
        assert q.where_fragments == [
            f"({ts('drop_date')} >= NOW() AND {ts('drop_date')} < NOW() + CAST($1 AS INTEGER) * INTERVAL '1 day')"
        ]
        assert q.parameters == [30]

    def test_expiring_from_status_only(self):
        q = compile_for(make_metadata("domain", "status"), lifecycleState="expiring")
        assert q.where_fragments == [
            f"NOT {DELETED_STATUS}",
            '("status"::text ILIKE $4 OR "status"::text ILIKE $5 OR "status"::text ILIKE $6)',
        ]
        assert q.parameters[3:] == ["%expir%", "%pending%", "%to_delete%"]

    def test_active_with_flag_and_expiration(self):
        metadata = make_metadata("domain", "is_deleted", "domain_expiration_date", types={"is_deleted": "BOOLEAN"})
        q = compile_for(metadata, lifecycleState="active")
        assert q.where_fragments == [
            'NOT ("is_deleted" IS TRUE)',
            f"{ts('domain_expiration_date')} >= NOW()",
        ]

    def test_active_either_expiration_or_status(self):
        q = compile_for(make_metadata("domain", "status", "expires_at"), lifecycleState="active")
        assert len(q.where_fragments) == 2
        assert q.where_fragments[1].startswith(f"({ts('expires_at')} >= NOW() OR (")
        assert q.parameters[3:] == ["active", "ok", "registered", "%active%"]

    def test_no_lifecycle_columns(self):
        for state in ("active", "expiring", "deleted"):
            q = compile_for(make_metadata("domain", "tld"), lifecycleState=state)
            assert q.where_fragments == []
            assert q.parameters == []


class TestExpiringDays:
    def test_values(self):
        assert expiring_days(None) == 30
        assert expiring_days("abc") == 30
        assert expiring_days("0") == 1
        assert expiring_days("7.9") == 7


class TestPlaceholders:
    def test_every_parameter_bound_once(self):
        metadata = make_metadata(
            "domain",
            "status",
            "domain_creation_date",
            "domain_expiration_date",
            "country_by_ip",
            "registrar",
            "detected_hosts",
            "wayback_snapshots",
        )
        q = compile_for(
            metadata,
            domainStartsWith="a",
            domainEndsWith="z",
            tld="com,net",
            lifecycleState="active",
            creationDateFrom="2000-01-01",
            ageYearsFrom=1,
            ageYearsTo=20,
            countryByIp="US",
            registrarContains="name",
            detectedHostsMin=1,
            expirationTo="2030-01-01",
            waybackMinSnapshots=2,
        )
        placeholders = [int(n) for n in re.findall(r"\$(\d+)", q.where_sql)]
        assert max(placeholders) == len(q.parameters)
        assert sorted(placeholders) == list(range(1, len(q.parameters) + 1))


class TestSelectColumns:
    def test_aliases_and_fixed_columns(self):
        metadata = make_metadata("hostname", "tld", "country_by_ip", "unrelated", "wayback_snapshots", "viewstotal")
        columns = build_select_columns(resolve_roles(metadata), metadata)
        assert columns == [
            ('"hostname"', "domain"),
            ('"tld"', "tld"),
            ('"country_by_ip"', None),
            ('"wayback_snapshots"', "wayback"),
            ('"viewstotal"', "viewstotal"),
        ]
