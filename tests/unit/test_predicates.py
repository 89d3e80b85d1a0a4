"""Unit tests for the WHERE predicate builder.

Covers equality, like, between (per dialect and numeric), in, the
default ignore list and per-field failure isolation.
"""

import datetime as dt

import pytest

from sqlcraft.database import Dialect
from sqlcraft.errors import PredicateBuildError, SchemaError
from sqlcraft.query import BuildStatus, QueryFragment, append_predicates, is_blank

from sample_entities import UserQuery

JAN_2 = dt.datetime(2024, 1, 2, 3, 4, 5)
FEB_1 = dt.datetime(2024, 2, 1)


def _where(q, *ignore, dialect=Dialect.MYSQL) -> str:
    frag = QueryFragment()
    result = append_predicates(q, frag, *ignore, dialect=dialect)
    assert result.ok, result.diagnostics
    return frag.text


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", [], (), set()])
    def test_blank(self, value) -> None:
        assert is_blank(value)

    @pytest.mark.parametrize("value", [0, 0.0, False, " ", ["x"], JAN_2])
    def test_not_blank(self, value) -> None:
        assert not is_blank(value)


class TestEqualityAndLike:
    def test_equality_escapes_quotes(self) -> None:
        assert "and name = 'o''brien'" in _where(UserQuery(name="o'brien"))

    def test_like(self) -> None:
        assert _where(UserQuery(userName="ann")) == " and user_name like '%ann%'"

    def test_like_escapes(self) -> None:
        assert _where(UserQuery(userName="a'b")) == " and user_name like '%a''b%'"

    def test_zero_is_a_value(self) -> None:
        assert _where(UserQuery(loginCount=0)) == " and login_count = '0'"

    def test_empty_object_adds_nothing(self) -> None:
        assert _where(UserQuery()) == ""

    def test_declaration_order(self) -> None:
        text = _where(UserQuery(name="bob", id="1", userName="b"))
        assert text == " and id = '1' and user_name like '%b%' and name = 'bob'"

    def test_marker_with_own_value_is_equality(self) -> None:
        assert _where(UserQuery(idMarker="x", ids=["1"])) == " and id_marker = 'x'"


class TestIgnored:
    def test_paging_fields_never_filtered(self) -> None:
        q = UserQuery(sidx="userName", sord="desc", page=2, rows=5)
        assert _where(q) == ""

    def test_caller_ignored(self) -> None:
        assert _where(UserQuery(name="bob", id="1"), "name") == " and id = '1'"

    def test_ignored_marker(self) -> None:
        assert _where(UserQuery(ids=["1"]), "idMarker") == ""

    def test_transient_skipped(self) -> None:
        assert _where(UserQuery(password="secret")) == ""


class TestBetween:
    def test_mysql_lower_bound_only(self) -> None:
        text = _where(UserQuery(minCreatedAt=JAN_2))
        assert text == " and created_at > str_to_date( '2024-01-02 03:04:05','%Y-%m-%d %H:%i:%s')"
        assert text.count(" > ") == 1
        assert " < " not in text

    def test_mysql_upper_bound_only(self) -> None:
        text = _where(UserQuery(maxCreatedAt=FEB_1))
        assert text == " and created_at < str_to_date( '2024-02-01 00:00:00','%Y-%m-%d %H:%i:%s')"

    def test_postgresql_both_bounds(self) -> None:
        text = _where(UserQuery(minCreatedAt=JAN_2, maxCreatedAt=FEB_1), dialect=Dialect.POSTGRESQL)
        assert text == (
            " and created_at > cast('2024-01-02 03:04:05' as timestamp)"
            " and created_at < cast('2024-02-01 00:00:00' as timestamp)"
        )

    def test_oracle(self) -> None:
        text = _where(UserQuery(minCreatedAt=JAN_2), dialect=Dialect.ORACLE)
        assert text == " and created_at > to_date( '2024-01-02 03:04:05','yyyy-mm-dd hh24:mi:ss')"

    def test_string_bound_is_escaped(self) -> None:
        text = _where(UserQuery(minCreatedAt="2024-01-02' or '1'='1"))
        assert "'2024-01-02'' or ''1''=''1'" in text

    def test_no_bounds(self) -> None:
        assert _where(UserQuery(), dialect=Dialect.ORACLE) == ""

    def test_numeric_range(self) -> None:
        assert _where(UserQuery(minScore=10, maxScore=20)) == " and score > 10 and score < 20"

    def test_numeric_zero_bound(self) -> None:
        assert _where(UserQuery(minScore=0)) == " and score > 0"

    def test_dialect_from_settings(self, driver) -> None:
        driver("org.postgresql.Driver")
        frag = QueryFragment()
        append_predicates(UserQuery(minCreatedAt=JAN_2), frag)
        assert frag.text == " and created_at > cast('2024-01-02 03:04:05' as timestamp)"


class TestIn:
    def test_in_list(self) -> None:
        assert _where(UserQuery(ids=["1", "2"])) == " and id_marker in ('1','2')"

    def test_in_values_escaped(self) -> None:
        assert _where(UserQuery(ids=["a'b"])) == " and id_marker in ('a''b')"

    def test_empty_list_adds_nothing(self) -> None:
        assert "id_marker" not in _where(UserQuery(ids=[]))

    def test_absent_list_adds_nothing(self) -> None:
        assert _where(UserQuery(ids=None)) == ""


class TestFailures:
    def test_bad_field_does_not_affect_others(self) -> None:
        frag = QueryFragment()
        q = UserQuery(id="1", name=["not", "scalar"], userName="ann")
        result = append_predicates(q, frag, dialect=Dialect.MYSQL)
        assert frag.text == " and id = '1' and user_name like '%ann%'"
        assert result.status is BuildStatus.PARTIAL
        assert [d.field for d in result.diagnostics] == ["name"]

    def test_bad_range_bound_leaves_no_partial_text(self) -> None:
        frag = QueryFragment()
        result = append_predicates(UserQuery(minScore=1, maxScore="lots"), frag, dialect=Dialect.MYSQL)
        assert frag.text == ""
        assert result.diagnostics[0].field == "score"

    def test_in_values_given_as_string(self) -> None:
        frag = QueryFragment()
        result = append_predicates(UserQuery(ids="1,2"), frag, dialect=Dialect.MYSQL)
        assert frag.text == ""
        assert not result.ok

    def test_unsupported_driver_only_affects_date_ranges(self, driver) -> None:
        driver("com.microsoft.sqlserver.jdbc.SQLServerDriver")
        frag = QueryFragment()
        result = append_predicates(UserQuery(name="bob", minCreatedAt=JAN_2), frag)
        assert frag.text == " and name = 'bob'"
        assert [d.field for d in result.diagnostics] == ["createdAt"]

    def test_raise_for_status(self) -> None:
        result = append_predicates(UserQuery(name=["x"]), QueryFragment(), dialect=Dialect.MYSQL)
        with pytest.raises(PredicateBuildError, match="name"):
            result.raise_for_status()

    def test_unregistered_entity_is_fatal(self) -> None:
        with pytest.raises(SchemaError):
            append_predicates(object(), QueryFragment(), dialect=Dialect.MYSQL)


class TestIdempotence:
    def test_same_entity_same_text(self) -> None:
        q = UserQuery(name="bob", userName="ann", ids=["1"], minCreatedAt=JAN_2, minScore=3)
        assert _where(q) == _where(q)

    def test_clauses_reported(self) -> None:
        frag = QueryFragment()
        result = append_predicates(UserQuery(id="1"), frag, dialect=Dialect.MYSQL)
        assert result.clauses == [" and id = '1'"]
        assert result.status is BuildStatus.OK
