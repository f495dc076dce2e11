"""Tests for crudkit.kits.raw — RawCrudKit over in-memory SQLite."""

from __future__ import annotations

from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from crudkit.core.connection import SqlConnectionFactory
from crudkit.core.errors import QueryError
from crudkit.core.protocols import RawCrudKitProtocol
from crudkit.kits.raw import RawCrudKit
from crudkit.query.fluent import FluentQuery


@dataclass
class Person:
    id: int
    name: str
    age: int


@pytest.fixture
def factory():
    f = SqlConnectionFactory("sqlite://")
    with f.get_connection() as conn:
        conn.execute(text("CREATE TABLE people (id INTEGER PRIMARY KEY, name TEXT, age INTEGER)"))
        conn.execute(
            text("INSERT INTO people (id, name, age) VALUES (1, 'ann', 30), (2, 'bob', 40), (3, 'cat', 50)")
        )
        conn.commit()
    yield f
    f.dispose()


@pytest.fixture
def raw_kit(factory) -> RawCrudKit:
    return RawCrudKit(factory)


class TestFind:
    def test_satisfies_protocol(self, raw_kit):
        assert isinstance(raw_kit, RawCrudKitProtocol)

    def test_find_returns_dicts(self, raw_kit):
        rows = raw_kit.find("SELECT id, name FROM people ORDER BY id")
        assert rows == [
            {"id": 1, "name": "ann"},
            {"id": 2, "name": "bob"},
            {"id": 3, "name": "cat"},
        ]

    def test_find_with_params(self, raw_kit):
        rows = raw_kit.find("SELECT name FROM people WHERE age > :age", {"age": 35})
        assert sorted(r["name"] for r in rows) == ["bob", "cat"]

    def test_find_maps_to_model(self, raw_kit):
        rows = raw_kit.find("SELECT * FROM people WHERE id = 1", model=Person)
        assert rows == [Person(id=1, name="ann", age=30)]

    def test_find_no_rows(self, raw_kit):
        assert raw_kit.find("SELECT * FROM people WHERE id = 99") == []

    def test_find_one(self, raw_kit):
        assert raw_kit.find_one("SELECT name FROM people ORDER BY age DESC") == {"name": "cat"}

    def test_find_one_missing(self, raw_kit):
        assert raw_kit.find_one("SELECT * FROM people WHERE id = 99") is None

    def test_find_one_maps_to_model(self, raw_kit):
        person = raw_kit.find_one("SELECT * FROM people WHERE name = :n", {"n": "bob"}, model=Person)
        assert person == Person(id=2, name="bob", age=40)


class TestFluentQueryInput:
    def test_raw_mode_builder(self, raw_kit):
        q = FluentQuery().select("name").from_("people").where_in("name", ["ann", "cat"]).order_by("name")
        assert [r["name"] for r in raw_kit.find(q)] == ["ann", "cat"]

    def test_bound_mode_builder(self, raw_kit):
        q = (
            FluentQuery(bind_params=True)
            .select("name")
            .from_("people")
            .where_in("id", [1, 2])
            .order_by("id", False)
        )
        assert [r["name"] for r in raw_kit.find(q)] == ["bob", "ann"]

    def test_bound_single_value(self, raw_kit):
        q = FluentQuery(bind_params=True).select("*").from_("people").where_in("id", [3])
        assert raw_kit.find_one(q, model=Person) == Person(id=3, name="cat", age=50)

    def test_not_in_and_limit(self, raw_kit):
        q = (
            FluentQuery(bind_params=True)
            .select("name")
            .from_("people")
            .where_not_in("name", ["ann"])
            .order_by("name")
            .limit(0, 1)
        )
        assert raw_kit.find(q) == [{"name": "bob"}]

    def test_extra_params_merge_with_builder_params(self, raw_kit):
        q = FluentQuery(bind_params=True).select("name").from_("people").where_in("id", [1, 2, 3])
        q.and_("age < :max_age")
        rows = raw_kit.find(q, {"max_age": 45})
        assert sorted(r["name"] for r in rows) == ["ann", "bob"]


class TestColonLiterals:
    def test_raw_builder_with_colon_in_literal(self, raw_kit):
        raw_kit.execute("INSERT INTO people (id, name, age) VALUES (5, 'see :ref', 1)")
        q = FluentQuery().select("id").from_("people").where_in("name", ["see :ref"])
        assert raw_kit.find(q) == [{"id": 5}]

    def test_find_one_plain_text_with_colon(self, raw_kit):
        assert raw_kit.find_one("SELECT '12:30' AS t") == {"t": "12:30"}


class TestParamMerging:
    def test_colliding_param_names_are_rejected(self, raw_kit):
        q = FluentQuery(bind_params=True).select("name").from_("people").where_in("id", [1])
        with pytest.raises(QueryError, match="p0"):
            raw_kit.find(q, {"p0": 2})

    def test_collision_is_raised_before_connecting(self):
        factory = MagicMock()
        kit = RawCrudKit(factory)
        q = FluentQuery(bind_params=True).select("*").from_("people").where_in("id", [1, 2])
        with pytest.raises(QueryError) as exc_info:
            kit.execute(q, {"p1": 9})
        assert exc_info.value.query == q.to_query()
        factory.get_connection.assert_not_called()


class TestExecute:
    def test_insert_returns_true(self, raw_kit):
        assert raw_kit.execute(
            "INSERT INTO people (id, name, age) VALUES (:id, :name, :age)",
            {"id": 4, "name": "dan", "age": 60},
        )
        assert raw_kit.find_one("SELECT name FROM people WHERE id = 4") == {"name": "dan"}

    def test_update_commits(self, raw_kit):
        assert raw_kit.execute("UPDATE people SET age = age + 1 WHERE name = 'ann'")
        assert raw_kit.find_one("SELECT age FROM people WHERE name = 'ann'") == {"age": 31}

    def test_no_rows_affected_returns_false(self, raw_kit):
        assert raw_kit.execute("DELETE FROM people WHERE id = 99") is False

    def test_bound_builder_delete(self, raw_kit):
        q = FluentQuery("DELETE FROM people", bind_params=True).where_in("id", [1, 2])
        assert raw_kit.execute(q)
        assert raw_kit.find("SELECT id FROM people") == [{"id": 3}]


class TestErrors:
    def test_bad_sql_raises_query_error(self, raw_kit):
        with pytest.raises(QueryError) as exc_info:
            raw_kit.find("SELECT * FROM missing_table")
        err = exc_info.value
        assert err.query == "SELECT * FROM missing_table"
        assert isinstance(err.__cause__, SQLAlchemyError)

    def test_execute_failure_raises_query_error(self, raw_kit):
        with pytest.raises(QueryError):
            raw_kit.execute("INSERT INTO people (id, name, age) VALUES (1, 'dup', 1)")

    def test_failed_execute_is_not_committed(self, raw_kit):
        with pytest.raises(QueryError):
            raw_kit.execute("INSERT INTO people (id, name) VALUES (1, 'dup')")
        assert raw_kit.find_one("SELECT name FROM people WHERE id = 1") == {"name": "ann"}
