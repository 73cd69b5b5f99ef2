"""Chain resolution over hand-built expressions (no parsing involved)."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from gorm2sql_mcp.gorm_tools.builder import StatementBuilder
from gorm2sql_mcp.gorm_tools.methods import HANDLERS, ChainMethod, apply_method
from gorm2sql_mcp.gorm_tools.resolver import ChainOrder, resolve_chain, unwind_chain
from gorm2sql_mcp.gorm_tools.syntax import (
    BasicLit,
    CallExpr,
    CompositeLit,
    Expr,
    Ident,
    KeyValueExpr,
    MapType,
    NamedType,
    OtherExpr,
    SelectorExpr,
    UnaryExpr,
)

DB = Ident("db")


def _s(text: str) -> BasicLit:
    return BasicLit(kind="string", value=f'"{text}"')


def _int(n: int) -> BasicLit:
    return BasicLit(kind="int", value=str(n))


def _model(type_name: str) -> Expr:
    return UnaryExpr(op="&", operand=CompositeLit(type=NamedType(type_name), elements=()))


def chain(*links: tuple[str, Sequence[Expr]], root: Expr = DB) -> Expr:
    """Build `root.A(...).B(...)...` from (method, args) pairs in source order."""
    expr = root
    for method, args in links:
        expr = CallExpr(func=SelectorExpr(operand=expr, name=method), args=tuple(args), line=1)
    return expr


def render(expr: Expr, order: ChainOrder = ChainOrder.OUTERMOST_FIRST) -> str:
    b = StatementBuilder()
    assert resolve_chain(expr, b, order) is True
    return b.render()


def test_select_where_order_limit() -> None:
    expr = chain(
        ("Model", [_model("User")]),
        ("Where", [_s("age > 18")]),
        ("Order", [_s("name")]),
        ("Limit", [_int(10)]),
    )
    assert render(expr) == "SELECT * FROM users WHERE age > 18 ORDER BY name LIMIT 10"


def test_delete() -> None:
    assert render(chain(("Model", [_model("User")]), ("Delete", []))) == "DELETE FROM users"


def test_count_with_alias() -> None:
    expr = chain(("Table", [_s("orders")]), ("Count", [Ident("total")]))
    assert render(expr) == "SELECT COUNT(*) AS total FROM orders"


def test_count_without_identifier() -> None:
    expr = chain(("Model", [_model("Order")]), ("Count", [UnaryExpr(op="&", operand=Ident("n"))]))
    assert render(expr) == "SELECT COUNT(*) FROM orders"


def test_unrecognized_link_contributes_nothing() -> None:
    expr = chain(
        ("Model", [_model("User")]),
        ("Session", [OtherExpr(kind="unary_expression", text="&gorm.Session{}")]),
        ("Where", [_s("id = 1")]),
    )
    assert render(expr) == "SELECT * FROM users WHERE id = 1"


def test_projection_defaults_to_star() -> None:
    expr = chain(("Model", [_model("User")]), ("Where", [_s("a")]), ("Find", [Ident("u")]))
    assert render(expr).startswith("SELECT * ")


def test_not_a_call_returns_false_and_leaves_builder() -> None:
    b = StatementBuilder()
    assert resolve_chain(DB, b) is False
    assert b == StatementBuilder()


def test_unqualified_call_returns_false() -> None:
    b = StatementBuilder()
    assert resolve_chain(CallExpr(func=Ident("getDB"), args=(), line=1), b) is False
    assert b == StatementBuilder()


def test_chain_stops_at_unqualified_receiver() -> None:
    # getDB().Where("x") -- getDB() is the root handle, not a link
    expr = chain(("Where", [_s("x")]), root=CallExpr(func=Ident("getDB"), args=(), line=1))
    assert [link.method for link in unwind_chain(expr)] == ["Where"]
    assert render(expr) == "SELECT * WHERE x"


def test_repeated_clauses_outermost_first() -> None:
    expr = chain(("Where", [_s("a = 1")]), ("Where", [_s("b = 2")]), ("Find", [Ident("x")]))
    assert render(expr) == "SELECT * WHERE b = 2 AND a = 1"


def test_repeated_clauses_source_order() -> None:
    expr = chain(("Where", [_s("a = 1")]), ("Where", [_s("b = 2")]), ("Find", [Ident("x")]))
    assert render(expr, ChainOrder.SOURCE) == "SELECT * WHERE a = 1 AND b = 2"


def test_last_default_order_depends_on_chain_order() -> None:
    expr = chain(("Model", [_model("User")]), ("Order", [_s("name")]), ("Last", [Ident("u")]))
    assert render(expr) == "SELECT * FROM users ORDER BY id DESC, name LIMIT 1"
    assert render(expr, ChainOrder.SOURCE) == "SELECT * FROM users ORDER BY name LIMIT 1"


def test_first_and_take_limit_one() -> None:
    assert render(chain(("Table", [_s("t")]), ("First", [Ident("x")]))) == "SELECT * FROM t LIMIT 1"
    assert render(chain(("Table", [_s("t")]), ("Take", [Ident("x")]))) == "SELECT * FROM t LIMIT 1"


def test_joins_family() -> None:
    expr = chain(
        ("Table", [_s("users")]),
        ("Joins", [_s("emails ON emails.user_id = users.id")]),
        ("LeftJoins", [_s("cards ON cards.user_id = users.id")]),
    )
    assert render(expr, ChainOrder.SOURCE) == (
        "SELECT * FROM users JOIN emails ON emails.user_id = users.id"
        " LEFT JOIN cards ON cards.user_id = users.id"
    )
    inner = chain(("InnerJoins", [_s("a")]), ("RightJoins", [_s("b")]))
    assert render(inner, ChainOrder.SOURCE) == "SELECT * INNER JOIN a RIGHT JOIN b"


def test_distinct_with_and_without_argument() -> None:
    assert render(chain(("Table", [_s("t")]), ("Distinct", [_s("name")]))) == (
        "SELECT DISTINCT name FROM t"
    )
    expr = chain(("Select", [_s("name, age")]), ("Distinct", []))
    assert render(expr, ChainOrder.SOURCE) == "SELECT DISTINCT name, age"
    assert render(chain(("Distinct", []))) == "SELECT DISTINCT *"


def test_update_single_column() -> None:
    expr = chain(
        ("Model", [_model("User")]),
        ("Where", [_s("id = 1")]),
        ("Update", [_s("name"), _s("hello")]),
    )
    assert render(expr) == "UPDATE users SET name = hello WHERE id = 1"


def test_updates_with_map() -> None:
    m = CompositeLit(
        type=MapType(key="string", value="interface{}"),
        elements=(
            KeyValueExpr(key=_s("name"), value=_s("hello")),
            KeyValueExpr(key=_s("age"), value=_int(18)),
        ),
    )
    expr = chain(("Model", [_model("User")]), ("Updates", [m]))
    assert render(expr) == "UPDATE users SET name = hello, age = 18"


def test_updates_with_struct() -> None:
    struct = CompositeLit(type=NamedType("User"), elements=())
    expr = chain(("Model", [_model("User")]), ("Updates", [struct]))
    assert render(expr) == "UPDATE users SET ..."


def test_create_is_insert() -> None:
    create = chain(("Model", [_model("Product")]), ("Create", [Ident("p")]))
    batch = chain(("Table", [_s("logs")]), ("CreateInBatches", [Ident("rows"), _int(100)]))
    assert render(create) == "INSERT INTO products"
    assert render(batch) == "INSERT INTO logs"


def test_offset_with_computed_value() -> None:
    expr = chain(("Limit", [_int(10)]), ("Offset", [CallExpr(func=Ident("page"), args=(), line=1)]))
    assert render(expr) == "SELECT * LIMIT 10 OFFSET ?"


def test_group_having_or() -> None:
    expr = chain(
        ("Table", [_s("orders")]),
        ("Where", [_s("a")]),
        ("Or", [_s("b")]),
        ("Group", [_s("user_id")]),
        ("Having", [_s("COUNT(*) > 1")]),
    )
    assert render(expr, ChainOrder.SOURCE) == (
        "SELECT * FROM orders WHERE a AND b GROUP BY user_id HAVING COUNT(*) > 1"
    )


def test_every_method_has_a_handler() -> None:
    assert set(HANDLERS) == set(ChainMethod)


@pytest.mark.parametrize("name", ["Preload", "Session", "Debug", "Scopes", "", "where"])
def test_unknown_methods(name: str) -> None:
    b = StatementBuilder()
    assert apply_method(b, name, [_s("x")]) is ChainMethod.UNKNOWN
    assert b == StatementBuilder()


def test_recognized_counter() -> None:
    b = StatementBuilder()
    resolve_chain(chain(("Session", []), ("Find", [Ident("x")])), b)
    assert b.recognized == 1
