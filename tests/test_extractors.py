from __future__ import annotations

from gorm2sql_mcp.gorm_tools.extractors import (
    extract_limit_offset,
    extract_string_arg,
    extract_string_literal,
    extract_updates_content,
    unquote,
)
from gorm2sql_mcp.gorm_tools.syntax import (
    BasicLit,
    CallExpr,
    CompositeLit,
    Ident,
    KeyValueExpr,
    MapType,
    NamedType,
    OtherExpr,
)


def _s(text: str) -> BasicLit:
    return BasicLit(kind="string", value=f'"{text}"')


def _map(*pairs: tuple[object, object]) -> CompositeLit:
    return CompositeLit(
        type=MapType(key="string", value="interface{}"),
        elements=tuple(KeyValueExpr(key=k, value=v) for k, v in pairs),  # type: ignore[arg-type]
    )


def test_unquote_variants() -> None:
    assert unquote(_s("age > 18")) == "age > 18"
    assert unquote(_s("name = 'x'")) == "name = 'x'"
    assert unquote(BasicLit(kind="raw_string", value="`a = \"b\"`")) == 'a = "b"'
    assert unquote(BasicLit(kind="int", value="10")) == "10"


def test_string_arg_literal_and_identifier() -> None:
    assert extract_string_arg(_s("name")) == "name"
    assert extract_string_arg(Ident("alias")) == "alias"
    assert extract_string_arg(OtherExpr(kind="binary_expression", text="a + b")) == ""


def test_string_literal_rejects_identifiers() -> None:
    assert extract_string_literal(_s("orders")) == "orders"
    assert extract_string_literal(Ident("tableName")) == ""


def test_limit_offset_call_placeholder() -> None:
    computed = CallExpr(func=Ident("pageSize"), args=(), line=1)
    assert extract_limit_offset(computed) == "?"
    assert extract_limit_offset(BasicLit(kind="int", value="20")) == "20"
    assert extract_limit_offset(Ident("n")) == "n"
    assert extract_limit_offset(OtherExpr(kind="binary_expression", text="n * 2")) == ""


def test_updates_map_literal_pairs() -> None:
    arg = _map((_s("name"), _s("hello")), (_s("age"), BasicLit(kind="int", value="18")))
    assert extract_updates_content([arg]) == "name = hello, age = 18"


def test_updates_non_literal_value_becomes_placeholder() -> None:
    arg = _map((_s("name"), Ident("newName")), (_s("active"), Ident("false")), (_s("n"), _s("1")))
    # `false` is an identifier in Go, so it is not a literal either
    assert extract_updates_content([arg]) == "name = ?, active = ?, n = 1"


def test_updates_skips_non_literal_keys() -> None:
    arg = _map((Ident("key"), _s("v")), (_s("ok"), _s("1")))
    assert extract_updates_content([arg]) == "ok = 1"


def test_updates_fallbacks() -> None:
    struct = CompositeLit(type=NamedType("User"), elements=())
    assert extract_updates_content([]) == "..."
    assert extract_updates_content([struct]) == "..."
    assert extract_updates_content([Ident("m")]) == "..."
    assert extract_updates_content([_map()]) == "..."
    assert extract_updates_content([_map((_s("a"), _s("b"))), Ident("x")]) == "..."
