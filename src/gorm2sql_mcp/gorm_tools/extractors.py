"""Argument extractors turning chain arguments into SQL tokens.

All functions are pure. An empty string means "nothing usable", and callers
skip the clause in that case.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from .syntax import BasicLit, CallExpr, CompositeLit, Expr, Ident, KeyValueExpr, MapType

PLACEHOLDER: Final[str] = "?"
UNKNOWN_ASSIGNMENT: Final[str] = "..."

_QUOTED: Final[frozenset[str]] = frozenset({"string", "raw_string", "rune"})


def unquote(lit: BasicLit) -> str:
    """Return literal text without its surrounding quotes.

    Numbers come back unchanged. Escape sequences are kept as written.
    """
    text = lit.value
    quoted = len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`"  # noqa: PLR2004
    if lit.kind in _QUOTED and quoted:
        return text[1:-1]
    return text


def extract_string_arg(expr: Expr) -> str:
    """Token for a literal or identifier argument, else ""."""
    if isinstance(expr, BasicLit):
        return unquote(expr)
    if isinstance(expr, Ident):
        return expr.name
    return ""


def extract_limit_offset(expr: Expr) -> str:
    """Like `extract_string_arg`, with computed values rendered as `?`."""
    if isinstance(expr, CallExpr):
        return PLACEHOLDER
    return extract_string_arg(expr)


def extract_string_literal(expr: Expr) -> str:
    if isinstance(expr, BasicLit):
        return unquote(expr)
    return ""


def extract_updates_content(args: Sequence[Expr]) -> str:
    """Decode `Updates(map[string]interface{}{...})` into `k = v` pairs.

    Non-literal values become `?`; pairs with a non-literal key are skipped.
    Anything other than a single map literal, or a map without any
    decodable pair, yields `...`.
    """
    if len(args) != 1:
        return UNKNOWN_ASSIGNMENT
    arg = args[0]
    if not isinstance(arg, CompositeLit) or not isinstance(arg.type, MapType):
        return UNKNOWN_ASSIGNMENT

    pairs: list[str] = []
    for element in arg.elements:
        if not isinstance(element, KeyValueExpr) or not isinstance(element.key, BasicLit):
            continue
        key = unquote(element.key)
        value = unquote(element.value) if isinstance(element.value, BasicLit) else PLACEHOLDER
        pairs.append(f"{key} = {value}")
    return ", ".join(pairs) if pairs else UNKNOWN_ASSIGNMENT
