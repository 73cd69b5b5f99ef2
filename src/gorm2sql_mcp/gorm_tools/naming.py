"""Table-name inference for GORM model arguments.

GORM's default naming strategy maps a struct type to the snake_case plural of
its name. Only the regular `s` suffix is produced here: `Person` becomes
`persons`, not `people`.
"""

from __future__ import annotations

from .syntax import CompositeLit, Expr, Ident, NamedType, UnaryExpr


def camel_to_snake(name: str) -> str:
    """Convert a CamelCase identifier to snake_case.

    An underscore is inserted before every uppercase letter except the first
    character, so acronyms split letter by letter.

    Example:
        >>> camel_to_snake("UserAccount")
        'user_account'
        >>> camel_to_snake("APIKey")
        'a_p_i_key'
    """
    out: list[str] = []
    for i, ch in enumerate(name):
        if i > 0 and "A" <= ch <= "Z":
            out.append("_")
        out.append(ch)
    return "".join(out).lower()


def pluralize(word: str) -> str:
    return word + "s"


def table_from_composite(lit: CompositeLit) -> str:
    """Table name for `T{...}` or `pkg.T{...}`; empty for unnamed types."""
    if isinstance(lit.type, NamedType):
        return pluralize(camel_to_snake(lit.type.name))
    return ""


def infer_table_name(expr: Expr) -> str:
    """Infer a table name from a `Model(...)` argument.

    Rules, first match wins:
    1. Composite literal, bare or behind a unary operator (`&User{}`) -> plural snake_case type
    2. Identifier (`users`, `u`) -> lowercased name + "s"
    3. Anything else -> "" (no table asserted)
    """
    if isinstance(expr, UnaryExpr):
        if isinstance(expr.operand, CompositeLit):
            return table_from_composite(expr.operand)
        return ""
    if isinstance(expr, CompositeLit):
        return table_from_composite(expr)
    if isinstance(expr, Ident):
        return expr.name.lower() + "s"
    return ""
