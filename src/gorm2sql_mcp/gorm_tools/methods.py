"""Recognized GORM chain methods and the builder mutation each one applies.

`ChainMethod` is closed: any method name GORM exposes that is not listed maps
to `ChainMethod.UNKNOWN`, whose handler does nothing. Every member has exactly
one entry in `HANDLERS`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Final

from .builder import JoinKind, Operation, StatementBuilder
from .extractors import (
    extract_limit_offset,
    extract_string_arg,
    extract_string_literal,
    extract_updates_content,
)
from .naming import infer_table_name
from .syntax import Expr, Ident


class ChainMethod(Enum):
    """GORM methods that contribute to the inferred statement."""

    MODEL = "Model"
    TABLE = "Table"
    WHERE = "Where"
    AND = "And"
    OR = "Or"
    SELECT = "Select"
    ORDER = "Order"
    GROUP = "Group"
    HAVING = "Having"
    LIMIT = "Limit"
    OFFSET = "Offset"
    JOINS = "Joins"
    INNER_JOINS = "InnerJoins"
    LEFT_JOINS = "LeftJoins"
    RIGHT_JOINS = "RightJoins"
    FIRST = "First"
    TAKE = "Take"
    LAST = "Last"
    FIND = "Find"
    COUNT = "Count"
    DISTINCT = "Distinct"
    DELETE = "Delete"
    UPDATE = "Update"
    UPDATES = "Updates"
    CREATE = "Create"
    CREATE_IN_BATCHES = "CreateInBatches"
    UNKNOWN = ""

    @classmethod
    def from_name(cls, name: str) -> ChainMethod:
        """Look up a method by its Go name; unlisted names give UNKNOWN."""
        if not name:
            return cls.UNKNOWN
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


Handler = Callable[[StatementBuilder, Sequence[Expr]], None]


def _first(args: Sequence[Expr], extract: Callable[[Expr], str]) -> str:
    return extract(args[0]) if args else ""


def _model(b: StatementBuilder, args: Sequence[Expr]) -> None:
    if args:
        b.set_table(infer_table_name(args[0]))


def _table(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.set_table(_first(args, extract_string_literal))


def _where(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.add_predicate(_first(args, extract_string_arg))


def _select(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.set_projection(_first(args, extract_string_arg))


def _order(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.add_order(_first(args, extract_string_arg))


def _group(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.add_group(_first(args, extract_string_arg))


def _having(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.add_having(_first(args, extract_string_arg))


def _limit(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.set_limit(_first(args, extract_limit_offset))


def _offset(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.set_offset(_first(args, extract_limit_offset))


def _joins(kind: JoinKind) -> Handler:
    def handler(b: StatementBuilder, args: Sequence[Expr]) -> None:
        b.add_join(kind, _first(args, extract_string_arg))

    return handler


def _single_row(b: StatementBuilder, _args: Sequence[Expr]) -> None:
    b.set_limit("1")


def _last(b: StatementBuilder, _args: Sequence[Expr]) -> None:
    if not b.order_by:
        b.add_order("id DESC")
    b.set_limit("1")


def _noop(_b: StatementBuilder, _args: Sequence[Expr]) -> None:
    return


def _count(b: StatementBuilder, args: Sequence[Expr]) -> None:
    projection = "COUNT(*)"
    if args and isinstance(args[0], Ident):
        projection += f" AS {args[0].name}"
    b.set_projection(projection)


def _distinct(b: StatementBuilder, args: Sequence[Expr]) -> None:
    columns = _first(args, extract_string_arg)
    if columns:
        b.set_projection(f"DISTINCT {columns}")
    else:
        b.set_projection(f"DISTINCT {b.projection}")


def _delete(b: StatementBuilder, _args: Sequence[Expr]) -> None:
    b.set_operation(Operation.DELETE)


def _update(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.set_operation(Operation.UPDATE)
    if len(args) >= 2:  # noqa: PLR2004 - Update(column, value)
        col = extract_string_arg(args[0])
        val = extract_string_arg(args[1])
        if col and val:
            b.set_assignment(f"{col} = {val}")


def _updates(b: StatementBuilder, args: Sequence[Expr]) -> None:
    b.set_operation(Operation.UPDATE)
    b.set_assignment(extract_updates_content(args))


def _create(b: StatementBuilder, _args: Sequence[Expr]) -> None:
    b.set_operation(Operation.INSERT)


HANDLERS: Final[dict[ChainMethod, Handler]] = {
    ChainMethod.MODEL: _model,
    ChainMethod.TABLE: _table,
    ChainMethod.WHERE: _where,
    ChainMethod.AND: _where,
    ChainMethod.OR: _where,
    ChainMethod.SELECT: _select,
    ChainMethod.ORDER: _order,
    ChainMethod.GROUP: _group,
    ChainMethod.HAVING: _having,
    ChainMethod.LIMIT: _limit,
    ChainMethod.OFFSET: _offset,
    ChainMethod.JOINS: _joins(JoinKind.JOIN),
    ChainMethod.INNER_JOINS: _joins(JoinKind.INNER),
    ChainMethod.LEFT_JOINS: _joins(JoinKind.LEFT),
    ChainMethod.RIGHT_JOINS: _joins(JoinKind.RIGHT),
    ChainMethod.FIRST: _single_row,
    ChainMethod.TAKE: _single_row,
    ChainMethod.LAST: _last,
    ChainMethod.FIND: _noop,
    ChainMethod.COUNT: _count,
    ChainMethod.DISTINCT: _distinct,
    ChainMethod.DELETE: _delete,
    ChainMethod.UPDATE: _update,
    ChainMethod.UPDATES: _updates,
    ChainMethod.CREATE: _create,
    ChainMethod.CREATE_IN_BATCHES: _create,
    ChainMethod.UNKNOWN: _noop,
}


def apply_method(builder: StatementBuilder, name: str, args: Sequence[Expr]) -> ChainMethod:
    """Apply the mutation for method `name` and return the matched member."""
    method = ChainMethod.from_name(name)
    HANDLERS[method](builder, args)
    if method is not ChainMethod.UNKNOWN:
        builder.recognized += 1
    return method
