"""Chain resolver: unwind a call's receiver chain into a statement builder.

For `db.Model(&User{}).Where("a").Find(&u)` the outermost call is `Find`, its
receiver is the `Where` call, whose receiver is the `Model` call, whose
receiver `db` is not a call and ends the chain.

Links are applied outermost-first by default: list clauses such as WHERE or
ORDER BY then accumulate right-to-left relative to the source when a method
appears more than once. `ChainOrder.SOURCE` applies links root-to-leaf
instead, matching the order in which they were written.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .builder import StatementBuilder
from .methods import apply_method
from .syntax import CallExpr, Expr, SelectorExpr


class ChainOrder(Enum):
    """Order in which chain links are applied to the builder."""

    OUTERMOST_FIRST = "outermost_first"
    SOURCE = "source"


@dataclass(frozen=True, slots=True)
class ChainLink:
    """One `receiver.Method(args)` invocation in a chain."""

    method: str
    call: CallExpr


def as_link(expr: Expr) -> ChainLink | None:
    """Return the link for a qualified method call, else None."""
    if isinstance(expr, CallExpr) and isinstance(expr.func, SelectorExpr):
        return ChainLink(method=expr.func.name, call=expr)
    return None


def unwind_chain(expr: Expr) -> list[ChainLink]:
    """Collect chain links from the outermost call back to the root handle.

    The walk stops at the first receiver that is not itself a qualified call,
    e.g. `db` or a plain function call like `getDB()`.
    """
    links: list[ChainLink] = []
    link = as_link(expr)
    while link is not None:
        links.append(link)
        receiver = link.call.func.operand if isinstance(link.call.func, SelectorExpr) else None
        link = as_link(receiver) if isinstance(receiver, CallExpr) else None
    return links


def resolve_chain(
    expr: Expr,
    builder: StatementBuilder,
    order: ChainOrder = ChainOrder.OUTERMOST_FIRST,
) -> bool:
    """Apply every link of the chain ending at `expr` to `builder`.

    Args:
        expr: Expression to resolve, normally a call node
        builder: Builder receiving the mutations
        order: Link application order

    Returns:
        True when `expr` is a qualified method call, whether or not any of
        its methods were recognized; False (builder untouched) otherwise.
    """
    links = unwind_chain(expr)
    if not links:
        return False
    if order is ChainOrder.SOURCE:
        links.reverse()
    for link in links:
        apply_method(builder, link.method, link.call.args)
    return True
