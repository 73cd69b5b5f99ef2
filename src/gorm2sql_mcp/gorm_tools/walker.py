"""Source walker: turn every call node of a parsed Go file into a candidate."""

from __future__ import annotations

from dataclasses import dataclass

from fastmcp.utilities.logging import get_logger
from tree_sitter import Tree

from .builder import StatementBuilder
from .resolver import ChainOrder, resolve_chain
from .syntax import iter_call_nodes, node_line, to_expr

_logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A rendered statement and the source line its chain starts on."""

    line: int
    sql: str


def walk_source(
    tree: Tree,
    source: bytes,
    *,
    order: ChainOrder = ChainOrder.OUTERMOST_FIRST,
    require_recognized: bool = False,
) -> list[Candidate]:
    """Render a candidate statement for each qualified call in the tree.

    Every call node is visited, nested ones included, with a fresh builder
    each time. Nothing is deduplicated here.

    Args:
        tree: Parsed Go source
        source: The bytes the tree was parsed from
        order: Chain link application order
        require_recognized: Skip chains in which no GORM method was recognized

    Returns:
        Candidates in visitation (pre-order) order
    """
    candidates: list[Candidate] = []
    visited = 0
    for node in iter_call_nodes(tree):
        visited += 1
        builder = StatementBuilder()
        if not resolve_chain(to_expr(node, source), builder, order):
            continue
        if require_recognized and builder.recognized == 0:
            continue
        sql = builder.render()
        if sql:
            candidates.append(Candidate(line=node_line(node), sql=sql))
    _logger.debug("walk_source: %d call nodes, %d candidates", visited, len(candidates))
    return candidates
