"""Go syntax layer backed by tree-sitter.

Parses Go source into a tree-sitter tree, rejects files with syntax errors,
enumerates every call-expression node, and converts nodes into a small closed
set of expression dataclasses. Everything downstream (extractors, resolver)
works on these dataclasses only and never touches tree-sitter nodes.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final, Literal

from tree_sitter import Language, Node, Parser, Tree
import tree_sitter_go

from .exceptions import ParseFailedError

GO_LANGUAGE: Final[Language] = Language(tree_sitter_go.language())

LiteralKind = Literal["string", "raw_string", "int", "float", "imaginary", "rune"]

_LITERAL_KINDS: Final[dict[str, LiteralKind]] = {
    "interpreted_string_literal": "string",
    "raw_string_literal": "raw_string",
    "int_literal": "int",
    "float_literal": "float",
    "imaginary_literal": "imaginary",
    "rune_literal": "rune",
}

# Predeclared names that go/ast models as plain identifiers.
_IDENT_LIKE: Final[frozenset[str]] = frozenset({"identifier", "true", "false", "nil", "iota"})

_SPINE_KINDS: Final[frozenset[str]] = frozenset({"call_expression", "selector_expression"})


# ---- type references ----------------------------------------------------
@dataclass(frozen=True, slots=True)
class NamedType:
    """A named type such as `User` or `models.User`."""

    name: str
    package: str | None = None


@dataclass(frozen=True, slots=True)
class MapType:
    """A map type such as `map[string]interface{}`."""

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class OtherType:
    """Any other type expression (slices, arrays, generics, struct types)."""

    text: str


TypeRef = NamedType | MapType | OtherType


# ---- expressions --------------------------------------------------------
@dataclass(frozen=True, slots=True)
class BasicLit:
    """A literal; `value` is the raw source text including quotes."""

    kind: LiteralKind
    value: str


@dataclass(frozen=True, slots=True)
class Ident:
    name: str


@dataclass(frozen=True, slots=True)
class SelectorExpr:
    """`operand.name`, e.g. the `db.Where` in `db.Where(...)`."""

    operand: Expr
    name: str


@dataclass(frozen=True, slots=True)
class CallExpr:
    """A call; `line` is the 1-based line where the call (and its chain) starts."""

    func: Expr
    args: tuple[Expr, ...]
    line: int


@dataclass(frozen=True, slots=True)
class UnaryExpr:
    op: str
    operand: Expr


@dataclass(frozen=True, slots=True)
class KeyValueExpr:
    key: Expr
    value: Expr


@dataclass(frozen=True, slots=True)
class CompositeLit:
    """`T{...}`; `type` is None for elided inner literals like `{1, 2}`."""

    type: TypeRef | None
    elements: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class OtherExpr:
    """Any expression kind the analysis does not look inside."""

    kind: str
    text: str


Expr = (
    BasicLit | Ident | SelectorExpr | CallExpr | UnaryExpr | KeyValueExpr | CompositeLit | OtherExpr
)


# ---- parsing ------------------------------------------------------------
def create_parser() -> Parser:
    return Parser(GO_LANGUAGE)


def node_text(source: bytes, node: Node) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def node_line(node: Node) -> int:
    start_row, _ = node.start_point
    return start_row + 1


def _first_error(root: Node) -> Node | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def parse_go_source(source: bytes, path: str, parser: Parser | None = None) -> Tree:
    """Parse Go source, raising `ParseFailedError` on any syntax error.

    Args:
        source: Raw file content
        path: Path used in error messages
        parser: Optional parser to reuse

    Returns:
        The tree-sitter parse tree

    Raises:
        ParseFailedError: If the tree contains an ERROR or MISSING node
    """
    tree = (parser or create_parser()).parse(source)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root) or root
        row, col = bad.start_point
        if bad.is_missing:
            cause = f"{row + 1}:{col + 1}: expected {bad.type}"
        else:
            snippet = node_text(source, bad).splitlines()[0:1]
            near = f" near {snippet[0][:40]!r}" if snippet and snippet[0] else ""
            cause = f"{row + 1}:{col + 1}: syntax error{near}"
        raise ParseFailedError(path, cause)
    return tree


def iter_call_nodes(tree: Tree) -> Iterator[Node]:
    """Yield every `call_expression` node in pre-order, nested ones included."""
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "call_expression":
            yield node
        stack.extend(reversed(node.named_children))


# ---- conversion ---------------------------------------------------------
def _significant(children: list[Node]) -> list[Node]:
    return [c for c in children if c.type != "comment"]


def _unwrap_element(node: Node) -> Node:
    # literal_element wraps exactly one expression or nested literal_value
    if node.type == "literal_element":
        inner = _significant(node.named_children)
        if inner:
            return inner[0]
    return node


def to_type_ref(node: Node, source: bytes) -> TypeRef:
    if node.type == "type_identifier":
        return NamedType(name=node_text(source, node))
    if node.type == "qualified_type":
        pkg = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        if name is not None:
            return NamedType(
                name=node_text(source, name),
                package=node_text(source, pkg) if pkg is not None else None,
            )
    if node.type == "map_type":
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        return MapType(
            key=node_text(source, key) if key is not None else "",
            value=node_text(source, value) if value is not None else "",
        )
    return OtherType(text=node_text(source, node))


def _literal_elements(body: Node | None, source: bytes) -> tuple[Expr, ...]:
    if body is None:
        return ()
    elements: list[Expr] = []
    for child in _significant(body.named_children):
        if child.type == "keyed_element":
            parts = [_unwrap_element(c) for c in _significant(child.named_children)]
            if len(parts) >= 2:
                key, value = to_expr(parts[0], source), to_expr(parts[1], source)
                elements.append(KeyValueExpr(key=key, value=value))
                continue
        elements.append(to_expr(_unwrap_element(child), source))
    return tuple(elements)


def _spine_child(node: Node) -> Node | None:
    field_name = "function" if node.type == "call_expression" else "operand"
    return node.child_by_field_name(field_name)


def _convert_spine(node: Node, source: bytes) -> Expr:
    # Each chain link nests a call and a selector; walk them with a stack so
    # chain length is not bounded by the interpreter's recursion limit.
    spine: list[Node] = []
    current = node
    while current.type in _SPINE_KINDS:
        inner = _spine_child(current)
        if inner is None:
            break
        spine.append(current)
        current = inner

    expr: Expr
    if current.type in _SPINE_KINDS:
        expr = OtherExpr(kind=current.type, text=node_text(source, current))
    else:
        expr = _convert_node(current, source)

    for link in reversed(spine):
        if link.type == "selector_expression":
            field = link.child_by_field_name("field")
            if field is None:
                expr = OtherExpr(kind=link.type, text=node_text(source, link))
                continue
            expr = SelectorExpr(operand=expr, name=node_text(source, field))
        else:
            args_node = link.child_by_field_name("arguments")
            args = _significant(args_node.named_children) if args_node is not None else []
            expr = CallExpr(
                func=expr,
                args=tuple(to_expr(a, source) for a in args),
                line=node_line(link),
            )
    return expr


def _convert_node(node: Node, source: bytes) -> Expr:
    kind = node.type
    if kind == "parenthesized_expression":
        inner = _significant(node.named_children)
        if len(inner) == 1:
            return to_expr(inner[0], source)
    if kind in _LITERAL_KINDS:
        return BasicLit(kind=_LITERAL_KINDS[kind], value=node_text(source, node))
    if kind in _IDENT_LIKE:
        return Ident(name=node_text(source, node))
    if kind == "unary_expression":
        op = node.child_by_field_name("operator")
        operand = node.child_by_field_name("operand")
        if op is not None and operand is not None:
            return UnaryExpr(op=node_text(source, op), operand=to_expr(operand, source))
    if kind == "composite_literal":
        type_node = node.child_by_field_name("type")
        return CompositeLit(
            type=to_type_ref(type_node, source) if type_node is not None else None,
            elements=_literal_elements(node.child_by_field_name("body"), source),
        )
    if kind == "literal_value":
        return CompositeLit(type=None, elements=_literal_elements(node, source))
    return OtherExpr(kind=kind, text=node_text(source, node))


def to_expr(node: Node, source: bytes) -> Expr:
    """Convert a tree-sitter expression node into the expression sum type."""
    if node.type in _SPINE_KINDS:
        return _convert_spine(node, source)
    return _convert_node(node, source)
