"""SQL statement builder accumulating clause fragments from a GORM chain.

A builder is created per analyzed call node, mutated by the chain resolver
and rendered exactly once. Rendering is a pure function of the state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Operation(Enum):
    """Statement kind produced by a chain."""

    SELECT = "SELECT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    INSERT = "INSERT"


class JoinKind(Enum):
    """Join keyword emitted for the `Joins` family of methods."""

    JOIN = "JOIN"
    INNER = "INNER JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"


@dataclass(slots=True)
class StatementBuilder:
    """Mutable aggregate of SQL clause fragments."""

    operation: Operation = Operation.SELECT
    table: str | None = None
    projection: str = "*"
    predicates: list[str] = field(default_factory=list)
    order_by: list[str] = field(default_factory=list)
    group_by: list[str] = field(default_factory=list)
    having: list[str] = field(default_factory=list)
    joins: list[tuple[JoinKind, str]] = field(default_factory=list)
    limit: str | None = None
    offset: str | None = None
    assignment: str = ""
    recognized: int = 0  # recognized chain methods applied so far

    # ---- mutations ------------------------------------------------------
    def set_table(self, table: str) -> None:
        if table:
            self.table = table

    def set_projection(self, projection: str) -> None:
        if projection:
            self.projection = projection

    def add_predicate(self, predicate: str) -> None:
        if predicate:
            self.predicates.append(predicate)

    def add_order(self, order: str) -> None:
        if order:
            self.order_by.append(order)

    def add_group(self, group: str) -> None:
        if group:
            self.group_by.append(group)

    def add_having(self, having: str) -> None:
        if having:
            self.having.append(having)

    def add_join(self, kind: JoinKind, fragment: str) -> None:
        if fragment:
            self.joins.append((kind, fragment))

    def set_limit(self, limit: str) -> None:
        if limit:
            self.limit = limit

    def set_offset(self, offset: str) -> None:
        if offset:
            self.offset = offset

    def set_operation(self, operation: Operation) -> None:
        """Switch to a mutating statement kind.

        There is no path back to SELECT: a chain containing `Delete()` or
        `Update()` stays a mutation whatever else it calls.
        """
        if operation is Operation.SELECT:
            return
        self.operation = operation

    def set_assignment(self, assignment: str) -> None:
        if assignment:
            self.assignment = assignment

    # ---- rendering ------------------------------------------------------
    def _operation_clause(self) -> str:
        table = self.table or ""
        if self.operation is Operation.UPDATE:
            parts = ["UPDATE", table, "SET", self.assignment]
        elif self.operation is Operation.DELETE:
            parts = ["DELETE"]
        elif self.operation is Operation.INSERT:
            parts = ["INSERT INTO", table]
        else:
            parts = ["SELECT", self.projection]
        return " ".join(p for p in parts if p)

    def render(self) -> str:
        """Render the statement with clauses in fixed SQL order.

        Clauses whose backing value is empty are omitted. UPDATE and INSERT
        carry the table in their leading clause, so only SELECT and DELETE
        get a FROM clause.
        """
        parts = [self._operation_clause()]
        if self.table and self.operation in (Operation.SELECT, Operation.DELETE):
            parts.append(f"FROM {self.table}")
        if self.joins:
            parts.append(" ".join(f"{kind.value} {fragment}" for kind, fragment in self.joins))
        if self.predicates:
            parts.append("WHERE " + " AND ".join(self.predicates))
        if self.group_by:
            parts.append("GROUP BY " + ", ".join(self.group_by))
        if self.having:
            parts.append("HAVING " + " AND ".join(self.having))
        if self.order_by:
            parts.append("ORDER BY " + ", ".join(self.order_by))
        if self.limit:
            parts.append(f"LIMIT {self.limit}")
        if self.offset:
            parts.append(f"OFFSET {self.offset}")
        return " ".join(parts)
