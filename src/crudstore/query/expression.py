# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Parsed form of the grid's filter expressions.

The grid hands over filters as nested lists whose meaning depends on their
length and contents::

    ["age", ">=", 18]                                # comparison
    [["age", ">=", 18], "and", ["name", "=", "x"]]   # connective
    ["!", ["name", "contains", "x"]]                 # negation
    [["age", ">=", 18], ["name", "=", "x"]]          # implicit "and"
    [["age", ">=", 18]]                              # wrapped

:func:`parse_filter` does all of that shape-sniffing once and returns a tree
of the frozen dataclasses below; the compiler only ever sees that tree.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from typing import Any, Union

from crudstore.kernel.exceptions import InvalidQueryException

NEGATION = "!"
DEFAULT_CONNECTIVES = frozenset({"and", "or"})


@dataclass(frozen=True)
class Terminal:
    """A leaf passed through as-is: a literal, or a search-tree mapping."""

    value: Any


@dataclass(frozen=True)
class Not:
    """Logical negation of the operand."""

    operand: Expression | None


@dataclass(frozen=True)
class Connective:
    """``left <op> right`` where *op* is ``and``/``or``."""

    op: str
    left: Expression | None
    right: Expression | None


@dataclass(frozen=True)
class Comparison:
    """``field <op> value``; *value* is parsed too, usually a Terminal."""

    field: str
    op: Any
    value: Expression | None


Expression = Union[Terminal, Not, Connective, Comparison]


def is_sequence(value: Any) -> bool:
    """Whether *value* is a filter node rather than a terminal."""
    return isinstance(value, (list, tuple))


def parse_filter(raw: Any, connectives: Collection[str] = DEFAULT_CONNECTIVES) -> Expression | None:
    """Parse a grid filter into an :data:`Expression` tree.

    Returns ``None`` for nodes of unsupported length (0 or more than 3
    elements); such nodes are dropped from the query rather than rejected.

    Raises:
        InvalidQueryException: a comparison's left-hand side is not a field name.
    """
    if not is_sequence(raw):
        return Terminal(raw)

    if len(raw) == 1:
        return parse_filter(raw[0], connectives)

    if len(raw) == 2:
        head, operand = raw
        if isinstance(head, str) and head == NEGATION:
            return Not(parse_filter(operand, connectives))
        return Connective("and", parse_filter(head, connectives), parse_filter(operand, connectives))

    if len(raw) == 3:
        left, op, right = raw
        if isinstance(op, str) and op in connectives:
            return Connective(op, parse_filter(left, connectives), parse_filter(right, connectives))
        return Comparison(_field_name(left), op, parse_filter(right, connectives))

    return None


def _field_name(value: Any) -> str:
    if is_sequence(value) or isinstance(value, dict):
        raise InvalidQueryException(
            "Left-hand side of a comparison must be a field name",
            context={"field": value},
        )
    return value if isinstance(value, str) else str(value)
