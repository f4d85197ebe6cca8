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
"""Filter compiler: grid filter expressions to REST search trees.

Example::

    compiler = FilterCompiler()
    compiler.compile(["!", [["age", ">=", 18], "and", ["name", "contains", "x"]]])
    # {"$or": [{"age": {"$lt": 18}}, {"name": {"$excl": "x"}}]}

Negation is carried down as a polarity flag instead of being emitted as a
node: each ``!`` flips the flag, connectives swap ``$and``/``$or`` and
comparisons take their complementary token.
"""

from __future__ import annotations

import logging
from typing import Any

from crudstore.query.expression import (
    Comparison,
    Connective,
    Expression,
    Not,
    Terminal,
    parse_filter,
)
from crudstore.query.operators import SEARCH_OPERATORS, OperatorTable

logger = logging.getLogger(__name__)


class FilterCompiler:
    """Compile filter expressions against an injected operator table."""

    def __init__(self, operators: OperatorTable = SEARCH_OPERATORS) -> None:
        self._operators = operators

    @property
    def operators(self) -> OperatorTable:
        return self._operators

    def parse(self, raw: Any) -> Expression | None:
        return parse_filter(raw, self._operators.connectives)

    def compile(self, raw: Any, negated: bool = False) -> Any:
        """Parse and compile a raw grid filter.

        Terminals (including mappings already in search-tree form) come back
        unchanged, malformed nodes come back as ``None``.

        Raises:
            UnknownOperatorException: an operator is missing from the table.
            InvalidQueryException: a comparison has no usable field name.
        """
        return self.compile_expression(self.parse(raw), negated)

    def compile_expression(self, expr: Expression | None, negated: bool = False) -> Any:
        if expr is None:
            return None

        if isinstance(expr, Terminal):
            return expr.value

        if isinstance(expr, Not):
            return self.compile_expression(expr.operand, not negated)

        if isinstance(expr, Connective):
            return {
                self._operators.resolve(expr.op, negated): [
                    self.compile_expression(expr.left, negated),
                    self.compile_expression(expr.right, negated),
                ]
            }

        if isinstance(expr, Comparison):
            token = self._operators.resolve(expr.op, negated)
            if self._operators.is_lossy(expr.op, negated):
                logger.warning(
                    "Negated %r on field %r compiled to %s, which also excludes matches elsewhere in the value",
                    expr.op,
                    expr.field,
                    token,
                )
            return {expr.field: {token: self.compile_expression(expr.value, negated)}}

        raise TypeError(f"Not a filter expression: {expr!r}")


_default_compiler = FilterCompiler()


def compile_filter(raw: Any, negated: bool = False) -> Any:
    """Compile *raw* with the default operator table."""
    return _default_compiler.compile(raw, negated)
