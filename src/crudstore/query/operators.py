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
"""Filter operator table: grid operators to search-tree tokens.

Each grid operator maps to a ``(positive, negated)`` pair of target tokens.
Negating a comparison picks its logical complement; negating a connective
picks the opposite connective (De Morgan). Distributing the negation onto
the operands is the compiler's job.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import StrEnum
from types import MappingProxyType

from crudstore.kernel.exceptions import UnknownOperatorException


class CondOperator(StrEnum):
    """Condition tokens understood by the REST query grammar."""

    EQUALS = "$eq"
    NOT_EQUALS = "$ne"
    GREATER_THAN = "$gt"
    LOWER_THAN = "$lt"
    GREATER_THAN_EQUALS = "$gte"
    LOWER_THAN_EQUALS = "$lte"
    STARTS = "$starts"
    ENDS = "$ends"
    CONTAINS = "$cont"
    EXCLUDES = "$excl"
    IN = "$in"
    NOT_IN = "$notin"
    IS_NULL = "$isnull"
    NOT_NULL = "$notnull"
    BETWEEN = "$between"
    EQUALS_LOW = "$eqL"
    NOT_EQUALS_LOW = "$neL"
    STARTS_LOW = "$startsL"
    ENDS_LOW = "$endsL"
    CONTAINS_LOW = "$contL"
    EXCLUDES_LOW = "$exclL"
    IN_LOW = "$inL"
    NOT_IN_LOW = "$notinL"


class LogicalOperator(StrEnum):
    """Logical tokens joining two search sub-trees."""

    AND = "$and"
    OR = "$or"


class OperatorTable(Mapping[str, tuple[str, str]]):
    """Read-only operator map with polarity-aware lookup.

    Args:
        operators: grid operator -> ``(positive, negated)`` token pair.
        connectives: which grid operators are logical connectives.
        lossy: grid operators whose negated token only approximates the
            logical complement.
    """

    def __init__(
        self,
        operators: Mapping[str, tuple[str, str]],
        connectives: frozenset[str] = frozenset({"and", "or"}),
        lossy: frozenset[str] = frozenset(),
    ) -> None:
        self._operators = MappingProxyType({op: (str(pos), str(neg)) for op, (pos, neg) in operators.items()})
        self._connectives = frozenset(connectives)
        self._lossy = frozenset(lossy)

    def __getitem__(self, operator: str) -> tuple[str, str]:
        return self._operators[operator]

    def __iter__(self) -> Iterator[str]:
        return iter(self._operators)

    def __len__(self) -> int:
        return len(self._operators)

    def __repr__(self) -> str:
        return f"OperatorTable({dict(self._operators)!r})"

    def resolve(self, operator: str, negated: bool = False) -> str:
        """Return the target token for *operator* under the given polarity.

        Raises:
            UnknownOperatorException: if *operator* is not in the table.
        """
        try:
            pair = self._operators[operator]
        except (KeyError, TypeError):
            raise UnknownOperatorException(operator) from None
        return pair[1] if negated else pair[0]

    @property
    def connectives(self) -> frozenset[str]:
        return self._connectives

    def is_connective(self, operator: object) -> bool:
        return isinstance(operator, str) and operator in self._connectives

    def is_lossy(self, operator: str, negated: bool) -> bool:
        """Whether resolving *operator* negated loses meaning."""
        return negated and operator in self._lossy


# startswith/endswith have no exact complement in the grammar; "$excl"
# (substring exclusion) is stricter than "does not start/end with".
SEARCH_OPERATORS = OperatorTable(
    {
        "and": (LogicalOperator.AND, LogicalOperator.OR),
        "or": (LogicalOperator.OR, LogicalOperator.AND),
        "=": (CondOperator.EQUALS, CondOperator.NOT_EQUALS),
        "<>": (CondOperator.NOT_EQUALS, CondOperator.EQUALS),
        ">": (CondOperator.GREATER_THAN, CondOperator.LOWER_THAN_EQUALS),
        ">=": (CondOperator.GREATER_THAN_EQUALS, CondOperator.LOWER_THAN),
        "<": (CondOperator.LOWER_THAN, CondOperator.GREATER_THAN_EQUALS),
        "<=": (CondOperator.LOWER_THAN_EQUALS, CondOperator.GREATER_THAN),
        "startswith": (CondOperator.STARTS, CondOperator.EXCLUDES),
        "endswith": (CondOperator.ENDS, CondOperator.EXCLUDES),
        "contains": (CondOperator.CONTAINS, CondOperator.EXCLUDES),
        "notcontains": (CondOperator.EXCLUDES, CondOperator.CONTAINS),
    },
    lossy=frozenset({"startswith", "endswith"}),
)
