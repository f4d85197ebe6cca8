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
"""Tests for the filter operator table."""

import pytest

from crudstore.kernel.exceptions import CompileException, UnknownOperatorException
from crudstore.query.operators import SEARCH_OPERATORS, CondOperator, LogicalOperator, OperatorTable


class TestResolve:
    @pytest.mark.parametrize(
        ("op", "positive", "negated"),
        [
            ("=", "$eq", "$ne"),
            ("<>", "$ne", "$eq"),
            (">", "$gt", "$lte"),
            (">=", "$gte", "$lt"),
            ("<", "$lt", "$gte"),
            ("<=", "$lte", "$gt"),
            ("startswith", "$starts", "$excl"),
            ("endswith", "$ends", "$excl"),
            ("contains", "$cont", "$excl"),
            ("notcontains", "$excl", "$cont"),
        ],
    )
    def test_comparison_pairs(self, op, positive, negated):
        assert SEARCH_OPERATORS.resolve(op) == positive
        assert SEARCH_OPERATORS.resolve(op, negated=True) == negated

    def test_connectives_swap_under_negation(self):
        assert SEARCH_OPERATORS.resolve("and") == "$and"
        assert SEARCH_OPERATORS.resolve("and", negated=True) == "$or"
        assert SEARCH_OPERATORS.resolve("or") == "$or"
        assert SEARCH_OPERATORS.resolve("or", negated=True) == "$and"

    def test_tokens_are_plain_strings(self):
        token = SEARCH_OPERATORS.resolve("=")
        assert type(token) is str
        assert token == CondOperator.EQUALS

    def test_unknown_operator_fails_fast(self):
        with pytest.raises(UnknownOperatorException) as exc_info:
            SEARCH_OPERATORS.resolve("between")
        assert exc_info.value.operator == "between"
        assert exc_info.value.code == "UNKNOWN_OPERATOR"
        assert isinstance(exc_info.value, CompileException)

    def test_lookup_is_case_sensitive(self):
        with pytest.raises(UnknownOperatorException):
            SEARCH_OPERATORS.resolve("Contains")

    def test_unhashable_operator_is_unknown(self):
        with pytest.raises(UnknownOperatorException):
            SEARCH_OPERATORS.resolve(["="])  # type: ignore[arg-type]


class TestTableProperties:
    def test_contains_all_grid_operators(self):
        assert set(SEARCH_OPERATORS) == {
            "and", "or", "=", "<>", ">", ">=", "<", "<=",
            "startswith", "endswith", "contains", "notcontains",
        }

    def test_is_read_only(self):
        with pytest.raises(TypeError):
            SEARCH_OPERATORS._operators["="] = ("$ne", "$eq")  # type: ignore[index]

    def test_lossy_only_when_negated(self):
        assert SEARCH_OPERATORS.is_lossy("startswith", True)
        assert SEARCH_OPERATORS.is_lossy("endswith", True)
        assert not SEARCH_OPERATORS.is_lossy("startswith", False)
        assert not SEARCH_OPERATORS.is_lossy("contains", True)

    def test_is_connective(self):
        assert SEARCH_OPERATORS.is_connective("and")
        assert SEARCH_OPERATORS.is_connective("or")
        assert not SEARCH_OPERATORS.is_connective("=")
        assert not SEARCH_OPERATORS.is_connective(None)

    def test_custom_table(self):
        table = OperatorTable(
            {"&&": (LogicalOperator.AND, LogicalOperator.OR), "==": ("eq", "neq")},
            connectives=frozenset({"&&"}),
        )
        assert table.resolve("&&") == "$and"
        assert table.resolve("==", negated=True) == "neq"
        assert table.is_connective("&&")
        assert not table.is_connective("and")
        assert len(table) == 2
