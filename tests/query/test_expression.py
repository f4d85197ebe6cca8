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
"""Tests for parsing grid filters into expression trees."""

import pytest

from crudstore.kernel.exceptions import InvalidQueryException
from crudstore.query.expression import Comparison, Connective, Not, Terminal, parse_filter


class TestTerminals:
    @pytest.mark.parametrize("value", ["name", 18, 1.5, True, None, {"age": {"$gt": 1}}])
    def test_non_sequences_are_terminals(self, value):
        assert parse_filter(value) == Terminal(value)

    def test_string_is_not_a_sequence(self):
        assert parse_filter("abc") == Terminal("abc")


class TestNodes:
    def test_comparison(self):
        assert parse_filter(["age", ">=", 18]) == Comparison("age", ">=", Terminal(18))

    def test_tuple_is_accepted(self):
        assert parse_filter(("age", ">=", 18)) == Comparison("age", ">=", Terminal(18))

    def test_connective(self):
        expr = parse_filter([["a", "=", 1], "or", ["b", "=", 2]])
        assert expr == Connective(
            "or",
            Comparison("a", "=", Terminal(1)),
            Comparison("b", "=", Terminal(2)),
        )

    def test_negation(self):
        assert parse_filter(["!", ["a", "=", 1]]) == Not(Comparison("a", "=", Terminal(1)))

    def test_two_elements_default_to_and(self):
        expr = parse_filter([["a", "=", 1], ["b", "=", 2]])
        assert expr == Connective(
            "and",
            Comparison("a", "=", Terminal(1)),
            Comparison("b", "=", Terminal(2)),
        )

    def test_single_element_is_unwrapped(self):
        assert parse_filter([[["a", "=", 1]]]) == Comparison("a", "=", Terminal(1))

    @pytest.mark.parametrize("raw", [[], ["a", "=", 1, 2], [1, 2, 3, 4, 5]])
    def test_invalid_length_is_none(self, raw):
        assert parse_filter(raw) is None

    def test_invalid_child_is_kept_as_none(self):
        assert parse_filter([[], "and", ["a", "=", 1]]) == Connective(
            "and", None, Comparison("a", "=", Terminal(1))
        )

    def test_connectives_are_configurable(self):
        expr = parse_filter([["a", "=", 1], "&&", ["b", "=", 2]], connectives={"&&"})
        assert isinstance(expr, Connective)
        assert expr.op == "&&"

    def test_non_string_field_is_stringified(self):
        assert parse_filter([1, "=", 2]) == Comparison("1", "=", Terminal(2))

    def test_sequence_field_is_rejected(self):
        with pytest.raises(InvalidQueryException):
            parse_filter([["a"], "=", 1])
