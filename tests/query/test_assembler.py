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
"""Tests for assembling load options into query strings."""

import json

import httpx
import pytest

from crudstore.kernel.exceptions import UnknownOperatorException
from crudstore.query.assembler import LoadOptions, QueryAssembler


def params(query: str) -> dict[str, list[str]]:
    decoded: dict[str, list[str]] = {}
    for name, value in httpx.QueryParams(query).multi_items():
        decoded.setdefault(name, []).append(value)
    return decoded


@pytest.fixture
def assembler() -> QueryAssembler:
    return QueryAssembler()


class TestLoadOptions:
    def test_from_dict_accepts_camel_case(self):
        options = LoadOptions.from_dict(
            {"searchExpr": "name", "searchValue": "al", "requireTotalCount": True, "take": 5}
        )
        assert options.search_expr == "name"
        assert options.search_value == "al"
        assert options.require_total_count is True
        assert options.take == 5

    def test_from_dict_ignores_unknown_and_none(self):
        options = LoadOptions.from_dict({"group": ["x"], "searchOperation": None, "userData": {}})
        assert options == LoadOptions()

    def test_of(self):
        options = LoadOptions(take=3)
        assert LoadOptions.of(options) is options
        assert LoadOptions.of(None) == LoadOptions()
        assert LoadOptions.of({"skip": 1}).skip == 1

    def test_with_take(self):
        assert LoadOptions(take=50, skip=10).with_take(1) == LoadOptions(take=1, skip=10)

    def test_combined_filter_without_search(self):
        assert LoadOptions(filter=["a", "=", 1]).combined_filter() == ["a", "=", 1]

    def test_combined_filter_with_search(self):
        options = LoadOptions(filter=["a", "=", 1], search_expr="name", search_value="al")
        assert options.combined_filter() == [["a", "=", 1], "and", ["name", "contains", "al"]]

    def test_search_over_several_fields(self):
        options = LoadOptions(search_expr=["first", "last"], search_operation="startswith", search_value="Al")
        assert options.combined_filter() == [
            ["first", "startswith", "Al"],
            "or",
            ["last", "startswith", "Al"],
        ]

    def test_empty_search_value_is_ignored(self):
        assert LoadOptions(search_expr="name", search_value="").combined_filter() is None


class TestCompile:
    def test_end_to_end(self, assembler):
        query = assembler.compile(
            {
                "filter": ["age", ">=", 18],
                "sort": {"selector": "name", "desc": True},
                "skip": 0,
                "take": 20,
            }
        )
        decoded = params(query)
        assert json.loads(decoded["s"][0]) == {"age": {"$gte": 18}}
        assert decoded["sort"] == ["name,DESC"]
        assert decoded["offset"] == ["0"]
        assert decoded["limit"] == ["20"]
        assert "fields" not in decoded

    def test_everything_absent(self, assembler):
        assert assembler.compile({}) == ""
        assert assembler.compile(None) == ""

    @pytest.mark.parametrize(
        ("options", "name"),
        [
            ({"filter": ["a", "=", 1]}, "s"),
            ({"sort": "a"}, "sort"),
            ({"skip": 5}, "offset"),
            ({"take": 5}, "limit"),
            ({"select": ["a"]}, "fields"),
        ],
    )
    def test_each_fragment_alone(self, assembler, options, name):
        assert list(params(assembler.compile(options))) == [name]

    def test_select_passes_through(self, assembler):
        assert params(assembler.compile({"select": ["id", "name"]}))["fields"] == ["id,name"]

    def test_bare_sort_name_is_ascending(self, assembler):
        assert params(assembler.compile({"sort": "name"}))["sort"] == ["name,ASC"]
        assert assembler.compile({"sort": "name"}) == assembler.compile(
            {"sort": [{"selector": "name", "desc": False}]}
        )

    def test_invalid_filter_is_dropped(self, assembler):
        assert assembler.compile({"filter": ["a", "=", 1, 2]}) == ""

    def test_invalid_sort_entries_are_dropped(self, assembler):
        assert params(assembler.compile({"sort": ["a", 7]}))["sort"] == ["a,ASC"]

    def test_unknown_operator_propagates(self, assembler):
        with pytest.raises(UnknownOperatorException):
            assembler.compile({"filter": ["a", "like", "x"]})

    def test_search_box_is_merged(self, assembler):
        query = assembler.compile(
            LoadOptions(filter=["a", "=", 1], search_expr="name", search_value="al")
        )
        assert json.loads(params(query)["s"][0]) == {
            "$and": [{"a": {"$eq": 1}}, {"name": {"$cont": "al"}}]
        }

    def test_raw_search_tree_filter(self, assembler):
        query = assembler.compile({"filter": {"id": "user-1"}})
        assert json.loads(params(query)["s"][0]) == {"id": "user-1"}


class TestStoreDefaults:
    def test_join_cache_and_include_deleted(self):
        assembler = QueryAssembler(join=("profile",), cache=False, include_deleted=True)
        decoded = params(assembler.compile({"take": 1}))
        assert decoded["join"] == ["profile"]
        assert decoded["cache"] == ["0"]
        assert decoded["include_deleted"] == ["1"]
        assert decoded["limit"] == ["1"]
