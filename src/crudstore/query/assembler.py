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
"""Assemble the grid's load options into a REST query string."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from crudstore.query.builder import QueryBuilderOptions, RequestQueryBuilder
from crudstore.query.compiler import FilterCompiler
from crudstore.query.sort import compile_sort

# grid (camelCase) option names -> LoadOptions fields
_ALIASES = {
    "searchExpr": "search_expr",
    "searchOperation": "search_operation",
    "searchValue": "search_value",
    "requireTotalCount": "require_total_count",
}


@dataclass(frozen=True)
class LoadOptions:
    """What the grid asks for when it loads a page of data.

    Attributes:
        filter: Filter expression, see :mod:`crudstore.query.expression`.
        sort: Field name, ``{"selector", "desc"}`` mapping, or a list of them.
        skip: Number of records to skip.
        take: Maximum number of records to return.
        select: Field names to return.
        search_expr: Field name(s) the grid's search box applies to.
        search_operation: Filter operator used for the search box.
        search_value: Search box text.
        require_total_count: Whether the caller needs the total count.
    """

    filter: Any = None
    sort: Any = None
    skip: int | None = None
    take: int | None = None
    select: list[str] | None = None
    search_expr: Any = None
    search_operation: str = "contains"
    search_value: Any = None
    require_total_count: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoadOptions:
        """Accept camelCase or snake_case keys; unknown keys are ignored."""
        names = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name in names and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def of(cls, options: LoadOptions | Mapping[str, Any] | None) -> LoadOptions:
        if options is None:
            return cls()
        if isinstance(options, LoadOptions):
            return options
        return cls.from_dict(options)

    def with_take(self, take: int | None) -> LoadOptions:
        return dataclasses.replace(self, take=take)

    def combined_filter(self) -> Any:
        """The filter AND-ed with the search box condition, if any."""
        search = self._search_filter()
        if search is None:
            return self.filter
        if self.filter is None:
            return search
        return [self.filter, "and", search]

    def _search_filter(self) -> Any:
        if self.search_expr is None or self.search_value in (None, ""):
            return None
        exprs = [self.search_expr] if isinstance(self.search_expr, str) else list(self.search_expr)
        result: Any = None
        for expr in exprs:
            condition = [expr, self.search_operation, self.search_value]
            result = condition if result is None else [result, "or", condition]
        return result


@dataclass
class QueryAssembler:
    """Turn :class:`LoadOptions` into a query string.

    ``join``, ``cache`` and ``include_deleted`` come from the store
    configuration and apply to every query.
    """

    compiler: FilterCompiler = field(default_factory=FilterCompiler)
    builder_options: QueryBuilderOptions = field(default_factory=QueryBuilderOptions)
    join: Iterable[Any] = ()
    cache: bool = True
    include_deleted: bool = False

    def builder(self, options: LoadOptions | Mapping[str, Any] | None) -> RequestQueryBuilder:
        options = LoadOptions.of(options)
        builder = (
            RequestQueryBuilder.create(self.builder_options)
            .search(self.compiler.compile(options.combined_filter()))
            .select(options.select)
            .sort_by(compile_sort(options.sort))
            .set_offset(options.skip)
            .set_limit(options.take)
            .set_join(list(self.join))
            .set_include_deleted(self.include_deleted)
        )
        if not self.cache:
            builder.reset_cache()
        return builder

    def compile(self, options: LoadOptions | Mapping[str, Any] | None) -> str:
        """Compile load options to a serialized query string."""
        return self.builder(options).query()
