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
"""Query-string builder for NestJS CRUD style REST endpoints.

Produces the request grammar those endpoints parse::

    s={"age":{"$gte":18}}&fields=id,name&sort=name,DESC&offset=0&limit=20

Every setter ignores ``None`` so absent options leave no trace in the
query string. Parameters are emitted in the order they were set.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from crudstore.kernel.exceptions import InvalidQueryException
from crudstore.query.sort import SortOrder


@dataclass(frozen=True)
class QueryBuilderOptions:
    """Parameter names and delimiters of the query grammar."""

    delim: str = "||"
    delim_str: str = ","
    search: str = "s"
    fields: str = "fields"
    sort: str = "sort"
    limit: str = "limit"
    offset: str = "offset"
    page: str = "page"
    join: str = "join"
    cache: str = "cache"
    include_deleted: str = "include_deleted"


class RequestQueryBuilder:
    """Fluent builder for the REST query string.

    Usage::

        query = (RequestQueryBuilder()
            .search({"age": {"$gte": 18}})
            .sort_by([SortOrder.desc("name")])
            .set_limit(20)
            .query())
    """

    def __init__(self, options: QueryBuilderOptions | None = None) -> None:
        self._options = options or QueryBuilderOptions()
        self._params: dict[str, str | list[str]] = {}

    @staticmethod
    def create(options: QueryBuilderOptions | None = None) -> RequestQueryBuilder:
        return RequestQueryBuilder(options)

    def search(self, tree: Any) -> RequestQueryBuilder:
        """Set the search tree; anything but a mapping is ignored."""
        if isinstance(tree, Mapping):
            self._params[self._options.search] = json.dumps(tree, separators=(",", ":"), ensure_ascii=False, default=str)
        return self

    def select(self, fields: Iterable[str] | None) -> RequestQueryBuilder:
        """Restrict the returned fields."""
        if not fields:
            return self
        if isinstance(fields, str):
            fields = [fields]
        fields = list(fields)
        for name in fields:
            if not isinstance(name, str) or not name:
                raise InvalidQueryException("Invalid field type. String expected", context={"field": name})
        self._params[self._options.fields] = self._options.delim_str.join(fields)
        return self

    def sort_by(self, orders: Iterable[SortOrder | None] | None) -> RequestQueryBuilder:
        """Add sort orders, skipping ``None`` entries."""
        if not orders:
            return self
        rendered = [o.to_param(self._options.delim_str) for o in orders if o is not None]
        if rendered:
            self._params[self._options.sort] = rendered
        return self

    def set_join(self, relations: Iterable[str | Mapping[str, Any]] | None) -> RequestQueryBuilder:
        """Join relations: ``"profile"`` or ``{"field": "profile", "select": ["name"]}``."""
        if not relations:
            return self
        rendered: list[str] = []
        for relation in relations:
            if isinstance(relation, str):
                rendered.append(relation)
            elif isinstance(relation, Mapping) and isinstance(relation.get("field"), str):
                select = relation.get("select")
                if select:
                    rendered.append(relation["field"] + self._options.delim + self._options.delim_str.join(select))
                else:
                    rendered.append(relation["field"])
            else:
                raise InvalidQueryException("Invalid join relation", context={"join": relation})
        self._params[self._options.join] = rendered
        return self

    def set_limit(self, n: Any) -> RequestQueryBuilder:
        return self._set_number(self._options.limit, n)

    def set_offset(self, n: Any) -> RequestQueryBuilder:
        return self._set_number(self._options.offset, n)

    def set_page(self, n: Any) -> RequestQueryBuilder:
        return self._set_number(self._options.page, n)

    def reset_cache(self) -> RequestQueryBuilder:
        """Ask the endpoint to bypass its query cache."""
        self._params[self._options.cache] = "0"
        return self

    def set_include_deleted(self, include: bool | None) -> RequestQueryBuilder:
        """Include soft-deleted records."""
        if include:
            self._params[self._options.include_deleted] = "1"
        return self

    def params(self) -> httpx.QueryParams:
        items: list[tuple[str, str]] = []
        for name, value in self._params.items():
            if isinstance(value, list):
                items.extend((name, v) for v in value)
            else:
                items.append((name, value))
        return httpx.QueryParams(items)

    def query(self) -> str:
        """Serialize to a percent-encoded query string (no leading ``?``)."""
        return str(self.params())

    def _set_number(self, name: str, n: Any) -> RequestQueryBuilder:
        if n is None:
            return self
        if isinstance(n, float) and n.is_integer():
            n = int(n)
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidQueryException(
                f"Invalid {name}. Non-negative integer expected",
                context={name: n},
            )
        self._params[name] = str(n)
        return self
