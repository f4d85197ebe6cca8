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
"""Sort descriptors for the REST query grammar."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class SortOrder:
    """A single sort order: field name + direction."""

    field: str
    order: Literal["ASC", "DESC"] = "ASC"

    @staticmethod
    def asc(field: str) -> SortOrder:
        return SortOrder(field=field, order="ASC")

    @staticmethod
    def desc(field: str) -> SortOrder:
        return SortOrder(field=field, order="DESC")

    def to_param(self, delimiter: str = ",") -> str:
        """Render as ``field,ORDER``."""
        return f"{self.field}{delimiter}{self.order}"


def compile_sort_descriptor(descriptor: Any) -> SortOrder | None:
    """Compile one grid sort descriptor.

    A bare field name sorts ascending; ``{"selector": ..., "desc": ...}``
    picks the direction. Anything else yields ``None``.
    """
    if isinstance(descriptor, str):
        return SortOrder.asc(descriptor)
    if isinstance(descriptor, Mapping):
        selector = descriptor.get("selector")
        if isinstance(selector, str) and selector:
            return SortOrder.desc(selector) if descriptor.get("desc") else SortOrder.asc(selector)
    return None


def compile_sort(sort: Any) -> list[SortOrder | None] | None:
    """Normalize the grid's ``sort`` option into a list of sort orders.

    Returns ``None`` when no sort was requested. Invalid descriptors stay in
    the list as ``None`` entries; the query builder skips them.
    """
    if not sort:
        return None
    if not isinstance(sort, (list, tuple)):
        sort = [sort]
    return [compile_sort_descriptor(s) for s in sort]
