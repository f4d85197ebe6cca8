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
"""Load results returned to the grid."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from crudstore.kernel.exceptions import ResponseFormatException

T = TypeVar("T")


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """A page of records plus the total number of matching records.

    Attributes:
        data: The records on this page.
        total_count: Total matches across all pages, ``None`` if the
            backend did not report one.
    """

    data: list[T]
    total_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Grid-shaped result: ``{"data": [...], "totalCount": n}``."""
        return {"data": self.data, "totalCount": self.total_count}

    @classmethod
    def from_body(cls, body: Any) -> LoadResult[Any]:
        """Unwrap a ``{data, total}`` envelope.

        A bare JSON array (an unpaginated listing) is accepted as well; its
        length is the total.
        """
        if isinstance(body, list):
            return cls(data=body, total_count=len(body))
        if isinstance(body, Mapping) and isinstance(body.get("data"), list):
            return cls(data=body["data"], total_count=body.get("total"))
        raise ResponseFormatException(
            "Expected a {data, total} envelope or a JSON array",
            context={"body_type": type(body).__name__},
        )
