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
"""Store configuration properties."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from crudstore.core.config import config_properties


@config_properties(prefix="crudstore.store")
@dataclass
class StoreProperties:
    """Configuration for a CRUD resource store (crudstore.store.*).

    ``options`` collects settings the store does not interpret itself; they
    are kept verbatim for whatever collaborator wraps the store.
    """

    url: str = ""
    key: str = "id"
    timeout: int = 30
    headers: dict = field(default_factory=dict)
    join: list = field(default_factory=list)
    cache: bool = True
    include_deleted: bool = False
    options: dict = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: str | Mapping[str, Any]) -> StoreProperties:
        """Build properties from a URL string or a flat options mapping.

        Unknown keys go to ``options``. A missing or empty ``key`` falls back
        to ``"id"``.
        """
        if isinstance(options, str):
            return cls(url=options)

        known = {f.name for f in dataclasses.fields(cls)} - {"options"}
        kwargs: dict[str, Any] = {}
        passthrough: dict[str, Any] = dict(options.get("options") or {})
        for name, value in options.items():
            if name in known:
                kwargs[name] = value
            elif name != "options":
                passthrough[name] = value

        if not kwargs.get("key"):
            kwargs.pop("key", None)
        return cls(options=passthrough, **kwargs)
