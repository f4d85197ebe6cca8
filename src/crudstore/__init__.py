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
"""crudstore — grid data source for NestJS CRUD style REST endpoints.

Compiles a data grid's load options (filter expressions, sort, paging,
field selection) into the endpoint's query grammar and maps the grid's
load/byKey/insert/update/remove/totalCount operations onto HTTP calls.
"""

__version__ = "0.1.0"

from crudstore.kernel.exceptions import (
    CompileException,
    CrudStoreException,
    HttpStatusException,
    TransportException,
    UnknownOperatorException,
)
from crudstore.query import FilterCompiler, LoadOptions, QueryAssembler, compile_filter
from crudstore.store import CrudStore, LoadResult, create_store

__all__ = [
    "CompileException",
    "CrudStore",
    "CrudStoreException",
    "FilterCompiler",
    "HttpStatusException",
    "LoadOptions",
    "LoadResult",
    "QueryAssembler",
    "TransportException",
    "UnknownOperatorException",
    "__version__",
    "compile_filter",
    "create_store",
]
