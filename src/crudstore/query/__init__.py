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
"""crudstore query — filter compiler, sort compilation and query assembly."""

from crudstore.query.assembler import LoadOptions, QueryAssembler
from crudstore.query.builder import QueryBuilderOptions, RequestQueryBuilder
from crudstore.query.compiler import FilterCompiler, compile_filter
from crudstore.query.expression import Comparison, Connective, Expression, Not, Terminal, parse_filter
from crudstore.query.operators import SEARCH_OPERATORS, CondOperator, LogicalOperator, OperatorTable
from crudstore.query.sort import SortOrder, compile_sort

__all__ = [
    "Comparison",
    "CondOperator",
    "Connective",
    "Expression",
    "FilterCompiler",
    "LoadOptions",
    "LogicalOperator",
    "Not",
    "OperatorTable",
    "QueryAssembler",
    "QueryBuilderOptions",
    "RequestQueryBuilder",
    "SEARCH_OPERATORS",
    "SortOrder",
    "Terminal",
    "compile_filter",
    "compile_sort",
    "parse_filter",
]
