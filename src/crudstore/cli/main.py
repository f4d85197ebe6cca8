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
"""crudstore CLI — inspect how load options compile."""

from __future__ import annotations

import json
from typing import Any

import click
import httpx
from rich.table import Table

from crudstore.cli.console import console, err_console
from crudstore.kernel.exceptions import CompileException
from crudstore.query.assembler import LoadOptions, QueryAssembler
from crudstore.query.operators import SEARCH_OPERATORS


@click.group()
@click.version_option(package_name="crudstore")
def cli() -> None:
    """crudstore — grid load options to REST query strings."""


@cli.command("compile")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--url", default="", help="Resource URL to prefix the query with.")
@click.option("--join", "joins", multiple=True, help="Relation to join (repeatable).")
@click.option("--params", "show_params", is_flag=True, help="Print decoded parameters instead of the query string.")
def compile_command(source: Any, url: str, joins: tuple[str, ...], show_params: bool) -> None:
    """Compile load options (JSON, from SOURCE or stdin) to a query string."""
    try:
        data = json.load(source)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"invalid JSON: {exc}", param_hint="SOURCE") from exc
    if not isinstance(data, dict):
        raise click.BadParameter("load options must be a JSON object", param_hint="SOURCE")

    assembler = QueryAssembler(join=joins)
    try:
        query = assembler.compile(LoadOptions.from_dict(data))
    except CompileException as exc:
        err_console.print(f"[error]{exc}[/error]")
        raise SystemExit(1) from exc

    if show_params:
        table = Table(border_style="dim")
        table.add_column("Parameter", style="info")
        table.add_column("Value")
        for name, value in httpx.QueryParams(query).multi_items():
            table.add_row(name, value)
        console.print(table)
        return

    click.echo(f"{url}?{query}" if url and query else url or query)


@cli.command("operators")
def operators_command() -> None:
    """Show the filter operator table."""
    table = Table(title="Filter operators", border_style="dim")
    table.add_column("Operator", style="info")
    table.add_column("Token")
    table.add_column("Negated")
    for op, (positive, negated) in SEARCH_OPERATORS.items():
        note = " [warning](approximate)[/warning]" if SEARCH_OPERATORS.is_lossy(op, True) else ""
        table.add_row(op, positive, negated + note)
    console.print(table)


def main() -> None:
    cli()
