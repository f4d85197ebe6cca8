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
"""Tests for CLI commands."""

from __future__ import annotations

import json

import httpx
from click.testing import CliRunner

from crudstore.cli.main import cli


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "compile" in result.output
        assert "operators" in result.output

    def test_compile_from_stdin(self):
        options = {"filter": ["age", ">=", 18], "sort": {"selector": "name", "desc": True}, "skip": 0, "take": 20}
        result = CliRunner().invoke(cli, ["compile"], input=json.dumps(options))
        assert result.exit_code == 0, result.output
        params = httpx.QueryParams(result.output.strip())
        assert json.loads(params["s"]) == {"age": {"$gte": 18}}
        assert params["sort"] == "name,DESC"
        assert params["limit"] == "20"

    def test_compile_with_url_and_join(self):
        result = CliRunner().invoke(
            cli, ["compile", "--url", "http://api/users", "--join", "profile"], input='{"take": 1}'
        )
        assert result.exit_code == 0, result.output
        url = httpx.URL(result.output.strip())
        assert url.path == "/users"
        assert url.params.get_list("join") == ["profile"]
        assert url.params["limit"] == "1"

    def test_compile_from_file(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text('{"select": ["id", "name"]}')
        result = CliRunner().invoke(cli, ["compile", str(path)])
        assert result.exit_code == 0, result.output
        assert httpx.QueryParams(result.output.strip())["fields"] == "id,name"

    def test_compile_params_table(self):
        result = CliRunner().invoke(cli, ["compile", "--params"], input='{"skip": 40}')
        assert result.exit_code == 0, result.output
        assert "offset" in result.output
        assert "40" in result.output

    def test_compile_rejects_invalid_json(self):
        result = CliRunner().invoke(cli, ["compile"], input="{not json")
        assert result.exit_code != 0
        assert "invalid JSON" in result.output

    def test_compile_reports_unknown_operator(self):
        result = CliRunner().invoke(cli, ["compile"], input='{"filter": ["a", "like", "x"]}')
        assert result.exit_code == 1

    def test_operators_table(self):
        result = CliRunner().invoke(cli, ["operators"])
        assert result.exit_code == 0
        assert "startswith" in result.output
        assert "$excl" in result.output
        assert "approximate" in result.output
