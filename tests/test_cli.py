"""Tests for CLI interface."""

import json
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import patch

import pytest
from playwright.async_api import Error as PlaywrightError

from remote_call.cli import run_cli
from remote_call.runtime.endpoint import CallEndpoint, LocalTransport


@pytest.fixture
def project_path():
    return Path(__file__).parent / "fixtures" / "project"


class TestCLI:
    def given_args(self, *args):
        self.args = list(args)

    async def when_cli_is_run_capturing_output(self, capsys):
        self.exit_code = await run_cli(self.args)
        self.captured = capsys.readouterr()

    def then_exit_code_is_zero(self):
        assert self.exit_code == 0

    def then_exit_code_is_nonzero(self):
        assert self.exit_code != 0

    @pytest.mark.asyncio
    async def test_scan_lists_matched_files(self, project_path, capsys):
        self.given_args("scan", "--root", str(project_path), "server/api/*")
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_zero()
        lines = self.captured.out.strip().splitlines()
        assert len(lines) == 1
        assert lines[0].endswith("test.ts")

    @pytest.mark.asyncio
    async def test_discover_outputs_json(self, project_path, capsys):
        self.given_args("discover", "--root", str(project_path), "server/api/*")
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_zero()
        output = json.loads(self.captured.out)
        assert [f["identifier"] for f in output["functions"]] == ["add", "multiply", "fetchUser"]

    @pytest.mark.asyncio
    async def test_discover_reads_config_file(self, project_path, capsys):
        self.given_args(
            "discover",
            "--root",
            str(project_path),
            "--config",
            str(project_path / "remote-call.json"),
        )
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_zero()
        output = json.loads(self.captured.out)
        assert len(output["functions"]) == 8
        assert len(output["conflicts"]) == 1
        assert len(output["errors"]) == 1

    @pytest.mark.asyncio
    async def test_generate_prints_declaration(self, project_path, capsys):
        self.given_args("generate", "--root", str(project_path), "server/api/*")
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_zero()
        assert 'type RemoteCallIds = "add" | "multiply" | "fetchUser";' in self.captured.out

    @pytest.mark.asyncio
    async def test_generate_writes_output_file(self, project_path, tmp_path, capsys):
        output = tmp_path / "types" / "remote-call.d.ts"
        self.given_args("generate", "--root", str(project_path), "server/api/*", "-o", str(output))
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_zero()
        assert '"fetchUser": (id: string) => Promise<{ id: string; name: string }>;' in output.read_text()
        assert str(output) in self.captured.err

    @pytest.mark.asyncio
    async def test_generate_without_paths_is_never(self, tmp_path, capsys):
        self.given_args("generate", "--root", str(tmp_path))
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_zero()
        assert "type RemoteCallIds = never;" in self.captured.out

    @pytest.mark.asyncio
    async def test_missing_root_is_fatal(self, tmp_path, capsys):
        self.given_args("discover", "--root", str(tmp_path / "missing"), "server/*")
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_nonzero()
        assert "Error:" in self.captured.err

    @pytest.mark.asyncio
    async def test_malformed_pattern_is_fatal(self, project_path, capsys):
        self.given_args("scan", "--root", str(project_path), "/absolute/*")
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_nonzero()

    @pytest.mark.asyncio
    async def test_no_command_shows_help(self, capsys):
        self.given_args()
        await self.when_cli_is_run_capturing_output(capsys)

        self.then_exit_code_is_nonzero()
        assert "usage" in self.captured.err.lower()


def fake_page_transport(functions):
    @asynccontextmanager
    async def opener(url, identifiers=None, headless=True):
        yield LocalTransport(CallEndpoint(functions))

    return opener


class TestCLICall:
    def given_page_functions(self, functions):
        self.opener = fake_page_transport(functions)

    async def when_called(self, capsys, *args):
        with patch("remote_call.cli.open_page_transport", self.opener):
            self.exit_code = await run_cli(["call", *args])
        self.captured = capsys.readouterr()

    @pytest.mark.asyncio
    async def test_prints_json_result(self, capsys):
        self.given_page_functions({"add": lambda a, b: a + b})
        await self.when_called(capsys, "file:///page.html", "add", "2", "3")

        assert self.exit_code == 0
        assert json.loads(self.captured.out) == 5

    @pytest.mark.asyncio
    async def test_bare_words_are_strings(self, capsys):
        self.given_page_functions({"hashPassword": lambda p: f"hashed_{p}"})
        await self.when_called(capsys, "file:///page.html", "hashPassword", "secret")

        assert json.loads(self.captured.out) == "hashed_secret"

    @pytest.mark.asyncio
    async def test_rejected_call_exits_nonzero(self, capsys):
        self.given_page_functions({})
        await self.when_called(capsys, "file:///page.html", "missing")

        assert self.exit_code == 1
        assert "Error (not-implemented): Remote call not implemented for function: missing" in self.captured.err

    @pytest.mark.asyncio
    async def test_browser_launch_failure_exits_nonzero(self, capsys):
        class NoChromium:
            async def launch(self, headless=True):
                raise PlaywrightError("Executable doesn't exist")

        class Started:
            chromium = NoChromium()

            async def stop(self):
                pass

        class Manager:
            async def start(self):
                return Started()

        with patch("remote_call.runtime.browser.async_playwright", Manager):
            self.exit_code = await run_cli(["call", "file:///page.html", "add", "1"])
        self.captured = capsys.readouterr()

        assert self.exit_code == 1
        assert "transport-failure" in self.captured.err
        assert "Executable doesn't exist" in self.captured.err
