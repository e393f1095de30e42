"""Unit tests for the process invoker (quicky_setup.scaffolder.installer).

Tests cover:
- base_project_command for every framework / language / routing combination
- ProcessRunner.run error mapping
- install, create_base_project and init_repository command lines
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, call, patch

import pytest

from quicky_setup.config import Config
from quicky_setup.errors import CommandError
from quicky_setup.scaffolder.installer import NEXT_ENV, ProcessRunner, base_project_command


# ---------------------------------------------------------------------------
# base_project_command
# ---------------------------------------------------------------------------


class TestBaseProjectCommand:
    @pytest.mark.unit
    def test_next_typescript_app(self, next_ts_cookie):
        cmd = base_project_command(next_ts_cookie, Config())
        assert cmd[:4] == ["npx", "--yes", "create-next-app@14.2.3", "."]
        assert "--typescript" in cmd
        assert cmd[-1] == "--app"
        for flag in ("--eslint", "--tailwind", "--no-src-dir", "--turbo", "--use-npm"):
            assert flag in cmd
        assert cmd[cmd.index("--import-alias") + 1] == "@/*"

    @pytest.mark.unit
    def test_next_javascript_pages(self, make_answers):
        cmd = base_project_command(make_answers(language="js", routing="pages"), Config())
        assert "--js" in cmd
        assert "--typescript" not in cmd
        assert cmd[-1] == "--no-app"

    @pytest.mark.unit
    @pytest.mark.parametrize("language, template", [("ts", "react-ts"), ("js", "react")])
    def test_vite(self, make_answers, language: str, template: str):
        cmd = base_project_command(
            make_answers(framework="react", language=language), Config(vite_version="6.0.0")
        )
        assert cmd == ["npx", "--yes", "create-vite@6.0.0", ".", "--template", template]


# ---------------------------------------------------------------------------
# ProcessRunner
# ---------------------------------------------------------------------------


class TestProcessRunner:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_run_returns_stdout(self, tmp_path: Path):
        runner = ProcessRunner(Config(command_timeout=30))
        with patch(
            "quicky_setup.scaffolder.installer.run_command",
            new_callable=AsyncMock,
            return_value=(0, "ok", ""),
        ) as mock_run:
            assert await runner.run(["echo"], tmp_path, capture=True) == "ok"
        mock_run.assert_awaited_once_with(
            ["echo"], cwd=tmp_path, timeout=30, capture=True, env=None
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_run_raises_on_failure(self, tmp_path: Path):
        runner = ProcessRunner(Config())
        with patch(
            "quicky_setup.scaffolder.installer.run_command",
            new_callable=AsyncMock,
            return_value=(1, "", "npm ERR!"),
        ):
            with pytest.raises(CommandError) as exc_info:
                await runner.run(["npm", "install"], tmp_path)
        assert exc_info.value.returncode == 1
        assert exc_info.value.command == ["npm", "install"]
        assert "npm ERR!" in str(exc_info.value)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_install(self, tmp_path: Path):
        runner = ProcessRunner(Config(package_manager="pnpm"))
        runner.run = AsyncMock(return_value="")
        await runner.install(["axios", "js-cookie"], tmp_path)
        await runner.install(["tailwindcss"], tmp_path, dev=True)
        assert runner.run.await_args_list == [
            call(["pnpm", "install", "axios", "js-cookie"], tmp_path),
            call(["pnpm", "install", "-D", "tailwindcss"], tmp_path),
        ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_install_nothing(self, tmp_path: Path):
        runner = ProcessRunner(Config())
        runner.run = AsyncMock(return_value="")
        await runner.install((), tmp_path)
        runner.run.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_create_next_project_sets_env(self, tmp_path: Path, next_ts_cookie):
        runner = ProcessRunner(Config())
        runner.run = AsyncMock(return_value="")
        await runner.create_base_project(next_ts_cookie, tmp_path)
        args, kwargs = runner.run.await_args
        assert args[0][2] == "create-next-app@14.2.3"
        assert kwargs["env"] == NEXT_ENV

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_create_vite_project(self, tmp_path: Path, react_js_no_auth):
        runner = ProcessRunner(Config())
        runner.run = AsyncMock(return_value="")
        await runner.create_base_project(react_js_no_auth, tmp_path)
        assert runner.run.await_args.kwargs["env"] is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_init_repository(self, tmp_path: Path):
        runner = ProcessRunner(Config())
        runner.run = AsyncMock(return_value="")
        await runner.init_repository(tmp_path, "Initial commit")
        assert runner.run.await_args_list == [
            call(["git", "init"], tmp_path, capture=True),
            call(["git", "add", "."], tmp_path, capture=True),
            call(["git", "commit", "-m", "Initial commit"], tmp_path, capture=True),
        ]
