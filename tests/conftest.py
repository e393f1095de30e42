"""Shared pytest fixtures for the quicky-setup test suite.

Provides reusable fixtures for:
- Answers factories and a default Config
- A template resolver over the packaged templates
- A mocked ProcessRunner whose base-project step writes what the upstream
  generators would leave behind
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from quicky_setup.answers import Answers, Framework, build_answers
from quicky_setup.config import Config
from quicky_setup.scaffolder.installer import ProcessRunner
from quicky_setup.scaffolder.resolver import TemplateResolver


# ---------------------------------------------------------------------------
# Answers & Config
# ---------------------------------------------------------------------------

@pytest.fixture
def make_answers() -> Callable[..., Answers]:
    """Factory for ``Answers`` with Next.js / TypeScript / cookie defaults.

    Usage::

        def test_something(make_answers):
            answers = make_answers(framework="react", language="js", auth=False)
    """
    def factory(**overrides: Any) -> Answers:
        values: dict[str, Any] = {
            "project_name": "demo-app",
            "framework": "next",
            "language": "ts",
            "auth": True,
            "auth_storage": "cookie",
        }
        values.update(overrides)
        if values["auth"] is False and "auth_storage" not in overrides:
            values["auth_storage"] = None
        return build_answers(**values)

    return factory


@pytest.fixture
def next_ts_cookie(make_answers) -> Answers:
    return make_answers()


@pytest.fixture
def react_js_no_auth(make_answers) -> Answers:
    return make_answers(framework="react", language="js", auth=False)


@pytest.fixture
def config() -> Config:
    """Default configuration with git disabled."""
    return Config(init_git=False)


@pytest.fixture
def resolver() -> TemplateResolver:
    return TemplateResolver()


# ---------------------------------------------------------------------------
# Project fixtures
# ---------------------------------------------------------------------------

def write_generator_output(answers: Answers, root: Path) -> None:
    """Write the files create-next-app / create-vite would have produced."""
    root.mkdir(parents=True, exist_ok=True)
    dependencies = {"react": "^18.2.0", "react-dom": "^18.2.0"}
    if answers.framework is Framework.NEXT:
        dependencies["next"] = "14.2.3"
        if answers.routing is not None and answers.routing.value == "app":
            (root / "app").mkdir(exist_ok=True)
        else:
            (root / "pages").mkdir(exist_ok=True)
    else:
        (root / "src").mkdir(exist_ok=True)
        (root / f"vite.config.{answers.ext}").write_text("export default {}\n", encoding="utf-8")

    manifest = {
        "name": answers.project_name,
        "private": True,
        "scripts": {"dev": "placeholder"},
        "dependencies": dependencies,
    }
    (root / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    (root / ".gitignore").write_text("node_modules\n", encoding="utf-8")
    if answers.is_typescript:
        (root / "tsconfig.json").write_text("{}\n", encoding="utf-8")
    else:
        (root / "jsconfig.json").write_text('{"compilerOptions": {}}\n', encoding="utf-8")


@pytest.fixture
def fake_generator() -> Callable[[Answers, Path], None]:
    """The generator-output writer, for runners built inside a test."""
    return write_generator_output


@pytest.fixture
def mock_runner() -> MagicMock:
    """A ``ProcessRunner`` stand-in that never spawns processes.

    ``create_base_project`` writes generator output into the target
    directory so later steps find the files they expect.
    """
    runner = MagicMock(spec=ProcessRunner)

    async def create_base_project(answers: Answers, cwd: Path) -> None:
        write_generator_output(answers, Path(cwd))

    runner.create_base_project = AsyncMock(side_effect=create_base_project)
    runner.install = AsyncMock(return_value=None)
    runner.init_repository = AsyncMock(return_value=None)
    runner.run = AsyncMock(return_value="")
    return runner


@pytest.fixture
def existing_project(tmp_path: Path, make_answers) -> Callable[..., Path]:
    """Factory creating an already-generated project directory (no snapshot)."""
    def factory(**overrides: Any) -> Path:
        answers = make_answers(**overrides)
        root = tmp_path / answers.project_name
        write_generator_output(answers, root)
        return root

    return factory
