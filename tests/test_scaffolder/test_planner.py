"""Unit tests for the directory planner (quicky_setup.scaffolder.planner)."""

from __future__ import annotations

from pathlib import Path

import pytest

from quicky_setup.answers import Framework
from quicky_setup.scaffolder.planner import create_folders, plan_folders


class TestPlanFolders:
    @pytest.mark.unit
    def test_next_layout(self):
        assert plan_folders(Framework.NEXT) == (
            "public",
            "components",
            "hooks",
            "lib",
            "styles",
            "types",
            "services",
        )

    @pytest.mark.unit
    def test_react_layout(self):
        folders = plan_folders(Framework.REACT)
        assert folders[0] == "public"
        assert "src/pages" in folders
        assert "src/routes" in folders
        assert all(f.startswith("src/") for f in folders[1:])

    @pytest.mark.unit
    def test_plain_string_framework(self):
        assert plan_folders("next") == plan_folders(Framework.NEXT)

    @pytest.mark.unit
    def test_unknown_framework_gets_generic_layout(self):
        folders = plan_folders("svelte")
        assert folders[0] == "public"
        assert "src/pages" not in folders
        assert "src/components" in folders

    @pytest.mark.unit
    @pytest.mark.parametrize("framework", [Framework.NEXT, Framework.REACT, "other"])
    def test_deterministic_and_unique(self, framework):
        first = plan_folders(framework)
        assert first == plan_folders(framework)
        assert len(first) == len(set(first))

    @pytest.mark.unit
    def test_next_never_touches_router_dirs(self):
        folders = plan_folders(Framework.NEXT)
        assert "app" not in folders
        assert "pages" not in folders


class TestCreateFolders:
    @pytest.mark.unit
    def test_creates_every_folder(self, tmp_path: Path):
        created = create_folders(tmp_path, Framework.REACT)
        assert [p.relative_to(tmp_path).as_posix() for p in created] == list(
            plan_folders(Framework.REACT)
        )
        assert all(p.is_dir() for p in created)

    @pytest.mark.unit
    def test_idempotent(self, tmp_path: Path):
        create_folders(tmp_path, Framework.NEXT)
        marker = tmp_path / "lib" / "keep.ts"
        marker.write_text("export {};\n")
        create_folders(tmp_path, Framework.NEXT)
        assert marker.read_text() == "export {};\n"
