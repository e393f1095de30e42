"""Unit tests for the Jinja2 renderer (quicky_setup.scaffolder.templates).

Tests cover:
- Packaged and custom template directories
- StrictUndefined behaviour
- No HTML escaping
- Whitespace control around block tags
"""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from quicky_setup.scaffolder.templates import TemplateRenderer


class TestTemplateRenderer:
    @pytest.mark.unit
    def test_packaged_templates_found(self):
        renderer = TemplateRenderer()
        assert (renderer.template_dir / "api" / "apiClient.j2").is_file()
        assert (renderer.template_dir / "redux" / "store.j2").is_file()

    @pytest.mark.unit
    def test_custom_directory(self, tmp_path: Path):
        (tmp_path / "hello.j2").write_text("Hello {{ name }}!\n")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("hello.j2", {"name": "World"}) == "Hello World!\n"

    @pytest.mark.unit
    def test_missing_template(self, tmp_path: Path):
        with pytest.raises(TemplateNotFound):
            TemplateRenderer(tmp_path).render("nope.j2", {})

    @pytest.mark.unit
    def test_missing_variable_raises(self, tmp_path: Path):
        (tmp_path / "broken.j2").write_text("{{ missing }}")
        with pytest.raises(UndefinedError):
            TemplateRenderer(tmp_path).render("broken.j2", {})

    @pytest.mark.unit
    def test_no_html_escaping(self, tmp_path: Path):
        (tmp_path / "generic.j2").write_text("const x = api{{ value }}();")
        rendered = TemplateRenderer(tmp_path).render("generic.j2", {"value": "<T>"})
        assert rendered == "const x = api<T>();"

    @pytest.mark.unit
    def test_block_tags_leave_no_blank_lines(self, tmp_path: Path):
        (tmp_path / "blocks.j2").write_text("a\n{% if flag %}\nb\n{% endif %}\nc\n")
        rendered = TemplateRenderer(tmp_path).render("blocks.j2", {"flag": False})
        assert rendered == "a\nc\n"
