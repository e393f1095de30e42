"""Unit tests for the interactive questions (quicky_setup.prompts).

``rich.prompt`` is patched so no terminal input is needed.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from quicky_setup.answers import AuthStorage, Framework, Language, Routing, UiLibrary
from quicky_setup.prompts import PromptAborted, ask_auth_storage, ask_project_name, ask_questions


class TestAskQuestions:
    @pytest.mark.unit
    def test_full_interactive_next(self):
        with patch(
            "quicky_setup.prompts.Prompt.ask",
            side_effect=["shop", "next", "ts", "pages", "localStorage", "antd"],
        ), patch("quicky_setup.prompts.Confirm.ask", side_effect=[False, True]):
            answers = ask_questions()

        assert answers.project_name == "shop"
        assert answers.framework is Framework.NEXT
        assert answers.language is Language.TS
        assert answers.routing is Routing.PAGES
        assert answers.redux is False
        assert answers.auth_storage is AuthStorage.LOCAL_STORAGE
        assert answers.ui_library is UiLibrary.ANTD

    @pytest.mark.unit
    def test_prompt_defaults_are_first_choices(self):
        with patch(
            "quicky_setup.prompts.Prompt.ask",
            side_effect=["shop", "react", "js", "none"],
        ) as mock_prompt, patch("quicky_setup.prompts.Confirm.ask", side_effect=[True, False]):
            ask_questions()

        defaults = {c.args[0]: c.kwargs["default"] for c in mock_prompt.call_args_list}
        assert defaults == {
            "Enter project name": "my-app",
            "Choose framework": "react",
            "Choose language": "js",
            "Choose UI library": "none",
        }

    @pytest.mark.unit
    def test_react_skips_routing_and_storage(self):
        with patch(
            "quicky_setup.prompts.Prompt.ask", side_effect=["react", "js", "none"]
        ) as mock_prompt, patch("quicky_setup.prompts.Confirm.ask", side_effect=[True, False]):
            answers = ask_questions(project_name="site")

        assert mock_prompt.call_count == 3
        assert answers.routing is None
        assert answers.auth is False
        assert answers.auth_storage is None
        assert answers.redux is True

    @pytest.mark.unit
    def test_cli_values_are_not_asked(self):
        with patch(
            "quicky_setup.prompts.Prompt.ask", side_effect=["app", "cookie", "shadcn"]
        ) as mock_prompt, patch("quicky_setup.prompts.Confirm.ask", side_effect=[True, True]):
            answers = ask_questions(
                project_name="shop", framework=Framework.NEXT, language=Language.JS
            )

        questions = [c.args[0] for c in mock_prompt.call_args_list]
        assert "Choose framework" not in questions
        assert "Choose language" not in questions
        assert answers.language is Language.JS
        assert answers.ui_library is UiLibrary.SHADCN

    @pytest.mark.unit
    def test_assume_defaults(self):
        with patch("quicky_setup.prompts.Prompt.ask") as mock_prompt, patch(
            "quicky_setup.prompts.Confirm.ask"
        ) as mock_confirm:
            answers = ask_questions(project_name="quick", assume_defaults=True)

        mock_prompt.assert_not_called()
        mock_confirm.assert_not_called()
        assert answers.project_name == "quick"
        assert answers.framework is Framework.REACT
        assert answers.language is Language.JS
        assert answers.redux is True
        assert answers.auth_storage is AuthStorage.COOKIE

    @pytest.mark.unit
    def test_assume_defaults_keeps_template(self):
        answers = ask_questions(framework=Framework.NEXT, language=Language.TS, assume_defaults=True)
        assert answers.project_name == "my-app"
        assert answers.routing is Routing.APP
        assert answers.language is Language.TS

    @pytest.mark.unit
    @pytest.mark.parametrize("interrupt", [KeyboardInterrupt, EOFError])
    def test_abort(self, interrupt):
        with patch("quicky_setup.prompts.Prompt.ask", side_effect=interrupt):
            with pytest.raises(PromptAborted, match="Setup cancelled"):
                ask_questions()


class TestSingleQuestions:
    @pytest.mark.unit
    def test_project_name_retries_until_valid(self):
        with patch(
            "quicky_setup.prompts.Prompt.ask", side_effect=["bad name", "  good-name  "]
        ), patch("quicky_setup.prompts.print_warning") as mock_warn:
            assert ask_project_name() == "good-name"
        mock_warn.assert_called_once()

    @pytest.mark.unit
    def test_auth_storage(self):
        with patch("quicky_setup.prompts.Prompt.ask", return_value="localStorage") as mock_prompt:
            assert ask_auth_storage() is AuthStorage.LOCAL_STORAGE
        assert mock_prompt.call_args.kwargs["choices"] == ["cookie", "localStorage"]
