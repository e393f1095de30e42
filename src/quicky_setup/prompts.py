"""Interactive setup questions.

Uses ``rich.prompt`` for input.  Questions whose answer was already given on
the command line are skipped, and with ``assume_defaults`` every remaining
question takes its default without asking.
"""

from __future__ import annotations

from typing import Any

from rich.prompt import Confirm, Prompt

from .answers import (
    Answers,
    AuthStorage,
    Framework,
    Language,
    Routing,
    UiLibrary,
    build_answers,
)
from .errors import QuickyError
from .utils import is_valid_project_name, print_warning


class PromptAborted(QuickyError):
    """Raised when the user cancels an interactive prompt."""


_FRAMEWORK_CHOICES = {"react": Framework.REACT, "next": Framework.NEXT}
_LANGUAGE_CHOICES = {"js": Language.JS, "ts": Language.TS}
_ROUTING_CHOICES = {"app": Routing.APP, "pages": Routing.PAGES}
_STORAGE_CHOICES = {"cookie": AuthStorage.COOKIE, "localStorage": AuthStorage.LOCAL_STORAGE}
_UI_CHOICES = {"none": UiLibrary.NONE, "shadcn": UiLibrary.SHADCN, "antd": UiLibrary.ANTD}


def _choose(question: str, choices: dict[str, Any], default: str) -> Any:
    answer = Prompt.ask(question, choices=list(choices), default=default)
    return choices[answer]


def _guard(fn, *args: Any, **kwargs: Any) -> Any:
    try:
        return fn(*args, **kwargs)
    except (KeyboardInterrupt, EOFError) as exc:
        raise PromptAborted("Setup cancelled") from exc


def ask_project_name(default: str = "my-app") -> str:
    while True:
        name = _guard(Prompt.ask, "Enter project name", default=default).strip()
        if is_valid_project_name(name):
            return name
        print_warning("Use letters, digits, '.', '-' and '_' only.")


def ask_auth_storage() -> AuthStorage:
    """Ask only for the token storage mode (used by ``add auth``)."""
    return _guard(_choose, "Auth storage type", _STORAGE_CHOICES, "cookie")


def ask_questions(
    *,
    project_name: str | None = None,
    framework: Framework | None = None,
    language: Language | None = None,
    assume_defaults: bool = False,
) -> Answers:
    """Collect every answer, asking only for what is still unknown.

    Raises:
        PromptAborted: On Ctrl-C or end of input.
        ConfigurationError: If the collected answers are inconsistent.
    """
    values: dict[str, Any] = {}

    if assume_defaults:
        values = {
            "project_name": project_name or "my-app",
            "framework": framework or Framework.REACT,
            "language": language or Language.JS,
            "redux": True,
            "auth": True,
            "auth_storage": AuthStorage.COOKIE,
            "ui_library": UiLibrary.NONE,
        }
        return build_answers(**values)

    values["project_name"] = project_name or ask_project_name()
    values["framework"] = framework or _guard(_choose, "Choose framework", _FRAMEWORK_CHOICES, "react")
    values["language"] = language or _guard(_choose, "Choose language", _LANGUAGE_CHOICES, "js")
    if values["framework"] is Framework.NEXT:
        values["routing"] = _guard(_choose, "Choose Next.js routing system", _ROUTING_CHOICES, "app")
    values["redux"] = _guard(Confirm.ask, "Include Redux Toolkit?", default=True)
    values["auth"] = _guard(Confirm.ask, "Include Auth + Axios?", default=True)
    if values["auth"]:
        values["auth_storage"] = ask_auth_storage()
    values["ui_library"] = _guard(_choose, "Choose UI library", _UI_CHOICES, "none")

    return build_answers(**values)
