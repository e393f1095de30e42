"""Template resolver: the decision table behind every generated file.

Maps a ``TemplateKind`` plus the user's ``Answers`` to the rendered file
content and its project-relative output path.  Variants are selected along
four axes:

* language      -- syntax variant and file extension
* framework     -- env var naming and output root (``lib/`` vs ``src/lib/``)
* auth storage  -- token persistence strategy of the API client
* UI library    -- extra dependencies only, never template content

``resolve`` is a pure function of its arguments; values that must differ per
run (such as the ``.env`` secret) are passed in through *extra*.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from ..answers import Answers, AuthStorage, Framework, UiLibrary
from ..errors import ConfigurationError
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TemplateKind(str, Enum):
    """Every file the scaffolder knows how to generate."""
    API_CLIENT = "api_client"
    ROUTES = "routes"
    API_ENDPOINTS = "api_endpoints"
    URL_HELPER = "url_helper"
    REDUX_STORE = "redux_store"
    REDUX_SLICE = "redux_slice"
    REDUX_THUNKS = "redux_thunks"
    REDUX_TYPES = "redux_types"
    REDUX_HOOKS = "redux_hooks"
    ENV = "env"
    ENV_EXAMPLE = "env_example"
    README = "readme"
    TAILWIND_CONFIG = "tailwind_config"
    VITE_CONFIG = "vite_config"
    INDEX_CSS = "index_css"
    JSCONFIG = "jsconfig"


class Feature(str, Enum):
    """Feature bundles that can be added at ``init`` time or with ``add``."""
    REDUX = "redux"
    API = "api"
    AUTH = "auth"


# ---------------------------------------------------------------------------
# Dependency tables
# ---------------------------------------------------------------------------

FEATURE_DEPENDENCIES: dict[Feature, tuple[str, ...]] = {
    Feature.API: ("axios",),
    Feature.AUTH: ("axios", "js-cookie"),
    Feature.REDUX: ("@reduxjs/toolkit", "react-redux"),
}

UI_DEPENDENCIES: dict[UiLibrary, tuple[str, ...]] = {
    UiLibrary.NONE: (),
    UiLibrary.SHADCN: ("lucide-react", "class-variance-authority", "tailwind-merge", "clsx"),
    UiLibrary.ANTD: ("antd",),
}

# Libraries that need their own interactive initialiser after installation.
UI_FOLLOW_UP: dict[UiLibrary, str] = {
    UiLibrary.SHADCN: "npx shadcn-ui@latest init",
}


def dependencies_for(item: Feature | UiLibrary) -> tuple[str, ...]:
    """Return the npm packages a feature bundle or UI library needs."""
    if isinstance(item, Feature):
        return FEATURE_DEPENDENCIES[item]
    return UI_DEPENDENCIES[item]


# ---------------------------------------------------------------------------
# Variant table
# ---------------------------------------------------------------------------

def _lib_dir(answers: Answers) -> str:
    return "lib" if answers.framework is Framework.NEXT else "src/lib"


def _store_dir(answers: Answers) -> str:
    return "store" if answers.framework is Framework.NEXT else "src/store"


def _hooks_dir(answers: Answers) -> str:
    return "hooks" if answers.framework is Framework.NEXT else "src/hooks"


def _always(answers: Answers) -> bool:
    return True


def _needs_storage(answers: Answers) -> bool:
    return answers.auth_storage is not None


def _typescript_only(answers: Answers) -> bool:
    return answers.is_typescript


def _vite_only(answers: Answers) -> bool:
    return answers.framework is Framework.REACT


@dataclass(frozen=True)
class TemplateSpec:
    """How one ``TemplateKind`` is rendered and where it is written."""

    template: str
    output: Callable[[Answers], str]
    applies: Callable[[Answers], bool] = _always
    context: dict[str, Any] = field(default_factory=dict)


_VARIANTS: dict[TemplateKind, TemplateSpec] = {
    TemplateKind.API_CLIENT: TemplateSpec(
        "api/apiClient.j2", lambda a: f"{_lib_dir(a)}/apiClient.{a.ext}", _needs_storage
    ),
    TemplateKind.ROUTES: TemplateSpec(
        "api/Routes.j2", lambda a: f"{_lib_dir(a)}/Routes.{a.ext}"
    ),
    TemplateKind.API_ENDPOINTS: TemplateSpec(
        "api/apiEndpoints.j2", lambda a: f"{_lib_dir(a)}/apiEndpoints.{a.ext}"
    ),
    TemplateKind.URL_HELPER: TemplateSpec(
        "api/url.j2", lambda a: f"{_lib_dir(a)}/url.{a.ext}"
    ),
    TemplateKind.REDUX_STORE: TemplateSpec(
        "redux/store.j2", lambda a: f"{_store_dir(a)}/store.{a.ext}"
    ),
    TemplateKind.REDUX_SLICE: TemplateSpec(
        "redux/counterSlice.j2",
        lambda a: f"{_store_dir(a)}/features/counter/counterSlice.{a.ext}",
    ),
    TemplateKind.REDUX_THUNKS: TemplateSpec(
        "redux/counterThunks.j2",
        lambda a: f"{_store_dir(a)}/features/counter/counterThunks.{a.ext}",
    ),
    TemplateKind.REDUX_TYPES: TemplateSpec(
        "redux/counter.types.j2",
        lambda a: f"{_store_dir(a)}/types/counter.types.ts",
        _typescript_only,
    ),
    TemplateKind.REDUX_HOOKS: TemplateSpec(
        "redux/hooks.j2", lambda a: f"{_hooks_dir(a)}/redux.ts", _typescript_only
    ),
    TemplateKind.ENV: TemplateSpec("project/env.j2", lambda a: ".env", context={"example": False}),
    TemplateKind.ENV_EXAMPLE: TemplateSpec(
        "project/env.j2", lambda a: ".env.example", context={"example": True}
    ),
    TemplateKind.README: TemplateSpec("project/README.md.j2", lambda a: "README.md"),
    TemplateKind.TAILWIND_CONFIG: TemplateSpec(
        "project/tailwind.config.j2", lambda a: "tailwind.config.js", _vite_only
    ),
    TemplateKind.VITE_CONFIG: TemplateSpec(
        "project/vite.config.j2", lambda a: f"vite.config.{a.ext}", _vite_only
    ),
    TemplateKind.INDEX_CSS: TemplateSpec(
        "project/index.css.j2", lambda a: "src/index.css", _vite_only
    ),
    TemplateKind.JSCONFIG: TemplateSpec("project/jsconfig.json.j2", lambda a: "jsconfig.json"),
}

FEATURE_TEMPLATES: dict[Feature, tuple[TemplateKind, ...]] = {
    Feature.API: (
        TemplateKind.URL_HELPER,
        TemplateKind.ROUTES,
        TemplateKind.API_ENDPOINTS,
        TemplateKind.API_CLIENT,
    ),
    Feature.AUTH: (
        TemplateKind.URL_HELPER,
        TemplateKind.ROUTES,
        TemplateKind.API_ENDPOINTS,
        TemplateKind.API_CLIENT,
    ),
    Feature.REDUX: (
        TemplateKind.REDUX_STORE,
        TemplateKind.REDUX_SLICE,
        TemplateKind.REDUX_THUNKS,
        TemplateKind.REDUX_TYPES,
        TemplateKind.REDUX_HOOKS,
    ),
}


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class TemplateResolver:
    """Selects and renders the template variant for each generated file."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def applies(self, kind: TemplateKind, answers: Answers) -> bool:
        """Return ``True`` if *kind* produces a file for these answers."""
        return _VARIANTS[kind].applies(answers)

    def output_path(self, kind: TemplateKind, answers: Answers) -> str:
        """Project-relative path the rendered *kind* is written to."""
        return _VARIANTS[kind].output(answers)

    def resolve(
        self,
        kind: TemplateKind,
        answers: Answers,
        extra: dict[str, Any] | None = None,
    ) -> str | None:
        """Render the variant of *kind* selected by *answers*.

        Returns:
            The file content, or ``None`` when *kind* does not apply (an API
            client without a storage mode, TypeScript-only files for a
            JavaScript project, Vite files for Next.js).
        """
        spec = _VARIANTS[kind]
        if not spec.applies(answers):
            return None
        context = {**build_context(answers), **spec.context, **(extra or {})}
        return self.renderer.render(spec.template, context)

    def plan_files(self, feature: Feature, answers: Answers) -> list[tuple[str, str]]:
        """Return ``(relative_path, content)`` pairs for a feature bundle.

        Raises:
            ConfigurationError: If ``auth`` is requested without a storage mode.
        """
        if feature is Feature.AUTH and answers.auth_storage is None:
            raise ConfigurationError("The auth feature needs an auth storage mode (cookie or localStorage)")

        files: list[tuple[str, str]] = []
        for kind in FEATURE_TEMPLATES[feature]:
            content = self.resolve(kind, answers)
            if content is None:
                continue
            files.append((self.output_path(kind, answers), content))
        return files


def build_context(answers: Answers) -> dict[str, Any]:
    """Build the Jinja2 context shared by every template.

    Adds the framework-specific environment variable names and the
    expression used to read them in client code.
    """
    is_next = answers.framework is Framework.NEXT
    prefix = "NEXT_PUBLIC_" if is_next else "VITE_"
    api_var = f"{prefix}API_URL"
    env_reader = "process.env" if is_next else "import.meta.env"

    return {
        **answers.template_context(),
        "is_next": is_next,
        "api_var": api_var,
        "socket_var": f"{prefix}SOCKET_URL",
        "secret_var": "NEXTAUTH_SECRET" if is_next else "VITE_AUTH_SECRET",
        "api_url_expr": f"{env_reader}.{api_var}",
        "use_client": is_next and answers.routing is not None and answers.routing.value == "app",
        "cookie_storage": answers.auth_storage is AuthStorage.COOKIE,
        "local_storage": answers.auth_storage is AuthStorage.LOCAL_STORAGE,
        "store_import": "@/store/store" if is_next else "../store/store",
    }
