"""The answer model: every choice the user makes for one scaffolding run.

``Answers`` is a frozen Pydantic v2 model.  It is built once (from prompts,
CLI flags or a project snapshot) and only read afterwards.  Construction
enforces the cross-field invariants:

* ``routing`` is set iff ``framework`` is ``next`` (defaults to ``app``).
* ``auth_storage`` is set iff ``auth`` is true.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError
from .utils import is_valid_project_name, load_json, write_file


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Upstream framework the base project is generated with."""
    REACT = "react"
    NEXT = "next"


class Language(str, Enum):
    """Source language of the generated files."""
    JS = "js"
    TS = "ts"


class Routing(str, Enum):
    """Next.js routing system."""
    APP = "app"
    PAGES = "pages"


class AuthStorage(str, Enum):
    """Where the generated API client keeps its tokens."""
    COOKIE = "cookie"
    LOCAL_STORAGE = "localStorage"


class UiLibrary(str, Enum):
    """Optional component library installed into the project."""
    NONE = "none"
    SHADCN = "shadcn"
    ANTD = "antd"


TEMPLATE_SHORTHANDS: dict[str, tuple[Framework, Language]] = {
    "next-ts": (Framework.NEXT, Language.TS),
    "next-js": (Framework.NEXT, Language.JS),
    "react-ts": (Framework.REACT, Language.TS),
    "react-js": (Framework.REACT, Language.JS),
}


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

class Answers(BaseModel):
    """Immutable record of the user's setup choices."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Directory name of the new project")
    framework: Framework = Field(..., description="react (Vite) or next")
    language: Language = Field(..., description="js or ts")
    routing: Optional[Routing] = Field(default=None, description="Next.js routing system")
    auth: bool = Field(default=True, description="Include the Axios auth client")
    auth_storage: Optional[AuthStorage] = Field(default=None, description="Token storage mode")
    ui_library: UiLibrary = Field(default=UiLibrary.NONE)
    redux: bool = Field(default=False, description="Include a Redux Toolkit store")

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        value = value.strip()
        if not is_valid_project_name(value):
            raise ValueError(
                f"'{value}' is not a valid project name "
                "(use letters, digits, '.', '-' and '_' only)"
            )
        return value

    @model_validator(mode="before")
    @classmethod
    def _default_routing(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("framework") == "next" and data.get("routing") is None:
            return {**data, "routing": Routing.APP}
        return data

    @model_validator(mode="after")
    def _check_invariants(self) -> "Answers":
        if self.framework is Framework.REACT and self.routing is not None:
            raise ValueError("routing only applies to Next.js projects")
        if self.auth and self.auth_storage is None:
            raise ValueError("auth requires an auth_storage of 'cookie' or 'localStorage'")
        if not self.auth and self.auth_storage is not None:
            raise ValueError("auth_storage is only allowed when auth is enabled")
        return self

    # -- Derived values ------------------------------------------------------

    @property
    def is_typescript(self) -> bool:
        return self.language is Language.TS

    @property
    def ext(self) -> str:
        """File extension for generated source files."""
        return self.language.value

    def template_context(self) -> dict[str, Any]:
        """Return the plain-value context shared by every template."""
        return {
            "project_name": self.project_name,
            "framework": self.framework.value,
            "language": self.language.value,
            "ts": self.is_typescript,
            "routing": self.routing.value if self.routing else None,
            "auth": self.auth,
            "auth_storage": self.auth_storage.value if self.auth_storage else None,
            "ui_library": self.ui_library.value,
            "redux": self.redux,
        }


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------

def parse_template(shorthand: str) -> tuple[Framework, Language]:
    """Resolve a ``--template`` shorthand such as ``next-ts``.

    Raises:
        ConfigurationError: For unknown shorthands.
    """
    key = shorthand.strip().lower()
    if key not in TEMPLATE_SHORTHANDS:
        available = ", ".join(TEMPLATE_SHORTHANDS)
        raise ConfigurationError(f"Unknown template '{shorthand}'. Available: {available}")
    return TEMPLATE_SHORTHANDS[key]


def build_answers(**values: Any) -> Answers:
    """Construct ``Answers``, turning validation failures into ``ConfigurationError``."""
    try:
        return Answers(**values)
    except ValidationError as exc:
        messages = "; ".join(_format_error(err) for err in exc.errors())
        raise ConfigurationError(f"Invalid answers: {messages}") from exc


def _format_error(err: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()))
    message = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


# ---------------------------------------------------------------------------
# Project snapshot
# ---------------------------------------------------------------------------

def save_snapshot(answers: Answers, project_dir: Path, name: str = ".quicky.json") -> Path:
    """Write the answers into ``<project_dir>/<name>`` for later ``add`` runs."""
    return write_file(Path(project_dir) / name, answers.model_dump_json(indent=2) + "\n")


def load_snapshot(project_dir: Path, name: str = ".quicky.json") -> Answers | None:
    """Read a previously saved snapshot, or ``None`` if the project has none."""
    path = Path(project_dir) / name
    if not path.is_file():
        return None
    try:
        return Answers.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise ConfigurationError(f"Corrupt project snapshot {path}: {exc}") from exc


def detect_answers(project_dir: Path, **overrides: Any) -> Answers:
    """Infer answers for an existing project that has no snapshot.

    The framework comes from ``package.json`` (a ``next`` dependency means
    Next.js, otherwise Vite/React); the language from the presence of
    ``tsconfig.json``.  Auth defaults to off unless *overrides* say otherwise.

    Raises:
        ConfigurationError: If *project_dir* has no ``package.json``.
    """
    root = Path(project_dir)
    manifest_path = root / "package.json"
    if not manifest_path.is_file():
        raise ConfigurationError(f"No package.json found in {root.resolve()}")

    manifest = load_json(manifest_path)
    deps = {**manifest.get("dependencies", {}), **manifest.get("devDependencies", {})}
    framework = Framework.NEXT if "next" in deps else Framework.REACT
    language = Language.TS if (root / "tsconfig.json").is_file() else Language.JS

    routing = None
    if framework is Framework.NEXT:
        routing = Routing.APP if (root / "app").is_dir() else Routing.PAGES

    name = str(manifest.get("name") or "")
    if not is_valid_project_name(name):
        name = root.resolve().name

    values: dict[str, Any] = {
        "project_name": name,
        "framework": framework,
        "language": language,
        "routing": routing,
        "auth": False,
        "auth_storage": None,
    }
    values.update(overrides)
    return build_answers(**values)
