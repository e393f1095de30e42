"""Directory layout for generated projects."""

from __future__ import annotations

from pathlib import Path

from ..answers import Framework
from ..utils import ensure_dir

# Next.js owns ``app/`` and ``pages/`` itself, so they are never created here.
_NEXT_FOLDERS: tuple[str, ...] = (
    "components",
    "hooks",
    "lib",
    "styles",
    "types",
    "services",
)

_REACT_FOLDERS: tuple[str, ...] = (
    "src/components",
    "src/hooks",
    "src/layouts",
    "src/services",
    "src/styles",
    "src/utils",
    "src/pages",
    "src/routes",
)

_GENERIC_FOLDERS: tuple[str, ...] = (
    "src/components",
    "src/hooks",
    "src/layouts",
    "src/services",
    "src/styles",
    "src/utils",
)


def plan_folders(framework: Framework | str) -> tuple[str, ...]:
    """Return the ordered project-relative folders for *framework*.

    ``public`` always comes first.  Unknown frameworks get the generic
    ``src/*`` set.
    """
    if framework == Framework.NEXT:
        extra = _NEXT_FOLDERS
    elif framework == Framework.REACT:
        extra = _REACT_FOLDERS
    else:
        extra = _GENERIC_FOLDERS
    return ("public", *extra)


def create_folders(project_root: Path, framework: Framework | str) -> list[Path]:
    """Create every planned folder under *project_root* (existing ones are kept)."""
    return [ensure_dir(Path(project_root) / folder) for folder in plan_folders(framework)]
