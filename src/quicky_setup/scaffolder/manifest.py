"""Edits to files owned by the upstream generators.

``package.json`` is merged, never replaced: entries the generator wrote stay
unless a pinned value below overrides them.  The module-resolution config is
only rewritten when the generator produced one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..answers import Answers
from ..utils import dump_json, load_json, write_file
from .resolver import TemplateKind, TemplateResolver


def next_dependencies(next_version: str) -> dict[str, str]:
    """Runtime dependencies pinned for Next.js projects."""
    return {
        "next": f"^{next_version}",
        "react": "^18.2.0",
        "react-dom": "^18.2.0",
    }


def next_dev_dependencies(next_version: str) -> dict[str, str]:
    """Development dependencies pinned for Next.js projects."""
    return {
        "@types/node": "^20.11.0",
        "@types/react": "^18.2.0",
        "@types/react-dom": "^18.2.0",
        "autoprefixer": "^10.4.0",
        "eslint": "^8.0.0",
        "eslint-config-next": f"^{next_version}",
        "postcss": "^8.0.0",
        "tailwindcss": "^3.4.0",
        "typescript": "^5.0.0",
    }


NEXT_SCRIPTS: dict[str, str] = {
    "dev": "next dev --turbo",
    "build": "next build",
    "start": "next start",
    "lint": "next lint",
    "dev:turbo": "next dev --turbo",
}


def merge_manifest(
    manifest: dict[str, Any],
    dependencies: dict[str, str] | None = None,
    dev_dependencies: dict[str, str] | None = None,
    scripts: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Return a copy of *manifest* with the given sections merged in."""
    merged = dict(manifest)
    for key, extra in (
        ("dependencies", dependencies),
        ("devDependencies", dev_dependencies),
        ("scripts", scripts),
    ):
        if extra:
            merged[key] = {**(merged.get(key) or {}), **extra}
    return merged


def merge_next_manifest(project_root: Path, next_version: str) -> bool:
    """Merge the pinned Next.js entries into ``package.json``.

    Returns:
        ``False`` if the generator left no ``package.json`` behind.
    """
    manifest_path = Path(project_root) / "package.json"
    if not manifest_path.is_file():
        return False

    merged = merge_manifest(
        load_json(manifest_path),
        dependencies=next_dependencies(next_version),
        dev_dependencies=next_dev_dependencies(next_version),
        scripts=NEXT_SCRIPTS,
    )
    write_file(manifest_path, dump_json(merged))
    return True


def rewrite_module_config(
    project_root: Path,
    answers: Answers,
    resolver: TemplateResolver | None = None,
) -> bool:
    """Point the ``@/*`` alias at the project root in an existing ``jsconfig.json``.

    Returns:
        ``True`` if the file existed and was rewritten.
    """
    resolver = resolver or TemplateResolver()
    target = Path(project_root) / resolver.output_path(TemplateKind.JSCONFIG, answers)
    if not target.is_file():
        return False
    content = resolver.resolve(TemplateKind.JSCONFIG, answers)
    if content is None:
        return False
    write_file(target, content)
    return True
